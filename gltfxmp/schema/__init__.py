"""glTF document schema definitions."""
from .gltf import (
    Document,
    Asset,
    Entity,
    Category,
    EntityExtensions,
    RootExtensions,
    PacketReference,
    KhrXmp,
    KhrXmpJsonLd,
)

__all__ = [
    "Document",
    "Asset",
    "Entity",
    "Category",
    "EntityExtensions",
    "RootExtensions",
    "PacketReference",
    "KhrXmp",
    "KhrXmpJsonLd",
]
