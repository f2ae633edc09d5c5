"""
glTF document model for packet metadata

Only the parts of a glTF 2.0 document that can carry XMP packet metadata are
typed here. Everything else (accessors, buffers, bufferViews, samplers,
skins, textures, extras, unknown extensions, ...) is kept as pass-through data
so that a document survives a load -> mutate -> save cycle unchanged.

TAGGING SCHEMAS:
Two parallel extensions reference the same kind of data and never interact:

- KHR_xmp (legacy)
    root:   {"@context": {...}, "packets": [...]}
    entity: {"packet": <index>}
- KHR_xmp_json_ld (structured)
    root:   {"packets": [...]}
    entity: {"packet": <index>}

TAGGABLE ENTITIES:
The asset plus the elements of animations, images, materials, meshes, nodes
and scenes. They are always visited in that order.

SERIALIZATION:
Typed fields and pass-through fields are merged on output. Optional typed
fields that are None are left out; pass-through values are written as read,
explicit nulls included.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, SerializationInfo, model_serializer


class GltfModel(BaseModel):
    """Typed core plus an open-ended bag of additional properties."""
    model_config = ConfigDict(extra='allow', populate_by_name=True)

    @model_serializer(mode='wrap')
    def omit_empty_core_fields(self, handler, info: SerializationInfo):
        data = handler(self)
        for name, field in type(self).model_fields.items():
            if not field.is_required() and getattr(self, name) is None:
                key = field.alias if (info.by_alias and field.alias) else name
                data.pop(key, None)
        return data

#########################
# EXTENSION PAYLOADS
#########################

class PacketReference(GltfModel):
    """Per-entity payload: index into the root packet collection."""
    packet: Optional[int] = Field(None, ge=0, description="Index into the root 'packets' list.")

class KhrXmp(GltfModel):
    context: Any = Field(..., alias='@context', description="JSON-LD context shared by all packets.")
    packets: List[Any] = Field(..., description="Metadata packets, addressed by index.")

class KhrXmpJsonLd(GltfModel):
    packets: List[Any] = Field(..., description="Metadata packets, addressed by index.")

class EntityExtensions(GltfModel):
    khr_xmp: Optional[PacketReference] = Field(None, alias='KHR_xmp')
    khr_xmp_json_ld: Optional[PacketReference] = Field(None, alias='KHR_xmp_json_ld')

class RootExtensions(GltfModel):
    khr_xmp: Optional[KhrXmp] = Field(None, alias='KHR_xmp')
    khr_xmp_json_ld: Optional[KhrXmpJsonLd] = Field(None, alias='KHR_xmp_json_ld')

#########################
# ENTITIES
#########################

class Category(str, Enum):
    asset = "asset"
    animations = "animations"
    images = "images"
    materials = "materials"
    meshes = "meshes"
    nodes = "nodes"
    scenes = "scenes"

    @property
    def label(self) -> str:
        return self.value.capitalize()

class Entity(GltfModel):
    extensions: Optional[EntityExtensions] = None

class Asset(Entity):
    version: str = Field(..., description="glTF version the asset targets.")

#########################
# DOCUMENT
#########################

class Document(GltfModel):
    asset: Asset
    extensions_used: Optional[List[str]] = Field(None, alias='extensionsUsed')
    animations: Optional[List[Entity]] = None
    images: Optional[List[Entity]] = None
    materials: Optional[List[Entity]] = None
    meshes: Optional[List[Entity]] = None
    nodes: Optional[List[Entity]] = None
    scenes: Optional[List[Entity]] = None
    extensions: Optional[RootExtensions] = None

    def entities(self, category: Category) -> Optional[List[Entity]]:
        """
        Entities of one category, in document order.

        The asset category is always a one-element list. Returns None when the
        document has no list for the category.
        """
        if category is Category.asset:
            return [self.asset]
        return getattr(self, category.value)

    def iter_entities(self) -> Iterator[Tuple[Category, int, Entity]]:
        """Yield (category, index, entity) over every taggable entity."""
        for category in Category:
            for index, entity in enumerate(self.entities(category) or []):
                yield category, index, entity

    def declare_extension(self, name: str) -> bool:
        """Add name to extensionsUsed unless already present. Returns True if added."""
        if self.extensions_used is None:
            self.extensions_used = []
        if name in self.extensions_used:
            return False
        self.extensions_used.append(name)
        return True
