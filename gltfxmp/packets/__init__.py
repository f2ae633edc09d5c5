"""Packet metadata engine for KHR_xmp and KHR_xmp_json_ld

Example:
    >>> from gltfxmp.packets import PacketAssignment, get_schema, apply_metadata
    >>> schema = get_schema("structured")
    >>> apply_metadata(document, schema, [PacketAssignment.parse("meshes:0")])
"""

from .schemas import MetadataSchema, SchemaKind, LEGACY, STRUCTURED, get_schema
from .engine import (
    PacketAssignment,
    PacketManager,
    apply_metadata,
    clear_metadata,
    update_metadata,
)
from .report import AppliedPacket, PacketReport, render_report

__all__ = [
    "MetadataSchema",
    "SchemaKind",
    "LEGACY",
    "STRUCTURED",
    "get_schema",
    "PacketAssignment",
    "PacketManager",
    "apply_metadata",
    "clear_metadata",
    "update_metadata",
    "AppliedPacket",
    "PacketReport",
    "render_report",
]
