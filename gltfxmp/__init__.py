"""
gltfxmp - Add, remove and list XMP packet metadata in glTF and GLB files

Supports the KHR_xmp_json_ld extension and the legacy KHR_xmp extension.
"""

__version__ = "0.1.0"

from gltfxmp.convert import (
    load_document,
    load_document_with_binary,
    encode_document_as_text,
    encode_document_as_container,
    save_document,
    load_metadata,
)
from gltfxmp.packets import (
    PacketAssignment,
    SchemaKind,
    get_schema,
    apply_metadata,
    clear_metadata,
    update_metadata,
    render_report,
)

__all__ = [
    "load_document",
    "load_document_with_binary",
    "encode_document_as_text",
    "encode_document_as_container",
    "save_document",
    "load_metadata",
    "PacketAssignment",
    "SchemaKind",
    "get_schema",
    "apply_metadata",
    "clear_metadata",
    "update_metadata",
    "render_report",
]
