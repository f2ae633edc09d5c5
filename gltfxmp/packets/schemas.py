"""
Packet-reference schema descriptors

KHR_xmp and KHR_xmp_json_ld tag entities the same way and differ only in the
extension name and the shape of the root payload. A MetadataSchema captures
that difference so a single PacketManager can serve both.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Type, Union

from pydantic import ValidationError

from gltfxmp.exceptions import ParseError
from gltfxmp.schema.gltf import (
    Document, Entity, EntityExtensions, RootExtensions,
    PacketReference, KhrXmp, KhrXmpJsonLd, GltfModel
)

KHR_XMP = "KHR_xmp"
KHR_XMP_JSON_LD = "KHR_xmp_json_ld"


class SchemaKind(str, Enum):
    legacy = "legacy"
    structured = "structured"


@dataclass(frozen=True)
class MetadataSchema:
    """
    Describes one packet-reference schema.

    Attributes:
        kind: Which schema this is
        extension_name: Key used in 'extensions' bags and in extensionsUsed
        attribute: Field name of the payload on both RootExtensions and EntityExtensions
        root_model: Model of the root extension payload (holds the packets)
    """
    kind: SchemaKind
    extension_name: str
    attribute: str
    root_model: Type[GltfModel]

    def root_extension(self, document: Document) -> Optional[GltfModel]:
        """Root payload for this schema, or None if the document has none."""
        if document.extensions is None:
            return None
        return getattr(document.extensions, self.attribute)

    def packets(self, root: GltfModel) -> List[Any]:
        return root.packets

    def set_root(self, document: Document, payload: GltfModel) -> None:
        """Install or replace the root payload, keeping other root extensions."""
        if document.extensions is None:
            document.extensions = RootExtensions()
        setattr(document.extensions, self.attribute, payload)

    def make_reference(self, packet: int) -> PacketReference:
        return PacketReference(packet=packet)

    def reference(self, entity: Entity) -> Optional[int]:
        """Packet index the entity is tagged with, or None."""
        if entity.extensions is None:
            return None
        ref = getattr(entity.extensions, self.attribute)
        return ref.packet if ref is not None else None

    def has_reference(self, entity: Entity) -> bool:
        return entity.extensions is not None and getattr(entity.extensions, self.attribute) is not None

    def set_reference(self, entity: Entity, packet: int) -> None:
        if entity.extensions is None:
            entity.extensions = EntityExtensions()
        setattr(entity.extensions, self.attribute, self.make_reference(packet))

    def remove_reference(self, entity: Entity) -> bool:
        """Drop the entity's payload for this schema. Returns True if one was present."""
        if not self.has_reference(entity):
            return False
        setattr(entity.extensions, self.attribute, None)
        return True

    def load_source(self, data: Union[str, bytes], source: Optional[str] = None) -> GltfModel:
        """
        Validate a metadata source document into a root payload.

        Args:
            data: JSON text with 'packets' (and '@context' for KHR_xmp)
            source: Path used in error messages

        Raises:
            ParseError: If the JSON is malformed or misses required keys
        """
        try:
            return self.root_model.model_validate_json(data)
        except ValidationError as e:
            raise ParseError(f"Invalid {self.extension_name} metadata: {e}", source) from e


LEGACY = MetadataSchema(
    kind=SchemaKind.legacy,
    extension_name=KHR_XMP,
    attribute="khr_xmp",
    root_model=KhrXmp,
)

STRUCTURED = MetadataSchema(
    kind=SchemaKind.structured,
    extension_name=KHR_XMP_JSON_LD,
    attribute="khr_xmp_json_ld",
    root_model=KhrXmpJsonLd,
)

_SCHEMAS = {
    SchemaKind.legacy: LEGACY,
    SchemaKind.structured: STRUCTURED,
}


def get_schema(kind: Union[SchemaKind, str]) -> MetadataSchema:
    """Look up the descriptor for 'legacy' or 'structured'."""
    try:
        return _SCHEMAS[SchemaKind(kind)]
    except ValueError:
        raise ValueError(
            f"Unknown metadata schema: {kind}. Supported: legacy, structured"
        ) from None
