"""
Packet application engine

Attaches, replaces and removes packet references on glTF entities while
keeping the root packet collection and extensionsUsed consistent.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from gltfxmp.exceptions import MissingEntityListError
from gltfxmp.packets.schemas import MetadataSchema
from gltfxmp.schema.gltf import Category, Document, GltfModel

logger = logging.getLogger(__name__)

# Singular spellings accepted by PacketAssignment.parse
_CATEGORY_ALIASES = {
    "assets": Category.asset,
    "animation": Category.animations,
    "image": Category.images,
    "material": Category.materials,
    "mesh": Category.meshes,
    "node": Category.nodes,
    "scene": Category.scenes,
}


@dataclass(frozen=True)
class PacketAssignment:
    """Tag every entity of a category with one packet index."""
    category: Category
    packet: int

    def __post_init__(self):
        if self.packet < 0:
            raise ValueError(f"Packet index must be non-negative, got {self.packet}")

    @classmethod
    def parse(cls, text: str) -> "PacketAssignment":
        """
        Parse 'category:index', e.g. 'asset:0' or 'meshes:3'.

        Category names are case-insensitive and may be singular or plural.
        """
        name, sep, index = text.partition(':')
        if not sep:
            raise ValueError(f"Expected CATEGORY:INDEX, got '{text}'")
        name = name.strip().lower()
        try:
            category = _CATEGORY_ALIASES.get(name) or Category(name)
        except ValueError:
            raise ValueError(
                f"Unknown category: {name}. "
                f"Supported: {', '.join(c.value for c in Category)}"
            ) from None
        try:
            packet = int(index.strip())
        except ValueError:
            raise ValueError(f"Packet index must be an integer, got '{index}'") from None
        return cls(category, packet)


class PacketManager:
    """
    Applies one metadata schema to a document.

    The same engine serves KHR_xmp and KHR_xmp_json_ld; the schema descriptor
    decides which extension fields are read and written. The document is
    mutated in place.

    Example:
        >>> manager = PacketManager(document, STRUCTURED)
        >>> manager.set_metadata(KhrXmpJsonLd(packets=[{...}]))
        >>> manager.apply([PacketAssignment(Category.asset, 0)])
    """

    def __init__(self, document: Document, schema: MetadataSchema):
        self.document = document
        self.schema = schema

    def set_metadata(self, payload: GltfModel) -> None:
        """Install the root packet collection and declare the extension."""
        self.schema.set_root(self.document, payload)
        logger.info(
            f"Set {self.schema.extension_name} with {len(self.schema.packets(payload))} packet(s)"
        )
        if self.document.declare_extension(self.schema.extension_name):
            logger.debug(f"Added {self.schema.extension_name} to extensionsUsed")

    def apply(self, assignments: Iterable[PacketAssignment], strict: bool = False) -> int:
        """
        Tag entities with packet indices.

        Args:
            assignments: (category, packet) pairs, applied in order
            strict: Raise instead of skipping when a category has no list

        Returns:
            Number of entities tagged

        Raises:
            MissingEntityListError: If strict and an assignment targets a missing list
        """
        assignments = list(assignments)
        if strict:
            # Nothing is tagged unless every target list exists
            for assignment in assignments:
                if self.document.entities(assignment.category) is None:
                    raise MissingEntityListError(assignment.category.value)

        tagged = 0
        for assignment in assignments:
            entities = self.document.entities(assignment.category)
            if entities is None:
                logger.warning(
                    f"Skipping {assignment.category.value}:{assignment.packet}, "
                    f"document has no {assignment.category.value}"
                )
                continue

            for index, entity in enumerate(entities):
                self.schema.set_reference(entity, assignment.packet)
                logger.debug(f"Tagged {assignment.category.label}[{index}] with packet {assignment.packet}")
            tagged += len(entities)

        if tagged and self.document.declare_extension(self.schema.extension_name):
            logger.debug(f"Added {self.schema.extension_name} to extensionsUsed")
        logger.info(f"Applied {self.schema.extension_name} packets to {tagged} entities")
        return tagged

    def clear(self) -> int:
        """
        Remove this schema's packet references from every entity.

        Other extensions and extensionsUsed are left alone.

        Returns:
            Number of references removed
        """
        removed = 0
        for category, index, entity in self.document.iter_entities():
            if self.schema.remove_reference(entity):
                logger.debug(f"Cleared {self.schema.extension_name} on {category.label}[{index}]")
                removed += 1
        logger.info(f"Cleared {removed} {self.schema.extension_name} packet reference(s)")
        return removed

    def update(
        self,
        payload: GltfModel,
        assignments: Iterable[PacketAssignment],
        strict: bool = False
    ) -> int:
        """Replace the packets and re-tag from scratch."""
        self.set_metadata(payload)
        self.clear()
        return self.apply(assignments, strict=strict)


def apply_metadata(
    document: Document,
    schema: MetadataSchema,
    assignments: Iterable[PacketAssignment],
    strict: bool = False
) -> Document:
    PacketManager(document, schema).apply(assignments, strict=strict)
    return document


def clear_metadata(document: Document, schema: MetadataSchema) -> Document:
    PacketManager(document, schema).clear()
    return document


def update_metadata(
    document: Document,
    schema: MetadataSchema,
    payload: GltfModel,
    assignments: Iterable[PacketAssignment],
    strict: bool = False
) -> Document:
    PacketManager(document, schema).update(payload, assignments, strict=strict)
    return document
