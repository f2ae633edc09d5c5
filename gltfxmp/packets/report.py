"""Packet listing for a glTF document"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List

from gltfxmp.exceptions import NoMetadataFoundError
from gltfxmp.packets.schemas import MetadataSchema
from gltfxmp.schema.gltf import Category, Document


@dataclass(frozen=True)
class AppliedPacket:
    """One tagged entity"""
    category: Category
    index: int      # Position in the category list (0 for the asset)
    packet: int     # Referenced packet index


@dataclass
class PacketReport:
    """
    Root packet collection of one schema plus every entity tagged with it.

    Attributes:
        extension_name: KHR_xmp or KHR_xmp_json_ld
        extension: Root extension value as JSON-ready data
        packets: Root packet collection
        applied: Tagged entities in category order, then list order
    """
    extension_name: str
    extension: Dict[str, Any]
    packets: List[Any]
    applied: List[AppliedPacket] = field(default_factory=list)

    def format(self) -> str:
        lines = [
            f"{self.extension_name} extension value:",
            json.dumps(self.extension, indent=2, ensure_ascii=False),
            "",
            "Packets applied at:",
        ]
        for entry in self.applied:
            if entry.category is Category.asset:
                lines.append(f"\t{entry.category.label}: {entry.packet}")
            else:
                lines.append(f"\t{entry.category.label}[{entry.index}]: {entry.packet}")
        return "\n".join(lines)


def render_report(document: Document, schema: MetadataSchema) -> PacketReport:
    """
    Scan a document for packets of one schema.

    Raises:
        NoMetadataFoundError: If the document has no root extension for the schema,
            whether or not individual entities carry references
    """
    root = schema.root_extension(document)
    if root is None:
        raise NoMetadataFoundError(schema.extension_name)

    applied = []
    for category, index, entity in document.iter_entities():
        packet = schema.reference(entity)
        if packet is not None:
            applied.append(AppliedPacket(category, index, packet))

    return PacketReport(
        extension_name=schema.extension_name,
        extension=root.model_dump(mode='json', by_alias=True),
        packets=list(schema.packets(root)),
        applied=applied,
    )
