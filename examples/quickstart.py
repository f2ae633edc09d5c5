"""
gltfxmp Quick Start Example

Tags a small glTF document with KHR_xmp_json_ld packets, lists them, and
saves the result as GLB.
"""

import json
import os
from gltfxmp import (
    load_document, apply_metadata, render_report, save_document,
    get_schema, PacketAssignment,
)
from gltfxmp.packets import PacketManager
from gltfxmp.schema import KhrXmpJsonLd

document = load_document(json.dumps({
    "asset": {"version": "2.0"},
    "nodes": [{"name": "Box"}],
}).encode("utf-8"))

schema = get_schema("structured")

print("Installing packets...")
PacketManager(document, schema).set_metadata(KhrXmpJsonLd(packets=[
    {"@context": {"dc": "http://purl.org/dc/elements/1.1/"}, "dc:title": "Box scene"},
    {"@context": {"dc": "http://purl.org/dc/elements/1.1/"}, "dc:title": "Box node"},
]))

apply_metadata(document, schema, [
    PacketAssignment.parse("asset:0"),
    PacketAssignment.parse("nodes:1"),
])

print(render_report(document, schema).format())

os.makedirs("output", exist_ok=True)
save_document(document, "output/box.glb", allow_overwrite=True)
print("\n✅ Saved to output/box.glb")
