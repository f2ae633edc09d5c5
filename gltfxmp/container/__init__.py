"""GLB binary container support"""

from gltfxmp.container.glb import (
    GlbContainer,
    align_to_four,
    decode_glb,
    encode_glb,
    is_glb,
)

__all__ = [
    "GlbContainer",
    "align_to_four",
    "decode_glb",
    "encode_glb",
    "is_glb",
]
