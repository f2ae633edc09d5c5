"""
GLB container codec

Layout (all integers little-endian uint32):

    header  magic b'glTF' | version 2 | length
    chunk   chunk_length | chunk_type | payload
    ...

The first chunk is the JSON document. An optional BIN chunk carries the
binary buffer. Any other chunk is skipped on decode.

The header length written by encode_glb is the padded JSON length plus the
BIN length. It does not count the 12-byte header or the 8-byte chunk headers.
Tools written against this format expect that value, so it is kept.
"""

import logging
import struct
from dataclasses import dataclass
from typing import Optional

from gltfxmp.exceptions import (
    ContainerError, InvalidMagicError, UnsupportedVersionError, MissingJsonChunkError
)

logger = logging.getLogger(__name__)

GLB_MAGIC = b'glTF'
GLB_VERSION = 2
CHUNK_JSON = b'JSON'
CHUNK_BIN = b'BIN\x00'

_HEADER = struct.Struct('<4sII')
_CHUNK_HEADER = struct.Struct('<I4s')


@dataclass
class GlbContainer:
    """Decoded container: JSON chunk payload plus optional BIN chunk payload"""
    json: bytes
    bin: Optional[bytes] = None


def align_to_four(n: int) -> int:
    """Round n up to the next multiple of 4."""
    return (n + 3) & ~3


def is_glb(data: bytes) -> bool:
    return data[:4] == GLB_MAGIC


def decode_glb(data: bytes, source: Optional[str] = None) -> GlbContainer:
    """
    Split a GLB byte string into its JSON and BIN payloads.

    Args:
        data: Complete container bytes
        source: Path used in error messages

    Returns:
        GlbContainer with the JSON chunk minus its trailing space padding

    Raises:
        InvalidMagicError: If data does not start with b'glTF'
        UnsupportedVersionError: If the version is not 2
        MissingJsonChunkError: If the first chunk is missing or not JSON
        ContainerError: If the header or a chunk is truncated
    """
    if len(data) < _HEADER.size:
        raise ContainerError(f"GLB header too short ({len(data)} bytes)", source)

    magic, version, length = _HEADER.unpack_from(data, 0)
    if magic != GLB_MAGIC:
        raise InvalidMagicError(magic, source)
    if version != GLB_VERSION:
        raise UnsupportedVersionError(version, source)
    logger.debug(f"GLB header: version {version}, declared length {length}, actual {len(data)}")

    json_chunk = None
    bin_chunk = None
    offset = _HEADER.size

    while len(data) - offset >= _CHUNK_HEADER.size:
        chunk_length, chunk_type = _CHUNK_HEADER.unpack_from(data, offset)
        offset += _CHUNK_HEADER.size
        end = offset + chunk_length
        if end > len(data):
            raise ContainerError(
                f"GLB chunk {chunk_type!r} declares {chunk_length} bytes, "
                f"only {len(data) - offset} available",
                source
            )
        payload = data[offset:end]
        offset = end

        if json_chunk is None:
            if chunk_type != CHUNK_JSON:
                raise MissingJsonChunkError(chunk_type, source)
            json_chunk = payload
        elif chunk_type == CHUNK_BIN and bin_chunk is None:
            bin_chunk = payload
        else:
            logger.debug(f"Skipping GLB chunk {chunk_type!r} ({chunk_length} bytes)")

    if json_chunk is None:
        raise MissingJsonChunkError(source=source)

    # Trailing spaces are alignment padding, never JSON content
    return GlbContainer(json=json_chunk.rstrip(b' '), bin=bin_chunk)


def encode_glb(json_data: bytes, bin_data: Optional[bytes] = None) -> bytes:
    """
    Build a GLB byte string.

    The JSON payload is padded with spaces to a multiple of 4. The BIN chunk is
    written as given, and only when bin_data is not None.
    """
    padded_length = align_to_four(len(json_data))
    json_payload = json_data + b' ' * (padded_length - len(json_data))

    bin_length = len(bin_data) if bin_data is not None else 0
    parts = [
        _HEADER.pack(GLB_MAGIC, GLB_VERSION, padded_length + bin_length),
        _CHUNK_HEADER.pack(padded_length, CHUNK_JSON),
        json_payload,
    ]
    if bin_data is not None:
        parts.append(_CHUNK_HEADER.pack(bin_length, CHUNK_BIN))
        parts.append(bin_data)

    return b''.join(parts)
