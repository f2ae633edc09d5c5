"""
Document loading and saving

Reads .gltf/.glb files (or raw bytes) into the Document model and writes them
back, keeping the GLB binary buffer alongside the document.
"""

import json
import logging
import os
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from pydantic import ValidationError

from gltfxmp.container.glb import decode_glb, encode_glb, is_glb
from gltfxmp.exceptions import ParseError
from gltfxmp.packets.engine import PacketAssignment, clear_metadata, update_metadata
from gltfxmp.packets.schemas import MetadataSchema
from gltfxmp.schema.gltf import Document, GltfModel

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_document(source: Union[PathLike, bytes]) -> Document:
    """
    Load a glTF document from a path or from raw bytes.

    Bytes starting with the GLB magic are decoded as a container, anything
    else as JSON text. Paths are dispatched on their extension.

    Raises:
        FileNotFoundError: If the path does not exist
        ValueError: If the extension is not .gltf or .glb
        ParseError: If the JSON or container is malformed
    """
    document, _ = load_document_with_binary(source)
    return document


def load_document_with_binary(source: Union[PathLike, bytes]) -> Tuple[Document, Optional[bytes]]:
    """Like load_document, also returning the GLB BIN chunk (None for .gltf)."""
    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
        name = None
        input_format = 'glb' if is_glb(data) else 'gltf'
    else:
        name = str(source)
        if not os.path.exists(name):
            raise FileNotFoundError(f"Input file not found: {name}")
        input_format = _detect_format(name)
        logger.info(f"Opening & reading input file at path {name}")
        with open(name, 'rb') as f:
            data = f.read()

    if input_format == 'glb':
        container = decode_glb(data, name)
        return _parse_document(container.json, name), container.bin

    return _parse_document(data, name), None


def encode_document_as_text(document: Document) -> bytes:
    """Pretty-printed UTF-8 JSON"""
    data = document.model_dump(mode='json', by_alias=True)
    return json.dumps(data, indent=2, ensure_ascii=False).encode('utf-8')


def encode_document_as_container(document: Document, binary: Optional[bytes] = None) -> bytes:
    """GLB bytes holding the document and, if given, the binary buffer"""
    return encode_glb(encode_document_as_text(document), binary)


def save_document(
    document: Document,
    path: PathLike,
    binary: Optional[bytes] = None,
    allow_overwrite: bool = False
) -> None:
    """
    Write a document, choosing .gltf or .glb from the path's extension.

    The output is fully encoded before the file is opened.

    Raises:
        FileExistsError: If path exists and allow_overwrite is False
        ValueError: If the extension is not .gltf or .glb
    """
    path = str(path)
    output_format = _detect_format(path)
    _check_output(path, allow_overwrite)

    if output_format == 'glb':
        data = encode_document_as_container(document, binary)
    else:
        if binary:
            logger.warning(
                f"Dropping {len(binary)}-byte binary buffer: .gltf output cannot hold a GLB BIN chunk"
            )
        data = encode_document_as_text(document)

    logger.info(f"Opening & writing to output file at path {path}")
    with open(path, 'wb') as f:
        f.write(data)


def load_metadata(path: PathLike, schema: MetadataSchema) -> GltfModel:
    """
    Read a metadata source file into the schema's root payload.

    KHR_xmp sources need '@context' and 'packets', KHR_xmp_json_ld sources
    need 'packets'.
    """
    path = str(path)
    if not os.path.exists(path):
        raise FileNotFoundError(f"Metadata file not found: {path}")
    logger.info(f"Reading {schema.extension_name} metadata from {path}")
    with open(path, 'rb') as f:
        return schema.load_source(f.read(), path)


def update_file(
    input_path: PathLike,
    output_path: PathLike,
    metadata_path: PathLike,
    schema: MetadataSchema,
    assignments: Iterable[PacketAssignment],
    strict: bool = False,
    allow_overwrite: bool = False
) -> Document:
    """
    Install packets from metadata_path and tag entities, input -> output.

    Existing references of the schema are cleared before the new ones are applied.
    """
    _check_output(str(output_path), allow_overwrite)
    document, binary = load_document_with_binary(input_path)
    payload = load_metadata(metadata_path, schema)

    update_metadata(document, schema, payload, assignments, strict=strict)

    save_document(document, output_path, binary, allow_overwrite=allow_overwrite)
    return document


def clear_file(
    input_path: PathLike,
    output_path: PathLike,
    schema: MetadataSchema,
    allow_overwrite: bool = False
) -> Document:
    """Remove every packet reference of the schema, input -> output."""
    _check_output(str(output_path), allow_overwrite)
    document, binary = load_document_with_binary(input_path)

    clear_metadata(document, schema)

    save_document(document, output_path, binary, allow_overwrite=allow_overwrite)
    return document


def _parse_document(data: bytes, source: Optional[str]) -> Document:
    try:
        return Document.model_validate_json(data)
    except ValidationError as e:
        raise ParseError(f"Invalid glTF JSON: {e}", source) from e


def _check_output(path: str, allow_overwrite: bool) -> None:
    if os.path.exists(path) and not allow_overwrite:
        raise FileExistsError(
            f"The output path provided, {path}, already exists. "
            "Use --allow-overwrite to allow overwriting."
        )


def _detect_format(path: str) -> str:
    """Detect format from file extension"""
    ext = os.path.splitext(path)[1].lower()

    format_map = {
        '.gltf': 'gltf',
        '.glb': 'glb',
    }

    if ext not in format_map:
        raise ValueError(
            f"Unsupported file format: {ext or path}. "
            f"Supported: .gltf, .glb"
        )

    return format_map[ext]
