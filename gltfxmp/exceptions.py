"""Custom exceptions for glTF metadata operations"""

from typing import Optional


class GltfXmpError(Exception):
    """Base exception for gltfxmp errors"""
    pass


class ParseError(GltfXmpError, ValueError):
    """Malformed JSON, or JSON that does not match the expected shape"""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class ContainerError(ParseError):
    """Malformed GLB container"""
    pass


class InvalidMagicError(ContainerError):
    """Container does not start with the glTF magic"""

    def __init__(self, magic: bytes, source: Optional[str] = None):
        self.magic = magic
        super().__init__(f"Invalid GLB magic: {magic!r} (expected b'glTF')", source)


class UnsupportedVersionError(ContainerError):
    """Container version other than 2"""

    def __init__(self, version: int, source: Optional[str] = None):
        self.version = version
        super().__init__(f"Unsupported GLB version: {version} (expected 2)", source)


class MissingJsonChunkError(ContainerError):
    """First chunk of the container is absent or not a JSON chunk"""

    def __init__(self, found: Optional[bytes] = None, source: Optional[str] = None):
        self.found = found
        if found is None:
            message = "GLB container has no JSON chunk"
        else:
            message = f"First GLB chunk must be JSON, found {found!r}"
        super().__init__(message, source)


class NoMetadataFoundError(GltfXmpError):
    """The document has no root extension for the requested schema"""

    def __init__(self, extension_name: str):
        self.extension_name = extension_name
        super().__init__(f"No metadata found. The document has no {extension_name} extension.")


class MissingEntityListError(GltfXmpError, KeyError):
    """An assignment targets a category the document has no list for"""

    def __init__(self, category: str):
        self.category = category
        super().__init__(category)

    def __str__(self) -> str:
        return f"Document has no '{self.category}' list to apply packets to"
