"""
Tests for the GLB container codec
"""
import struct
import pytest
from gltfxmp.container import align_to_four, decode_glb, encode_glb, is_glb
from gltfxmp.exceptions import (
    ContainerError, InvalidMagicError, UnsupportedVersionError, MissingJsonChunkError, ParseError
)


def build_glb(chunks, magic=b'glTF', version=2):
    """Assemble raw GLB bytes from (type, payload) pairs without any padding"""
    body = b''.join(struct.pack('<I4s', len(payload), kind) + payload for kind, payload in chunks)
    return struct.pack('<4sII', magic, version, 12 + len(body)) + body


class TestAlignToFour:
    """Test length alignment"""

    def test_known_values(self):
        """Test the reference table"""
        assert align_to_four(0) == 0
        assert align_to_four(1) == 4
        assert align_to_four(4) == 4
        assert align_to_four(5) == 8

    def test_properties(self):
        """Result is the smallest multiple of 4 not below n"""
        for n in range(0, 200):
            result = align_to_four(n)
            assert result >= n
            assert result % 4 == 0
            assert result - n < 4


class TestEncode:
    """Test GLB encoding layout"""

    def test_header_and_json_chunk(self):
        """Test header fields and space padding of the JSON chunk"""
        data = encode_glb(b'{"a":1}')  # 7 bytes -> padded to 8
        magic, version, length = struct.unpack_from('<4sII', data, 0)
        assert magic == b'glTF'
        assert version == 2
        assert length == 8

        chunk_length, chunk_type = struct.unpack_from('<I4s', data, 12)
        assert chunk_length == 8
        assert chunk_type == b'JSON'
        assert data[20:28] == b'{"a":1} '
        assert len(data) == 28

    def test_length_field_counts_payloads_only(self):
        """Header length is padded JSON plus BIN, without header sizes"""
        data = encode_glb(b'{}', b'\x01\x02\x03')
        _, _, length = struct.unpack_from('<4sII', data, 0)
        assert length == 4 + 3

    def test_bin_chunk_written_when_present(self):
        """Test BIN chunk follows the JSON chunk"""
        data = encode_glb(b'{}  ', b'\xff' * 5)
        chunk_length, chunk_type = struct.unpack_from('<I4s', data, 20 + 4)
        assert chunk_type == b'BIN\x00'
        assert chunk_length == 5
        assert data[-5:] == b'\xff' * 5

    def test_no_bin_chunk_when_absent(self):
        """Test only header and JSON chunk are written without binary"""
        data = encode_glb(b'{}')
        assert len(data) == 12 + 8 + 4

    def test_empty_bin_chunk_kept(self):
        """An empty binary buffer still produces a BIN chunk"""
        data = encode_glb(b'{}', b'')
        assert len(data) == 12 + 8 + 4 + 8
        assert decode_glb(data).bin == b''


class TestDecode:
    """Test GLB decoding and its failure modes"""

    def test_decode_json_only(self):
        """Test a container with a single JSON chunk"""
        container = decode_glb(build_glb([(b'JSON', b'{"asset":{}}')]))
        assert container.json == b'{"asset":{}}'
        assert container.bin is None

    def test_decode_json_and_bin(self):
        """Test a container with JSON and BIN chunks"""
        container = decode_glb(build_glb([(b'JSON', b'{}  '), (b'BIN\x00', b'\x00\x01')]))
        assert container.json == b'{}'
        assert container.bin == b'\x00\x01'

    def test_invalid_magic(self):
        """Test that a wrong magic is rejected"""
        with pytest.raises(InvalidMagicError) as exc_info:
            decode_glb(build_glb([(b'JSON', b'{}')], magic=b'glTX'))
        assert exc_info.value.magic == b'glTX'

    def test_unsupported_version(self):
        """Test that version 1 containers are rejected"""
        with pytest.raises(UnsupportedVersionError) as exc_info:
            decode_glb(build_glb([(b'JSON', b'{}')], version=1))
        assert exc_info.value.version == 1

    def test_missing_json_chunk(self):
        """Test a header with no chunks"""
        with pytest.raises(MissingJsonChunkError):
            decode_glb(build_glb([]))

    def test_first_chunk_not_json(self):
        """Test that a leading BIN chunk is rejected"""
        with pytest.raises(MissingJsonChunkError) as exc_info:
            decode_glb(build_glb([(b'BIN\x00', b'\x00'), (b'JSON', b'{}')]))
        assert exc_info.value.found == b'BIN\x00'

    def test_truncated_header(self):
        """Test data shorter than the header"""
        with pytest.raises(ContainerError):
            decode_glb(b'glTF\x02\x00')

    def test_truncated_chunk(self):
        """Test a chunk that claims more bytes than available"""
        data = build_glb([(b'JSON', b'{"asset":{}}')])[:-3]
        with pytest.raises(ContainerError):
            decode_glb(data)

    def test_unknown_chunks_skipped(self):
        """Test that extra chunks of other types are not fatal"""
        data = build_glb([
            (b'JSON', b'{}'),
            (b'XTRA', b'ignored'),
            (b'BIN\x00', b'\x07'),
            (b'BIN\x00', b'\x08'),
        ])
        container = decode_glb(data)
        assert container.json == b'{}'
        assert container.bin == b'\x07'

    def test_errors_are_parse_errors(self):
        """Container errors can be handled as parse errors"""
        with pytest.raises(ParseError):
            decode_glb(b'not a glb at all')

    def test_source_in_message(self):
        """Test that the source path is reported"""
        with pytest.raises(InvalidMagicError) as exc_info:
            decode_glb(b'XXXX' + b'\x00' * 8, source='model.glb')
        assert 'model.glb' in str(exc_info.value)

    def test_is_glb(self):
        """Test magic sniffing"""
        assert is_glb(encode_glb(b'{}'))
        assert not is_glb(b'{"asset": {}}')


class TestRoundtrip:
    """Test decode(encode(json, bin)) reproduces the input"""

    @pytest.mark.parametrize("json_bytes,bin_bytes", [
        (b'{"asset":{"version":"2.0"}}', None),
        (b'{"ab":1}', None),
        (b'{"asset":{"version":"2.0"}}', bytes(range(13))),
        (b'{"ab":1}', bytes(range(13))),
    ], ids=["unaligned-no-bin", "aligned-no-bin", "unaligned-bin", "aligned-bin"])
    def test_roundtrip(self, json_bytes, bin_bytes):
        """JSON comes back without padding and BIN exactly as given"""
        container = decode_glb(encode_glb(json_bytes, bin_bytes))
        assert container.json == json_bytes
        assert container.bin == bin_bytes
