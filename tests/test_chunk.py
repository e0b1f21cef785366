from struct import pack

import pytest

from stegchunk import (
    ChecksumMismatchException,
    ChunkType,
    InvalidChunkStructureException,
    InvalidChunkTypeException,
    PayloadEncodingException,
    PngChunk,
    TruncatedChunkException,
)
from stegchunk.utils import ByteReader

from conftest import MESSAGE, MESSAGE_CRC, raw_chunk


@pytest.fixture
def secret_bytes():
    return raw_chunk(b'RuSt', MESSAGE.encode())


def test_new_chunk(secret_chunk):
    assert secret_chunk.length == 42
    assert len(secret_chunk) == 42
    assert secret_chunk.crc == MESSAGE_CRC


def test_new_chunk_from_chunk_type():
    chunk = PngChunk(ChunkType.from_bytes(b'RuSt'), bytearray(MESSAGE.encode()))
    assert chunk.data == MESSAGE.encode()
    assert isinstance(chunk.data, bytes)


def test_new_chunk_bad_arguments():
    with pytest.raises(TypeError):
        PngChunk(b'RuSt', b'')
    with pytest.raises(TypeError):
        PngChunk("RuSt", "not bytes")
    with pytest.raises(InvalidChunkTypeException):
        PngChunk("Ru5t", b'')


def test_empty_chunk():
    chunk = PngChunk("IEND")
    assert chunk.length == 0
    assert chunk.bytes == bytes.fromhex('0000000049454e44ae426082')


def test_accessors(secret_chunk):
    assert str(secret_chunk.type) == "RuSt"
    assert secret_chunk.data == MESSAGE.encode()
    assert secret_chunk.data_as_string() == MESSAGE


def test_to_bytes(secret_chunk):
    data = secret_chunk.bytes
    assert data[:4] == pack('>I', 42)
    assert data[4:8] == b'RuSt'
    assert data[8:-4] == MESSAGE.encode()
    assert data[-4:] == pack('>I', MESSAGE_CRC)
    assert len(data) == 42 + 12


def test_from_bytes(secret_bytes):
    chunk = PngChunk.from_bytes(secret_bytes)
    assert chunk.length == 42
    assert str(chunk.type) == "RuSt"
    assert chunk.data_as_string() == MESSAGE
    assert chunk.crc == MESSAGE_CRC


def test_from_bytes_wrong_crc():
    data = raw_chunk(b'RuSt', MESSAGE.encode(), crc=2882656333)
    with pytest.raises(ChecksumMismatchException) as e:
        PngChunk.from_bytes(data)
    assert e.value.stored == 2882656333
    assert e.value.computed == MESSAGE_CRC
    assert "CRC not valid" in str(e.value)


def test_round_trip(secret_chunk):
    assert PngChunk.from_bytes(secret_chunk.bytes) == secret_chunk


@pytest.mark.parametrize("payload", [b'', b'\x00', bytes(range(256)), b'x' * 5000])
def test_round_trip_payloads(payload):
    chunk = PngChunk("biNa", payload)
    parsed = PngChunk.from_bytes(chunk.bytes)
    assert parsed.data == payload
    assert parsed.crc == chunk.crc


def test_any_flipped_bit_is_detected(secret_bytes):
    # type and data fields only, the length and crc fields are covered elsewhere
    for i in range(4, len(secret_bytes) - 4):
        for bit in range(8):
            corrupted = bytearray(secret_bytes)
            corrupted[i] ^= 1 << bit
            with pytest.raises(ChecksumMismatchException):
                PngChunk.from_bytes(corrupted)


@pytest.mark.parametrize("size", [0, 3, 4, 7, 8, 20, 49, 53])
def test_truncated(secret_bytes, size):
    with pytest.raises(TruncatedChunkException):
        PngChunk.from_bytes(secret_bytes[:size])


def test_truncated_is_a_structure_error(secret_bytes):
    with pytest.raises(InvalidChunkStructureException):
        PngChunk.from_bytes(secret_bytes[:-1])


def test_declared_length_too_long():
    data = pack('>I', 100) + b'RuSt' + b'short' + pack('>I', 0)
    with pytest.raises(TruncatedChunkException) as e:
        PngChunk.from_bytes(data)
    assert e.value.expected == 100


def test_trailing_bytes_are_left(secret_bytes):
    reader = ByteReader(secret_bytes + b'garbage')
    chunk = PngChunk.read(reader)
    assert chunk.data_as_string() == MESSAGE
    assert reader.offset == len(secret_bytes)
    assert reader.remaining == len(b'garbage')
    assert PngChunk.from_bytes(secret_bytes + b'garbage') == chunk


def test_failed_read_does_not_move_reader_past_valid_data(secret_bytes):
    reader = ByteReader(secret_bytes[:-2])
    with pytest.raises(TruncatedChunkException):
        PngChunk.read(reader)
    assert reader.offset == len(secret_bytes) - 4


def test_chunk_type_is_not_validated_when_parsing():
    chunk = PngChunk.from_bytes(raw_chunk(b'ru1t', b'data'))
    assert chunk.type.bytes == b'ru1t'
    assert not chunk.type.is_valid()


def test_data_as_string_invalid_utf8():
    chunk = PngChunk("biNa", b'\xff\xfe\x00')
    with pytest.raises(PayloadEncodingException) as e:
        chunk.data_as_string()
    assert isinstance(e.value.__cause__, UnicodeDecodeError)


def test_str(secret_chunk):
    assert str(secret_chunk) == "42, RuSt, {}, {}".format(MESSAGE, MESSAGE_CRC)


def test_str_binary_payload_fails():
    with pytest.raises(PayloadEncodingException):
        str(PngChunk("biNa", b'\xff'))


def test_repr_binary_payload():
    assert "biNa" in repr(PngChunk("biNa", b'\xff'))


def test_critical(secret_chunk):
    assert secret_chunk.iscritical()
    assert not secret_chunk.isancillary()
    assert PngChunk("ruSt").isancillary()


def test_equality(secret_chunk):
    same = PngChunk("RuSt", MESSAGE.encode())
    assert secret_chunk == same
    assert hash(secret_chunk) == hash(same)
    assert secret_chunk != PngChunk("RuSt", b'other')
    assert secret_chunk != PngChunk("ruSt", MESSAGE.encode())
