import zlib
from struct import pack

import pytest

from stegchunk import Png, PngChunk

SIGNATURE = b'\x89PNG\r\n\x1a\n'
MESSAGE = "This is where your secret message will be!"
MESSAGE_CRC = 2882656334


def raw_chunk(typebytes, data, crc=None):
    """Builds a chunk by hand, without going through PngChunk."""
    if crc is None:
        crc = zlib.crc32(typebytes + data) & 0xffffffff
    return pack('>I', len(data)) + typebytes + data + pack('>I', crc)


@pytest.fixture
def png_bytes():
    """A 1x1 greyscale image."""
    ihdr = pack('>IIBBBBB', 1, 1, 8, 0, 0, 0, 0)
    idat = zlib.compress(b'\x00\x00')
    return SIGNATURE + raw_chunk(b'IHDR', ihdr) + raw_chunk(b'IDAT', idat) + raw_chunk(b'IEND', b'')


@pytest.fixture
def png(png_bytes):
    return Png.from_bytes(png_bytes)


@pytest.fixture
def png_file(tmp_path, png_bytes):
    path = tmp_path / "image.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def secret_chunk():
    return PngChunk("RuSt", MESSAGE.encode())
