import zlib
from struct import unpack
from typing import Union, get_args

from .pngexceptions import TruncatedChunkException

Data = Union[bytes, bytearray, memoryview]


def as_data(data: Data) -> bytes:
    if not isinstance(data, get_args(Data)):
        types = " or ".join(t.__name__ for t in get_args(Data))
        raise TypeError("Expected {}, not {}".format(types, type(data).__name__))
    if not isinstance(data, bytes):
        data = bytes(data)
    return data


def crc(data: bytes) -> int:
    """CRC-32 as used by PNG (ISO 3309 / ITU-T V.42), see https://www.w3.org/TR/PNG/#5CRC-algorithm"""
    return zlib.crc32(data) & 0xffffffff


class ByteReader:

    """
    A read cursor over an immutable buffer.
    Every read either returns exactly the requested amount of bytes
    and moves the cursor forward, or raises without moving it.
    """

    def __init__(self, data: Data, offset: int = 0) -> None:
        self.__data = as_data(data)
        if not 0 <= offset <= len(self.__data):
            raise ValueError("offset {} out of range".format(offset))
        self.__offset = offset

    @property
    def offset(self) -> int:
        return self.__offset

    @property
    def remaining(self) -> int:
        return len(self.__data) - self.__offset

    def at_end(self) -> bool:
        return self.remaining == 0

    def read_exact(self, size: int, field: str = 'data') -> bytes:
        """
        :param size: the number of bytes to read.
        :param field: name of what is being read, used in the error message.
        :returns: the next size bytes.
        :raises TruncatedChunkException: if fewer than size bytes are left.
        """
        if size > self.remaining:
            raise TruncatedChunkException(field, size, self.remaining)
        start = self.__offset
        self.__offset += size
        return self.__data[start:self.__offset]

    def read_uint32(self, field: str = 'integer') -> int:
        return unpack('>I', self.read_exact(4, field))[0]
