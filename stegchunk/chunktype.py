from .pngexceptions import InvalidChunkTypeException
from .utils import as_data, Data as _Data


"""
Chunk types are four bytes tags. Besides naming the chunk, bit 5 of each byte
(the case of the letter) carries a property of the chunk:

    byte 0: ancillary bit    (uppercase = critical, lowercase = ancillary)
    byte 1: private bit      (uppercase = public, lowercase = private)
    byte 2: reserved bit     (must be uppercase)
    byte 3: safe-to-copy bit (uppercase = unsafe to copy, lowercase = safe to copy)

See https://www.w3.org/TR/PNG/#5Chunk-naming-conventions
"""

_ChunkType = "ChunkType"


def _isupper(byte: int) -> bool:
    return 0x41 <= byte <= 0x5a


def _islower(byte: int) -> bool:
    return 0x61 <= byte <= 0x7a


class ChunkType:

    """
    An immutable PNG chunk type.
    The properties encoded in the tag are always computed from the stored bytes.
    """

    def __init__(self, typebytes: _Data) -> None:
        """
        Use :meth:`from_bytes` or :meth:`from_string` rather than calling this directly.

        :param typebytes: the four bytes of the tag. They are not checked for validity.
        :raises TypeError: if typebytes is not of a bytes-like type.
        :raises InvalidChunkTypeException: if typebytes is not exactly 4 bytes long.
        """
        typebytes = as_data(typebytes)
        if len(typebytes) != 4:
            raise InvalidChunkTypeException(
                "a chunk type is 4 bytes long, got {}".format(len(typebytes))
            )
        self.__bytes = typebytes

    @classmethod
    def from_bytes(cls, typebytes: _Data) -> _ChunkType:
        return cls(typebytes)

    @classmethod
    def from_string(cls, name: str) -> _ChunkType:
        """
        :param name: a four letters chunk name, e.g. 'tEXt'.
        :returns: the corresponding chunk type, with the exact case given.
        :raises TypeError: if name is not a string.
        :raises InvalidChunkTypeException: if name is not 4 ASCII letters.
        """
        if not isinstance(name, str):
            raise TypeError("A chunk's type should be a string.")
        if len(name) != 4:
            raise InvalidChunkTypeException(
                "A chunk's type have to be 4 characters long, got {!r}".format(name)
            )
        for c in name:
            if not (c.isascii() and c.isalpha()):
                raise InvalidChunkTypeException(
                    "A chunk's type can only contain ASCII letters, got {!r}".format(name)
                )
        return cls(name.encode('ascii'))

    @property
    def bytes(self) -> bytes:
        return self.__bytes

    def is_valid(self) -> bool:
        """
        :returns: True if the reserved bit is valid and all four bytes are ASCII letters.
        """
        if not self.is_reserved_bit_valid():
            return False
        return all(_isupper(b) or _islower(b) for b in self.__bytes)

    def is_critical(self) -> bool:
        """
        :returns: whether the critical bit is set (first letter uppercase).
            A decoder coming across a critical chunk it doesn't know about should produce an error.
        """
        return _isupper(self.__bytes[0])

    def is_ancillary(self) -> bool:
        return not self.is_critical()

    def is_public(self) -> bool:
        return _isupper(self.__bytes[1])

    def is_reserved_bit_valid(self) -> bool:
        return _isupper(self.__bytes[2])

    def is_safe_to_copy(self) -> bool:
        """
        :returns: whether editors that do not recognize this chunk may copy it
            into a modified file (last letter lowercase).
        """
        return _islower(self.__bytes[3])

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChunkType):
            return NotImplemented
        return self.__bytes == other.bytes

    def __hash__(self) -> int:
        return hash(self.__bytes)

    def __str__(self) -> str:
        # latin-1 maps every byte to exactly one character
        return self.__bytes.decode('latin-1')

    def __repr__(self) -> str:
        return "ChunkType({!r})".format(str(self))
