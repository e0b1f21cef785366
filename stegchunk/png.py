import logging
from struct import pack
from typing import Iterator, Optional, Union

from . import fileio
from .chunktype import ChunkType
from .pngexceptions import (
    ChecksumMismatchException,
    ChunkNotFoundException,
    InvalidPngStructureException,
    PayloadEncodingException,
)
from .utils import ByteReader, as_data, crc, Data as _Data


"""
This is the main stegchunk module, and contains the structures that make up a PNG file:
the chunks and the file that holds them.
"""

logger = logging.getLogger(__name__)

# Type aliases for annotations
_Png = "Png"
_Chunk = "PngChunk"
_ChunkTypeLike = Union[ChunkType, str]

_PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'

# Length, type and CRC fields
_CHUNK_OVERHEAD = 12
_MAX_LENGTH = (1 << 32) - 1


class PngChunk:

    """
    Represents a PNG chunk.
    The structure of a png chunk should be as follow:
            [   length (4 bytes, big-endian) |
                type (4 bytes, ascii)        |
                data (length bytes)          |
                crc (4 bytes, big-endian)    ]

    The crc checksum is calculated with the chunk type and data, but does
    not include the length header.
    Chunks are immutable: the length and the crc are always derived from the type and the data.
    """

    def __init__(self, chunk_type: _ChunkTypeLike, data: _Data = b'') -> None:
        """
        Creates a new chunk. To read a chunk from raw bytes, use :meth:`from_bytes`.

        :param chunk_type: the chunk type, either as a :class:`ChunkType` or as a 4 letters string.
        :param data: the chunk's payload.
        :raises TypeError: if one of the arguments is not of a valid type.
        :raises InvalidChunkTypeException: if chunk_type is a string that is not a valid chunk name.
        :raises ValueError: if data is too long to fit in a chunk.
        """
        if isinstance(chunk_type, str):
            chunk_type = ChunkType.from_string(chunk_type)
        elif not isinstance(chunk_type, ChunkType):
            raise TypeError(
                "A chunk's type should be a ChunkType or a string, not {}".format(type(chunk_type).__name__)
            )
        data = as_data(data)
        if len(data) > _MAX_LENGTH:
            raise ValueError("A chunk's payload cannot be longer than {} bytes".format(_MAX_LENGTH))
        self.__type = chunk_type
        self.__data = data

    @classmethod
    def from_bytes(cls, chunkbytes: _Data) -> _Chunk:
        """
        Reads a chunk from its raw bytes.
        Anything following the CRC field is ignored.

        :param chunkbytes: the raw bytes of the chunk.
        :returns: the decoded chunk.
        :raises TruncatedChunkException: if chunkbytes ends before the chunk does.
        :raises ChecksumMismatchException: if the stored CRC does not match the chunk's content.
        """
        return cls.read(ByteReader(chunkbytes))

    @classmethod
    def read(cls, reader: ByteReader) -> _Chunk:
        """
        Reads the chunk starting at the reader's position, and moves the reader after it.

        :param reader: a reader positioned at the start of a chunk.
        :returns: the decoded chunk.
        :raises TruncatedChunkException: if the stream ends before the chunk does.
        :raises ChecksumMismatchException: if the stored CRC does not match the chunk's content.
        """
        start = reader.offset
        length = reader.read_uint32('length')
        typebytes = reader.read_exact(4, 'chunk type')
        data = reader.read_exact(length, 'chunk data')
        stored_crc = reader.read_uint32('crc')
        computed_crc = crc(typebytes + data)
        if computed_crc != stored_crc:
            raise ChecksumMismatchException(computed_crc, stored_crc)
        chunk = cls(ChunkType.from_bytes(typebytes), data)
        logger.debug("read chunk %r at offset %d", chunk, start)
        return chunk

    @property
    def type(self) -> ChunkType:
        """
        :returns: the type of this chunk (E.g. IHDR)
        """
        return self.__type

    @property
    def data(self) -> bytes:
        """
        :returns: this chunk's payload.
        """
        return self.__data

    @property
    def length(self) -> int:
        """
        :returns: the length of this chunk's payload.
        """
        return len(self.__data)

    def __len__(self) -> int:
        return self.length

    @property
    def crc(self) -> int:
        """
        Computes the CRC checksum for this chunk.
        :returns: the CRC-32 of the chunk type followed by the payload.
        """
        return crc(self.__type.bytes + self.__data)

    @property
    def bytes(self) -> bytes:
        """
        :returns: this chunk's raw content, as it is stored in a PNG file.
        """
        return pack('>I', self.length) + self.__type.bytes + self.__data + pack('>I', self.crc)

    def data_as_string(self) -> str:
        """
        :returns: the payload, decoded as UTF-8 text.
        :raises PayloadEncodingException: if the payload is not valid UTF-8.
        """
        try:
            return self.__data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise PayloadEncodingException(
                "the payload of the {} chunk is not valid UTF-8: {}".format(self.__type, e)
            ) from e

    def iscritical(self) -> bool:
        return self.__type.is_critical()

    def isancillary(self) -> bool:
        return self.__type.is_ancillary()

    def __eq__(self, other) -> bool:
        if not isinstance(other, PngChunk):
            return NotImplemented
        return self.__type == other.type and self.__data == other.data

    def __hash__(self) -> int:
        return hash((self.__type, self.__data))

    def __str__(self) -> str:
        return "{}, {}, {}, {}".format(self.length, self.__type, self.data_as_string(), self.crc)

    def __repr__(self) -> str:
        return "<PngChunk [{}] length={} crc={}>".format(self.__type, self.length, self.crc)


class Png:

    """
    Represents a PNG file as a sequence of chunks: https://www.w3.org/TR/PNG/.
    A PNG file starts with the PNG signature.
    It then contains a stream of PNG chunks, each starting with a four bytes length,
    followed by a four bytes type and then by a payload of the specified length, followed by a CRC checksum.

    The order of the chunks is kept as is. Apart from the signature and the chunks' CRC,
    nothing is checked: a Png can hold chunks in any order, or several chunks of the same type.
    """

    def __init__(self, chunks=None) -> None:
        """
        Constructs a :class:`Png` object holding the given chunks.
        To read a PNG from bytes, prefer :meth:`from_bytes`,
        and to read one from disc or http, prefer the :func:`stegchunk.open` function.

        :param chunks: an iterable of :class:`PngChunk`, in file order.
        :raises TypeError: if one of the chunks is not a :class:`PngChunk`.
        """
        self.__chunks = []
        for chunk in chunks or ():
            self.append_chunk(chunk)

    @classmethod
    def from_bytes(cls, filebytes: _Data, ignore_signature: bool = False) -> _Png:
        """
        Reads every chunk in filebytes.

        :param filebytes: the bytes that make up the PNG.
        :param ignore_signature: consider the PNG signature missing from the file's header.
        :raises TypeError: if filebytes is not of a bytes-like type.
        :raises InvalidPngStructureException: if ignore_signature is False and the PNG signature is missing.
        :raises InvalidChunkStructureException: if one of the chunks is truncated or has an invalid CRC.
        """
        filebytes = as_data(filebytes)
        if ignore_signature:
            reader = ByteReader(filebytes)
        else:
            if not read_png_signature(filebytes):
                raise InvalidPngStructureException("missing PNG signature")
            reader = ByteReader(filebytes, len(_PNG_SIGNATURE))
        png = cls()
        while not reader.at_end():
            png.__chunks.append(PngChunk.read(reader))
        logger.debug("read %d chunks from %d bytes", len(png.__chunks), len(filebytes))
        return png

    @classmethod
    def from_path(cls, path, ignore_signature: bool = False) -> _Png:
        """
        Reads a PNG file from disc.

        :raises OSError: if the file cannot be read.
        """
        return cls.from_bytes(fileio.read_all_bytes(path), ignore_signature=ignore_signature)

    @property
    def chunks(self) -> tuple:
        """
        :returns: the PNG chunks that make up this image, in order.
        """
        return tuple(self.__chunks)

    def __len__(self) -> int:
        return len(self.__chunks)

    def __iter__(self) -> Iterator[PngChunk]:
        return iter(self.chunks)

    @property
    def bytes(self) -> bytes:
        """
        :returns: the raw bytes that make up the PNG file.
        """
        b = bytearray(_PNG_SIGNATURE)
        for chunk in self.__chunks:
            b += chunk.bytes
        return bytes(b)

    def save(self, file_name, overwrite: bool = True) -> None:
        """
        Save this PNG to a file on disc.

        :param file_name: name to save the file as.
        :param overwrite: whether an existing file may be replaced.
        :raises FileExistsError: if overwrite is False and the file already exists.
        """
        fileio.write_all_bytes(file_name, self.bytes, overwrite=overwrite)

    def copy(self) -> _Png:
        """
        :returns: a new Png object with the same chunks as this one.
        """
        return Png(self.__chunks)

    def append_chunk(self, chunk: PngChunk) -> None:
        """
        Adds the chunk at the end of the file.
        Nothing is checked against the chunks already there.

        :param chunk: the chunk to add to the image.
        :raises TypeError: if chunk is not a :class:`PngChunk`.
        """
        if not isinstance(chunk, PngChunk):
            raise TypeError("Expected a PngChunk, not {}".format(type(chunk).__name__))
        self.__chunks.append(chunk)
        logger.debug("appended %r", chunk)

    def chunk_by_type(self, chunk_type: _ChunkTypeLike) -> Optional[PngChunk]:
        """
        :param chunk_type: the chunk type to look for (e.g. 'IHDR'). The comparison is case sensitive.
        :returns: the first chunk of the given type, or None if there is none.
        """
        index = self.__index_of_type(chunk_type)
        return None if index is None else self.__chunks[index]

    def get_chunks_by_type(self, chunk_type: _ChunkTypeLike) -> tuple:
        """
        :param chunk_type: the chunk type to look for (e.g. IDAT).
        :returns: all the chunks of the given type in this image.
        """
        name = str(chunk_type)
        return tuple(c for c in self.__chunks if str(c.type) == name)

    def remove_chunk(self, chunk_type: _ChunkTypeLike) -> PngChunk:
        """
        Removes the first chunk of the given type from the image.

        :param chunk_type: the chunk type to look for.
        :returns: the removed chunk.
        :raises ChunkNotFoundException: if this image does not contain a chunk of that type.
        """
        index = self.__index_of_type(chunk_type)
        if index is None:
            raise ChunkNotFoundException(str(chunk_type))
        chunk = self.__chunks.pop(index)
        logger.debug("removed %r from index %d", chunk, index)
        return chunk

    def __index_of_type(self, chunk_type):
        name = str(chunk_type)
        for i, chunk in enumerate(self.__chunks):
            if str(chunk.type) == name:
                return i
        return None

    def __repr__(self) -> str:
        return "<Png {} chunks>".format(len(self.__chunks))


def read_png_signature(data: _Data) -> bool:
    return data[0:8] == _PNG_SIGNATURE


def open(filename, ignore_signature: bool = False) -> Png:
    """
    :returns: a Png object, reading from the given file name. Http and Https links are supported as well.
    """
    return Png.from_bytes(fileio.load(filename), ignore_signature=ignore_signature)


def create_empty_chunk(chunk_type: _ChunkTypeLike) -> PngChunk:
    """
    :returns: a chunk of the given type with no payload.
    """
    return PngChunk(chunk_type, b'')


def create_empty_png() -> Png:
    """
    Creates an empty Png object, holding nothing but the signature.
    """
    return Png()
