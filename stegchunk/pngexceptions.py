"""
Exceptions raised by the chunk codec.
Every failure the codec can report has its own class, so callers can tell
a corrupted file from a missing message without reading error strings.
"""


class StegChunkException(Exception):
    """Base class for all the errors raised by stegchunk."""


class PngFormatException(StegChunkException):
    """Raised when a chunk type or a PNG stream does not have the expected format."""


class InvalidChunkTypeException(PngFormatException):
    """Raised when a chunk type is not made of exactly 4 ASCII letters."""

    def __init__(self, txt):
        super(InvalidChunkTypeException, self).__init__(txt)


class InvalidPngStructureException(PngFormatException):
    """Raised when a png structure is invalid."""

    def __init__(self, txt):
        super(InvalidPngStructureException, self).__init__(txt)


class InvalidChunkStructureException(StegChunkException):
    """Raised when a chunk's internal structure is invalid."""

    def __init__(self, txt):
        super(InvalidChunkStructureException, self).__init__(txt)


class TruncatedChunkException(InvalidChunkStructureException):
    """Raised when the stream ends before a chunk field could be read entirely."""

    def __init__(self, field, expected, available):
        self.field = field
        self.expected = expected
        self.available = available
        super(TruncatedChunkException, self).__init__(
            "truncated chunk: expected {} bytes of {} but only {} left".format(expected, field, available)
        )


class ChecksumMismatchException(InvalidChunkStructureException):
    """Raised when the CRC stored in a chunk does not match its content."""

    def __init__(self, computed, stored):
        self.computed = computed
        self.stored = stored
        super(ChecksumMismatchException, self).__init__(
            "CRC not valid: stored {} but computed {}".format(stored, computed)
        )


class PayloadEncodingException(StegChunkException):
    """Raised when a chunk's payload is read as text but is not valid UTF-8."""

    def __init__(self, txt):
        super(PayloadEncodingException, self).__init__(txt)


class ChunkNotFoundException(StegChunkException):
    """Raised when no chunk of the requested type exists in a PNG."""

    def __init__(self, chunk_type):
        self.chunk_type = chunk_type
        super(ChunkNotFoundException, self).__init__("chunk not found: {}".format(chunk_type))
