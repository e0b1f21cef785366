"""
stegchunk hides text messages in the ancillary chunks of PNG files,
and reads, lists and removes them again, leaving the rest of the file untouched.
"""

from .chunktype import ChunkType
from .png import (
    Png,
    PngChunk,
    create_empty_chunk,
    create_empty_png,
    open,
    read_png_signature,
)
from .pngexceptions import *

__version__ = "1.0.0"
