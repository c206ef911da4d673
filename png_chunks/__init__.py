"""Read, modify and write PNG chunks.

Typical use::

    png = Png.decode(path.read_bytes())
    png.insert_before_end(Chunk.from_text("ruSt", "hello"))
    path.write_bytes(png.encode())
"""

from .chunk import MAX_CHUNK_LENGTH, NON_TEXT_PLACEHOLDER, Chunk, compute_crc
from .chunk_type import ChunkType, ChunkTypeLike
from .errors import (
    BadSignature,
    ChunkDataLengthMismatch,
    ChunkLengthTooLarge,
    ChunkTypeError,
    ChunkTypeNotFound,
    CrcMismatch,
    DecodeError,
    InvalidChunkTypeByte,
    InvalidChunkTypeLength,
    InvalidUtf8,
    PNGChunkError,
    TruncatedInput,
)
from .png import PNG_SIGNATURE, Png

__all__ = [
    "BadSignature",
    "Chunk",
    "ChunkDataLengthMismatch",
    "ChunkLengthTooLarge",
    "ChunkType",
    "ChunkTypeError",
    "ChunkTypeLike",
    "ChunkTypeNotFound",
    "CrcMismatch",
    "DecodeError",
    "InvalidChunkTypeByte",
    "InvalidChunkTypeLength",
    "InvalidUtf8",
    "MAX_CHUNK_LENGTH",
    "NON_TEXT_PLACEHOLDER",
    "PNGChunkError",
    "PNG_SIGNATURE",
    "Png",
    "TruncatedInput",
    "compute_crc",
]
