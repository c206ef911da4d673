"""A single length-prefixed, CRC-checked PNG chunk."""

from __future__ import annotations

import logging
import struct
import zlib
from dataclasses import dataclass, field
from typing import Tuple, Union

from .chunk_type import ChunkType, ChunkTypeLike
from .errors import (
    ChunkDataLengthMismatch,
    ChunkLengthTooLarge,
    CrcMismatch,
    InvalidUtf8,
    TruncatedInput,
)

__all__ = ["Chunk", "MAX_CHUNK_LENGTH", "NON_TEXT_PLACEHOLDER", "compute_crc"]

logger = logging.getLogger(__name__)

MAX_CHUNK_LENGTH = (1 << 31) - 1
NON_TEXT_PLACEHOLDER = "[non-UTF-8 data]"
_LENGTH_STRUCT = struct.Struct(">I")
_CRC_STRUCT = struct.Struct(">I")
_TYPE_SIZE = 4
_OVERHEAD = _LENGTH_STRUCT.size + _TYPE_SIZE + _CRC_STRUCT.size

BytesLike = Union[bytes, bytearray, memoryview]


def compute_crc(chunk_type: ChunkType, data: bytes) -> int:
    """Return the CRC-32/IEEE of the type code followed by the data."""

    return zlib.crc32(chunk_type.raw + data) & 0xFFFFFFFF


def _take(buffer: memoryview, offset: int, size: int, field_name: str) -> bytes:
    available = max(len(buffer) - offset, 0)
    if available < size:
        raise TruncatedInput(field_name, size, available)
    return bytes(buffer[offset : offset + size])


@dataclass(frozen=True)
class Chunk:
    """One PNG chunk: type, data and the CRC over both.

    ``Chunk(chunk_type, data)`` computes the CRC; decoded chunks come from
    :meth:`decode` which verifies it instead.
    """

    chunk_type: ChunkType
    data: bytes = b""
    crc: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "chunk_type", ChunkType.coerce(self.chunk_type))
        object.__setattr__(self, "data", bytes(self.data))
        object.__setattr__(self, "crc", compute_crc(self.chunk_type, self.data))

    @property
    def length(self) -> int:
        return len(self.data)

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------
    @classmethod
    def decode(cls, buffer: BytesLike) -> "Chunk":
        """Decode a chunk from the start of *buffer*.

        Bytes after the CRC are ignored.
        """

        chunk, _ = cls.decode_from(buffer)
        return chunk

    @classmethod
    def decode_from(cls, buffer: BytesLike, offset: int = 0) -> Tuple["Chunk", int]:
        """Decode the chunk starting at *offset*.

        Returns the chunk and the offset just past its CRC.
        """

        view = memoryview(buffer)

        (length,) = _LENGTH_STRUCT.unpack(_take(view, offset, _LENGTH_STRUCT.size, "chunk length"))
        offset += _LENGTH_STRUCT.size
        if length > MAX_CHUNK_LENGTH:
            raise ChunkLengthTooLarge(length, MAX_CHUNK_LENGTH)

        chunk_type = ChunkType.from_bytes(_take(view, offset, _TYPE_SIZE, "chunk type"))
        offset += _TYPE_SIZE

        data = _take(view, offset, length, "chunk data")
        offset += length
        if len(data) != length:
            raise ChunkDataLengthMismatch(length, len(data))

        (stored_crc,) = _CRC_STRUCT.unpack(_take(view, offset, _CRC_STRUCT.size, "chunk CRC"))
        offset += _CRC_STRUCT.size

        computed_crc = compute_crc(chunk_type, data)
        if stored_crc != computed_crc:
            raise CrcMismatch(stored_crc, computed_crc)

        logger.debug("Decoded %s chunk (%d bytes)", chunk_type, length)
        return cls(chunk_type, data), offset

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------
    def encode(self) -> bytes:
        return (
            _LENGTH_STRUCT.pack(self.length)
            + self.chunk_type.raw
            + self.data
            + _CRC_STRUCT.pack(self.crc)
        )

    def __bytes__(self) -> bytes:
        return self.encode()

    @property
    def encoded_size(self) -> int:
        return _OVERHEAD + self.length

    # ------------------------------------------------------------------
    # Text helpers
    # ------------------------------------------------------------------
    def data_as_text(self) -> str:
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidUtf8(exc) from exc

    def display_text(self) -> str:
        """Return the data as text, or a placeholder when it is not UTF-8."""

        try:
            return self.data_as_text()
        except InvalidUtf8:
            return NON_TEXT_PLACEHOLDER

    def __str__(self) -> str:
        return f"{self.chunk_type} (length {self.length}): {self.display_text()}"

    @classmethod
    def from_text(cls, chunk_type: ChunkTypeLike, message: str) -> "Chunk":
        return cls(ChunkType.coerce(chunk_type), message.encode("utf-8"))
