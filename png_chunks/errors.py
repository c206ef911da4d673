"""Exceptions raised by the PNG chunk codec.

Every failure is a subclass of :class:`PNGChunkError` (itself a
``ValueError``), so callers can catch the whole family at a boundary or match
a single kind in tests.
"""

from __future__ import annotations

__all__ = [
    "PNGChunkError",
    "ChunkTypeError",
    "InvalidChunkTypeByte",
    "InvalidChunkTypeLength",
    "DecodeError",
    "ChunkLengthTooLarge",
    "TruncatedInput",
    "ChunkDataLengthMismatch",
    "CrcMismatch",
    "BadSignature",
    "ChunkTypeNotFound",
    "InvalidUtf8",
]


class PNGChunkError(ValueError):
    """Base class for all chunk and container errors."""


class ChunkTypeError(PNGChunkError):
    """A chunk type code could not be constructed."""


class InvalidChunkTypeByte(ChunkTypeError):
    """A chunk type byte lies outside ``A-Z``/``a-z``."""

    def __init__(self, byte: int) -> None:
        self.byte = byte
        super().__init__(f"Invalid chunk type byte: {byte} ({byte:#04x}, {byte:08b})")


class InvalidChunkTypeLength(ChunkTypeError):
    """A chunk type code is not exactly four bytes long."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"Invalid chunk type length: {length} (expected 4)")


class DecodeError(PNGChunkError):
    """A byte buffer could not be decoded into a chunk or PNG."""


class ChunkLengthTooLarge(DecodeError):
    def __init__(self, length: int, maximum: int) -> None:
        self.length = length
        self.maximum = maximum
        super().__init__(f"Chunk length is too long ({length} > {maximum})")


class TruncatedInput(DecodeError):
    """Fewer bytes remain than a field requires."""

    def __init__(self, field: str, expected: int, available: int) -> None:
        self.field = field
        self.expected = expected
        self.available = available
        super().__init__(
            f"Buffer too short for {field}: need {expected} bytes, {available} available"
        )


class ChunkDataLengthMismatch(DecodeError):
    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Chunk data is {actual} bytes long (expected {expected})")


class CrcMismatch(DecodeError):
    """The stored CRC does not match the one computed over type and data."""

    def __init__(self, stored: int, computed: int) -> None:
        self.stored = stored
        self.computed = computed
        super().__init__(f"Bad CRC (received {stored:#010x}, expected {computed:#010x})")


class BadSignature(DecodeError):
    def __init__(self, found: bytes) -> None:
        self.found = bytes(found)
        super().__init__(f"Bad PNG signature: {self.found.hex() or 'empty input'}")


class ChunkTypeNotFound(PNGChunkError):
    def __init__(self, chunk_type) -> None:
        self.chunk_type = chunk_type
        super().__init__(f"Chunk type not found: {chunk_type}")


class InvalidUtf8(PNGChunkError):
    """Chunk data is not valid UTF-8 text."""

    def __init__(self, reason: UnicodeDecodeError) -> None:
        self.reason = reason
        super().__init__(f"Chunk data is not valid UTF-8: {reason}")
