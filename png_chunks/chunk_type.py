"""Four-letter PNG chunk type codes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Union

from .errors import InvalidChunkTypeByte, InvalidChunkTypeLength

__all__ = ["ChunkType", "ChunkTypeLike"]

_PROPERTY_BIT = 5


def _is_valid_byte(byte: int) -> bool:
    return 65 <= byte <= 90 or 97 <= byte <= 122


def _is_flag_zero(byte: int, bit: int = _PROPERTY_BIT) -> bool:
    return byte & (1 << bit) == 0


@dataclass(frozen=True)
class ChunkType:
    """A validated chunk type code.

    The case of each letter carries a property bit (bit 5): ancillary,
    private, reserved and safe-to-copy, in that order.
    """

    raw: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.raw, (bytes, bytearray, memoryview)):
            raise TypeError("chunk type must be a bytes-like object")
        raw = bytes(self.raw)
        if len(raw) != 4:
            raise InvalidChunkTypeLength(len(raw))
        for byte in raw:
            if not _is_valid_byte(byte):
                raise InvalidChunkTypeByte(byte)
        object.__setattr__(self, "raw", raw)

    @classmethod
    def from_bytes(cls, raw: Union[bytes, bytearray, memoryview]) -> "ChunkType":
        return cls(bytes(raw))

    @classmethod
    def from_string(cls, text: str) -> "ChunkType":
        return cls(text.encode("utf-8"))

    @classmethod
    def coerce(cls, value: "ChunkTypeLike") -> "ChunkType":
        """Return *value* as a :class:`ChunkType`, parsing strings and bytes."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls.from_bytes(value)
        raise TypeError(f"Cannot build a chunk type from {type(value).__name__}")

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return self.raw.decode("ascii")

    def __repr__(self) -> str:
        return f"ChunkType({str(self)!r})"

    @property
    def is_critical(self) -> bool:
        return _is_flag_zero(self.raw[0])

    @property
    def is_public(self) -> bool:
        return _is_flag_zero(self.raw[1])

    @property
    def is_reserved_bit_valid(self) -> bool:
        # Must be uppercase in files conforming to the current PNG version
        return _is_flag_zero(self.raw[2])

    @property
    def is_safe_to_copy(self) -> bool:
        return not _is_flag_zero(self.raw[3])

    @property
    def is_valid(self) -> bool:
        return self.is_reserved_bit_valid

    def describe(self) -> Dict[str, bool]:
        return {
            "critical": self.is_critical,
            "public": self.is_public,
            "reserved_bit_valid": self.is_reserved_bit_valid,
            "safe_to_copy": self.is_safe_to_copy,
        }


ChunkTypeLike = Union[ChunkType, str, bytes, bytearray, memoryview]
