"""The PNG container: signature plus an ordered list of chunks."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from .chunk import BytesLike, Chunk
from .chunk_type import ChunkType, ChunkTypeLike
from .errors import BadSignature, ChunkTypeNotFound

__all__ = ["Png", "PNG_SIGNATURE"]

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_END_TYPE = ChunkType(b"IEND")


class Png:
    """A whole PNG file held in memory as a list of :class:`Chunk` objects.

    Chunk order is the on-disk order and decides which chunk a type lookup
    returns. Several chunks may share a type.
    """

    SIGNATURE = PNG_SIGNATURE

    def __init__(self, chunks: Iterable[Chunk] = ()) -> None:
        self._chunks: List[Chunk] = list(chunks)

    @classmethod
    def from_chunks(cls, chunks: Iterable[Chunk]) -> "Png":
        return cls(chunks)

    @classmethod
    def decode(cls, buffer: BytesLike) -> "Png":
        """Parse a complete PNG file.

        Raises :class:`BadSignature` when the magic bytes are missing and
        propagates the first chunk error otherwise; nothing is returned for a
        partially valid file.
        """

        view = memoryview(buffer)
        header = bytes(view[: len(PNG_SIGNATURE)])
        if header != PNG_SIGNATURE:
            raise BadSignature(header)

        chunks: List[Chunk] = []
        offset = len(PNG_SIGNATURE)
        while offset < len(view):
            chunk, offset = Chunk.decode_from(view, offset)
            chunks.append(chunk)

        logger.debug("Decoded PNG with %d chunks", len(chunks))
        return cls(chunks)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def chunks(self) -> Tuple[Chunk, ...]:
        return tuple(self._chunks)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks())

    def __len__(self) -> int:
        return len(self._chunks)

    def chunk_by_type(self, chunk_type: ChunkTypeLike) -> Optional[Chunk]:
        wanted = ChunkType.coerce(chunk_type)
        for chunk in self._chunks:
            if chunk.chunk_type == wanted:
                return chunk
        return None

    def chunks_by_type(self, chunk_type: ChunkTypeLike) -> List[Chunk]:
        wanted = ChunkType.coerce(chunk_type)
        return [chunk for chunk in self._chunks if chunk.chunk_type == wanted]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def append_chunk(self, chunk: Chunk) -> None:
        self._chunks.append(chunk)

    def insert_before_end(self, chunk: Chunk) -> None:
        """Insert *chunk* ahead of the first ``IEND``, or append it if there is none.

        Decoders stop reading at ``IEND``, so data placed after it is easy to
        lose when the file is re-saved by other tools.
        """

        for index, existing in enumerate(self._chunks):
            if existing.chunk_type == _END_TYPE:
                self._chunks.insert(index, chunk)
                return
        self._chunks.append(chunk)

    def remove_chunk(self, chunk_type: ChunkTypeLike) -> Chunk:
        """Remove and return the first chunk of *chunk_type*."""

        wanted = ChunkType.coerce(chunk_type)
        for index, chunk in enumerate(self._chunks):
            if chunk.chunk_type == wanted:
                del self._chunks[index]
                logger.debug("Removed %s chunk at index %d", wanted, index)
                return chunk
        raise ChunkTypeNotFound(wanted)

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------
    def encode(self) -> bytes:
        return PNG_SIGNATURE + b"".join(chunk.encode() for chunk in self._chunks)

    def __bytes__(self) -> bytes:
        return self.encode()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Png):
            return NotImplemented
        return self._chunks == other._chunks

    def __repr__(self) -> str:
        return f"Png({len(self._chunks)} chunks)"

    def __str__(self) -> str:
        return "\n".join(str(chunk) for chunk in self._chunks)
