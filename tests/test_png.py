from io import BytesIO
from pathlib import Path
import struct
import sys
import zlib

import pytest
from PIL import Image

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from png_chunks import (
    PNG_SIGNATURE,
    BadSignature,
    Chunk,
    ChunkType,
    ChunkTypeNotFound,
    CrcMismatch,
    InvalidChunkTypeByte,
    Png,
    TruncatedInput,
)


def _minimal_png_bytes() -> bytes:
    ihdr_data = struct.pack(">IIBBBBB", 1, 1, 8, 2, 0, 0, 0)
    idat_data = zlib.compress(b"\x00\xff\x00\x00")  # filter byte + RGB pixel
    return (
        PNG_SIGNATURE
        + Chunk("IHDR", ihdr_data).encode()
        + Chunk("IDAT", idat_data).encode()
        + Chunk("IEND", b"").encode()
    )


def _pillow_png_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (4, 3), (200, 10, 10)).save(buffer, format="PNG")
    return buffer.getvalue()


def _testing_chunks():
    return [
        Chunk("FrSt", b"I am the first chunk"),
        Chunk("miDl", b"I am another chunk"),
        Chunk("LASt", b"I am the last chunk"),
    ]


def test_signature_constant() -> None:
    assert Png.SIGNATURE == bytes([137, 80, 78, 71, 13, 10, 26, 10])


def test_from_chunks_keeps_order() -> None:
    png = Png.from_chunks(_testing_chunks())
    assert [str(chunk.chunk_type) for chunk in png.chunks()] == ["FrSt", "miDl", "LASt"]
    assert len(png) == 3


def test_decode_minimal_png() -> None:
    png = Png.decode(_minimal_png_bytes())
    assert [str(chunk.chunk_type) for chunk in png] == ["IHDR", "IDAT", "IEND"]


def test_decode_real_png() -> None:
    data = _pillow_png_bytes()
    png = Png.decode(data)
    assert png.chunk_by_type("IHDR") is not None
    assert png.encode() == data


def test_signature_only_file_has_no_chunks() -> None:
    png = Png.decode(PNG_SIGNATURE)
    assert len(png) == 0
    assert png.encode() == PNG_SIGNATURE


@pytest.mark.parametrize(
    "data",
    [b"", b"\x89PNG", b"GIF89a\x00\x00", b"\x89PNG\r\n\x1a\x0b" + Chunk("IEND", b"").encode()],
)
def test_bad_signature_is_rejected(data: bytes) -> None:
    with pytest.raises(BadSignature):
        Png.decode(data)


def test_corrupt_chunk_aborts_parse() -> None:
    data = bytearray(_minimal_png_bytes())
    # last byte of the IEND CRC
    data[-1] ^= 0xFF
    with pytest.raises(CrcMismatch):
        Png.decode(bytes(data))


def test_trailing_garbage_aborts_parse() -> None:
    with pytest.raises(TruncatedInput):
        Png.decode(_minimal_png_bytes() + b"\x00\x00")


def test_invalid_type_aborts_parse() -> None:
    bad = struct.pack(">I", 0) + b"12AB" + struct.pack(">I", 0)
    with pytest.raises(InvalidChunkTypeByte):
        Png.decode(_minimal_png_bytes() + bad)


def test_round_trip_preserves_chunks() -> None:
    png = Png.from_chunks(_testing_chunks())
    decoded = Png.decode(png.encode())
    assert decoded.chunks() == png.chunks()
    assert decoded == png


def test_encode_layout() -> None:
    chunks = _testing_chunks()
    png = Png.from_chunks(chunks)
    assert png.encode() == PNG_SIGNATURE + b"".join(chunk.encode() for chunk in chunks)
    assert bytes(png) == png.encode()


def test_chunks_view_is_reiterable_and_read_only() -> None:
    png = Png.from_chunks(_testing_chunks())
    view = png.chunks()
    assert list(view) == list(view)
    assert list(png) == list(png)
    with pytest.raises(TypeError):
        view[0] = Chunk("ruSt", b"")  # type: ignore[index]


def test_chunk_by_type() -> None:
    png = Png.from_chunks(_testing_chunks())
    chunk = png.chunk_by_type("FrSt")
    assert chunk is not None
    assert chunk.data_as_text() == "I am the first chunk"
    assert png.chunk_by_type(ChunkType(b"miDl")).data == b"I am another chunk"
    assert png.chunk_by_type(b"LASt") is not None
    assert png.chunk_by_type("ruSt") is None


def test_append_then_lookup() -> None:
    png = Png.from_chunks(_testing_chunks())
    png.append_chunk(Chunk("TeSt", b"Message"))
    assert png.chunks()[-1].chunk_type == ChunkType(b"TeSt")
    assert png.chunk_by_type("TeSt").data_as_text() == "Message"


def test_append_keeps_duplicates() -> None:
    png = Png.from_chunks(_testing_chunks())
    png.append_chunk(Chunk("FrSt", b"second"))
    assert len(png) == 4
    assert png.chunk_by_type("FrSt").data == b"I am the first chunk"
    assert [c.data for c in png.chunks_by_type("FrSt")] == [b"I am the first chunk", b"second"]


def test_remove_chunk() -> None:
    png = Png.from_chunks(_testing_chunks())
    removed = png.remove_chunk("miDl")
    assert removed.data == b"I am another chunk"
    assert png.chunk_by_type("miDl") is None
    assert [str(chunk.chunk_type) for chunk in png] == ["FrSt", "LASt"]


def test_remove_missing_chunk_leaves_png_unchanged() -> None:
    png = Png.from_chunks(_testing_chunks())
    before = png.chunks()
    with pytest.raises(ChunkTypeNotFound) as excinfo:
        png.remove_chunk("ruSt")
    assert excinfo.value.chunk_type == ChunkType(b"ruSt")
    assert png.chunks() == before


def test_remove_only_first_duplicate() -> None:
    png = Png.from_chunks(_testing_chunks())
    png.append_chunk(Chunk("FrSt", b"second"))
    png.remove_chunk("FrSt")
    remaining = png.chunks_by_type("FrSt")
    assert [c.data for c in remaining] == [b"second"]
    assert png.chunks()[-1].data == b"second"


def test_insert_before_end() -> None:
    png = Png.decode(_minimal_png_bytes())
    png.insert_before_end(Chunk("ruSt", b"hello"))
    assert [str(chunk.chunk_type) for chunk in png] == ["IHDR", "IDAT", "ruSt", "IEND"]


def test_insert_before_end_without_iend_appends() -> None:
    png = Png.from_chunks(_testing_chunks())
    png.insert_before_end(Chunk("ruSt", b"hello"))
    assert png.chunks()[-1].chunk_type == ChunkType(b"ruSt")


def test_str_lists_chunks() -> None:
    text = str(Png.from_chunks(_testing_chunks()))
    assert len(text.splitlines()) == 3
    assert "I am the last chunk" in text


def test_hidden_message_end_to_end() -> None:
    original = _minimal_png_bytes()

    png = Png.decode(original)
    png.append_chunk(Chunk(ChunkType.from_string("ruSt"), b"hello"))
    stego = png.encode()

    found = Png.decode(stego).chunk_by_type("ruSt")
    assert found is not None
    assert found.data_as_text() == "hello"

    cleaned = Png.decode(stego)
    cleaned.remove_chunk("ruSt")
    restored = cleaned.encode()
    assert Png.decode(restored).chunk_by_type("ruSt") is None
    assert restored == original


def test_image_with_hidden_chunk_still_opens() -> None:
    png = Png.decode(_pillow_png_bytes())
    png.insert_before_end(Chunk("ruSt", b"hello"))

    with Image.open(BytesIO(png.encode())) as image:
        image.load()
        assert image.size == (4, 3)
        assert image.getpixel((0, 0)) == (200, 10, 10)
