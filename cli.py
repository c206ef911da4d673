"""Command line interface for PNGSECRET.

This module implements the command dispatcher used by :mod:`main`: a
``pngsecret`` command with ``encode``, ``decode``, ``remove`` and ``print``
sub-commands. Each command reads the whole file, hands the bytes to
:mod:`png_chunks`, and writes or prints the result.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, Optional

from config import APP_NAME, APP_VERSION, CHUNK_SETTINGS
from png_chunks import Chunk, ChunkType, PNGChunkError, Png
from utils.logger import log_operation, setup_logger
from utils.validators import validate_png_path

logger = setup_logger(__name__)

_FLAG_LABELS = {
    "critical": ("critical", "ancillary"),
    "public": ("public", "private"),
    "safe_to_copy": ("safe-to-copy", "unsafe-to-copy"),
}


class CLIError(RuntimeError):
    """Custom error raised for recoverable CLI failures."""


_EXPECTED_ERRORS = (CLIError, PNGChunkError)


def _ensure_exists(path: Path, description: str) -> Path:
    result = validate_png_path(path)
    if not result.valid:
        raise CLIError(f"{description}: {result.message}: {path}")
    if result.warning:
        logger.warning("%s: %s", path, result.message)
    return path


def _read_png(path: Path) -> Png:
    source = _ensure_exists(path, "Input file")
    return Png.decode(source.read_bytes())


def _format_flags(chunk_type: ChunkType) -> str:
    described = chunk_type.describe()
    flags = [
        labels[0] if described[name] else labels[1]
        for name, labels in _FLAG_LABELS.items()
    ]
    if not described["reserved_bit_valid"]:
        flags.append("reserved-bit-set")
    return ", ".join(flags)


class PngSecretCLI:
    """CLI dispatcher for PNGSECRET."""

    def __init__(self, args) -> None:
        self.args = args
        self.command = getattr(args, "command", None)

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------
    def run(self) -> bool:
        try:
            if self.command == "encode":
                self._handle_encode()
            elif self.command == "decode":
                self._handle_decode()
            elif self.command == "remove":
                self._handle_remove()
            elif self.command == "print":
                self._handle_print()
            else:
                raise CLIError("No command specified. Use --help for usage information.")
        except _EXPECTED_ERRORS as exc:
            print(f"Error: {exc}")
            return False
        except OSError as exc:
            logger.error("I/O error: %s", exc)
            print(f"Error: {exc}")
            return False
        except KeyboardInterrupt:
            print("Operation cancelled by user.")
            return False

        return True

    # ------------------------------------------------------------------
    # Encode command
    # ------------------------------------------------------------------
    @log_operation("Encode", expected=_EXPECTED_ERRORS)
    def _handle_encode(self) -> None:
        args = self.args

        input_path = Path(args.input)
        output_path = Path(args.output) if args.output else input_path

        data = args.message.encode("utf-8")
        max_length = CHUNK_SETTINGS["max_length"]
        if len(data) > max_length:
            raise CLIError(f"Message is too long for one chunk ({len(data)} > {max_length} bytes)")

        png = _read_png(input_path)
        chunk = Chunk(args.chunk_type, data)
        png.insert_before_end(chunk)
        output_path.write_bytes(png.encode())

        log_operation(logger, "Encode", details=f"{chunk.chunk_type} -> {output_path}")
        print(f"{APP_NAME} v{APP_VERSION} - Encode")
        print(f"Input  : {input_path}")
        print(f"Output : {output_path}")
        print(f"Chunk  : {chunk.chunk_type} ({chunk.length} bytes)")

    # ------------------------------------------------------------------
    # Decode command
    # ------------------------------------------------------------------
    @log_operation("Decode", expected=_EXPECTED_ERRORS)
    def _handle_decode(self) -> None:
        args = self.args

        path = Path(args.path)
        png = _read_png(path)
        chunk = png.chunk_by_type(args.chunk_type)
        if chunk is None:
            raise CLIError(f"No {args.chunk_type} chunk found in {path}")

        print(chunk.display_text())

    # ------------------------------------------------------------------
    # Remove command
    # ------------------------------------------------------------------
    @log_operation("Remove", expected=_EXPECTED_ERRORS)
    def _handle_remove(self) -> None:
        args = self.args

        path = Path(args.path)
        png = _read_png(path)
        removed = png.remove_chunk(args.chunk_type)
        path.write_bytes(png.encode())

        print(f"Removed chunk: {removed}")

    # ------------------------------------------------------------------
    # Print command
    # ------------------------------------------------------------------
    @log_operation("Print", expected=_EXPECTED_ERRORS)
    def _handle_print(self) -> None:
        args = self.args

        path = Path(args.path)
        png = _read_png(path)

        print(f"{path}: {len(png)} chunks")
        for index, chunk in enumerate(png.chunks()):
            print(f"  [{index}] {chunk}")
            print(f"        crc={chunk.crc:08x}  {_format_flags(chunk.chunk_type)}")


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Entry point used by unit tests."""

    from main import main as run_main  # Lazy import to avoid circular dependency.

    return run_main(list(argv) if argv is not None else None)


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    sys.exit(main(sys.argv[1:]))
