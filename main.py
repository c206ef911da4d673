"""Entry point module for the PNGSECRET application."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Optional

from config import APP_DESCRIPTION, APP_NAME, APP_VERSION, CHUNK_SETTINGS
from png_chunks import ChunkType, ChunkTypeError
from utils.logger import setup_logger

logger = setup_logger(__name__)


def chunk_type_argument(value: str) -> ChunkType:
    """argparse ``type=`` hook turning a 4-letter string into a :class:`ChunkType`."""

    try:
        return ChunkType.from_string(value)
    except ChunkTypeError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    example_type = CHUNK_SETTINGS["default_chunk_type"]
    type_help = f"Chunk type code (four ASCII letters, like '{example_type}')"

    parser = argparse.ArgumentParser(
        prog="pngsecret",
        description=f"{APP_DESCRIPTION} v{APP_VERSION}",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"{APP_NAME} v{APP_VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", metavar="command")

    # ------------------------------------------------------------------
    # Encode command
    # ------------------------------------------------------------------
    encode = subparsers.add_parser("encode", help="Add a secret message to a PNG")
    encode.add_argument("input", help="Path to the input PNG")
    encode.add_argument("chunk_type", type=chunk_type_argument, help=type_help)
    encode.add_argument("message", help="The message to hide")
    encode.add_argument(
        "output",
        nargs="?",
        default=None,
        help="Path to the output PNG (defaults to overwriting the input)",
    )

    # ------------------------------------------------------------------
    # Decode command
    # ------------------------------------------------------------------
    decode = subparsers.add_parser("decode", help="Show the secret message in a PNG")
    decode.add_argument("path", help="Path to the PNG")
    decode.add_argument("chunk_type", type=chunk_type_argument, help=type_help)

    # ------------------------------------------------------------------
    # Remove command
    # ------------------------------------------------------------------
    remove = subparsers.add_parser("remove", help="Remove a secret message from a PNG")
    remove.add_argument("path", help="Path to the PNG")
    remove.add_argument("chunk_type", type=chunk_type_argument, help=type_help)

    # ------------------------------------------------------------------
    # Print command
    # ------------------------------------------------------------------
    print_ = subparsers.add_parser("print", help="Print every chunk in a PNG")
    print_.add_argument("path", help="Path to the PNG")

    return parser


def parse_arguments(argv: Optional[Iterable[str]] = None):
    """Return parsed command line arguments."""

    parser = build_parser()
    return parser.parse_args(args=list(argv) if argv is not None else None)


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Main entry point used by ``python main.py`` and the console script."""

    args = parse_arguments(argv)

    if getattr(args, "command", None) is None:
        build_parser().print_help()
        return 1

    if args.verbose:
        setup_logger("png_chunks", level="DEBUG")
        setup_logger("cli", level="DEBUG")

    from cli import PngSecretCLI  # Lazy import to avoid circular dependency.

    cli = PngSecretCLI(args)
    return 0 if cli.run() else 1


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
