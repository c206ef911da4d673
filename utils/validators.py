"""Validation helpers for paths handed to the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

PNG_EXTENSIONS = {".png", ".apng"}


@dataclass(frozen=True)
class ValidationResult:
    """Simple structure describing a validation outcome."""

    valid: bool
    message: str = ""
    warning: bool = False


def _ensure_path(path: Path | str) -> Path:
    if isinstance(path, Path):
        return path
    return Path(path)


def validate_png_path(path: Path | str) -> ValidationResult:
    """Check whether *path* refers to a readable file.

    The extension is only advisory: the signature check in
    :meth:`png_chunks.Png.decode` is what decides whether the content is a PNG,
    so an unexpected suffix is reported as a warning on a valid result.
    """

    candidate = _ensure_path(path)
    if not candidate.exists():
        return ValidationResult(False, "File not found")
    if not candidate.is_file():
        return ValidationResult(False, "Not a regular file")

    suffix = candidate.suffix.lower()
    if suffix not in PNG_EXTENSIONS:
        return ValidationResult(True, f"Unusual extension for a PNG: {suffix or 'none'}", warning=True)

    return ValidationResult(True, "OK")


__all__ = [
    "PNG_EXTENSIONS",
    "ValidationResult",
    "validate_png_path",
]
