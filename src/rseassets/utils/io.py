"""Whole-file reads for decoder input."""

from __future__ import annotations

from pathlib import Path

from ..errors import FileReadError

__all__ = ["DEFAULT_MAX_FILE_SIZE", "safe_read_file"]

DEFAULT_MAX_FILE_SIZE = 256 * 1024 * 1024


def safe_read_file(
    path: str | Path, max_size: int = DEFAULT_MAX_FILE_SIZE
) -> bytes:
    p = Path(path)
    if not p.is_file():
        raise FileReadError(str(p), "file not found")
    size = p.stat().st_size
    if size > max_size:
        raise FileReadError(str(p), f"file too large: {size}>{max_size}")
    try:
        return p.read_bytes()
    except OSError as e:
        raise FileReadError(str(p), f"could not read file: {e}") from e
