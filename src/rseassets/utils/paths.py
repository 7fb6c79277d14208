"""Asset file discovery."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

__all__ = ["normalize_extensions", "find_files"]


def normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    """Lower-case extensions with a leading dot (``"RSB"`` -> ``".rsb"``)."""
    out = set()
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        out.add(ext if ext.startswith(".") else f".{ext}")
    return frozenset(out)


def find_files(root: Path, extensions: Iterable[str]) -> List[Path]:
    """Files under ``root`` whose suffix matches, case-insensitively.

    A file ``root`` is returned as-is when it matches. Results are sorted for
    a stable scan order.
    """
    wanted = normalize_extensions(extensions)
    if root.is_file():
        return [root] if root.suffix.lower() in wanted else []
    return sorted(
        p for p in root.rglob("*") if p.is_file() and p.suffix.lower() in wanted
    )
