"""RSB statistics over a directory tree.

Decodes every matching file, times each decode and tallies
(version, palette) pairs, bit depths and RGBA width tuples.
"""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .config import ScanConfig
from .decoding.rsb import Rsb, decode_rsb
from .errors import DecodeError, FileReadError
from .reporting import get_reporter, task
from .utils.io import safe_read_file
from .utils.paths import find_files

__all__ = ["ScanFailure", "RsbStats", "scan_rsb", "summary_lines"]


@dataclass(frozen=True, slots=True)
class ScanFailure:
    path: Path
    error: DecodeError | FileReadError

    def describe(self) -> str:
        if isinstance(self.error, DecodeError):
            return f"{self.path}: {self.error}"
        return str(self.error)


def _version_key(key: Tuple[int, Optional[int]]) -> Tuple[int, int]:
    version, palette = key
    return (version, -1 if palette is None else palette)


@dataclass(slots=True)
class RsbStats:
    total: int = 0
    total_bytes: int = 0
    elapsed: float = 0.0
    versions: Counter = field(default_factory=Counter)
    depths: Counter = field(default_factory=Counter)
    layouts: Counter = field(default_factory=Counter)
    failures: List[ScanFailure] = field(default_factory=list)

    def record(self, rsb: Rsb, size: int, elapsed: float) -> None:
        self.total += 1
        self.total_bytes += size
        self.elapsed += elapsed
        self.versions[(rsb.version, rsb.palette_mode)] += 1
        self.depths[rsb.mask.bits()] += 1
        self.layouts[rsb.mask.as_tuple()] += 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files": self.total,
            "bytes": self.total_bytes,
            "elapsed_seconds": self.elapsed,
            "versions": [
                {"version": v, "palette": p, "count": self.versions[(v, p)]}
                for v, p in sorted(self.versions, key=_version_key)
            ],
            "depths": {str(k): v for k, v in sorted(self.depths.items())},
            "layouts": {
                "/".join(map(str, k)): v for k, v in sorted(self.layouts.items())
            },
            "failures": [f.describe() for f in self.failures],
        }


def _file_details(path: Path, rsb: Rsb) -> List[str]:
    lines = [
        str(path),
        f"  version = {rsb.version} ; palette = {rsb.palette_mode}",
    ]
    if rsb.palette is not None:
        lines.append(f"  palette colors: {len(rsb.palette)}")
    lines.append(f"  height, width: ({rsb.height}, {rsb.width})")
    lines.append(f"  bitmask: {rsb.mask.as_tuple()}")
    lines.append(f"  pixels: {len(rsb.pixels)}")
    if rsb.masked_pixels is not None:
        lines.append(f"  masked: {len(rsb.masked_pixels)}")
    bits = rsb.mask.bits()
    if bits == 32:
        lines.append(f"  32-bit, is ARGB: {rsb.mask.is_argb()}")
    else:
        lines.append(f"  bits: {bits}")
    return lines


def scan_rsb(
    config: ScanConfig, files: Optional[List[Path]] = None
) -> RsbStats:
    """Decode all RSB files selected by ``config``.

    A failing file is recorded and skipped unless ``config.fail_fast`` is
    set, in which case its error propagates.
    """
    rep = get_reporter()
    if files is None:
        files = find_files(config.root, config.extensions)
    stats = RsbStats()
    with task("scan.rsb", "Decode RSB files", total=len(files)):
        for path in files:
            try:
                data = safe_read_file(path, config.max_file_size)
                start = time.perf_counter()
                rsb = decode_rsb(data)
                elapsed = time.perf_counter() - start
            except DecodeError as exc:
                exc.attach_path(path)
                if config.fail_fast:
                    raise
                stats.failures.append(ScanFailure(path, exc))
                rep.error(f"{path}: {exc.format_chain()}")
            except FileReadError as exc:
                if config.fail_fast:
                    raise
                stats.failures.append(ScanFailure(path, exc))
                rep.error(str(exc))
            else:
                stats.record(rsb, len(data), elapsed)
                for line in _file_details(path, rsb):
                    rep.verbose(line, level=1)
            rep.advance("scan.rsb", current_item=path.name)
        # Totals shown on the completion line.
        rep.advance(
            "scan.rsb",
            step=0,
            files=stats.total,
            failed=len(stats.failures),
            bytes=stats.total_bytes,
        )
    return stats


def _palette_text(palette: Optional[int]) -> str:
    return "nil" if palette is None else str(palette)


def summary_lines(stats: RsbStats) -> List[str]:
    lines = [
        "Scan summary: "
        + f"files={stats.total} failed={len(stats.failures)} "
        + f"bytes={stats.total_bytes} elapsed={stats.elapsed:.3f}s"
    ]
    for version, palette in sorted(stats.versions, key=_version_key):
        count = stats.versions[(version, palette)]
        lines.append(
            f"version={version}, palette={_palette_text(palette):<5}: "
            f"{count:>5} files"
        )
    for depth in sorted(stats.depths):
        lines.append(f"bits={depth:<19}: {stats.depths[depth]:>5} files")
    for layout in sorted(stats.layouts):
        r, g, b, a = layout
        lines.append(f"RGBA {r}/{g}/{b}/{a} : {stats.layouts[layout]:>5} files")
    return lines
