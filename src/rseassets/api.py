"""High-level API for rseassets.

``read_map`` / ``read_rsb`` read a whole file and decode it; ``decode_map`` /
``decode_rsb`` take an in-memory buffer. Failures raise ``DecodeError``
(with the file path attached by the ``read_*`` variants) or
``FileReadError``; nothing partial is ever returned.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, TypeVar

from .decoding.map import decode_map
from .decoding.map_models import Map
from .decoding.rsb import Rsb, decode_rsb
from .errors import DecodeError
from .logging import get_logger
from .utils.io import DEFAULT_MAX_FILE_SIZE, safe_read_file

__all__ = [
    "decode_map",
    "decode_rsb",
    "read_map",
    "read_rsb",
    "describe_map",
    "describe_rsb",
    "Map",
    "Rsb",
]

T = TypeVar("T")


def _read(
    path: str | Path,
    decode: Callable[[bytes], T],
    kind: str,
    max_size: int,
) -> T:
    p = Path(path)
    data = safe_read_file(p, max_size)
    try:
        result = decode(data)
    except DecodeError as exc:
        exc.attach_path(p)
        raise
    get_logger().debug("Decoded %s: %s (%d bytes)", kind, p.name, len(data))
    return result


def read_map(path: str | Path, max_size: int = DEFAULT_MAX_FILE_SIZE) -> Map:
    return _read(path, decode_map, "MAP", max_size)


def read_rsb(path: str | Path, max_size: int = DEFAULT_MAX_FILE_SIZE) -> Rsb:
    return _read(path, decode_rsb, "RSB", max_size)


def describe_rsb(rsb: Rsb, name: str = "rsb") -> str:
    lines = [f"{name} {{", f"  version: {rsb.version}"]
    if rsb.palette_mode is not None:
        lines.append(f"  palette: {rsb.palette_mode}")
    lines.append(f"  size: ({rsb.height}, {rsb.width})")
    if rsb.palette is not None:
        lines.append(f"  palette color count: {len(rsb.palette)}")
    m = rsb.mask
    lines.append(f"  RGBA bits: {m.r}/{m.g}/{m.b}/{m.a}")
    lines.append(f"  pixels: {len(rsb.pixels)} ({rsb.pixels.layout.value})")
    if rsb.masked_pixels is not None:
        lines.append(f"  masked pixel count: {len(rsb.masked_pixels)}")
    lines.append("}")
    return "\n".join(lines)


def describe_map(level: Map, name: str = "map") -> str:
    counts = [
        ("materials", len(level.materials.materials)),
        ("geometries", len(level.geometries.objects)),
        ("portals", len(level.portals.portals)),
        ("lights", level.lights.light_count),
        ("dynamic objects", len(level.dynamic_objects.objects)),
        ("rooms", len(level.rooms.rooms)),
        ("transitions", len(level.transitions.transitions)),
        ("planning levels", len(level.planning_levels.levels)),
    ]
    lines = [f"{name} {{", f"  timestamp: {level.header.timestamp}"]
    lines.extend(f"  {label}: {count}" for label, count in counts)
    lines.append("}")
    return "\n".join(lines)
