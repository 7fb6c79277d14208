"""Viewer raster conversion: one packed ``0RGB`` word per pixel.

Channel values are scaled by their own bit width, except a 6-bit green which
is scaled by 3, matching the two layouts Rogue Spear ships (RGBA 5/6/5/0 and
4/4/4/4). Palette textures are drawn from their masked-pixel companion.
"""

from __future__ import annotations

import struct
from pathlib import Path
from typing import List

from .decoding.bitmask import BitMask, Channels
from .decoding.rsb import PixelLayout, Rsb

__all__ = ["green_scale", "pack_0rgb", "rgb_raster", "write_raster"]


def green_scale(mask: BitMask) -> int:
    return mask.g >> 1 if mask.g == 6 else mask.g


def pack_0rgb(ch: Channels, mask: BitMask) -> int:
    r = (ch.r or 0) * mask.r
    g = (ch.g or 0) * green_scale(mask)
    b = (ch.b or 0) * mask.b
    return (r << 16) | (g << 8) | b


def rgb_raster(rsb: Rsb) -> List[int]:
    if rsb.pixels.layout is PixelLayout.PALETTE_INDEX:
        channels = rsb.masked_channels()
    else:
        channels = rsb.pixels.channels(rsb.mask)
    return [pack_0rgb(ch, rsb.mask) for ch in channels]


def write_raster(words: List[int], path: Path) -> int:
    """Write words as little-endian u32; returns bytes written."""
    data = struct.pack(f"<{len(words)}I", *words)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return len(data)
