"""RSB (raster texture) decoder.

Only versions 0 and 1 (Rainbow Six and Rogue Spear) are handled. The
(version, palette mode) pair selects what follows the dimensions:

========  =======  ====================================================
version   palette  payload
========  =======  ====================================================
1         -        mask, w*h u16 pixels (ARGB or BGRA)
0         0        mask, w*h u16 pixels (ARGB or BGRA)
0         1        256 BGRA palette entries, w*h u8 palette indices,
                   mask, w*h u16 masked pixels
========  =======  ====================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..errors import unsupported_palette, unsupported_version
from ..logging import get_logger
from .bitmask import (
    BitMask,
    Channels,
    argb_channels,
    bgra_channels,
    masked_pixel_channels,
    read_bitmask,
)
from .reader import ByteReader

__all__ = [
    "PALETTE_SIZE",
    "PixelLayout",
    "PaletteColor",
    "PixelArray",
    "Rsb",
    "decode_rsb",
]

PALETTE_SIZE = 256


class PixelLayout(Enum):
    PALETTE_INDEX = "palette_index"
    ARGB = "argb"
    BGRA = "bgra"


@dataclass(frozen=True, slots=True)
class PaletteColor:
    b: int
    g: int
    r: int
    a: int


@dataclass(frozen=True, slots=True)
class PixelArray:
    """Raw pixel values sharing one layout tag."""

    layout: PixelLayout
    values: List[int]

    def __len__(self) -> int:
        return len(self.values)

    def channels(self, mask: BitMask) -> List[Channels]:
        if self.layout is PixelLayout.ARGB:
            return [argb_channels(v, mask) for v in self.values]
        if self.layout is PixelLayout.BGRA:
            return [bgra_channels(v, mask) for v in self.values]
        raise TypeError("palette index pixels have no channels")


@dataclass(frozen=True, slots=True)
class Rsb:
    version: int
    width: int
    height: int
    # Only present when version == 0.
    palette_mode: Optional[int]
    palette: Optional[List[PaletteColor]]
    mask: BitMask
    pixels: PixelArray
    # Only present when version == 0 and palette_mode == 1.
    masked_pixels: Optional[List[int]]

    @property
    def size(self) -> int:
        return self.width * self.height

    def masked_channels(self) -> List[Channels]:
        if self.masked_pixels is None:
            return []
        return [masked_pixel_channels(v, self.mask) for v in self.masked_pixels]


def _read_palette(reader: ByteReader) -> List[PaletteColor]:
    raw = reader.read_exact(PALETTE_SIZE * 4, "palette colors")
    return [
        PaletteColor(raw[i], raw[i + 1], raw[i + 2], raw[i + 3])
        for i in range(0, len(raw), 4)
    ]


def _read_packed_pixels(
    reader: ByteReader, mask: BitMask, count: int
) -> PixelArray:
    layout = PixelLayout.ARGB if mask.is_argb() else PixelLayout.BGRA
    return PixelArray(layout, reader.u16_values(count, "pixels"))


def decode_rsb(data: bytes) -> Rsb:
    """Decode a whole RSB buffer or raise a ``DecodeError``."""
    reader = ByteReader(data)
    version = reader.u32("RSB version")
    if version >= 2:
        raise unsupported_version(version)
    width = reader.u32("width")
    height = reader.u32("height")
    size = width * height

    palette_mode: Optional[int] = None
    palette: Optional[List[PaletteColor]] = None
    masked_pixels: Optional[List[int]] = None

    if version == 0:
        palette_mode = reader.u32("palette")
        if palette_mode not in (0, 1):
            raise unsupported_palette(palette_mode)

    if palette_mode == 1:
        palette = _read_palette(reader)
        pixels = PixelArray(
            PixelLayout.PALETTE_INDEX,
            reader.u8_values(size, "palette color indices"),
        )
        with reader.label("masked pixel bitmask"):
            mask = read_bitmask(reader)
        masked_pixels = reader.u16_values(size, "masked pixels")
    else:
        with reader.label("bitmask"):
            mask = read_bitmask(reader)
        pixels = _read_packed_pixels(reader, mask, size)

    get_logger().debug(
        "RSB v%d %dx%d palette=%s bits=%d layout=%s",
        version,
        width,
        height,
        palette_mode,
        mask.bits(),
        pixels.layout.value,
    )
    return Rsb(
        version=version,
        width=width,
        height=height,
        palette_mode=palette_mode,
        palette=palette,
        mask=mask,
        pixels=pixels,
        masked_pixels=masked_pixels,
    )
