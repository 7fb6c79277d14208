"""Bit channel mask and the channel extraction formulas.

A mask lists the bit width of the red, green, blue and alpha channels. The
packed pixel layouts do not agree on channel order, and real assets depend on
each layout's exact shift scheme, so every layout keeps its own formula:

* ARGB (only when the widths sum to 32): alpha in the low bits, then red,
  green and blue.
* BGRA (every other depth): blue in the low bits, then green, red and alpha.
* Masked pixel (16-bit companion array of palette textures): red in the low
  bits, then green, blue and alpha.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional

from .reader import ByteReader

__all__ = [
    "BitMask",
    "Channels",
    "read_bitmask",
    "extract",
    "argb_channels",
    "bgra_channels",
    "masked_pixel_channels",
]


@dataclass(frozen=True, slots=True)
class BitMask:
    r: int
    g: int
    b: int
    a: int

    def bits(self) -> int:
        """Bit depth of a pixel described by this mask."""
        return self.r + self.g + self.b + self.a

    def is_argb(self) -> bool:
        # The sum is the only signal that selects ARGB over BGRA.
        return self.bits() == 32

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)


class Channels(NamedTuple):
    r: Optional[int]
    g: Optional[int]
    b: Optional[int]
    a: Optional[int]


def read_bitmask(reader: ByteReader) -> BitMask:
    r = reader.u32("red bits")
    g = reader.u32("green bits")
    b = reader.u32("blue bits")
    a = reader.u32("alpha bits")
    return BitMask(r, g, b, a)


def extract(value: int, width: int, shift: int) -> Optional[int]:
    """Channel value of ``width`` bits at ``shift``; None when absent."""
    if width <= 0:
        return None
    mask = ((1 << width) - 1) << shift
    return (value & mask) >> shift


def argb_channels(value: int, mask: BitMask) -> Channels:
    return Channels(
        r=extract(value, mask.r, mask.a),
        g=extract(value, mask.g, mask.a + mask.r),
        b=extract(value, mask.b, mask.a + mask.r + mask.g),
        a=extract(value, mask.a, 0),
    )


def bgra_channels(value: int, mask: BitMask) -> Channels:
    return Channels(
        r=extract(value, mask.r, mask.b + mask.g),
        g=extract(value, mask.g, mask.b),
        b=extract(value, mask.b, 0),
        a=extract(value, mask.a, mask.b + mask.g + mask.r),
    )


def masked_pixel_channels(value: int, mask: BitMask) -> Channels:
    return Channels(
        r=extract(value, mask.r, 0),
        g=extract(value, mask.g, mask.r),
        b=extract(value, mask.b, mask.r + mask.g),
        a=extract(value, mask.a, mask.r + mask.g + mask.b),
    )
