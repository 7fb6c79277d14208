from .reader import ByteReader, latin1
from .section import (
    SectionHeader,
    read_section_header,
    read_section_header_short,
)
from .bitmask import (
    BitMask,
    Channels,
    argb_channels,
    bgra_channels,
    masked_pixel_channels,
)
from .map import decode_map, KNOWN_LIMITATIONS
from .map_models import Map, DynamicObjectKind
from .rsb import decode_rsb, Rsb, PixelArray, PixelLayout, PaletteColor

__all__ = [
    "ByteReader",
    "latin1",
    "SectionHeader",
    "read_section_header",
    "read_section_header_short",
    "BitMask",
    "Channels",
    "argb_channels",
    "bgra_channels",
    "masked_pixel_channels",
    "decode_map",
    "KNOWN_LIMITATIONS",
    "Map",
    "DynamicObjectKind",
    "decode_rsb",
    "Rsb",
    "PixelArray",
    "PixelLayout",
    "PaletteColor",
]
