"""Decoders for Red Storm Entertainment MAP levels and RSB textures."""

from .api import (
    Map,
    Rsb,
    decode_map,
    decode_rsb,
    describe_map,
    describe_rsb,
    read_map,
    read_rsb,
)
from .errors import DecodeError, FileReadError

__version__ = "0.1.0"

__all__ = [
    "Map",
    "Rsb",
    "decode_map",
    "decode_rsb",
    "describe_map",
    "describe_rsb",
    "read_map",
    "read_rsb",
    "DecodeError",
    "FileReadError",
    "__version__",
]
