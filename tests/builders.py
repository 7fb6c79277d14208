"""Byte builders for synthetic MAP / RSB buffers used across tests."""

from __future__ import annotations

import struct
from typing import Iterable, Sequence


def u8(v: int) -> bytes:
    return struct.pack("<B", v)


def u16(v: int) -> bytes:
    return struct.pack("<H", v)


def u32(v: int) -> bytes:
    return struct.pack("<I", v)


def f32(v: float) -> bytes:
    return struct.pack("<f", v)


def f32s(values: Iterable[float]) -> bytes:
    return b"".join(f32(v) for v in values)


def u16s(values: Iterable[int]) -> bytes:
    return b"".join(u16(v) for v in values)


def cstr(text: str | bytes) -> bytes:
    """Length-prefixed string including its terminator byte."""
    raw = text.encode("latin-1") if isinstance(text, str) else text
    return u32(len(raw) + 1) + raw + b"\x00"


def short_section(ident: int, name: str, version: int | None = None) -> bytes:
    if version is None:
        return u32(ident) + cstr(name)
    return u32(ident) + cstr("Version") + u32(version) + cstr(name)


def section(ident: int, name: str, version: int | None = None) -> bytes:
    body = short_section(ident, name, version)
    return u32(len(body)) + body


def identity_transform() -> bytes:
    return f32s((1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0))


def empty_list(ident: int, name: str) -> bytes:
    return section(ident, name) + u32(0)


MAGIC = cstr("BeginMapv2.1")
END = cstr("EndMap")
TIMESTAMP = 0x3B9ACA00


def map_buffer(
    materials: bytes | None = None,
    geometries: bytes | None = None,
    portals: bytes | None = None,
    lights: bytes | None = None,
    dynamic_objects: bytes | None = None,
    rooms: bytes | None = None,
    transitions: bytes | None = None,
    planning_levels: bytes | None = None,
    end: bytes = END,
    magic: bytes = MAGIC,
) -> bytes:
    """MAP buffer where every section not given is an empty list."""
    parts = [
        magic,
        u32(TIMESTAMP),
        materials or empty_list(1, "MaterialList"),
        geometries or empty_list(2, "GeometryList"),
        portals or empty_list(3, "PortalList"),
        lights or empty_list(4, "LightList"),
        dynamic_objects or empty_list(5, "ObjectList"),
        rooms or empty_list(6, "RoomList"),
        transitions or empty_list(7, "TransitionList"),
        planning_levels or empty_list(8, "PlanningLevelList"),
        end,
    ]
    return b"".join(parts)


def minimal_map() -> bytes:
    return map_buffer()


def kind_common(name: str = "door") -> bytes:
    parts = [identity_transform(), cstr(name), u32(7)]
    parts += [cstr(f"sound{i}") for i in range(4)]
    strings = [
        "coll2d",
        "coll3d",
        "destroy",
        "category",
        "penetration",
        "name2",
        "category2",
    ]
    parts += [cstr(s) for s in strings]
    return b"".join(parts)


def dynamic_object(ident: int, name: str, payload: bytes) -> bytes:
    return section(ident, name) + cstr(name) + identity_transform() + payload


def dynamic_list(*objects: bytes) -> bytes:
    return section(5, "ObjectList") + u32(len(objects)) + b"".join(objects)


def bitmask(r: int, g: int, b: int, a: int) -> bytes:
    return u32(r) + u32(g) + u32(b) + u32(a)


def rsb_v1(
    width: int, height: int, mask: Sequence[int], pixels: Sequence[int]
) -> bytes:
    return u32(1) + u32(width) + u32(height) + bitmask(*mask) + u16s(pixels)


def rsb_v0_palette(
    width: int,
    height: int,
    indices: Sequence[int],
    mask: Sequence[int],
    masked: Sequence[int],
) -> bytes:
    palette = b"".join(bytes((i, i, i, 0xFF)) for i in range(256))
    return (
        u32(0)
        + u32(width)
        + u32(height)
        + u32(1)
        + palette
        + bytes(indices)
        + bitmask(*mask)
        + u16s(masked)
    )
