"""Dynamic object records and their discriminator dispatch.

The section header id of each dynamic object selects one of seven payload
grammars (see ``DynamicObjectKind``). Ids outside that set are decode
failures; there is no fallback grammar.

Dynamic, Animation and RepeatableTouchplate payloads start with the same
common block (``KindCommon``).
"""

from __future__ import annotations

from typing import Callable, Dict

from ..errors import unknown_discriminator
from .map_models import (
    AnimationPayload,
    DynamicObject,
    DynamicObjectKind,
    DynamicObjectPayload,
    DynamicObjects,
    DynamicParamNames,
    DynamicParamStruct,
    DynamicParamStructs,
    DynamicParams,
    DynamicPayload,
    GlassPayload,
    HaloEntry,
    HaloPayload,
    KindCommon,
    OneTimeTouchplatePayload,
    RepeatableTouchplatePayload,
    StaticEffectPayload,
)
from .reader import ByteReader
from .records import read_transform, read_vec3, read_vec6, read_vec8
from .section import read_section_header

__all__ = [
    "PAYLOAD_READERS",
    "resolve_kind",
    "read_dynamic_object",
    "read_dynamic_objects",
    "read_kind_common",
    "read_dynamic_params",
]


def resolve_kind(section_id: int) -> DynamicObjectKind:
    try:
        return DynamicObjectKind(section_id)
    except ValueError:
        raise unknown_discriminator("dynamic object id", section_id) from None


def read_kind_common(reader: ByteReader) -> KindCommon:
    with reader.label("transformation matrix"):
        transform = read_transform(reader)
    name = reader.string("name")
    flags = reader.u32("unknown1")
    s0, s1, s2, s3 = (reader.string(f"sound {i}") for i in range(4))
    return KindCommon(
        transform=transform,
        name=name,
        flags=flags,
        sounds=(s0, s1, s2, s3),
        collision_type_2d=reader.string("2D collision type"),
        collision_type_3d=reader.string("3D collision type"),
        destruction_action=reader.string("destruction action"),
        destruction_category=reader.string("destruction category"),
        penetration_type=reader.string("penetration type"),
        name2=reader.string("name2"),
        destruction_category2=reader.string("destruction category 2"),
    )


def _read_param_struct(reader: ByteReader) -> DynamicParamStruct:
    name = reader.string("dynamic object kind struct name")
    values = reader.f32_array(9, "dynamic object kind struct unknown1")
    first, second = reader.u32_array(2, "dynamic object kind struct unknown2")
    return DynamicParamStruct(name, values, (first, second))


def read_dynamic_params(reader: ByteReader) -> DynamicParams:
    count = reader.u32("dynamic object kind count")
    if count > 0:
        structs = reader.repeat(
            count, "dynamic object kind struct", _read_param_struct
        )
        return DynamicParamStructs(structs)
    # A zero count is not an empty list: a second count shadows it, followed
    # by that many names and always four floats.
    flat_count = reader.u32("dynamic object flat count")
    names = reader.strings(flat_count, "dynamic object kind flat name")
    a, b, c, d = reader.f32_array(4, "dynamic object kind flat unknown")
    return DynamicParamNames(names, (a, b, c, d))


def _read_dynamic(reader: ByteReader) -> DynamicPayload:
    common = read_kind_common(reader)
    params = read_dynamic_params(reader)
    return DynamicPayload(common, params)


def _read_animation(reader: ByteReader) -> AnimationPayload:
    common = read_kind_common(reader)
    unknown_u32 = reader.u32("unknown2")
    count = reader.u32("name count")
    names = reader.strings(count, "animation name")
    x, y, z = reader.f32_array(3, "animation unknown3")
    unknown_u32_2 = reader.u32("animation unknown4")
    name3 = reader.string("animation name3")
    name4 = reader.string("animation name4")
    animation_type = reader.string("animation type")
    direction = read_vec3(reader, "animation direction")
    distance = reader.f32("animation distance")
    velocity = reader.f32("animation velocity")
    return AnimationPayload(
        common=common,
        unknown_u32=unknown_u32,
        names=names,
        unknown_floats=(x, y, z),
        unknown_u32_2=unknown_u32_2,
        name3=name3,
        name4=name4,
        animation_type=animation_type,
        direction=direction,
        distance=distance,
        velocity=velocity,
    )


def _read_repeatable_touchplate(
    reader: ByteReader,
) -> RepeatableTouchplatePayload:
    """Doors the player can use more than once ("ADT" in most maps)."""
    common = read_kind_common(reader)
    unknown_u32 = reader.u32("ADT unknown1")
    count = reader.u32("ADT attachment count")
    attachments = reader.strings(count, "ADT attachment")
    x, y, z = reader.f32_array(3, "ADT unknown2")
    count = reader.u32("name count")
    names = reader.strings(count, "ADT name")
    name2 = reader.string("ADT name2")
    name3 = reader.string("ADT name3")
    animation_type = reader.string("animation type")
    direction = read_vec3(reader, "animation direction")
    distance = reader.f32("animation distance")
    velocity = reader.f32("animation velocity")
    return RepeatableTouchplatePayload(
        common=common,
        unknown_u32=unknown_u32,
        attachments=attachments,
        unknown_floats=(x, y, z),
        names=names,
        name2=name2,
        name3=name3,
        animation_type=animation_type,
        direction=direction,
        distance=distance,
        velocity=velocity,
    )


def _read_glass(reader: ByteReader) -> GlassPayload:
    return GlassPayload(reader.string("glass name"))


def _read_one_time_touchplate(reader: ByteReader) -> OneTimeTouchplatePayload:
    collision_type_2d = reader.string("one-time touchplate 2D collision type")
    collision_type_3d = reader.string("one-time touchplate 3D collision type")
    with reader.label("one-time touchplate coordinates"):
        coordinates = read_vec6(reader)
    count = reader.u32("one-time touchplate attachment count")
    attachments = reader.strings(count, "one-time touchplate attachment name")
    return OneTimeTouchplatePayload(
        collision_type_2d, collision_type_3d, coordinates, attachments
    )


def _read_halo_entry(reader: ByteReader) -> HaloEntry:
    name = reader.string("halo name")
    with reader.label("halo vec"):
        vector = read_vec8(reader)
    return HaloEntry(name, vector)


def _read_halo(reader: ByteReader) -> HaloPayload:
    return HaloPayload(reader.counted("halo count", "halo", _read_halo_entry))


def _read_static_effect(reader: ByteReader) -> StaticEffectPayload:
    return StaticEffectPayload()


PAYLOAD_READERS: Dict[
    DynamicObjectKind, Callable[[ByteReader], DynamicObjectPayload]
] = {
    DynamicObjectKind.DYNAMIC: _read_dynamic,
    DynamicObjectKind.ANIMATION: _read_animation,
    DynamicObjectKind.REPEATABLE_TOUCHPLATE: _read_repeatable_touchplate,
    DynamicObjectKind.GLASS: _read_glass,
    DynamicObjectKind.ONE_TIME_TOUCHPLATE: _read_one_time_touchplate,
    DynamicObjectKind.HALO: _read_halo,
    DynamicObjectKind.STATIC_EFFECT: _read_static_effect,
}


def read_dynamic_object(reader: ByteReader) -> DynamicObject:
    with reader.label("dynamic object section header"):
        header = read_section_header(reader)
    name = reader.string("name")
    with reader.label("transformation matrix"):
        transform = read_transform(reader)
    kind = resolve_kind(header.id)
    with reader.label(f"{kind.name.lower()} payload"):
        payload = PAYLOAD_READERS[kind](reader)
    return DynamicObject(header, name, transform, kind, payload)


def read_dynamic_objects(reader: ByteReader) -> DynamicObjects:
    with reader.label("dynamic objects section header"):
        header = read_section_header(reader)
    objects = reader.counted(
        "dynamic object count", "dynamic object", read_dynamic_object
    )
    return DynamicObjects(header.id, header.name, objects)
