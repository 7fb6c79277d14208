from __future__ import annotations

"""Dynamic object dispatch by section id and the per-kind grammars."""

import pytest

from builders import (
    cstr,
    dynamic_list,
    dynamic_object,
    f32,
    f32s,
    kind_common,
    map_buffer,
    u32,
)
from rseassets.decoding.dynamic import (
    PAYLOAD_READERS,
    read_dynamic_objects,
    resolve_kind,
)
from rseassets.decoding.map import decode_map
from rseassets.decoding.map_models import (
    AnimationPayload,
    DynamicObjectKind,
    DynamicParamNames,
    DynamicParamStructs,
    DynamicPayload,
    GlassPayload,
    HaloPayload,
    OneTimeTouchplatePayload,
    RepeatableTouchplatePayload,
    StaticEffectPayload,
    Vec3,
    Vec6,
    Vec8,
)
from rseassets.decoding.reader import ByteReader
from rseassets.errors import (
    E_UNKNOWN_DISCRIMINATOR,
    TruncatedInput,
    UnknownDiscriminator,
)


def _decode_objects(*objects: bytes):
    return decode_map(map_buffer(dynamic_objects=dynamic_list(*objects)))


def _single(ident: int, payload: bytes):
    (obj,) = _decode_objects(
        dynamic_object(ident, "obj", payload)
    ).dynamic_objects.objects
    return obj


def test_every_kind_has_a_reader():
    assert set(PAYLOAD_READERS) == set(DynamicObjectKind)


@pytest.mark.parametrize("ident", [14, 15, 16, 20, 25, 31, 36])
def test_resolve_known_ids(ident):
    assert resolve_kind(ident).value == ident


def test_dynamic_with_param_structs():
    params = u32(1) + cstr("hinge") + f32s(range(9)) + u32(3) + u32(4)
    obj = _single(14, kind_common() + params)
    assert obj.kind is DynamicObjectKind.DYNAMIC
    assert isinstance(obj.payload, DynamicPayload)
    common = obj.payload.common
    assert common.name == "door"
    assert common.flags == 7
    assert common.sounds == ("sound0", "sound1", "sound2", "sound3")
    assert common.penetration_type == "penetration"
    assert common.destruction_category2 == "category2"
    assert isinstance(obj.payload.params, DynamicParamStructs)
    (struct,) = obj.payload.params.structs
    assert struct.name == "hinge"
    assert struct.values == tuple(float(i) for i in range(9))
    assert struct.ints == (3, 4)


def test_zero_count_is_shadowed_by_flat_count():
    params = u32(0) + u32(2) + cstr("a") + cstr("b") + f32s((1, 2, 3, 4))
    obj = _single(14, kind_common() + params)
    assert obj.payload.params == DynamicParamNames(["a", "b"], (1, 2, 3, 4))


def test_shadow_count_zero_still_reads_four_floats():
    params = u32(0) + u32(0) + f32s((5, 6, 7, 8))
    obj = _single(14, kind_common() + params)
    assert obj.payload.params == DynamicParamNames([], (5, 6, 7, 8))


def test_animation():
    payload = (
        kind_common("lift")
        + u32(11)
        + u32(2)
        + cstr("up")
        + cstr("down")
        + f32s((1, 2, 3))
        + u32(12)
        + cstr("n3")
        + cstr("n4")
        + cstr("slide")
        + f32s((0, 0, 1))
        + f32(4.0)
        + f32(0.5)
    )
    obj = _single(15, payload)
    assert isinstance(obj.payload, AnimationPayload)
    assert obj.payload.common.name == "lift"
    assert obj.payload.names == ["up", "down"]
    assert obj.payload.unknown_floats == (1, 2, 3)
    assert obj.payload.unknown_u32_2 == 12
    assert (obj.payload.name3, obj.payload.name4) == ("n3", "n4")
    assert obj.payload.animation_type == "slide"
    assert obj.payload.direction == Vec3(0, 0, 1)
    assert (obj.payload.distance, obj.payload.velocity) == (4.0, 0.5)


def test_repeatable_touchplate():
    payload = (
        kind_common()
        + u32(1)
        + u32(1)
        + cstr("handle")
        + f32s((0, 0, 0))
        + u32(1)
        + cstr("open")
        + cstr("n2")
        + cstr("n3")
        + cstr("rotate")
        + f32s((0, 1, 0))
        + f32(90.0)
        + f32(1.0)
    )
    obj = _single(16, payload)
    assert obj.kind is DynamicObjectKind.REPEATABLE_TOUCHPLATE
    assert isinstance(obj.payload, RepeatableTouchplatePayload)
    assert obj.payload.attachments == ["handle"]
    assert obj.payload.names == ["open"]
    assert obj.payload.animation_type == "rotate"
    assert obj.payload.distance == 90.0


def test_glass():
    obj = _single(20, cstr("pane"))
    assert obj.payload == GlassPayload("pane")


def test_one_time_touchplate():
    payload = (
        cstr("box")
        + cstr("mesh")
        + f32s((0, 0, 0, 1, 1, 1))
        + u32(2)
        + cstr("alarm")
        + cstr("light")
    )
    obj = _single(25, payload)
    assert obj.payload == OneTimeTouchplatePayload(
        "box", "mesh", Vec6(0, 0, 0, 1, 1, 1), ["alarm", "light"]
    )


def test_halo():
    payload = u32(2) + cstr("h1") + f32s(range(8)) + cstr("h2") + f32s((1,) * 8)
    obj = _single(31, payload)
    assert isinstance(obj.payload, HaloPayload)
    assert [h.name for h in obj.payload.halos] == ["h1", "h2"]
    assert obj.payload.halos[0].vector == Vec8(0, 1, 2, 3, 4, 5, 6, 7)


def test_static_effect_has_no_payload():
    first = dynamic_object(36, "fx", b"")
    second = dynamic_object(20, "glass", cstr("pane"))
    objects = _decode_objects(first, second).dynamic_objects.objects
    assert objects[0].payload == StaticEffectPayload()
    assert objects[0].name == "fx"
    assert objects[1].payload == GlassPayload("pane")


def test_unknown_id_fails_with_chain():
    data = map_buffer(
        dynamic_objects=dynamic_list(dynamic_object(99, "mystery", b""))
    )
    with pytest.raises(UnknownDiscriminator) as ei:
        decode_map(data)
    err = ei.value
    assert err.code == E_UNKNOWN_DISCRIMINATOR
    assert err.context["value"] == 99
    assert err.frames == ["Dynamic Object List", "dynamic object 0 of 1"]
    assert "99" in err.format_chain()


def test_truncated_payload_names_kind():
    reader = ByteReader(dynamic_list(dynamic_object(20, "glass", b"")))
    with pytest.raises(TruncatedInput) as ei:
        read_dynamic_objects(reader)
    assert ei.value.frames == [
        "dynamic object 0 of 1",
        "glass payload",
        "glass name",
        "string length",
    ]
