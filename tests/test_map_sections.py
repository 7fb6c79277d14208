from __future__ import annotations

"""Record grammars of the non-dynamic MAP sections."""

import pytest

from builders import (
    cstr,
    f32,
    f32s,
    identity_transform,
    map_buffer,
    section,
    short_section,
    u16s,
    u32,
    u8,
)
from rseassets.decoding.map import decode_map, read_rooms
from rseassets.decoding.map_models import (
    Color4,
    FaceNormal,
    LevelHeight,
    TextureAddressMode,
    Vec3,
)
from rseassets.decoding.reader import ByteReader
from rseassets.errors import DecodeError, TruncatedInput, UnknownDiscriminator


def _material(ident: int, name: str, address_mode: int = 1) -> bytes:
    return (
        section(ident, name)
        + cstr("wall.rsb")
        + f32(0.5)
        + u32(2)
        + u32(address_mode)
        + f32s((0.1, 0.2, 0.3, 1.0))
        + f32s((0.4, 0.5, 0.6, 1.0))
        + f32s((0.0, 0.0, 0.0, 1.0))
        + f32(0.25)
        + u8(1)
    )


def _materials(*records: bytes) -> bytes:
    return section(1, "MaterialList") + u32(len(records)) + b"".join(records)


def test_materials():
    data = map_buffer(materials=_materials(_material(10, "mat_wall")))
    (mat,) = decode_map(data).materials.materials
    assert (mat.id, mat.name, mat.filename) == (10, "mat_wall", "wall.rsb")
    assert mat.opacity == 0.5
    assert mat.emissive_strength == 2
    assert mat.address_mode is TextureAddressMode.WRAP
    assert mat.ambient == Color4(
        pytest.approx(0.1), pytest.approx(0.2), pytest.approx(0.3), 1.0
    )
    assert mat.specular_level == 0.25
    assert mat.two_sided is True


def test_unknown_texture_address_mode_fails():
    data = map_buffer(materials=_materials(_material(10, "m", address_mode=2)))
    with pytest.raises(UnknownDiscriminator) as ei:
        decode_map(data)
    assert ei.value.frames[:2] == ["Materials List", "material section header 0"]


def _geometry_object() -> bytes:
    vertices = u32(3) + f32s((0, 0, 0, 1, 0, 0, 0, 1, 0))
    faces = (
        u32(1)
        + f32s((0, 0, 1, 2.5))
        + u16s((0, 1, 2))
        + u16s((0, 1, 2))
    )
    texture_vertices = (
        u32(3)
        + f32s((0, 0, 1) * 3)
        + f32s((0, 0, 1, 0, 0, 1))
        + f32s((1, 1, 1, 1) * 3)
    )
    object_data = u32(1) + u32(0x4D4E) + faces + texture_vertices
    collisions = u32(1) + f32s((5, 5, 5)) + u32(1) + f32s((0, 1, 0, 3))
    tags = u32(1) + u16s((1, 2, 3)) + u16s((4,)) + u16s((5, 6, 7)) + u16s((8,))
    names = u32(1) + cstr("floor") + u32(9) + u32(2) + u16s((0, 1))
    return (
        section(20, "box")
        + section(21, "box_object")
        + vertices
        + object_data
        + collisions
        + tags
        + names
    )


def test_geometry_object():
    geometries = section(2, "GeometryList") + u32(1) + _geometry_object()
    (obj,) = decode_map(map_buffer(geometries=geometries)).geometries.objects
    assert obj.header.name == "box"
    assert obj.object_header.name == "box_object"
    assert obj.vertices[1] == Vec3(1, 0, 0)
    (data,) = obj.object_data
    assert data.tag == 0x4D4E
    assert data.faces.normals == [FaceNormal(0, 0, 1, 2.5)]
    assert data.faces.vertex_indices == [(0, 1, 2)]
    assert data.faces.texture_indices == [(0, 1, 2)]
    assert len(data.texture_vertices.normals) == 3
    assert len(data.texture_vertices.uv_coords) == 3
    assert len(data.texture_vertices.face_colors) == 3
    assert obj.collisions.vertices == [Vec3(5, 5, 5)]
    assert obj.collisions.faces == [FaceNormal(0, 1, 0, 3)]
    (tag,) = obj.tags
    assert (tag.coord1, tag.face_index_1) == ((1, 2, 3), 4)
    assert (tag.coord2, tag.face_index_2) == ((5, 6, 7), 8)
    (name,) = obj.indexed_names
    assert (name.name, name.id, name.indices) == ("floor", 9, [0, 1])


def test_portals():
    portal = (
        section(30, "portal_a")
        + u32(2)
        + f32s((0, 0, 0, 1, 1, 1))
        + u32(1)
        + u32(2)
    )
    portals = section(3, "PortalList") + u32(1) + portal
    (p,) = decode_map(map_buffer(portals=portals)).portals.portals
    assert p.coordinates == [Vec3(0, 0, 0), Vec3(1, 1, 1)]
    assert (p.room, p.opposite_room) == (1, 2)


def _room_level() -> bytes:
    transform = identity_transform() + f32s((0, 0, 0, 1, 1, 1))
    return cstr("level1") + u32(1) + transform + u32(2) + f32s((7, 8)) + u8(3)


def _room(flag1: int, flag3: int, field_a: int | None = None) -> bytes:
    body = short_section(40, "room") + u8(flag1) + u8(0) + u8(flag3)
    if flag1 == 0:
        body += u8(field_a)
    if flag3 == 1:
        body += f32s((1,) * 6)
    if field_a == 1:
        body += f32s((2,) * 6)
    body += u32(1) + _room_level()
    body += u32(2) + f32(9.0) + f32s((1.0, 0.5, 2.0, 0.5))
    return body


def _rooms(*rooms: bytes) -> bytes:
    return section(6, "RoomList") + u32(len(rooms)) + b"".join(rooms)


@pytest.mark.parametrize(
    "flag1,flag3,field_a,present",
    [
        (1, 0, None, (False, False, False)),
        (1, 1, None, (False, True, False)),
        (0, 0, 0, (True, False, False)),
        (0, 0, 1, (True, False, True)),
        (0, 1, 1, (True, True, True)),
    ],
)
def test_room_conditional_fields(flag1, flag3, field_a, present):
    data = map_buffer(rooms=_rooms(_room(flag1, flag3, field_a)))
    (room,) = decode_map(data).rooms.rooms
    has_a, has_b, has_c = present
    assert (room.field_a is not None) == has_a
    assert (room.field_b is not None) == has_b
    assert (room.field_c is not None) == has_c
    if has_a:
        assert room.field_a == field_a
    if has_c:
        assert room.field_c == (2.0,) * 6
    assert room.header.name == "room"
    (level,) = room.levels
    assert level.name == "level1"
    assert level.transforms[0].aabb == (0, 0, 0, 1, 1, 1)
    assert level.values == [7.0, 8.0]
    assert level.flag == 3
    assert room.height_base == 9.0
    assert room.level_heights == [LevelHeight(1.0, 0.5), LevelHeight(2.0, 0.5)]


def test_room_truncated_inside_optional_field():
    room = short_section(40, "room") + u8(0) + u8(0) + u8(0) + u8(1) + f32(1)
    with pytest.raises(TruncatedInput) as ei:
        read_rooms(ByteReader(_rooms(room)))
    assert ei.value.frames == ["room 0", "room unknown6 1"]


def test_transitions_and_planning_levels():
    transitions = (
        section(7, "TransitionList")
        + u32(1)
        + cstr("stairs")
        + f32s((0, 0, 0))
        + f32s((1, 2, 3))
    )
    planning = (
        section(8, "PlanningLevelList")
        + u32(1)
        + f32(1.0)
        + f32(-2.0)
        + u32(2)
        + cstr("hall")
        + cstr("lobby")
    )
    level = decode_map(
        map_buffer(transitions=transitions, planning_levels=planning)
    )
    (t,) = level.transitions.transitions
    assert (t.name, t.p2) == ("stairs", Vec3(1, 2, 3))
    (p,) = level.planning_levels.levels
    assert (p.level_number, p.floor_height) == (1.0, -2.0)
    assert p.room_names == ["hall", "lobby"]


def test_extra_bytes_before_transitions_fail_in_transition_list():
    rooms = _rooms() + u32(0)
    with pytest.raises(DecodeError) as ei:
        decode_map(map_buffer(rooms=rooms))
    assert ei.value.frames[0] == "Transition List"
