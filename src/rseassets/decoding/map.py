"""MAP (level geometry) decoder.

Layout: the length-prefixed magic string ``BeginMapv2.1``, a u32 creation
timestamp, eight sections in a fixed order (materials, geometries, portals,
lights, dynamic objects, rooms, transitions, planning levels) and the
length-prefixed terminator ``EndMap``. Each section is a section header, a
u32 count and that many records.

Known to read Rogue Spear, Urban Ops and Covert Ops maps.
"""

from __future__ import annotations

from typing import List

from ..errors import (
    DecodeError,
    magic_mismatch,
    missing_terminator,
    unknown_discriminator,
)
from ..logging import get_logger
from .dynamic import read_dynamic_objects
from .map_models import (
    Collisions,
    Faces,
    Geometries,
    GeometryObject,
    IndexedName,
    LevelHeight,
    Lights,
    Map,
    MapHeader,
    Material,
    Materials,
    ObjectData,
    PlanningLevel,
    PlanningLevels,
    Portal,
    Portals,
    Room,
    RoomLevel,
    Rooms,
    Tag,
    TextureAddressMode,
    TextureVertices,
    Transition,
    Transitions,
    Triple,
    UvCoord,
    Vec3,
)
from .reader import ByteReader
from .records import (
    read_color,
    read_face_normal,
    read_transform_with_aabb,
    read_vec3,
)
from .section import read_section_header, read_section_header_short

__all__ = ["MAGIC", "END", "KNOWN_LIMITATIONS", "decode_map"]

MAGIC = b"BeginMapv2.1"
END = b"EndMap"

KNOWN_LIMITATIONS = (
    "Some map families (BT and CL maps, e.g. BT03) carry 4 extra bytes "
    "between the Room list and the Transition list. The condition is not "
    "known, so those files fail inside the Transition List.",
)


def _triples(values: List[int]) -> List[Triple]:
    return [
        (values[i], values[i + 1], values[i + 2])
        for i in range(0, len(values), 3)
    ]


# Header ----------------------------------------------------------------------
def read_map_header(reader: ByteReader) -> MapHeader:
    observed = reader.peek(4 + len(MAGIC) + 1)
    try:
        magic = reader.cstring("magic")
    except DecodeError as exc:
        raise magic_mismatch(observed, MAGIC) from exc
    if magic != MAGIC:
        raise magic_mismatch(magic, MAGIC)
    timestamp = reader.u32("file creation timestamp")
    return MapHeader(timestamp)


def read_terminator(reader: ByteReader) -> None:
    observed = reader.peek(4 + len(END) + 1)
    try:
        end = reader.cstring("end")
    except DecodeError as exc:
        raise missing_terminator(observed, END) from exc
    if end != END:
        raise missing_terminator(end, END)


# Materials -------------------------------------------------------------------
def _read_address_mode(reader: ByteReader) -> TextureAddressMode:
    value = reader.u32("texture address mode")
    try:
        return TextureAddressMode(value)
    except ValueError:
        raise unknown_discriminator("texture address mode", value) from None


def read_material(reader: ByteReader) -> Material:
    with reader.label("material section header"):
        header = read_section_header(reader)
    filename = reader.string("texture filename")
    opacity = reader.f32("opacity")
    emissive_strength = reader.u32("emissive strength")
    address_mode = _read_address_mode(reader)
    with reader.label("ambient"):
        ambient = read_color(reader)
    with reader.label("diffuse"):
        diffuse = read_color(reader)
    with reader.label("specular"):
        specular = read_color(reader)
    specular_level = reader.f32("specular level")
    two_sided = reader.boolean("two sided")
    return Material(
        id=header.id,
        name=header.name,
        filename=filename,
        opacity=opacity,
        emissive_strength=emissive_strength,
        address_mode=address_mode,
        ambient=ambient,
        diffuse=diffuse,
        specular=specular,
        specular_level=specular_level,
        two_sided=two_sided,
    )


def read_materials(reader: ByteReader) -> Materials:
    with reader.label("material list section header"):
        header = read_section_header(reader)
    materials = reader.counted(
        "missing number of materials",
        lambda i: f"material section header {i}",
        read_material,
    )
    return Materials(header.id, header.name, materials)


# Geometry --------------------------------------------------------------------
def read_faces(reader: ByteReader) -> Faces:
    n = reader.u32("face count")
    normals = reader.repeat(n, lambda i: f"face normal {i}", read_face_normal)
    vertex_indices = _triples(reader.u16_values(3 * n, "face vertex indices"))
    texture_indices = _triples(
        reader.u16_values(3 * n, "face texture indices")
    )
    return Faces(normals, vertex_indices, texture_indices)


def _read_uv(reader: ByteReader) -> UvCoord:
    u, v = reader.xy("uv")
    return UvCoord(u, v)


def _read_vertex(reader: ByteReader) -> Vec3:
    return read_vec3(reader, "vertex")


def read_texture_vertices(reader: ByteReader) -> TextureVertices:
    n = reader.u32("vertices count")
    normals = reader.repeat(
        n, lambda i: f"normal coordinate {i} of {n}", _read_vertex
    )
    uv_coords = reader.repeat(
        n, lambda i: f"UV texture coordinate {i} of {n}", _read_uv
    )
    face_colors = reader.repeat(
        n, lambda i: f"face color {i} of {n}", read_color
    )
    return TextureVertices(normals, uv_coords, face_colors)


def read_object_data(reader: ByteReader) -> ObjectData:
    tag = reader.u32("MN")
    with reader.label("faces"):
        faces = read_faces(reader)
    with reader.label("texture vertices"):
        texture_vertices = read_texture_vertices(reader)
    return ObjectData(tag, faces, texture_vertices)


def read_collisions(reader: ByteReader) -> Collisions:
    vertices = reader.counted(
        "collision vertices count",
        lambda i: f"collision vertex {i}",
        _read_vertex,
    )
    faces = reader.counted(
        "collision faces count",
        lambda i: f"collision face normal {i}",
        read_face_normal,
    )
    return Collisions(vertices, faces)


def read_tag(reader: ByteReader) -> Tag:
    c1 = reader.u16_values(3, "coord1")
    face_index_1 = reader.u16("face index 1")
    c2 = reader.u16_values(3, "coord2")
    face_index_2 = reader.u16("face index 2")
    return Tag(
        (c1[0], c1[1], c1[2]),
        face_index_1,
        (c2[0], c2[1], c2[2]),
        face_index_2,
    )


def read_indexed_name(reader: ByteReader) -> IndexedName:
    name = reader.string("EIndex text")
    ident = reader.u32("EIndex MN")
    count = reader.u32("EIndex indices count")
    indices = reader.u16_values(count, "EIndex indices")
    return IndexedName(name, ident, indices)


def read_geometry_object(reader: ByteReader) -> GeometryObject:
    with reader.label("section header"):
        header = read_section_header(reader)
    # Objects carry two consecutive section headers.
    with reader.label("object section header"):
        object_header = read_section_header(reader)
    vertices = reader.counted(
        "vertex count", lambda i: f"vertex {i}", _read_vertex
    )
    object_data = reader.counted(
        "objects data count", lambda i: f"object data {i}", read_object_data
    )
    with reader.label("collisions"):
        collisions = read_collisions(reader)
    tags = reader.counted("object tag count", lambda i: f"tag {i}", read_tag)
    indexed_names = reader.counted(
        "FF count", lambda i: f"EIndices {i}", read_indexed_name
    )
    return GeometryObject(
        header=header,
        object_header=object_header,
        vertices=vertices,
        object_data=object_data,
        collisions=collisions,
        tags=tags,
        indexed_names=indexed_names,
    )


def read_geometries(reader: ByteReader) -> Geometries:
    with reader.label("geometry list section header"):
        header = read_section_header(reader)
    objects = reader.counted(
        "missing number of objects",
        lambda i: f"geometry object {i}",
        read_geometry_object,
    )
    return Geometries(header.id, header.name, objects)


# Portals / lights ------------------------------------------------------------
def read_portal(reader: ByteReader) -> Portal:
    with reader.label("portal"):
        header = read_section_header(reader)
    coordinates = reader.counted(
        "coordinates count",
        lambda i: f"coordinate vertex {i}",
        _read_vertex,
    )
    room = reader.u32("room")
    opposite_room = reader.u32("opposite room")
    return Portal(header.id, header.name, coordinates, room, opposite_room)


def read_portals(reader: ByteReader) -> Portals:
    with reader.label("portals"):
        header = read_section_header(reader)
    portals = reader.counted(
        "portal count", lambda i: f"portal {i}", read_portal
    )
    return Portals(header.id, header.name, portals)


def read_lights(reader: ByteReader) -> Lights:
    # Every known map has an empty light list; no light records are defined.
    with reader.label("lights"):
        header = read_section_header(reader)
    count = reader.u32("light count")
    return Lights(header.id, header.name, count)


# Rooms -----------------------------------------------------------------------
def read_room_level(reader: ByteReader) -> RoomLevel:
    name = reader.string("level name")
    transforms = reader.counted(
        "level TM + AABB count",
        lambda i: f"level TM + AABB {i}",
        read_transform_with_aabb,
    )
    count = reader.u32("unknown count")
    values = list(reader.f32_array(count, "level unknown1"))
    flag = reader.u8("level unknown2")
    return RoomLevel(name, transforms, values, flag)


def _read_level_height(reader: ByteReader) -> LevelHeight:
    height = reader.f32("level height")
    unknown = reader.f32("level height unknown")
    return LevelHeight(height, unknown)


def read_room(reader: ByteReader) -> Room:
    with reader.label("room section header short"):
        header = read_section_header_short(reader)
    flag1 = reader.u8("room unknown1")
    flag2 = reader.u8("room unknown2")
    flag3 = reader.u8("room unknown3")
    # Order matters: field_c depends on the value of the optional field_a.
    field_a = reader.u8("room unknown4") if flag1 == 0 else None
    field_b = reader.f32_array(6, "room unknown5") if flag3 == 1 else None
    field_c = reader.f32_array(6, "room unknown6") if field_a == 1 else None
    n = reader.u32("room level count")
    levels = reader.repeat(
        n, lambda i: f"room sherman level {i} of {n}", read_room_level
    )
    n = reader.u32("room level heights count")
    height_base = reader.f32("room unknown7")
    level_heights = reader.repeat(
        n,
        lambda i: f"room sherman level heights {i} of {n}",
        _read_level_height,
    )
    return Room(
        header=header,
        flag1=flag1,
        flag2=flag2,
        flag3=flag3,
        field_a=field_a,
        field_b=field_b,  # type: ignore[arg-type]
        field_c=field_c,  # type: ignore[arg-type]
        levels=levels,
        height_base=height_base,
        level_heights=level_heights,
    )


def read_rooms(reader: ByteReader) -> Rooms:
    with reader.label("room list"):
        header = read_section_header(reader)
    rooms = reader.counted("room count", lambda i: f"room {i}", read_room)
    return Rooms(header.id, header.name, rooms)


# Transitions / planning levels -----------------------------------------------
def read_transition(reader: ByteReader) -> Transition:
    name = reader.string("transition")
    p1 = read_vec3(reader, "transition coords P1")
    p2 = read_vec3(reader, "transition coords P2")
    return Transition(name, p1, p2)


def read_transitions(reader: ByteReader) -> Transitions:
    with reader.label("transitions"):
        header = read_section_header(reader)
    transitions = reader.counted(
        "transitions count", "transition", read_transition
    )
    return Transitions(header.id, header.name, transitions)


def read_planning_level(reader: ByteReader) -> PlanningLevel:
    level_number = reader.f32("planning level number")
    floor_height = reader.f32("planning level floor height")
    count = reader.u32("planning level room count")
    room_names = reader.strings(count, "planning level room name")
    return PlanningLevel(level_number, floor_height, room_names)


def read_planning_levels(reader: ByteReader) -> PlanningLevels:
    with reader.label("planning levels"):
        header = read_section_header(reader)
    levels = reader.counted(
        "planning levels count", "planning level", read_planning_level
    )
    return PlanningLevels(header.id, header.name, levels)


# Entry point -----------------------------------------------------------------
def decode_map(data: bytes) -> Map:
    """Decode a whole MAP buffer or raise a ``DecodeError``."""
    logger = get_logger()
    reader = ByteReader(data)
    with reader.label("MAP Header"):
        header = read_map_header(reader)
    with reader.label("Materials List"):
        materials = read_materials(reader)
    with reader.label("Geometry List"):
        geometries = read_geometries(reader)
    with reader.label("Portal List"):
        portals = read_portals(reader)
    with reader.label("Light List"):
        lights = read_lights(reader)
    with reader.label("Dynamic Object List"):
        dynamic_objects = read_dynamic_objects(reader)
    with reader.label("Rooms List"):
        rooms = read_rooms(reader)
    with reader.label("Transition List"):
        transitions = read_transitions(reader)
    with reader.label("Planning Levels List"):
        planning_levels = read_planning_levels(reader)
    read_terminator(reader)
    logger.debug(
        "MAP sections: materials=%d geometries=%d portals=%d dynamic=%d "
        "rooms=%d transitions=%d planning_levels=%d",
        len(materials.materials),
        len(geometries.objects),
        len(portals.portals),
        len(dynamic_objects.objects),
        len(rooms.rooms),
        len(transitions.transitions),
        len(planning_levels.levels),
    )
    return Map(
        header=header,
        materials=materials,
        geometries=geometries,
        portals=portals,
        lights=lights,
        dynamic_objects=dynamic_objects,
        rooms=rooms,
        transitions=transitions,
        planning_levels=planning_levels,
    )
