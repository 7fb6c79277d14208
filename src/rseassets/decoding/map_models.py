"""Dataclass records produced by the MAP decoder.

The in-memory tree mirrors the on-disk nesting. Explicit list lengths are
not stored; each list holds exactly as many records as the count that
preceded it in the file.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Tuple, Union

from .section import SectionHeader

Triple = Tuple[int, int, int]
Floats6 = Tuple[float, float, float, float, float, float]


# Geometry primitives ---------------------------------------------------------
@dataclass(frozen=True, slots=True)
class Vec3:
    x: float
    y: float
    z: float


@dataclass(frozen=True, slots=True)
class Vec6:
    x1: float
    y1: float
    z1: float
    x2: float
    y2: float
    z2: float


# Two xyz points plus an extra xy pair; used by halo entries.
@dataclass(frozen=True, slots=True)
class Vec8:
    x1: float
    y1: float
    z1: float
    x2: float
    y2: float
    z2: float
    x3: float
    y3: float


@dataclass(frozen=True, slots=True)
class Color4:
    r: float
    g: float
    b: float
    a: float


@dataclass(frozen=True, slots=True)
class Transform:
    x_axis: Vec3
    y_axis: Vec3
    z_axis: Vec3
    position: Vec3


@dataclass(frozen=True, slots=True)
class TransformWithAabb:
    transform: Transform
    aabb: Floats6


# Header / materials ----------------------------------------------------------
@dataclass(frozen=True, slots=True)
class MapHeader:
    timestamp: int  # unix time the MAP was written


class TextureAddressMode(IntEnum):
    OPAQUE = 0
    WRAP = 1
    CLAMP = 3


@dataclass(frozen=True, slots=True)
class Material:
    id: int
    name: str
    filename: str
    opacity: float
    emissive_strength: int
    address_mode: TextureAddressMode
    ambient: Color4
    diffuse: Color4
    specular: Color4
    specular_level: float
    two_sided: bool


@dataclass(frozen=True, slots=True)
class Materials:
    id: int
    name: str
    materials: List[Material]


# Geometry --------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class FaceNormal:
    x: float
    y: float
    z: float
    distance: float  # signed distance from the origin to the face plane


@dataclass(frozen=True, slots=True)
class Faces:
    normals: List[FaceNormal]
    vertex_indices: List[Triple]
    texture_indices: List[Triple]


@dataclass(frozen=True, slots=True)
class UvCoord:
    u: float
    v: float


@dataclass(frozen=True, slots=True)
class TextureVertices:
    normals: List[Vec3]
    uv_coords: List[UvCoord]
    face_colors: List[Color4]


@dataclass(frozen=True, slots=True)
class ObjectData:
    tag: int
    faces: Faces
    texture_vertices: TextureVertices


@dataclass(frozen=True, slots=True)
class Collisions:
    vertices: List[Vec3]
    faces: List[FaceNormal]


@dataclass(frozen=True, slots=True)
class Tag:
    coord1: Triple
    face_index_1: int
    coord2: Triple
    face_index_2: int


@dataclass(frozen=True, slots=True)
class IndexedName:
    name: str
    id: int
    indices: List[int]


@dataclass(frozen=True, slots=True)
class GeometryObject:
    header: SectionHeader
    # Geometry objects carry a second header; both are kept as read.
    object_header: SectionHeader
    vertices: List[Vec3]
    object_data: List[ObjectData]
    collisions: Collisions
    tags: List[Tag]
    indexed_names: List[IndexedName]


@dataclass(frozen=True, slots=True)
class Geometries:
    id: int
    name: str
    objects: List[GeometryObject]


# Portals / lights ------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class Portal:
    id: int
    name: str
    coordinates: List[Vec3]
    room: int
    opposite_room: int


@dataclass(frozen=True, slots=True)
class Portals:
    id: int
    name: str
    portals: List[Portal]


@dataclass(frozen=True, slots=True)
class Lights:
    id: int
    name: str
    light_count: int


# Dynamic objects -------------------------------------------------------------
class DynamicObjectKind(IntEnum):
    DYNAMIC = 14
    ANIMATION = 15
    REPEATABLE_TOUCHPLATE = 16
    GLASS = 20
    ONE_TIME_TOUCHPLATE = 25
    HALO = 31
    STATIC_EFFECT = 36


@dataclass(frozen=True, slots=True)
class KindCommon:
    transform: Transform
    name: str
    flags: int
    sounds: Tuple[str, str, str, str]
    collision_type_2d: str
    collision_type_3d: str
    destruction_action: str
    destruction_category: str
    penetration_type: str
    name2: str
    destruction_category2: str


@dataclass(frozen=True, slots=True)
class DynamicParamStruct:
    name: str
    values: Tuple[float, ...]  # 9 floats
    ints: Tuple[int, int]


@dataclass(frozen=True, slots=True)
class DynamicParamStructs:
    """Leading count was non-zero."""

    structs: List[DynamicParamStruct]


@dataclass(frozen=True, slots=True)
class DynamicParamNames:
    """Leading count was zero: a second count of names, then 4 floats."""

    names: List[str]
    trailing: Tuple[float, float, float, float]


DynamicParams = Union[DynamicParamStructs, DynamicParamNames]


@dataclass(frozen=True, slots=True)
class DynamicPayload:
    common: KindCommon
    params: DynamicParams


@dataclass(frozen=True, slots=True)
class AnimationPayload:
    common: KindCommon
    unknown_u32: int
    names: List[str]
    unknown_floats: Tuple[float, float, float]
    unknown_u32_2: int
    name3: str
    name4: str
    animation_type: str
    direction: Vec3
    distance: float
    velocity: float


@dataclass(frozen=True, slots=True)
class RepeatableTouchplatePayload:
    common: KindCommon
    unknown_u32: int
    attachments: List[str]
    unknown_floats: Tuple[float, float, float]
    names: List[str]
    name2: str
    name3: str
    animation_type: str
    direction: Vec3
    distance: float
    velocity: float


@dataclass(frozen=True, slots=True)
class GlassPayload:
    name: str


@dataclass(frozen=True, slots=True)
class OneTimeTouchplatePayload:
    collision_type_2d: str
    collision_type_3d: str
    coordinates: Vec6
    attachments: List[str]


@dataclass(frozen=True, slots=True)
class HaloEntry:
    name: str
    vector: Vec8


@dataclass(frozen=True, slots=True)
class HaloPayload:
    halos: List[HaloEntry]


@dataclass(frozen=True, slots=True)
class StaticEffectPayload:
    pass


DynamicObjectPayload = Union[
    DynamicPayload,
    AnimationPayload,
    RepeatableTouchplatePayload,
    GlassPayload,
    OneTimeTouchplatePayload,
    HaloPayload,
    StaticEffectPayload,
]


@dataclass(frozen=True, slots=True)
class DynamicObject:
    header: SectionHeader
    name: str
    transform: Transform
    kind: DynamicObjectKind
    payload: DynamicObjectPayload


@dataclass(frozen=True, slots=True)
class DynamicObjects:
    id: int
    name: str
    objects: List[DynamicObject]


# Rooms -----------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class RoomLevel:
    name: str
    transforms: List[TransformWithAabb]
    values: List[float]
    flag: int


@dataclass(frozen=True, slots=True)
class LevelHeight:
    height: float
    unknown: float


@dataclass(frozen=True, slots=True)
class Room:
    header: SectionHeader
    flag1: int
    flag2: int
    flag3: int
    field_a: Optional[int]  # present iff flag1 == 0
    field_b: Optional[Floats6]  # present iff flag3 == 1
    field_c: Optional[Floats6]  # present iff field_a == 1
    levels: List[RoomLevel]
    height_base: float
    level_heights: List[LevelHeight]


@dataclass(frozen=True, slots=True)
class Rooms:
    id: int
    name: str
    rooms: List[Room]


# Transitions / planning ------------------------------------------------------
@dataclass(frozen=True, slots=True)
class Transition:
    name: str
    p1: Vec3
    p2: Vec3


@dataclass(frozen=True, slots=True)
class Transitions:
    id: int
    name: str
    transitions: List[Transition]


@dataclass(frozen=True, slots=True)
class PlanningLevel:
    level_number: float
    floor_height: float
    room_names: List[str]


@dataclass(frozen=True, slots=True)
class PlanningLevels:
    id: int
    name: str
    levels: List[PlanningLevel]


@dataclass(frozen=True, slots=True)
class Map:
    header: MapHeader
    materials: Materials
    geometries: Geometries
    portals: Portals
    lights: Lights
    dynamic_objects: DynamicObjects
    rooms: Rooms
    transitions: Transitions
    planning_levels: PlanningLevels


__all__ = [
    "Vec3",
    "Vec6",
    "Vec8",
    "Color4",
    "Transform",
    "TransformWithAabb",
    "MapHeader",
    "TextureAddressMode",
    "Material",
    "Materials",
    "FaceNormal",
    "Faces",
    "UvCoord",
    "TextureVertices",
    "ObjectData",
    "Collisions",
    "Tag",
    "IndexedName",
    "GeometryObject",
    "Geometries",
    "Portal",
    "Portals",
    "Lights",
    "DynamicObjectKind",
    "KindCommon",
    "DynamicParamStruct",
    "DynamicParamStructs",
    "DynamicParamNames",
    "DynamicParams",
    "DynamicPayload",
    "AnimationPayload",
    "RepeatableTouchplatePayload",
    "GlassPayload",
    "OneTimeTouchplatePayload",
    "HaloEntry",
    "HaloPayload",
    "StaticEffectPayload",
    "DynamicObjectPayload",
    "DynamicObject",
    "DynamicObjects",
    "RoomLevel",
    "LevelHeight",
    "Room",
    "Rooms",
    "Transition",
    "Transitions",
    "PlanningLevel",
    "PlanningLevels",
    "Map",
]
