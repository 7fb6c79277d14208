"""Small composite records shared by several MAP grammars."""

from __future__ import annotations

from .map_models import (
    Color4,
    FaceNormal,
    Transform,
    TransformWithAabb,
    Vec3,
    Vec6,
    Vec8,
)
from .reader import ByteReader

__all__ = [
    "read_vec3",
    "read_vec6",
    "read_vec8",
    "read_color",
    "read_face_normal",
    "read_transform",
    "read_transform_with_aabb",
]


def read_vec3(reader: ByteReader, label: str = "vector") -> Vec3:
    return Vec3(*reader.xyz(label))


def read_vec6(reader: ByteReader) -> Vec6:
    x1, y1, z1 = reader.xyz("first point")
    x2, y2, z2 = reader.xyz("second point")
    return Vec6(x1, y1, z1, x2, y2, z2)


def read_vec8(reader: ByteReader) -> Vec8:
    x1, y1, z1 = reader.xyz("first point")
    x2, y2, z2 = reader.xyz("second point")
    x3, y3 = reader.xy("trailing pair")
    return Vec8(x1, y1, z1, x2, y2, z2, x3, y3)


def read_color(reader: ByteReader) -> Color4:
    r = reader.f32("red")
    g = reader.f32("green")
    b = reader.f32("blue")
    a = reader.f32("alpha")
    return Color4(r, g, b, a)


def read_face_normal(reader: ByteReader) -> FaceNormal:
    x, y, z = reader.xyz("normal")
    distance = reader.f32("distance origin to face")
    return FaceNormal(x, y, z, distance)


def read_transform(reader: ByteReader) -> Transform:
    x_axis = read_vec3(reader, "transformation matrix x-axis")
    y_axis = read_vec3(reader, "transformation matrix y-axis")
    z_axis = read_vec3(reader, "transformation matrix z-axis")
    position = read_vec3(reader, "transformation matrix position")
    return Transform(x_axis, y_axis, z_axis, position)


def read_transform_with_aabb(reader: ByteReader) -> TransformWithAabb:
    with reader.label("TM + AABB"):
        transform = read_transform(reader)
    aabb = reader.f32_array(6, "level TM + AABB side")
    return TransformWithAabb(transform, aabb)  # type: ignore[arg-type]
