"""Math helpers shared by the scene graph and skeleton converters."""

from .matrix_math import (
    TO_RADIANS,
    as_mat4,
    decompose,
    mat4_extract,
    mat4_from_values,
    mat4_to_json,
    quat_from_mat3,
    transform_to_mat4,
    vec3_extract,
)

__all__ = [
    "TO_RADIANS",
    "as_mat4",
    "decompose",
    "mat4_extract",
    "mat4_from_values",
    "mat4_to_json",
    "quat_from_mat3",
    "transform_to_mat4",
    "vec3_extract",
]
