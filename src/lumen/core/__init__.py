"""Core value types for the rendering pipeline.

Components:
    vector: 3D vector with tolerant comparisons and the shared EPSILON
    rotation: Unit quaternion rotations (axis-angle, minimal arc, composition)
    ray: Ray (origin + direction)
    colour: RGB colour arithmetic, hex codec and output tone mapping
    errors: DegenerateGeometryError for undefined directions
    config: Shape checks for plain-data scene configuration entries

Every type here is an immutable Python value used for scene description and
the reference renderer. Kernel-side twins of the few operations needed on
the GPU (reflection, quaternion rotation, ray evaluation) are exposed as
Taichi functions next to their Python counterparts.
"""

from .colour import BLACK, WHITE, Colour, quantise_array, tone_map_array
from .config import read_mapping, read_number, read_numbers, read_string
from .errors import DegenerateGeometryError
from .ray import Ray, ray_at
from .rotation import IDENTITY, Quaternion, rotate_vec3, vec4
from .vector import (
    EPSILON,
    ONE,
    X_AXIS,
    Y_AXIS,
    Z_AXIS,
    ZERO,
    Vector,
    approx_equal,
    reflect_vec3,
    vec3,
)

__all__ = [
    # Vectors
    "Vector",
    "EPSILON",
    "approx_equal",
    "ZERO",
    "ONE",
    "X_AXIS",
    "Y_AXIS",
    "Z_AXIS",
    "vec3",
    "reflect_vec3",
    # Rotations
    "Quaternion",
    "IDENTITY",
    "vec4",
    "rotate_vec3",
    # Rays
    "Ray",
    "ray_at",
    # Colours
    "Colour",
    "BLACK",
    "WHITE",
    "tone_map_array",
    "quantise_array",
    # Config readers
    "read_mapping",
    "read_number",
    "read_numbers",
    "read_string",
    # Errors
    "DegenerateGeometryError",
]
