"""Geometry module for intersectable shape primitives.

This module provides the intersectable-object abstraction and primitives:

Components:
    intersectable: Intersectable base class, Intersection record, ShapeKind tag
    sphere: Sphere primitive with analytic ray-sphere intersection

New shapes implement the Intersectable interface for the Python reference
path and add a ShapeKind plus a Taichi intersection function for the render
kernel. Kernel-side intersection follows the pattern:
    rec = hit_shape(ray_origin, ray_direction, shape_data)  # HitRecord
"""

from .intersectable import Intersectable, Intersection, ShapeKind, next_shape_id
from .sphere import HitRecord, Sphere, hit_sphere, make_miss_record

__all__ = [
    "Intersectable",
    "Intersection",
    "ShapeKind",
    "next_shape_id",
    "Sphere",
    "hit_sphere",
    "HitRecord",
    "make_miss_record",
]
