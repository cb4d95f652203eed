"""Ray data structure.

A ray is an origin plus a direction. The direction is not required to be
unit length (camera rays generally are not), so code that reports distances
along a ray measures the Euclidean distance to the hit point rather than
using the raw ray parameter t.
"""

from dataclasses import dataclass

import taichi as ti

from src.lumen.core.vector import Vector, vec3


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray (any non-zero length).
    """

    origin: Vector
    direction: Vector

    def at(self, t: float) -> Vector:
        """Compute the point origin + t * direction."""
        return self.origin + self.direction * t

    def distance_to(self, point: Vector) -> float:
        """Euclidean distance from the ray origin to a point."""
        return (point - self.origin).length()


@ti.func
def ray_at(origin: vec3, direction: vec3, t: ti.f32) -> vec3:
    """Compute the point along a ray at parameter t inside a Taichi kernel.

    Args:
        origin: The ray origin.
        direction: The ray direction.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point origin + t * direction.
    """
    return origin + t * direction
