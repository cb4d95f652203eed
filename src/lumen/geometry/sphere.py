"""Sphere primitive with analytic ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |origin + t * direction - centre|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + b*t + c = 0

where:
    a = dot(direction, direction)
    b = 2 * dot(origin - centre, direction)
    c = dot(origin - centre, origin - centre) - radius^2

A negative discriminant means the ray misses. Otherwise both roots are
computed and sorted, roots at or behind the origin (t <= 0) are dropped and
coincident hit points (a tangent ray) are merged. Reported distances are the
Euclidean distance to each hit point, not the raw t, so they do not depend
on the length of the ray direction. Normals always point outward, even when
the ray starts inside the sphere.

Two implementations share these semantics: Sphere.intersections() for the
Python reference path, and hit_sphere() for use inside Taichi kernels.

Example:
    >>> from src.lumen.core.ray import Ray
    >>> from src.lumen.core.vector import Vector
    >>> from src.lumen.geometry.sphere import Sphere
    >>> from src.lumen.materials.material import IVORY
    >>> sphere = Sphere.unit(IVORY)
    >>> hits = sphere.intersections(Ray(Vector(0, 0, 5), Vector(0, 0, -1)))
    >>> sorted(hit.distance for hit in hits)
    [4.0, 6.0]
"""

import math
from dataclasses import dataclass, field

import taichi as ti
import taichi.math as tm

from src.lumen.core.ray import Ray, ray_at
from src.lumen.core.vector import Vector, vec3
from src.lumen.geometry.intersectable import (
    Intersectable,
    Intersection,
    ShapeKind,
    next_shape_id,
)
from src.lumen.materials.material import Material


@dataclass(frozen=True, eq=False)
class Sphere(Intersectable):
    """A sphere defined by centre point, radius and material.

    Attributes:
        position: The centre point of the sphere.
        radius: The radius of the sphere (must be positive).
        surface: The material of the sphere.
        shape_id: Stable identifier used to compare intersection records.
    """

    position: Vector
    radius: float
    surface: Material = field(default_factory=Material)
    shape_id: int = field(default_factory=next_shape_id)

    kind = ShapeKind.SPHERE

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")

    @classmethod
    def unit(cls, material: Material) -> "Sphere":
        """Create a sphere of radius 1 centred at the origin."""
        return cls(Vector(0.0, 0.0, 0.0), 1.0, material)

    def intersections(self, ray: Ray) -> list[Intersection]:
        """Find where a ray enters and leaves the sphere.

        Args:
            ray: The ray to test (direction need not be normalized).

        Returns:
            Zero, one (tangent, or origin inside the sphere) or two
            intersections, nearest first. A zero-length ray direction
            yields no intersections.
        """
        oc = ray.origin - self.position
        a = ray.direction.dot(ray.direction)
        b = 2.0 * oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius

        if a == 0.0:
            return []

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return []

        sqrt_d = math.sqrt(discriminant)
        roots = sorted(((-b - sqrt_d) / (2.0 * a), (-b + sqrt_d) / (2.0 * a)))

        points: list[Vector] = []
        for t in roots:
            if t <= 0.0:
                continue
            point = ray.at(t)
            # Tangent rays produce the same point twice
            if points and points[-1] == point:
                continue
            points.append(point)

        return [
            Intersection(
                position=point,
                distance=ray.distance_to(point),
                normal=(point - self.position).normalise(),
                object=self,
                ray=ray,
            )
            for point in points
        ]

    def extent(self) -> float:
        """Return the diameter of the sphere."""
        return self.radius * 2.0

    def centre(self) -> Vector:
        """Return the centre of the sphere."""
        return self.position

    def material(self) -> Material:
        """Return the material of the sphere."""
        return self.surface


# =============================================================================
# Taichi-side intersection
# =============================================================================


@ti.dataclass
class HitRecord:
    """Nearest hit of a ray on a single shape inside a Taichi kernel.

    Attributes:
        hit: 1 if the ray hits in front of its origin, else 0.
        distance: Euclidean distance from the ray origin to the hit point.
        point: The hit point.
        normal: Outward unit normal at the hit point.
    """

    hit: ti.i32
    distance: ti.f32
    point: vec3
    normal: vec3


@ti.func
def make_miss_record() -> HitRecord:
    """Create a record representing no intersection."""
    return HitRecord(
        hit=0, distance=0.0, point=vec3(0.0, 0.0, 0.0), normal=vec3(0.0, 0.0, 0.0)
    )


@ti.func
def hit_sphere(origin: vec3, direction: vec3, centre: vec3, radius: ti.f32) -> HitRecord:
    """Find the nearest hit of a ray on a sphere inside a Taichi kernel.

    Uses the same quadratic as Sphere.intersections() and returns only the
    nearest root in front of the origin.

    Args:
        origin: The starting point of the ray.
        direction: The direction vector of the ray (need not be normalized).
        centre: The centre of the sphere.
        radius: The radius of the sphere.

    Returns:
        A HitRecord for the nearest root with t > 0, or a miss record.
    """
    oc = origin - centre
    a = tm.dot(direction, direction)
    b = 2.0 * tm.dot(oc, direction)
    c = tm.dot(oc, oc) - radius * radius
    discriminant = b * b - 4.0 * a * c

    # Initialize result (Taichi requires outer-scope declaration)
    result = make_miss_record()

    if a > 0.0 and discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t0 = (-b - sqrt_d) / (2.0 * a)
        t1 = (-b + sqrt_d) / (2.0 * a)

        t = t0
        if t <= 0.0:
            t = t1

        if t > 0.0:
            point = ray_at(origin, direction, t)
            result = HitRecord(
                hit=1,
                distance=tm.length(point - origin),
                point=point,
                normal=tm.normalize(point - centre),
            )

    return result
