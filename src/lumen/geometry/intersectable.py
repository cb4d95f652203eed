"""Intersectable object abstraction and intersection records.

Every shape that can appear in a scene implements the Intersectable
interface:

    intersections(ray) -> list[Intersection]   (0, 1 or 2 hits, unordered)
    extent()           -> characteristic size (diameter)
    centre()           -> centre point
    material()         -> surface Material

Shapes are also tagged with a ShapeKind so the render kernel can dispatch
to the matching Taichi intersection routine, and with a stable integer
shape_id so intersection records can tell hits on distinct (but otherwise
identical) objects apart.

Intersections order by distance alone, so sorting a list of hits gathered
from every object in the scene puts the nearest hit first.
"""

import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum

from src.lumen.core.ray import Ray
from src.lumen.core.vector import Vector, approx_equal
from src.lumen.materials.material import Material


class ShapeKind(IntEnum):
    """Enumeration of supported shape kinds.

    Used for shape dispatch in the render kernel to determine which
    intersection function to call.
    """

    SPHERE = 0


_shape_ids = itertools.count()


def next_shape_id() -> int:
    """Allocate a process-wide unique shape identifier."""
    return next(_shape_ids)


class Intersectable(ABC):
    """Abstract base for objects that can be hit by a ray."""

    kind: ShapeKind
    shape_id: int

    @abstractmethod
    def intersections(self, ray: Ray) -> list["Intersection"]:
        """Return every point where the ray meets the surface in front of its origin."""

    @abstractmethod
    def extent(self) -> float:
        """Return the characteristic size of the object (its diameter)."""

    @abstractmethod
    def centre(self) -> Vector:
        """Return the centre point of the object."""

    @abstractmethod
    def material(self) -> Material:
        """Return the surface material."""


@dataclass(frozen=True, eq=False)
class Intersection:
    """Record of one ray-object hit.

    Attributes:
        position: The world-space hit point.
        distance: Euclidean distance from the ray origin to the hit point (>= 0).
        normal: Outward-facing unit surface normal at the hit point.
        object: The object that was hit.
        ray: The ray that produced the hit.
    """

    position: Vector
    distance: float
    normal: Vector
    object: Intersectable
    ray: Ray

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return (
            approx_equal(self.distance, other.distance)
            and self.position == other.position
            and self.normal == other.normal
            and self.object.shape_id == other.object.shape_id
        )

    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: "Intersection") -> bool:
        return self.distance < other.distance

    def __le__(self, other: "Intersection") -> bool:
        return self.distance <= other.distance

    def __gt__(self, other: "Intersection") -> bool:
        return self.distance > other.distance

    def __ge__(self, other: "Intersection") -> bool:
        return self.distance >= other.distance
