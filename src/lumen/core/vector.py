"""3D vector value type and vector utilities.

This module provides the immutable Vector used throughout scene description
and the Python reference renderer, together with the tolerance-based
comparisons shared by every value type in the package.

Equality between vectors is never exact: two vectors compare equal when every
component differs by less than EPSILON. Ordering compares magnitudes with the
same tolerance.

Example:
    >>> from src.lumen.core.vector import Vector
    >>> v = Vector(1.0, 2.0, 3.0)
    >>> v.dot(Vector(4.0, 5.0, 6.0))
    32.0
    >>> Vector(1.0, 1.0, 0.0).reflect(Vector(0.0, 1.0, 0.0))
    Vector(x=1.0, y=-1.0, z=0.0)
"""

import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

import taichi as ti
import taichi.math as tm

from src.lumen.core.errors import DegenerateGeometryError

# Type alias for 3D vectors inside Taichi kernels
vec3 = tm.vec3

# Shared tolerance for approximate comparisons (vectors, quaternions, colours)
EPSILON = 1e-5


def approx_equal(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """Check whether two scalars are equal within a tolerance.

    Args:
        a: First value.
        b: Second value.
        epsilon: Maximum allowed absolute difference.

    Returns:
        True if |a - b| < epsilon.
    """
    return abs(a - b) < epsilon


@dataclass(frozen=True, eq=False)
class Vector:
    """An immutable 3D vector.

    Attributes:
        x: The x component.
        y: The y component.
        z: The z component.
    """

    x: float
    y: float
    z: float

    @classmethod
    def triple(cls, value: float) -> "Vector":
        """Create a vector with all three components set to value."""
        return cls(value, value, value)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Union["Vector", float]) -> "Vector":
        if isinstance(other, Vector):
            return Vector(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vector(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> "Vector":
        return self.__mul__(other)

    def __truediv__(self, other: Union["Vector", float]) -> "Vector":
        if isinstance(other, Vector):
            return Vector(self.x / other.x, self.y / other.y, self.z / other.z)
        return Vector(self.x / other, self.y / other, self.z / other)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y, -self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    # -------------------------------------------------------------------------
    # Products and norms
    # -------------------------------------------------------------------------

    def dot(self, other: "Vector") -> float:
        """Compute the dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector") -> "Vector":
        """Compute the cross product self x other."""
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        """Compute the Euclidean length.

        Uses chained hypot calls so that large components do not overflow
        when squared.
        """
        return math.hypot(math.hypot(self.x, self.y), self.z)

    def length_squared(self) -> float:
        """Compute the squared length (no square root)."""
        return self.dot(self)

    def normalise(self) -> "Vector":
        """Return the unit vector pointing in the same direction.

        Raises:
            DegenerateGeometryError: If the vector has zero or non-finite
                length and therefore no direction.
        """
        length = self.length()
        if length == 0.0 or not math.isfinite(length):
            raise DegenerateGeometryError(f"Cannot normalise vector of length {length}: {self}")
        return self / length

    def reflect(self, normal: "Vector") -> "Vector":
        """Reflect this vector about a plane with the given normal.

        Args:
            normal: The plane normal (should be unit length).

        Returns:
            self - normal * 2 * (self . normal)
        """
        return self - normal * 2.0 * self.dot(normal)

    def is_finite(self) -> bool:
        """Check that every component is finite."""
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def as_tuple(self) -> tuple[float, float, float]:
        """Return the components as a plain tuple (for Taichi fields and configs)."""
        return (self.x, self.y, self.z)

    # -------------------------------------------------------------------------
    # Tolerant comparisons
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return (
            approx_equal(self.x, other.x)
            and approx_equal(self.y, other.y)
            and approx_equal(self.z, other.z)
        )

    __hash__ = None  # type: ignore[assignment]

    def _compare_length(self, other: "Vector") -> int:
        difference = self.length() - other.length()
        if abs(difference) < EPSILON:
            return 0
        return -1 if difference < 0 else 1

    def __lt__(self, other: "Vector") -> bool:
        return self._compare_length(other) < 0

    def __le__(self, other: "Vector") -> bool:
        return self._compare_length(other) <= 0

    def __gt__(self, other: "Vector") -> bool:
        return self._compare_length(other) > 0

    def __ge__(self, other: "Vector") -> bool:
        return self._compare_length(other) >= 0


ZERO = Vector.triple(0.0)
ONE = Vector.triple(1.0)
X_AXIS = Vector(1.0, 0.0, 0.0)
Y_AXIS = Vector(0.0, 1.0, 0.0)
Z_AXIS = Vector(0.0, 0.0, 1.0)


# =============================================================================
# Taichi-side helpers
# =============================================================================


@ti.func
def reflect_vec3(v: vec3, normal: vec3) -> vec3:
    """Reflect a vector about a plane normal inside a Taichi kernel.

    Args:
        v: The vector to reflect.
        normal: The plane normal (should be normalized).

    Returns:
        v - normal * 2 * dot(v, normal).
    """
    return v - normal * 2.0 * tm.dot(v, normal)
