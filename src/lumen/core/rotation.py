"""Unit quaternion rotations.

Rotations are stored as unit quaternions (w, x, y, z). Composition is the
Hamilton product and vectors are rotated with the sandwich product written
in its expanded cross-product form, so no rotation matrix is ever built:

    v' = v + w * (2 u x v) + u x (2 u x v),    u = (x, y, z)

Example:
    >>> import math
    >>> from src.lumen.core.rotation import Quaternion
    >>> from src.lumen.core.vector import Vector, X_AXIS
    >>> quarter_turn = Quaternion.from_axis_angle(X_AXIS, -math.pi / 2)
    >>> forward = quarter_turn * Vector(0.0, 1.0, 0.0)  # local forward maps to -z
    >>> forward == Vector(0.0, 0.0, -1.0)
    True
"""

import math
from dataclasses import dataclass
from typing import Union, overload

import taichi as ti
import taichi.math as tm

from src.lumen.core.errors import DegenerateGeometryError
from src.lumen.core.vector import EPSILON, Vector, approx_equal, vec3

# Quaternions inside Taichi kernels are packed as vec4 (w, x, y, z)
vec4 = tm.vec4


@dataclass(frozen=True, eq=False)
class Quaternion:
    """A rotation quaternion.

    Attributes:
        w: The scalar (real) part.
        x: The i component.
        y: The j component.
        z: The k component.
    """

    w: float
    x: float
    y: float
    z: float

    @classmethod
    def identity(cls) -> "Quaternion":
        """The rotation that leaves every vector unchanged."""
        return cls(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_axis_angle(cls, axis: Vector, angle: float) -> "Quaternion":
        """Build the rotation of `angle` radians about `axis`.

        The axis is normalised internally, so any non-zero length works.

        Args:
            axis: Rotation axis.
            angle: Rotation angle in radians (right-hand rule).

        Returns:
            A unit quaternion.

        Raises:
            DegenerateGeometryError: If the axis has zero length.
        """
        unit_axis = axis.normalise()
        half_angle = angle / 2.0
        sin_half = math.sin(half_angle)
        return cls(
            math.cos(half_angle),
            unit_axis.x * sin_half,
            unit_axis.y * sin_half,
            unit_axis.z * sin_half,
        )

    @classmethod
    def rotate(cls, source: Vector, target: Vector, up: Vector) -> "Quaternion":
        """Build the minimal rotation taking direction `source` onto `target`.

        When the two directions are opposite the rotation axis is undefined;
        the half turn about `up` is used instead. When they already coincide
        the identity is returned.

        Args:
            source: Direction to rotate from.
            target: Direction to rotate onto.
            up: Fallback axis for the antiparallel case.

        Returns:
            A unit quaternion q with q * source == target (for unit inputs).

        Raises:
            DegenerateGeometryError: If any input direction has zero length.
        """
        source = source.normalise()
        target = target.normalise()
        cos_angle = source.dot(target)
        if cos_angle < -1.0 + EPSILON:
            return cls.from_axis_angle(up, math.pi)
        if cos_angle > 1.0 - EPSILON:
            return cls.identity()
        axis = source.cross(target).normalise()
        return cls.from_axis_angle(axis, math.acos(max(-1.0, min(1.0, cos_angle))))

    @property
    def vector_part(self) -> Vector:
        """The imaginary part (x, y, z) as a Vector."""
        return Vector(self.x, self.y, self.z)

    def norm(self) -> float:
        """Compute the quaternion norm."""
        return math.sqrt(self.w * self.w + self.x * self.x + self.y * self.y + self.z * self.z)

    def normalised(self) -> "Quaternion":
        """Return the unit quaternion for the same rotation.

        Raises:
            DegenerateGeometryError: If the quaternion is zero.
        """
        norm = self.norm()
        if norm == 0.0 or not math.isfinite(norm):
            raise DegenerateGeometryError(f"Cannot normalise quaternion of norm {norm}: {self}")
        return Quaternion(self.w / norm, self.x / norm, self.y / norm, self.z / norm)

    def conjugate(self) -> "Quaternion":
        """Return the conjugate, which is the inverse rotation for unit quaternions."""
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def apply(self, v: Vector) -> Vector:
        """Rotate a vector by this quaternion."""
        u = self.vector_part
        t = u.cross(v) * 2.0
        return v + t * self.w + u.cross(t)

    @overload
    def __mul__(self, other: "Quaternion") -> "Quaternion": ...

    @overload
    def __mul__(self, other: Vector) -> Vector: ...

    def __mul__(self, other: Union["Quaternion", Vector]) -> Union["Quaternion", Vector]:
        if isinstance(other, Vector):
            return self.apply(other)
        if isinstance(other, Quaternion):
            # Hamilton product: applying the result rotates by `other` first
            return Quaternion(
                self.w * other.w - self.x * other.x - self.y * other.y - self.z * other.z,
                self.w * other.x + self.x * other.w + self.y * other.z - self.z * other.y,
                self.w * other.y - self.x * other.z + self.y * other.w + self.z * other.x,
                self.w * other.z + self.x * other.y - self.y * other.x + self.z * other.w,
            )
        return NotImplemented

    def as_tuple(self) -> tuple[float, float, float, float]:
        """Return (w, x, y, z) as a plain tuple."""
        return (self.w, self.x, self.y, self.z)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return all(approx_equal(a, b) for a, b in zip(self.as_tuple(), other.as_tuple()))

    __hash__ = None  # type: ignore[assignment]


IDENTITY = Quaternion.identity()


# =============================================================================
# Taichi-side helpers
# =============================================================================


@ti.func
def rotate_vec3(q: vec4, v: vec3) -> vec3:
    """Rotate a vector by a quaternion packed as vec4 (w, x, y, z).

    Args:
        q: The unit quaternion.
        v: The vector to rotate.

    Returns:
        The rotated vector.
    """
    u = vec3(q[1], q[2], q[3])
    t = 2.0 * tm.cross(u, v)
    return v + q[0] * t + tm.cross(u, t)
