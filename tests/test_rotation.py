"""Unit tests for quaternion rotations.

Tests cover:
- Axis-angle construction and vector rotation
- Composition (Hamilton product) of rotations
- Minimal-arc rotation between two directions, including the parallel
  and antiparallel special cases
- Degenerate axes
- The Taichi rotation helper
"""

import math

import pytest
import taichi as ti


class TestAxisAngle:
    """Tests for Quaternion.from_axis_angle and apply."""

    def test_identity_leaves_vectors_unchanged(self):
        """Test that the identity rotation is a no-op."""
        from src.lumen.core.rotation import IDENTITY
        from src.lumen.core.vector import Vector

        v = Vector(1.0, -2.0, 3.0)
        assert IDENTITY * v == v

    def test_quarter_turn_about_z(self):
        """Test that a quarter turn about z takes x to y."""
        from src.lumen.core.rotation import Quaternion
        from src.lumen.core.vector import X_AXIS, Y_AXIS, Z_AXIS

        q = Quaternion.from_axis_angle(Z_AXIS, math.pi / 2.0)
        assert q * X_AXIS == Y_AXIS

    def test_local_forward_to_negative_z(self):
        """Test the camera rotation taking local forward (+y) onto -z."""
        from src.lumen.core.rotation import Quaternion
        from src.lumen.core.vector import X_AXIS, Vector

        q = Quaternion.from_axis_angle(X_AXIS, -math.pi / 2.0)
        assert q * Vector(0.0, 1.0, 0.0) == Vector(0.0, 0.0, -1.0)

    def test_axis_is_normalised(self):
        """Test that a non-unit axis gives the same rotation as a unit one."""
        from src.lumen.core.rotation import Quaternion
        from src.lumen.core.vector import Vector

        a = Quaternion.from_axis_angle(Vector(0.0, 0.0, 5.0), 1.2)
        b = Quaternion.from_axis_angle(Vector(0.0, 0.0, 1.0), 1.2)
        assert a == b
        assert a.norm() == pytest.approx(1.0)

    def test_rotation_preserves_length(self):
        """Test that rotating a vector does not change its length."""
        from src.lumen.core.rotation import Quaternion
        from src.lumen.core.vector import Vector

        q = Quaternion.from_axis_angle(Vector(1.0, 2.0, 3.0), 0.7)
        v = Vector(-4.0, 0.5, 2.0)
        assert (q * v).length() == pytest.approx(v.length())

    def test_zero_axis_raises(self):
        """Test that a zero-length axis is rejected."""
        from src.lumen.core.errors import DegenerateGeometryError
        from src.lumen.core.rotation import Quaternion
        from src.lumen.core.vector import ZERO

        with pytest.raises(DegenerateGeometryError):
            Quaternion.from_axis_angle(ZERO, 1.0)

    def test_conjugate_undoes_rotation(self):
        """Test that the conjugate is the inverse rotation."""
        from src.lumen.core.rotation import Quaternion
        from src.lumen.core.vector import Vector

        q = Quaternion.from_axis_angle(Vector(1.0, 1.0, 0.0), 0.9)
        v = Vector(0.3, -1.0, 2.0)
        assert q.conjugate() * (q * v) == v


class TestComposition:
    """Tests for the Hamilton product."""

    @pytest.mark.parametrize("theta", [0.1, 0.5, math.pi / 3.0, 1.5, 2.5])
    def test_double_rotation_equals_double_angle(self, theta):
        """Test that rotating by theta twice equals rotating by 2 theta."""
        from src.lumen.core.rotation import Quaternion
        from src.lumen.core.vector import Vector

        axis = Vector(1.0, -2.0, 0.5)
        q = Quaternion.from_axis_angle(axis, theta)
        assert q * q == Quaternion.from_axis_angle(axis, 2.0 * theta)

    def test_product_applies_right_operand_first(self):
        """Test that (a * b) * v == a * (b * v)."""
        from src.lumen.core.rotation import Quaternion
        from src.lumen.core.vector import X_AXIS, Y_AXIS, Vector

        a = Quaternion.from_axis_angle(X_AXIS, 0.4)
        b = Quaternion.from_axis_angle(Y_AXIS, 1.1)
        v = Vector(1.0, 2.0, 3.0)
        assert (a * b) * v == a * (b * v)

    def test_composition_is_associative(self):
        """Test that (a * b) * c == a * (b * c)."""
        from src.lumen.core.rotation import Quaternion
        from src.lumen.core.vector import X_AXIS, Y_AXIS, Z_AXIS

        a = Quaternion.from_axis_angle(X_AXIS, 0.3)
        b = Quaternion.from_axis_angle(Y_AXIS, -0.8)
        c = Quaternion.from_axis_angle(Z_AXIS, 2.0)
        assert (a * b) * c == a * (b * c)

    def test_composition_is_not_commutative(self):
        """Test that rotation order matters."""
        from src.lumen.core.rotation import Quaternion
        from src.lumen.core.vector import X_AXIS, Y_AXIS

        a = Quaternion.from_axis_angle(X_AXIS, math.pi / 2.0)
        b = Quaternion.from_axis_angle(Y_AXIS, math.pi / 2.0)
        assert a * b != b * a


class TestMinimalArc:
    """Tests for Quaternion.rotate."""

    @pytest.mark.parametrize(
        "source,target",
        [
            ((0.0, 1.0, 0.0), (0.0, 0.0, -1.0)),
            ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0)),
            ((1.0, 2.0, 3.0), (-3.0, 0.5, 1.0)),
            ((0.0, 0.0, 1.0), (0.0, 0.01, 1.0)),
        ],
    )
    def test_rotate_maps_source_onto_target(self, source, target):
        """Test that rotate(source, target, up) carries source onto target."""
        from src.lumen.core.rotation import Quaternion
        from src.lumen.core.vector import Z_AXIS, Vector

        s = Vector(*source).normalise()
        t = Vector(*target).normalise()
        q = Quaternion.rotate(s, t, Z_AXIS)
        assert q.apply(s) == t

    def test_rotate_accepts_non_unit_inputs(self):
        """Test that source and target are normalised internally."""
        from src.lumen.core.rotation import Quaternion
        from src.lumen.core.vector import Z_AXIS, Vector

        q = Quaternion.rotate(Vector(0.0, 3.0, 0.0), Vector(0.0, 0.0, -7.0), Z_AXIS)
        assert q * Vector(0.0, 1.0, 0.0) == Vector(0.0, 0.0, -1.0)

    def test_parallel_directions_give_identity(self):
        """Test that rotating a direction onto itself is the identity."""
        from src.lumen.core.rotation import IDENTITY, Quaternion
        from src.lumen.core.vector import Y_AXIS, Z_AXIS

        assert Quaternion.rotate(Y_AXIS, Y_AXIS, Z_AXIS) == IDENTITY

    def test_antiparallel_directions_turn_about_up(self):
        """Test that opposite directions use a half turn about up."""
        from src.lumen.core.rotation import Quaternion
        from src.lumen.core.vector import Y_AXIS, Z_AXIS

        q = Quaternion.rotate(Y_AXIS, -Y_AXIS, Z_AXIS)
        assert q == Quaternion.from_axis_angle(Z_AXIS, math.pi)
        assert q * Y_AXIS == -Y_AXIS

    def test_zero_target_raises(self):
        """Test that a zero target direction is rejected."""
        from src.lumen.core.errors import DegenerateGeometryError
        from src.lumen.core.rotation import Quaternion
        from src.lumen.core.vector import Y_AXIS, Z_AXIS, ZERO

        with pytest.raises(DegenerateGeometryError):
            Quaternion.rotate(Y_AXIS, ZERO, Z_AXIS)


class TestRotateKernel:
    """Tests for the Taichi rotation helper."""

    def test_rotate_vec3_matches_python(self):
        """Test that the kernel rotation agrees with Quaternion.apply."""
        from src.lumen.core.rotation import Quaternion, rotate_vec3
        from src.lumen.core.vector import Vector, vec3

        q = Quaternion.from_axis_angle(Vector(1.0, 2.0, -1.0), 0.8)
        v = Vector(0.5, -1.0, 2.0)
        expected = q * v

        rotation = ti.Vector.field(4, dtype=ti.f32, shape=())
        result = ti.Vector.field(3, dtype=ti.f32, shape=())
        rotation[None] = list(q.as_tuple())

        @ti.kernel
        def test_kernel():
            result[None] = rotate_vec3(rotation[None], vec3(0.5, -1.0, 2.0))

        test_kernel()
        r = result[None]
        assert abs(r[0] - expected.x) < 1e-5
        assert abs(r[1] - expected.y) < 1e-5
        assert abs(r[2] - expected.z) < 1e-5
