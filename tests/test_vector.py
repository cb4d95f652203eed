"""Unit tests for the Vector value type.

Tests cover:
- Arithmetic, dot and cross products
- Length, normalisation and reflection
- Tolerant equality and magnitude ordering
- Degenerate inputs (zero-length normalisation)
- The Taichi reflect helper
"""

import math

import pytest
import taichi as ti


class TestVectorArithmetic:
    """Tests for component-wise arithmetic."""

    def test_add_and_subtract(self):
        """Test component-wise addition and subtraction."""
        from src.lumen.core.vector import Vector

        a = Vector(1.0, 2.0, 3.0)
        b = Vector(4.0, -5.0, 6.0)
        assert a + b == Vector(5.0, -3.0, 9.0)
        assert a - b == Vector(-3.0, 7.0, -3.0)

    def test_scalar_and_componentwise_multiply(self):
        """Test multiplication by a scalar (either side) and by a vector."""
        from src.lumen.core.vector import Vector

        v = Vector(1.0, -2.0, 3.0)
        assert v * 2.0 == Vector(2.0, -4.0, 6.0)
        assert 2.0 * v == Vector(2.0, -4.0, 6.0)
        assert v * Vector(2.0, 3.0, 4.0) == Vector(2.0, -6.0, 12.0)

    def test_divide_and_negate(self):
        """Test scalar division and negation."""
        from src.lumen.core.vector import Vector

        assert Vector(2.0, 4.0, 8.0) / 2.0 == Vector(1.0, 2.0, 4.0)
        assert -Vector(1.0, -1.0, 0.0) == Vector(-1.0, 1.0, 0.0)

    def test_triple_and_iteration(self):
        """Test the triple constructor and unpacking."""
        from src.lumen.core.vector import Vector

        x, y, z = Vector.triple(0.5)
        assert (x, y, z) == (0.5, 0.5, 0.5)

    def test_vectors_are_immutable(self):
        """Test that components cannot be reassigned."""
        from dataclasses import FrozenInstanceError

        from src.lumen.core.vector import Vector

        v = Vector(1.0, 2.0, 3.0)
        with pytest.raises(FrozenInstanceError):
            v.x = 5.0  # type: ignore[misc]


class TestVectorProducts:
    """Tests for dot, cross, length and reflection."""

    def test_dot_product(self):
        """Test dot product of two vectors."""
        from src.lumen.core.vector import Vector

        assert Vector(1.0, 2.0, 3.0).dot(Vector(4.0, 5.0, 6.0)) == pytest.approx(32.0)

    def test_cross_product_of_axes(self):
        """Test that x cross y is z (right-handed)."""
        from src.lumen.core.vector import X_AXIS, Y_AXIS, Z_AXIS

        assert X_AXIS.cross(Y_AXIS) == Z_AXIS
        assert Y_AXIS.cross(X_AXIS) == -Z_AXIS

    def test_cross_product_is_orthogonal(self):
        """Test that the cross product is perpendicular to both inputs."""
        from src.lumen.core.vector import Vector

        a = Vector(1.0, 2.0, 3.0)
        b = Vector(-2.0, 0.5, 4.0)
        c = a.cross(b)
        assert abs(c.dot(a)) < 1e-9
        assert abs(c.dot(b)) < 1e-9

    def test_length(self):
        """Test Euclidean length."""
        from src.lumen.core.vector import Vector

        assert Vector(2.0, 3.0, 6.0).length() == pytest.approx(7.0)
        assert Vector(2.0, 3.0, 6.0).length_squared() == pytest.approx(49.0)

    def test_length_does_not_overflow(self):
        """Test that very large components do not overflow when squared."""
        from src.lumen.core.vector import Vector

        v = Vector(1e200, 1e200, 0.0)
        assert math.isfinite(v.length())
        assert v.length() == pytest.approx(math.sqrt(2.0) * 1e200)

    def test_normalise_gives_unit_length(self):
        """Test that normalise produces a unit vector with the same direction."""
        from src.lumen.core.vector import Vector

        n = Vector(3.0, 0.0, 4.0).normalise()
        assert n == Vector(0.6, 0.0, 0.8)
        assert n.length() == pytest.approx(1.0)

    def test_normalise_zero_vector_raises(self):
        """Test that a zero vector has no direction."""
        from src.lumen.core.errors import DegenerateGeometryError
        from src.lumen.core.vector import ZERO

        with pytest.raises(DegenerateGeometryError):
            ZERO.normalise()

    def test_degenerate_error_is_value_error(self):
        """Test that degenerate geometry can be caught as ValueError."""
        from src.lumen.core.vector import ZERO

        with pytest.raises(ValueError):
            ZERO.normalise()

    def test_reflect(self):
        """Test reflection about a plane normal."""
        from src.lumen.core.vector import Vector

        reflected = Vector(1.0, -1.0, 0.0).reflect(Vector(0.0, 1.0, 0.0))
        assert reflected == Vector(1.0, 1.0, 0.0)

    def test_is_finite(self):
        """Test finiteness check."""
        from src.lumen.core.vector import Vector

        assert Vector(1.0, 2.0, 3.0).is_finite()
        assert not Vector(float("nan"), 0.0, 0.0).is_finite()
        assert not Vector(0.0, float("inf"), 0.0).is_finite()


class TestVectorComparison:
    """Tests for tolerant equality and ordering."""

    def test_equality_within_epsilon(self):
        """Test that vectors closer than EPSILON per component are equal."""
        from src.lumen.core.vector import EPSILON, Vector

        a = Vector(1.0, 2.0, 3.0)
        assert a == Vector(1.0 + EPSILON / 2, 2.0, 3.0 - EPSILON / 2)
        assert a != Vector(1.0 + EPSILON * 2, 2.0, 3.0)

    def test_vectors_are_unhashable(self):
        """Test that tolerant equality makes vectors unhashable."""
        from src.lumen.core.vector import Vector

        with pytest.raises(TypeError):
            hash(Vector(1.0, 2.0, 3.0))

    def test_ordering_by_magnitude(self):
        """Test that ordering compares lengths, not components."""
        from src.lumen.core.vector import Vector

        short = Vector(0.0, 0.0, 1.0)
        long = Vector(2.0, 0.0, 0.0)
        assert short < long
        assert long > short
        assert short <= long
        assert long >= short

    def test_ordering_is_tolerant(self):
        """Test that vectors of equal length are neither less nor greater."""
        from src.lumen.core.vector import X_AXIS, Y_AXIS

        assert not X_AXIS < Y_AXIS
        assert not X_AXIS > Y_AXIS
        assert X_AXIS <= Y_AXIS
        assert X_AXIS >= Y_AXIS

    def test_sorting_by_magnitude(self):
        """Test that sorting orders vectors by length."""
        from src.lumen.core.vector import Vector

        vectors = [Vector(3.0, 0.0, 0.0), Vector(0.0, 1.0, 0.0), Vector(0.0, 0.0, 2.0)]
        assert [v.length() for v in sorted(vectors)] == [1.0, 2.0, 3.0]


class TestReflectKernel:
    """Tests for the Taichi reflection helper."""

    def test_reflect_vec3_matches_python(self):
        """Test that the kernel reflection agrees with Vector.reflect."""
        from src.lumen.core.vector import Vector, reflect_vec3, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = reflect_vec3(vec3(1.0, -2.0, 0.5), vec3(0.0, 1.0, 0.0))

        test_kernel()
        expected = Vector(1.0, -2.0, 0.5).reflect(Vector(0.0, 1.0, 0.0))
        r = result[None]
        assert abs(r[0] - expected.x) < 1e-6
        assert abs(r[1] - expected.y) < 1e-6
        assert abs(r[2] - expected.z) < 1e-6
