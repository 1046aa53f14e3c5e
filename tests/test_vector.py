"""Unit tests for the Point and Vector value types.

Tests cover:
- Arithmetic between points and vectors
- Rejection of the zero vector
- Tolerant equality and immutability
"""

import math

import numpy as np
import pytest

from raygeom.core import EPSILON, Point, Vector, ZeroVectorError, align_zero, is_zero


class TestTolerance:
    """Tests for the shared zero tests."""

    def test_is_zero(self):
        assert is_zero(0.0)
        assert is_zero(EPSILON / 2)
        assert is_zero(-EPSILON / 2)
        assert not is_zero(1e-6)

    def test_align_zero(self):
        assert align_zero(1e-12) == 0.0
        assert align_zero(-0.5) == -0.5


class TestPoint:
    """Tests for Point arithmetic."""

    def test_components(self):
        p = Point(1, 2, 3)
        assert (p.x, p.y, p.z) == (1.0, 2.0, 3.0)
        assert tuple(p) == (1.0, 2.0, 3.0)

    def test_add_vector(self):
        assert Point(1, 2, 3) + Vector(-1, -3, -5) == Point(0, -1, -2)

    def test_subtract_point_gives_vector(self):
        v = Point(2, 3, 4) - Point(1, 1, 1)
        assert isinstance(v, Vector)
        assert v == Vector(1, 2, 3)

    def test_subtract_vector_gives_point(self):
        p = Point(2, 3, 4) - Vector(1, 1, 1)
        assert isinstance(p, Point)
        assert p == Point(1, 2, 3)

    def test_subtract_self_is_zero_vector(self):
        with pytest.raises(ZeroVectorError):
            Point(1, 2, 3) - Point(1, 2, 3)

    def test_distance(self):
        assert Point(1, 2, 3).distance_squared(Point(2, 4, 5)) == pytest.approx(9.0)
        assert Point(1, 2, 3).distance(Point(2, 4, 5)) == pytest.approx(3.0)

    def test_equality_is_tolerant(self):
        assert Point(1, 2, 3) == Point(1 + EPSILON / 10, 2, 3)
        assert Point(1, 2, 3) != Point(1.001, 2, 3)

    def test_point_never_equals_vector(self):
        assert Point(1, 2, 3) != Vector(1, 2, 3)

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Point(1, 2, 3))

    def test_immutable(self):
        p = Point(1, 2, 3)
        with pytest.raises(AttributeError):
            p.foo = 1
        with pytest.raises(ValueError):
            p.xyz[0] = 5.0

    def test_from_array(self):
        assert Point.from_array(np.array([1.0, 2.0, 3.0])) == Point(1, 2, 3)


class TestVector:
    """Tests for Vector arithmetic."""

    def test_zero_vector_rejected(self):
        with pytest.raises(ZeroVectorError):
            Vector(0, 0, 0)

    def test_zero_vector_error_is_value_error(self):
        with pytest.raises(ValueError):
            Vector(0, 0, 0)

    def test_add_and_subtract(self):
        assert Vector(1, 2, 3) + Vector(-2, -4, -6) == Vector(-1, -2, -3)
        assert Vector(1, 2, 3) - Vector(-2, -4, -6) == Vector(3, 6, 9)

    def test_add_opposite_is_zero_vector(self):
        with pytest.raises(ZeroVectorError):
            Vector(1, 2, 3) + Vector(-1, -2, -3)

    def test_scale(self):
        assert Vector(1, 2, 3) * 2 == Vector(2, 4, 6)
        assert 2 * Vector(1, 2, 3) == Vector(2, 4, 6)
        assert -Vector(1, 2, 3) == Vector(-1, -2, -3)

    def test_scale_by_zero_rejected(self):
        with pytest.raises(ZeroVectorError):
            Vector(1, 2, 3).scale(0)

    def test_dot(self):
        assert Vector(1, 2, 3).dot(Vector(-2, -4, -6)) == pytest.approx(-28.0)
        assert is_zero(Vector(1, 2, 3).dot(Vector(0, 3, -2)))

    def test_cross(self):
        v1 = Vector(1, 2, 3)
        v3 = Vector(0, 3, -2)
        cross = v1.cross(v3)
        assert cross.length() == pytest.approx(v1.length() * v3.length())
        assert is_zero(cross.dot(v1))
        assert is_zero(cross.dot(v3))

    def test_cross_of_parallel_vectors_rejected(self):
        with pytest.raises(ZeroVectorError):
            Vector(1, 2, 3).cross(Vector(-2, -4, -6))

    def test_length(self):
        assert Vector(1, 2, 3).length_squared() == pytest.approx(14.0)
        assert Vector(0, 3, 4).length() == pytest.approx(5.0)

    def test_normalize(self):
        v = Vector(1, 2, 3)
        u = v.normalize()
        assert u.length() == pytest.approx(1.0, abs=1e-12)
        assert u.dot(v) > 0
        assert u == Vector(1 / math.sqrt(14), 2 / math.sqrt(14), 3 / math.sqrt(14))
