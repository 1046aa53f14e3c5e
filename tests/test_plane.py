"""Unit tests for the Plane primitive.

Tests cover:
- Construction from a point and normal, and from three points
- Rejection of coincident and collinear points
- Ray-plane intersection, parallel rays and rays starting on the plane
"""

import pytest

from raygeom.core import Point, Ray, Vector, is_zero
from raygeom.geometry import Plane


class TestPlaneBasics:
    """Tests for Plane construction and normals."""

    def test_normal_is_normalized(self):
        plane = Plane(Point(0, 0, 1), Vector(0, 0, 5))
        assert plane.normal == Vector(0, 0, 1)
        assert plane.normal_at(Point(3, 4, 1)) == Vector(0, 0, 1)

    def test_from_points(self):
        p1, p2, p3 = Point(1, 0, 0), Point(0, 1, 0), Point(0, 0, 1)
        plane = Plane.from_points(p1, p2, p3)
        normal = plane.normal
        assert abs(normal.length() - 1.0) < 1e-6
        assert is_zero(normal.dot(p2 - p1))
        assert is_zero(normal.dot(p3 - p2))
        assert is_zero(normal.dot(p1 - p3))

    def test_from_coincident_points_rejected(self):
        with pytest.raises(ValueError):
            Plane.from_points(Point(1, 0, 0), Point(1, 0, 0), Point(0, 0, 1))

    def test_from_collinear_points_rejected(self):
        with pytest.raises(ValueError):
            Plane.from_points(Point(1, 0, 0), Point(2, 0, 0), Point(3, 0, 0))


class TestPlaneIntersection:
    """Tests for ray-plane intersection."""

    @pytest.fixture
    def plane(self):
        return Plane(Point(0, 0, 1), Vector(0, 0, 1))

    def test_ray_crosses_plane(self, plane):
        ray = Ray(Point(0, 0, 0), Vector(1, 1, 1))
        result = plane.find_geo_intersections(ray)
        assert len(result) == 1
        assert result[0].point == Point(1, 1, 1)
        assert result[0].geometry is plane

    def test_ray_from_other_side(self, plane):
        ray = Ray(Point(0, 0, 3), Vector(0, 0, -1))
        assert plane.find_intersections(ray) == [Point(0, 0, 1)]

    def test_ray_away_from_plane(self, plane):
        ray = Ray(Point(0, 0, 0), Vector(0, 0, -1))
        assert plane.find_intersections(ray) is None

    def test_parallel_ray(self, plane):
        ray = Ray(Point(0, 0, 0), Vector(1, 0, 0))
        assert plane.find_intersections(ray) is None

    def test_ray_inside_plane(self, plane):
        ray = Ray(Point(0, 0, 1), Vector(1, 0, 0))
        assert plane.find_intersections(ray) is None

    def test_ray_starts_on_plane(self, plane):
        ray = Ray(Point(2, 2, 1), Vector(0, 0, 1))
        assert plane.find_intersections(ray) is None

    def test_ray_starts_at_reference_point(self, plane):
        ray = Ray(Point(0, 0, 1), Vector(1, 1, 1))
        assert plane.find_intersections(ray) is None

    def test_max_distance(self, plane):
        ray = Ray(Point(0, 0, 0), Vector(1, 1, 1))
        assert plane.find_intersections(ray, max_distance=1.0) is None
        assert plane.find_intersections(ray, max_distance=2.0) == [Point(1, 1, 1)]
