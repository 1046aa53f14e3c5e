"""Unit tests for the Sphere primitive.

Tests cover:
- Radius validation
- Outward normals
- Ray through the center, tangent ray, missing ray
- Rays starting inside, on, and in front of the sphere
- max_distance filtering
"""

import pytest

from raygeom.core import Point, Ray, Vector, ZeroVectorError
from raygeom.geometry import Sphere


class TestSphereBasics:
    """Tests for Sphere construction and normals."""

    def test_construct(self):
        sphere = Sphere(0.5, Point(1, 2, 3))
        assert sphere.radius == 0.5
        assert sphere.center == Point(1, 2, 3)

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_non_positive_radius_rejected(self, radius):
        with pytest.raises(ValueError):
            Sphere(radius, Point(0, 0, 0))

    def test_normal(self):
        sphere = Sphere(1.0, Point(0, 0, 0))
        assert sphere.normal_at(Point(0, 0, 1)) == Vector(0, 0, 1)

    def test_normal_is_unit(self):
        sphere = Sphere(5.0, Point(1, 1, 1))
        normal = sphere.normal_at(Point(4, 5, 1))
        assert abs(normal.length() - 1.0) < 1e-6
        assert normal == Vector(0.6, 0.8, 0)

    def test_normal_at_center_rejected(self):
        sphere = Sphere(1.0, Point(1, 2, 3))
        with pytest.raises(ZeroVectorError):
            sphere.normal_at(Point(1, 2, 3))


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_ray_through_center(self):
        """Test a ray through the center gives two symmetric points in front of it."""
        sphere = Sphere(1.0, Point(0, 0, -5))
        ray = Ray(Point(0, 0, 0), Vector(0, 0, -1))
        result = sphere.find_geo_intersections(ray)
        assert len(result) == 2
        near, far = result
        assert near.point == Point(0, 0, -4)
        assert far.point == Point(0, 0, -6)
        assert near.geometry is sphere and far.geometry is sphere
        # Symmetric about the center
        assert near.point.distance(sphere.center) == pytest.approx(far.point.distance(sphere.center))
        assert near.point + (far.point - near.point) * 0.5 == sphere.center

    def test_unnormalized_direction_same_result(self):
        sphere = Sphere(1.0, Point(0, 0, -5))
        result = sphere.find_intersections(Ray(Point(0, 0, 0), Vector(0, 0, -3)))
        assert result == [Point(0, 0, -4), Point(0, 0, -6)]

    def test_off_center_ray(self):
        sphere = Sphere(5.0, Point(0, 0, 0))
        ray = Ray(Point(-10, 3, 0), Vector(1, 0, 0))
        assert sphere.find_intersections(ray) == [Point(-4, 3, 0), Point(4, 3, 0)]

    def test_tangent_ray(self):
        """Test a ray grazing the sphere gives exactly one point."""
        sphere = Sphere(1.0, Point(0, 0, -5))
        ray = Ray(Point(1, 0, 0), Vector(0, 0, -1))
        assert sphere.find_intersections(ray) == [Point(1, 0, -5)]

    def test_ray_misses(self):
        sphere = Sphere(1.0, Point(0, 0, -5))
        ray = Ray(Point(2, 0, 0), Vector(0, 0, -1))
        assert sphere.find_geo_intersections(ray) is None

    def test_sphere_behind_ray(self):
        sphere = Sphere(1.0, Point(0, 0, 5))
        ray = Ray(Point(0, 0, 0), Vector(0, 0, -1))
        assert sphere.find_intersections(ray) is None

    def test_ray_starts_at_center(self):
        sphere = Sphere(2.0, Point(1, 1, 1))
        ray = Ray(Point(1, 1, 1), Vector(1, 0, 0))
        assert sphere.find_intersections(ray) == [Point(3, 1, 1)]

    def test_ray_starts_inside(self):
        sphere = Sphere(1.0, Point(0, 0, 0))
        ray = Ray(Point(0.5, 0, 0), Vector(-1, 0, 0))
        assert sphere.find_intersections(ray) == [Point(-1, 0, 0)]

    def test_ray_starts_on_surface_going_out(self):
        sphere = Sphere(1.0, Point(0, 0, 0))
        ray = Ray(Point(0, 0, 1), Vector(0, 0, 1))
        assert sphere.find_intersections(ray) is None

    def test_ray_starts_on_surface_going_in(self):
        sphere = Sphere(1.0, Point(0, 0, 0))
        ray = Ray(Point(0, 0, 1), Vector(0, 0, -1))
        assert sphere.find_intersections(ray) == [Point(0, 0, -1)]

    def test_max_distance(self):
        sphere = Sphere(1.0, Point(0, 0, -5))
        ray = Ray(Point(0, 0, 0), Vector(0, 0, -1))
        assert sphere.find_intersections(ray, max_distance=5.0) == [Point(0, 0, -4)]
        assert sphere.find_intersections(ray, max_distance=3.0) is None

    def test_not_a_ray_rejected(self):
        sphere = Sphere(1.0, Point(0, 0, -5))
        with pytest.raises(TypeError):
            sphere.find_intersections(None)

    def test_intersection_normals_are_unit(self):
        sphere = Sphere(2.0, Point(1, -1, -6))
        ray = Ray(Point(0, 0, 0), Vector(0.3, -0.2, -1))
        for geo_point in sphere.find_geo_intersections(ray):
            assert abs(sphere.normal_at(geo_point.point).length() - 1.0) < 1e-6
