"""Sphere primitive with geometric ray-sphere intersection.

The intersection uses the geometric (half-chord) solution rather than the
raw quadratic: project the center onto the ray to get ``tca``, measure the
squared distance ``d2`` from the center to that projection, and step
``thc = sqrt(r^2 - d2)`` either way along the ray.

Example:
    >>> from raygeom.core import Point, Ray, Vector
    >>> from raygeom.geometry import Sphere
    >>> sphere = Sphere(1.0, Point(0, 0, -5))
    >>> sphere.find_intersections(Ray(Point(0, 0, 0), Vector(0, 0, -1)))
    [Point(0.0, 0.0, -4.0), Point(0.0, 0.0, -6.0)]
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from raygeom.core.geo_point import GeoPoint
from raygeom.core.ray import Ray
from raygeom.core.tolerance import align_zero
from raygeom.core.vector import Point, Vector

from .geometry import RadialGeometry


class Sphere(RadialGeometry):
    """A sphere defined by radius and center point.

    Attributes:
        radius: The radius of the sphere (positive float).
        center: The center point of the sphere.

    Raises:
        ValueError: If radius is not positive.
    """

    def __init__(self, radius: float, center: Point) -> None:
        super().__init__(radius)
        self._center = center

    @property
    def center(self) -> Point:
        return self._center

    def normal_at(self, point: Point) -> Vector:
        """Outward normal: from the center through ``point``.

        Raises:
            ZeroVectorError: If ``point`` is the center.
        """
        return (point - self._center).normalize()

    def _find_geo_intersections(
        self, ray: Ray, max_distance: float
    ) -> Optional[list[GeoPoint]]:
        # Raw arrays: the ray may start at the center, where center - origin
        # is not a valid Vector.
        to_center = self._center.xyz - ray.origin.xyz
        tca = float(np.dot(to_center, ray.direction.xyz))
        d2 = float(np.dot(to_center, to_center)) - tca * tca
        r2 = self._radius * self._radius

        gap = align_zero(r2 - d2)
        if gap < 0:
            return None

        thc = math.sqrt(gap)
        return self._geo_points_at(ray, (tca - thc, tca + thc), max_distance)

    def __repr__(self) -> str:
        return f"Sphere(radius={self._radius}, center={self._center!r})"
