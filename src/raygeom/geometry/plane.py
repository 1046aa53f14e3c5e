"""Infinite plane, defined by a point and a unit normal."""

from __future__ import annotations

from typing import Optional

import numpy as np

from raygeom.core.errors import ZeroVectorError
from raygeom.core.geo_point import GeoPoint
from raygeom.core.ray import Ray
from raygeom.core.tolerance import is_zero
from raygeom.core.vector import Point, Vector

from .geometry import Geometry


class Plane(Geometry):
    """A plane through ``point`` perpendicular to ``normal``.

    Attributes:
        point: A reference point on the plane.
        normal: The unit normal (normalized at construction).
    """

    def __init__(self, point: Point, normal: Vector) -> None:
        self._point = point
        self._normal = normal.normalize()

    @classmethod
    def from_points(cls, p1: Point, p2: Point, p3: Point) -> Plane:
        """Build the plane through three points.

        The normal is ``(p2 - p1) x (p3 - p1)``, normalized, so its sign
        follows the order the points are given in.

        Raises:
            ValueError: If two points coincide or all three are collinear.
        """
        try:
            normal = (p2 - p1).cross(p3 - p1)
        except ZeroVectorError as exc:
            raise ValueError(
                "Plane points must be distinct and not collinear"
            ) from exc
        return cls(p1, normal)

    @property
    def point(self) -> Point:
        return self._point

    @property
    def normal(self) -> Vector:
        return self._normal

    def normal_at(self, point: Point) -> Vector:
        return self._normal

    def ray_distance(self, ray: Ray) -> Optional[float]:
        """Signed distance along ``ray`` to this plane.

        Returns:
            The ray parameter of the crossing, or None if the ray is
            parallel to the plane or starts on it.
        """
        normal = self._normal.xyz
        denom = float(np.dot(normal, ray.direction.xyz))
        if is_zero(denom):
            return None
        numerator = float(np.dot(normal, self._point.xyz - ray.origin.xyz))
        if is_zero(numerator):
            return None
        return numerator / denom

    def _find_geo_intersections(
        self, ray: Ray, max_distance: float
    ) -> Optional[list[GeoPoint]]:
        t = self.ray_distance(ray)
        if t is None:
            return None
        return self._geo_points_at(ray, (t,), max_distance)

    def __repr__(self) -> str:
        return f"Plane(point={self._point!r}, normal={self._normal!r})"
