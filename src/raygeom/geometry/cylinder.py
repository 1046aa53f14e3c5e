"""Finite cylinder: a tube cut to a height and closed by two cap discs."""

from __future__ import annotations

from typing import Optional

import numpy as np

from raygeom.core.geo_point import GeoPoint
from raygeom.core.ray import Ray
from raygeom.core.tolerance import align_zero, is_zero
from raygeom.core.vector import Point, Vector

from .tube import Tube


class Cylinder(Tube):
    """A tube between ``axis.origin`` and ``axis.point_at(height)``.

    The bottom cap lies in the plane through the axis origin, the top cap in
    the plane through the axis point at ``height``; both are perpendicular
    to the axis.

    Attributes:
        radius: The cylinder radius (positive float).
        axis: The axis ray; the bottom cap is centered on its origin.
        height: Length of the cylinder along the axis (positive float).

    Raises:
        ValueError: If radius or height is not positive.
    """

    def __init__(self, radius: float, axis: Ray, height: float) -> None:
        super().__init__(radius, axis)
        if not height > 0:
            raise ValueError(f"Height = {height} must be positive.")
        self._height = float(height)

    @property
    def height(self) -> float:
        return self._height

    def normal_at(self, point: Point) -> Vector:
        """Axis direction on the caps, tube normal on the side.

        Points on the rim are treated as cap points.
        """
        s = self._axis_parameter(point)
        if is_zero(s):
            return -self._axis.direction
        if is_zero(s - self._height):
            return self._axis.direction
        return super().normal_at(point)

    def _cap_distances(self, ray: Ray) -> list[float]:
        axis_dir = self._axis.direction.xyz
        denom = float(np.dot(ray.direction.xyz, axis_dir))
        if is_zero(denom):
            return []

        r2 = self._radius * self._radius
        distances = []
        for offset in (0.0, self._height):
            cap_center = self._axis.origin.xyz + axis_dir * offset
            t = float(np.dot(cap_center - ray.origin.xyz, axis_dir)) / denom
            hit = ray.origin.xyz + ray.direction.xyz * t
            from_center = hit - cap_center
            if align_zero(float(np.dot(from_center, from_center)) - r2) <= 0:
                distances.append(t)
        return distances

    def _find_geo_intersections(
        self, ray: Ray, max_distance: float
    ) -> Optional[list[GeoPoint]]:
        distances = self._cap_distances(ray)
        for t in self._side_distances(ray):
            hit = ray.origin.xyz + ray.direction.xyz * t
            s = float(np.dot(hit - self._axis.origin.xyz, self._axis.direction.xyz))
            if align_zero(s) > 0 and align_zero(s - self._height) < 0:
                distances.append(t)
        return self._geo_points_at(ray, distances, max_distance)

    def __repr__(self) -> str:
        return f"Cylinder(radius={self._radius}, axis={self._axis!r}, height={self._height})"
