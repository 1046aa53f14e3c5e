"""Infinite cylinder (tube) around an axis ray."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from raygeom.core.geo_point import GeoPoint
from raygeom.core.ray import Ray
from raygeom.core.tolerance import align_zero, is_zero
from raygeom.core.vector import Point, Vector

from .geometry import RadialGeometry


def _reject(v: np.ndarray, axis: np.ndarray) -> np.ndarray:
    """Component of ``v`` perpendicular to the unit vector ``axis``."""
    return v - np.dot(v, axis) * axis


class Tube(RadialGeometry):
    """An infinite cylinder: all points at ``radius`` from the axis line.

    Attributes:
        radius: The tube radius (positive float).
        axis: The axis ray; its direction is unit length by construction.

    Raises:
        ValueError: If radius is not positive.
        TypeError: If axis is not a Ray.
    """

    def __init__(self, radius: float, axis: Ray) -> None:
        super().__init__(radius)
        if not isinstance(axis, Ray):
            raise TypeError(f"Tube axis must be a Ray, got {type(axis).__name__}")
        self._axis = axis

    @property
    def axis(self) -> Ray:
        return self._axis

    def _axis_parameter(self, point: Point) -> float:
        """Signed distance along the axis of ``point``'s foot on the axis line."""
        return float(np.dot(point.xyz - self._axis.origin.xyz, self._axis.direction.xyz))

    def normal_at(self, point: Point) -> Vector:
        """Unit vector from the point's foot on the axis out to ``point``.

        Raises:
            ZeroVectorError: If ``point`` lies on the axis.
        """
        foot = self._axis.point_at(self._axis_parameter(point))
        return (point - foot).normalize()

    def _side_distances(self, ray: Ray) -> tuple[float, ...]:
        """Ray distances where the distance to the axis line equals the radius.

        Solves ``|perp(o + t*d - A)|^2 = r^2`` where perp drops the
        axis-parallel component. Rays parallel to the axis yield nothing.
        """
        axis_dir = self._axis.direction.xyz
        d_perp = _reject(ray.direction.xyz, axis_dir)
        delta_perp = _reject(ray.origin.xyz - self._axis.origin.xyz, axis_dir)

        a = float(np.dot(d_perp, d_perp))
        if is_zero(a):
            return ()
        half_b = float(np.dot(d_perp, delta_perp))
        c = float(np.dot(delta_perp, delta_perp)) - self._radius * self._radius

        discriminant = align_zero(half_b * half_b - a * c)
        if discriminant < 0:
            return ()

        root = math.sqrt(discriminant)
        return ((-half_b - root) / a, (-half_b + root) / a)

    def _find_geo_intersections(
        self, ray: Ray, max_distance: float
    ) -> Optional[list[GeoPoint]]:
        return self._geo_points_at(ray, self._side_distances(ray), max_distance)

    def __repr__(self) -> str:
        return f"Tube(radius={self._radius}, axis={self._axis!r})"
