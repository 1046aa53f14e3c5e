"""The intersection capability shared by shapes and shape collections."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from raygeom.core.geo_point import GeoPoint
from raygeom.core.ray import Ray
from raygeom.core.tolerance import align_zero, is_zero
from raygeom.core.vector import Point


class Intersectable(ABC):
    """Anything a Ray can be intersected with.

    Subclasses implement ``_find_geo_intersections``; the public entry points
    validate the ray and project results. A miss is reported as None, never
    as an empty list or an exception.
    """

    def find_geo_intersections(
        self, ray: Ray, max_distance: float = math.inf
    ) -> Optional[list[GeoPoint]]:
        """Find every point where ``ray`` meets this object.

        Args:
            ray: The ray to intersect.
            max_distance: Intersections farther than this along the ray are
                discarded.

        Returns:
            Tagged intersection points ordered by increasing distance from
            the ray origin, or None if there are none.

        Raises:
            TypeError: If ``ray`` is not a Ray.
        """
        if not isinstance(ray, Ray):
            raise TypeError(f"Expected a Ray, got {type(ray).__name__}")
        return self._find_geo_intersections(ray, max_distance)

    def find_intersections(
        self, ray: Ray, max_distance: float = math.inf
    ) -> Optional[list[Point]]:
        """Same as ``find_geo_intersections`` without the shape tags."""
        geo_points = self.find_geo_intersections(ray, max_distance)
        return None if geo_points is None else [gp.point for gp in geo_points]

    @abstractmethod
    def _find_geo_intersections(
        self, ray: Ray, max_distance: float
    ) -> Optional[list[GeoPoint]]:
        """Compute intersections for an already validated ray."""

    def _geo_points_at(
        self, ray: Ray, distances: Iterable[float], max_distance: float
    ) -> Optional[list[GeoPoint]]:
        """Turn candidate ray distances into sorted GeoPoints tagged with self.

        Distances at or behind the origin (``t <= EPSILON``) and beyond
        ``max_distance`` are dropped, and coincident roots collapse into one.
        """
        kept: list[float] = []
        for t in sorted(distances):
            if align_zero(t) <= 0 or align_zero(t - max_distance) > 0:
                continue
            if kept and is_zero(t - kept[-1]):
                continue
            kept.append(t)
        if not kept:
            return None
        return [GeoPoint(self, ray.point_at(t)) for t in kept]
