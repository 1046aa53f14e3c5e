"""Composite of intersectable objects."""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from raygeom.core.geo_point import GeoPoint
from raygeom.core.ray import Ray

from .intersectable import Intersectable

logger = logging.getLogger(__name__)


class Geometries(Intersectable):
    """A collection of intersectables that is itself intersectable.

    Intersections of all children are flattened into one list; the result
    is None only when every child misses. Children may themselves be
    Geometries, so scenes can be grouped hierarchically.

    Example:
        >>> scene = Geometries(Sphere(1.0, Point(0, 0, -3)))
        >>> scene.add(Plane(Point(0, -1, 0), Vector(0, 1, 0)))
        >>> len(scene)
        2
    """

    def __init__(self, *geometries: Intersectable) -> None:
        self._geometries: list[Intersectable] = []
        self.add(*geometries)

    def add(self, *geometries: Intersectable) -> None:
        """Append intersectables to the collection.

        Raises:
            TypeError: If any argument is not Intersectable.
        """
        for geometry in geometries:
            if not isinstance(geometry, Intersectable):
                raise TypeError(f"Expected an Intersectable, got {type(geometry).__name__}")
        self._geometries.extend(geometries)
        logger.debug(f"Added {len(geometries)} geometries, collection size {len(self._geometries)}")

    def __len__(self) -> int:
        return len(self._geometries)

    def __iter__(self) -> Iterator[Intersectable]:
        return iter(self._geometries)

    def _find_geo_intersections(
        self, ray: Ray, max_distance: float
    ) -> Optional[list[GeoPoint]]:
        result: Optional[list[GeoPoint]] = None
        for geometry in self._geometries:
            geo_points = geometry.find_geo_intersections(ray, max_distance)
            if geo_points is None:
                continue
            if result is None:
                result = []
            result.extend(geo_points)
        return result
