"""Ray value type and closest-point selection.

A Ray is an origin Point plus a unit-length direction Vector. The direction
is normalized at construction no matter what magnitude is passed in.

Example:
    >>> from raygeom.core import Point, Ray, Vector
    >>> ray = Ray(Point(0, 0, 0), Vector(0, 0, -5))
    >>> ray.direction
    Vector(0.0, 0.0, -1.0)
    >>> ray.point_at(2.0)
    Point(0.0, 0.0, -2.0)
"""

from __future__ import annotations

from typing import Iterable, Optional

from .geo_point import GeoPoint
from .tolerance import is_zero
from .vector import Point, Vector


class Ray:
    """A half-line starting at ``origin`` and heading along ``direction``.

    Attributes:
        origin: The starting point of the ray.
        direction: The unit direction of the ray.

    Raises:
        TypeError: If origin is not a Point or direction is not a Vector.
    """

    __slots__ = ("_origin", "_direction")

    def __init__(self, origin: Point, direction: Vector) -> None:
        if not isinstance(origin, Point):
            raise TypeError(f"Ray origin must be a Point, got {type(origin).__name__}")
        if not isinstance(direction, Vector):
            raise TypeError(f"Ray direction must be a Vector, got {type(direction).__name__}")
        object.__setattr__(self, "_origin", origin)
        object.__setattr__(self, "_direction", direction.normalize())

    def __setattr__(self, name, value):
        raise AttributeError("Ray is immutable")

    @property
    def origin(self) -> Point:
        return self._origin

    @property
    def direction(self) -> Vector:
        return self._direction

    def point_at(self, distance: float) -> Point:
        """Compute the point ``distance`` units along the ray.

        A distance within EPSILON of zero returns the origin itself, so the
        trivial case never picks up floating-point drift.

        Args:
            distance: Signed distance along the direction.

        Returns:
            origin + direction * distance.
        """
        if is_zero(distance):
            return self._origin
        return Point.from_array(self._origin.xyz + self._direction.xyz * distance)

    def closest_point(self, points: Optional[Iterable[Point]]) -> Optional[Point]:
        """Return the point nearest to the origin, or None for empty input."""
        if not points:
            return None
        closest = self.closest_geo_point([GeoPoint(None, p) for p in points])
        return None if closest is None else closest.point

    def closest_geo_point(self, geo_points: Optional[Iterable[GeoPoint]]) -> Optional[GeoPoint]:
        """Return the tagged point nearest to the origin.

        Points whose distances differ by less than EPSILON are ties; the
        first one in input order wins.

        Args:
            geo_points: Candidate intersection points, possibly None.

        Returns:
            The nearest GeoPoint, or None if there are no candidates.
        """
        if not geo_points:
            return None

        closest = None
        closest_distance = 0.0
        for geo_point in geo_points:
            distance = geo_point.point.distance(self._origin)
            if closest is None or (
                distance < closest_distance and not is_zero(distance - closest_distance)
            ):
                closest = geo_point
                closest_distance = distance
        return closest

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Ray):
            return NotImplemented
        return self._origin == other._origin and self._direction == other._direction

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Ray(origin={self._origin!r}, direction={self._direction!r})"
