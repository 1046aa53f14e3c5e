"""Intersection point tagged with the shape that produced it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .vector import Point

if TYPE_CHECKING:
    from raygeom.geometry.intersectable import Intersectable


@dataclass(frozen=True, eq=False)
class GeoPoint:
    """A Point paired with a reference to the shape it lies on.

    The geometry reference only identifies which surface produced the point
    so shading can query that shape's normal without re-testing
    intersection. It may be None for points that did not come from a shape.

    Attributes:
        geometry: The shape that produced the point, or None.
        point: The intersection point.
    """

    geometry: Optional[Intersectable]
    point: Point

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeoPoint):
            return NotImplemented
        return self.geometry is other.geometry and self.point == other.point

    __hash__ = None  # type: ignore[assignment]
