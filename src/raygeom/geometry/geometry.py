"""Surface-normal capability and the radius-based shape base class."""

from __future__ import annotations

from abc import abstractmethod

from raygeom.core.vector import Point, Vector

from .intersectable import Intersectable


class Geometry(Intersectable):
    """A shape with a surface that can report its outward normal."""

    @abstractmethod
    def normal_at(self, point: Point) -> Vector:
        """Return the unit outward normal at ``point``.

        ``point`` is assumed to lie on the surface; the result for any other
        point is unspecified.
        """


class RadialGeometry(Geometry):
    """Base for shapes defined by a radius.

    Attributes:
        radius: The shape's radius (strictly positive).

    Raises:
        ValueError: If radius is not positive.
    """

    def __init__(self, radius: float) -> None:
        if not radius > 0:
            raise ValueError(f"Radius = {radius} must be positive.")
        self._radius = float(radius)

    @property
    def radius(self) -> float:
        return self._radius
