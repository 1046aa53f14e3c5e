"""Convex planar polygon primitive.

A Polygon is validated once, at construction, and is immutable afterwards.
Construction fails with ``ValueError`` unless the vertices:

- number at least three,
- are pairwise distinct (including first vs. last),
- lie in one plane,
- turn the same way at every vertex (convex, consistent winding),
- wind around the interior exactly once (no star polygons),
- never have three consecutive vertices on one line.

The plane normal is taken from the first three vertices, so it follows the
winding order of the vertex list.

Ray-polygon intersection is a two step test:
1. Find where the ray crosses the supporting plane.
2. Check the crossing against every edge: the cross product of the edge and
   the vector to the crossing must point the same way (relative to the
   normal) for all edges. A zero means the crossing is on the boundary,
   which counts as a miss.

Example:
    >>> from raygeom.core import Point, Ray, Vector
    >>> from raygeom.geometry import Polygon
    >>> square = Polygon(Point(0, 0, 0), Point(1, 0, 0), Point(1, 1, 0), Point(0, 1, 0))
    >>> square.find_intersections(Ray(Point(0.5, 0.5, 1), Vector(0, 0, -1)))
    [Point(0.5, 0.5, 0.0)]
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from raygeom.core.geo_point import GeoPoint
from raygeom.core.ray import Ray
from raygeom.core.tolerance import is_zero
from raygeom.core.vector import Point, Vector

from .geometry import Geometry
from .plane import Plane


def _turn(edge1: np.ndarray, edge2: np.ndarray, normal: np.ndarray) -> float:
    """Signed turn from ``edge1`` to ``edge2`` measured against ``normal``.

    Raises:
        ValueError: If the edges are collinear.
    """
    turn = np.cross(edge1, edge2)
    if is_zero(float(np.linalg.norm(turn))):
        raise ValueError("Polygon vertices must not lie on another edge (collinear vertices)")
    return float(np.dot(turn, normal))


class Polygon(Geometry):
    """A closed, convex, planar polygon.

    Attributes:
        vertices: The vertices in winding order.
        plane: The supporting plane.
        normal: The unit plane normal.

    Raises:
        ValueError: If the vertices do not describe a valid convex polygon.
    """

    def __init__(self, *vertices: Point) -> None:
        if len(vertices) < 3:
            raise ValueError("A polygon can't have less than 3 vertices")
        self._vertices = tuple(vertices)
        self._check_distinct()

        try:
            self._plane = Plane.from_points(vertices[0], vertices[1], vertices[2])
        except ValueError as exc:
            raise ValueError("The first three polygon vertices must not be collinear") from exc

        # A triangle is always convex
        if len(vertices) > 3:
            self._check_convex()

        self._xyz = np.stack([v.xyz for v in self._vertices])

    def _check_distinct(self) -> None:
        vertices = self._vertices
        if vertices[0] == vertices[-1]:
            raise ValueError("The last polygon vertex must not repeat the first one")
        for i in range(len(vertices)):
            for j in range(i + 1, len(vertices)):
                if vertices[i] == vertices[j]:
                    raise ValueError(f"Polygon vertices {i} and {j} coincide")

    def _check_convex(self) -> None:
        vertices = [v.xyz for v in self._vertices]
        normal = self._plane.normal.xyz

        edge1 = vertices[-1] - vertices[-2]
        edge2 = vertices[0] - vertices[-1]
        turn = _turn(edge1, edge2, normal)
        positive = turn > 0
        total_angle = math.atan2(turn, float(np.dot(edge1, edge2)))

        for i in range(1, len(vertices)):
            if not is_zero(float(np.dot(vertices[i] - vertices[0], normal))):
                raise ValueError("All vertices of a polygon must lie in the same plane")

            edge1 = edge2
            edge2 = vertices[i] - vertices[i - 1]
            turn = _turn(edge1, edge2, normal)
            if positive != (turn > 0):
                raise ValueError("Polygon vertices must be ordered and the polygon must be convex")
            total_angle += math.atan2(turn, float(np.dot(edge1, edge2)))

        # Star polygons turn the same way at every vertex but wind more than once
        if not math.isclose(abs(total_angle), 2 * math.pi, abs_tol=1e-6):
            raise ValueError("Polygon vertices must be ordered and the polygon must be convex")

    @property
    def vertices(self) -> tuple[Point, ...]:
        return self._vertices

    @property
    def plane(self) -> Plane:
        return self._plane

    @property
    def normal(self) -> Vector:
        return self._plane.normal

    def normal_at(self, point: Point) -> Vector:
        return self._plane.normal

    def contains(self, point: Point) -> bool:
        """Check whether an in-plane ``point`` lies strictly inside the polygon."""
        normal = self._plane.normal.xyz
        edges = np.roll(self._xyz, -1, axis=0) - self._xyz
        to_point = point.xyz - self._xyz
        signs = np.einsum("ij,j->i", np.cross(edges, to_point), normal)

        first = signs[0]
        if is_zero(float(first)):
            return False
        for sign in signs[1:]:
            if is_zero(float(sign)) or (sign > 0) != (first > 0):
                return False
        return True

    def _find_geo_intersections(
        self, ray: Ray, max_distance: float
    ) -> Optional[list[GeoPoint]]:
        t = self._plane.ray_distance(ray)
        if t is None:
            return None
        candidates = self._geo_points_at(ray, (t,), max_distance)
        if candidates is None or not self.contains(candidates[0].point):
            return None
        return candidates

    def __repr__(self) -> str:
        inner = ", ".join(repr(v) for v in self._vertices)
        return f"{type(self).__name__}({inner})"


class Triangle(Polygon):
    """A polygon with exactly three vertices."""

    def __init__(self, p1: Point, p2: Point, p3: Point) -> None:
        super().__init__(p1, p2, p3)
