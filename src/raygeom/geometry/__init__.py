"""Geometry module: shape primitives and their intersection algorithms.

Components:
    intersectable: The Intersectable capability (ray -> tagged points)
    geometry: The Geometry capability (surface normals) and RadialGeometry
    sphere: Sphere primitive
    tube: Infinite cylinder around an axis ray
    cylinder: Tube cut to a height and capped
    plane: Infinite plane
    polygon: Convex planar polygon and Triangle
    geometries: Composite collection of intersectables

Every shape answers the same two questions:
    geo_points = shape.find_geo_intersections(ray)   # None on a miss
    normal = shape.normal_at(geo_points[0].point)    # unit vector
"""

from raygeom.core.geo_point import GeoPoint

from .cylinder import Cylinder
from .geometries import Geometries
from .geometry import Geometry, RadialGeometry
from .intersectable import Intersectable
from .plane import Plane
from .polygon import Polygon, Triangle
from .sphere import Sphere
from .tube import Tube

__all__ = [
    "GeoPoint",
    "Intersectable",
    "Geometry",
    "RadialGeometry",
    "Sphere",
    "Tube",
    "Cylinder",
    "Plane",
    "Polygon",
    "Triangle",
    "Geometries",
]
