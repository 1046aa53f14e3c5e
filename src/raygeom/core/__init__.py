"""Core module: numeric tolerance, value types and rays.

Components:
    tolerance: The shared EPSILON and zero tests
    vector: Immutable Point and Vector value types
    ray: Ray with parametric evaluation and closest-point selection
    geo_point: Intersection point tagged with its source shape
    errors: ZeroVectorError

Everything in core is pure host-side Python on NumPy arrays; it never
touches Taichi.
"""

from .errors import ZeroVectorError
from .geo_point import GeoPoint
from .ray import Ray
from .tolerance import EPSILON, align_zero, is_zero
from .vector import Point, Vector

__all__ = [
    "EPSILON",
    "is_zero",
    "align_zero",
    "Point",
    "Vector",
    "Ray",
    "GeoPoint",
    "ZeroVectorError",
]
