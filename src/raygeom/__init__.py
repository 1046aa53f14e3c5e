"""Geometric core of a ray tracer.

This package provides exact ray-shape intersection for:
- Spheres, tubes (infinite cylinders) and capped cylinders
- Planes, convex polygons and triangles
- Composite shape collections
- Closest-point selection along a ray

Subpackages:
    core: Tolerance, Point/Vector value types, Ray and GeoPoint
    geometry: Shape primitives and intersection algorithms
    scene: Taichi-accelerated batch closest-hit queries

Shading, cameras, scene parsing and image output are left to callers.
"""

__version__ = "0.1.0"

import logging

# Silent unless the application configures logging (see logging_config)
logging.getLogger(__name__).addHandler(logging.NullHandler())
