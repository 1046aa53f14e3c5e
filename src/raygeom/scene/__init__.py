"""Scene module for batched ray queries.

Components:
    batch: Taichi-kernel closest-hit queries for many rays against one scene

The host-side core answers one ray at a time. BatchIntersector uploads a
scene once into GPU-friendly Structure-of-Arrays fields and then answers
whole arrays of rays per kernel launch, returning the same closest hits.
"""

from .batch import MAX_POLYGON_VERTICES, BatchIntersector, PrimitiveKind

__all__ = [
    "BatchIntersector",
    "PrimitiveKind",
    "MAX_POLYGON_VERTICES",
]
