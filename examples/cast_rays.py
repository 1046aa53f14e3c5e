#!/usr/bin/env python3
"""Cast a grid of rays into a small scene and report what they hit.

This script builds a scene with one of each batch-supported shape, fires a
width x height grid of rays from a single eye point through a view window,
and prints how many rays hit each shape. With --check it also recomputes a
sample of rays with the host-side intersection code and compares.

Usage:
    python examples/cast_rays.py [options]

Options:
    --width WIDTH       Rays across (default: 64)
    --height HEIGHT     Rays down (default: 48)
    --check COUNT       Rays to cross-check on the host (default: 32)
    --verbose           Enable debug logging

Example:
    python examples/cast_rays.py --width 320 --height 240 --check 100
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

import numpy as np
import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Cast a grid of rays into a small scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=64,
        help="Rays across (default: 64)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=48,
        help="Rays down (default: 48)",
    )
    parser.add_argument(
        "--check",
        type=int,
        default=32,
        help="Rays to cross-check on the host (default: 32)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args()


def build_scene():
    """Build the demo scene: a sphere and a tube over a floor, a square behind."""
    from raygeom.core import Point, Ray, Vector
    from raygeom.geometry import Geometries, Plane, Polygon, Sphere, Tube

    return Geometries(
        Sphere(1.0, Point(-1.5, 0.0, -6.0)),
        Tube(0.5, Ray(Point(1.5, 0.0, -6.0), Vector(0.0, 1.0, 0.0))),
        Polygon(
            Point(-3.0, -1.0, -10.0),
            Point(3.0, -1.0, -10.0),
            Point(3.0, 3.0, -10.0),
            Point(-3.0, 3.0, -10.0),
        ),
        Plane(Point(0.0, -1.0, 0.0), Vector(0.0, 1.0, 0.0)),
    )


def grid_rays(width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    """Rays from the origin through a 4 x 3 window one unit down -z."""
    u = np.linspace(-2.0, 2.0, width)
    v = np.linspace(1.5, -1.5, height)
    uu, vv = np.meshgrid(u, v)
    directions = np.stack([uu.ravel(), vv.ravel(), -np.ones(uu.size)], axis=1)
    origins = np.zeros_like(directions)
    return origins, directions


def cast_rays(width: int = 64, height: int = 48, check: int = 32) -> int:
    """Cast the ray grid and print a hit summary.

    Args:
        width: Rays across.
        height: Rays down.
        check: Number of rays to recompute on the host.

    Returns:
        Number of rays whose host and batch results disagree.
    """
    # Lazy imports to allow Taichi initialization first
    from raygeom.core import Point, Ray, Vector
    from raygeom.scene import BatchIntersector

    scene = build_scene()
    batch = BatchIntersector(scene)
    origins, directions = grid_rays(width, height)

    start_time = time.time()
    distances, indices = batch.closest_hits(origins, directions)
    elapsed = time.time() - start_time

    print(f"Cast {len(distances)} rays in {elapsed:.3f}s")
    for i, primitive in enumerate(batch.primitives):
        print(f"  {type(primitive).__name__:>8}: {int(np.sum(indices == i))} hits")
    print(f"  {'miss':>8}: {int(np.sum(indices < 0))}")

    mismatches = 0
    rng = np.random.default_rng(0)
    for r in rng.choice(len(distances), size=min(check, len(distances)), replace=False):
        ray = Ray(Point.from_array(origins[r]), Vector.from_array(directions[r]))
        expected = ray.closest_geo_point(scene.find_geo_intersections(ray))
        if expected is None:
            agrees = indices[r] < 0
        else:
            agrees = (
                indices[r] >= 0
                and batch.primitives[indices[r]] is expected.geometry
                and abs(distances[r] - expected.point.distance(ray.origin)) < 1e-6
            )
        if not agrees:
            mismatches += 1
    print(f"Host cross-check: {mismatches} mismatches")
    return mismatches


def main() -> int:
    """Main entry point."""
    args = parse_args()

    from raygeom.logging_config import setup_logging

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu, default_fp=ti.f64)
    except Exception:
        ti.init(arch=ti.cpu, default_fp=ti.f64)

    try:
        mismatches = cast_rays(width=args.width, height=args.height, check=args.check)
        return 0 if mismatches == 0 else 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
