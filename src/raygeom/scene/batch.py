"""Data-parallel closest-hit queries over many rays.

This module packs a scene of shapes into Taichi fields and runs one kernel
thread per ray, each testing every primitive and keeping the nearest hit.
It computes the same answer as

    ray.closest_geo_point(geometries.find_geo_intersections(ray))

for every ray, but for thousands of rays at a time.

Primitive storage uses a Structure-of-Arrays layout per primitive kind, plus
two parallel fields (``kinds``, ``slots``) listing the primitives in scene
order so ties resolve exactly as the host-side closest-point selection does:
the first primitive in scene order wins.

Supported shapes are Sphere, Tube, Plane and Polygon (including Triangle)
with at most MAX_POLYGON_VERTICES vertices. Cylinder is not supported.

Taichi must be initialized before a BatchIntersector is built, since
construction allocates fields. ``default_fp=ti.f64`` is recommended.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from raygeom.scene import BatchIntersector
    >>> batch = BatchIntersector(Geometries(Sphere(1.0, Point(0, 0, -5))))
    >>> distances, indices = batch.closest_hits(origins, directions)
"""

import logging
import math
from enum import IntEnum
from typing import Iterator, Optional, Sequence

import numpy as np
import numpy.typing as npt
import taichi as ti

from raygeom.core.errors import ZeroVectorError
from raygeom.core.geo_point import GeoPoint
from raygeom.core.ray import Ray
from raygeom.core.tolerance import EPSILON
from raygeom.geometry.cylinder import Cylinder
from raygeom.geometry.geometries import Geometries
from raygeom.geometry.intersectable import Intersectable
from raygeom.geometry.plane import Plane
from raygeom.geometry.polygon import Polygon
from raygeom.geometry.sphere import Sphere
from raygeom.geometry.tube import Tube

logger = logging.getLogger(__name__)

# Double-precision 3-vector; results must agree with the float64 host code.
vec3 = ti.types.vector(3, ti.f64)

# Maximum number of vertices per polygon uploaded to the kernel
MAX_POLYGON_VERTICES = 16

# Stand-in for an unbounded max_distance inside the kernel
_FAR = 1e30


class PrimitiveKind(IntEnum):
    """Primitive type tags stored in the ``kinds`` field."""

    SPHERE = 0
    TUBE = 1
    PLANE = 2
    POLYGON = 3


_SPHERE = int(PrimitiveKind.SPHERE)
_TUBE = int(PrimitiveKind.TUBE)
_PLANE = int(PrimitiveKind.PLANE)


@ti.func
def _nearest_root(t0: ti.f64, t1: ti.f64) -> ti.f64:
    """Return the smaller of two ordered roots lying in front of the ray, or -1."""
    result = ti.cast(-1.0, ti.f64)
    if t0 >= EPSILON:
        result = t0
    elif t1 >= EPSILON:
        result = t1
    return result


@ti.func
def _hit_sphere(origin: vec3, direction: vec3, center: vec3, radius: ti.f64) -> ti.f64:
    """Nearest ray distance to a sphere, or -1 on a miss.

    Same geometric half-chord solution as Sphere: tca is the projection of
    the center onto the ray, thc the half chord length.
    """
    to_center = center - origin
    tca = to_center.dot(direction)
    d2 = to_center.dot(to_center) - tca * tca
    gap = radius * radius - d2

    result = ti.cast(-1.0, ti.f64)
    if gap > -EPSILON:
        thc = ti.sqrt(ti.max(gap, 0.0))
        result = _nearest_root(tca - thc, tca + thc)
    return result


@ti.func
def _hit_tube(
    origin: vec3,
    direction: vec3,
    axis_origin: vec3,
    axis_direction: vec3,
    radius: ti.f64,
) -> ti.f64:
    """Nearest ray distance to an infinite tube, or -1 on a miss.

    Rays parallel to the axis never hit.
    """
    d_perp = direction - direction.dot(axis_direction) * axis_direction
    delta = origin - axis_origin
    delta_perp = delta - delta.dot(axis_direction) * axis_direction

    a = d_perp.dot(d_perp)
    result = ti.cast(-1.0, ti.f64)
    if a >= EPSILON:
        half_b = d_perp.dot(delta_perp)
        c = delta_perp.dot(delta_perp) - radius * radius
        discriminant = half_b * half_b - a * c
        if discriminant > -EPSILON:
            root = ti.sqrt(ti.max(discriminant, 0.0))
            result = _nearest_root((-half_b - root) / a, (-half_b + root) / a)
    return result


@ti.func
def _hit_plane(origin: vec3, direction: vec3, point: vec3, normal: vec3) -> ti.f64:
    """Ray distance to a plane, or -1 if parallel, starting on it, or behind."""
    denom = normal.dot(direction)
    result = ti.cast(-1.0, ti.f64)
    if ti.abs(denom) >= EPSILON:
        numerator = normal.dot(point - origin)
        if ti.abs(numerator) >= EPSILON:
            t = numerator / denom
            if t >= EPSILON:
                result = t
    return result


def _leaves(geometries: Intersectable) -> Iterator[Intersectable]:
    """Yield the non-composite members of a (possibly nested) scene."""
    if isinstance(geometries, Geometries):
        for child in geometries:
            yield from _leaves(child)
    else:
        yield geometries


@ti.data_oriented
class BatchIntersector:
    """Closest-hit queries for batches of rays against a fixed scene.

    Attributes:
        primitives: The scene's shapes in scene order. Hit indices returned
            by ``closest_hits`` index into this list.

    Raises:
        TypeError: If the scene contains a shape the kernel cannot test.
        ValueError: If a polygon has more than MAX_POLYGON_VERTICES vertices.
    """

    def __init__(self, geometries: Intersectable) -> None:
        self.primitives: list[Intersectable] = list(_leaves(geometries))

        spheres: list[Sphere] = []
        tubes: list[Tube] = []
        planes: list[Plane] = []
        polygons: list[Polygon] = []
        kinds: list[int] = []
        slots: list[int] = []

        for primitive in self.primitives:
            # Cylinder is a Tube subclass, so it must be rejected first
            if isinstance(primitive, Cylinder):
                raise TypeError("Cylinder is not supported by the batch intersector")
            if isinstance(primitive, Sphere):
                kinds.append(_SPHERE)
                slots.append(len(spheres))
                spheres.append(primitive)
            elif isinstance(primitive, Tube):
                kinds.append(_TUBE)
                slots.append(len(tubes))
                tubes.append(primitive)
            elif isinstance(primitive, Plane):
                kinds.append(_PLANE)
                slots.append(len(planes))
                planes.append(primitive)
            elif isinstance(primitive, Polygon):
                if len(primitive.vertices) > MAX_POLYGON_VERTICES:
                    raise ValueError(
                        f"Polygon has {len(primitive.vertices)} vertices, "
                        f"maximum is {MAX_POLYGON_VERTICES}"
                    )
                kinds.append(int(PrimitiveKind.POLYGON))
                slots.append(len(polygons))
                polygons.append(primitive)
            else:
                raise TypeError(
                    f"{type(primitive).__name__} is not supported by the batch intersector"
                )

        self._count = len(self.primitives)

        # Fields need at least one element; unused slots are never read
        self.kinds = ti.field(dtype=ti.i32, shape=max(self._count, 1))
        self.slots = ti.field(dtype=ti.i32, shape=max(self._count, 1))

        self.sphere_centers = ti.Vector.field(3, dtype=ti.f64, shape=max(len(spheres), 1))
        self.sphere_radii = ti.field(dtype=ti.f64, shape=max(len(spheres), 1))

        self.tube_origins = ti.Vector.field(3, dtype=ti.f64, shape=max(len(tubes), 1))
        self.tube_directions = ti.Vector.field(3, dtype=ti.f64, shape=max(len(tubes), 1))
        self.tube_radii = ti.field(dtype=ti.f64, shape=max(len(tubes), 1))

        self.plane_points = ti.Vector.field(3, dtype=ti.f64, shape=max(len(planes), 1))
        self.plane_normals = ti.Vector.field(3, dtype=ti.f64, shape=max(len(planes), 1))

        self.polygon_vertices = ti.Vector.field(
            3, dtype=ti.f64, shape=(max(len(polygons), 1), MAX_POLYGON_VERTICES)
        )
        self.polygon_sizes = ti.field(dtype=ti.i32, shape=max(len(polygons), 1))
        self.polygon_normals = ti.Vector.field(3, dtype=ti.f64, shape=max(len(polygons), 1))

        if self._count:
            self.kinds.from_numpy(np.array(kinds, dtype=np.int32))
            self.slots.from_numpy(np.array(slots, dtype=np.int32))
        if spheres:
            self.sphere_centers.from_numpy(np.stack([s.center.xyz for s in spheres]))
            self.sphere_radii.from_numpy(np.array([s.radius for s in spheres]))
        if tubes:
            self.tube_origins.from_numpy(np.stack([t.axis.origin.xyz for t in tubes]))
            self.tube_directions.from_numpy(np.stack([t.axis.direction.xyz for t in tubes]))
            self.tube_radii.from_numpy(np.array([t.radius for t in tubes]))
        if planes:
            self.plane_points.from_numpy(np.stack([p.point.xyz for p in planes]))
            self.plane_normals.from_numpy(np.stack([p.normal.xyz for p in planes]))
        if polygons:
            vertices = np.zeros((len(polygons), MAX_POLYGON_VERTICES, 3))
            for i, polygon in enumerate(polygons):
                for k, vertex in enumerate(polygon.vertices):
                    vertices[i, k] = vertex.xyz
            self.polygon_vertices.from_numpy(vertices)
            self.polygon_sizes.from_numpy(
                np.array([len(p.vertices) for p in polygons], dtype=np.int32)
            )
            self.polygon_normals.from_numpy(np.stack([p.normal.xyz for p in polygons]))

        logger.info(
            f"Uploaded {self._count} primitives: {len(spheres)} spheres, {len(tubes)} tubes, "
            f"{len(planes)} planes, {len(polygons)} polygons"
        )

    def __len__(self) -> int:
        return self._count

    @ti.func
    def _inside_polygon(self, slot: ti.i32, point: vec3) -> ti.i32:
        """1 if an in-plane point is strictly inside polygon ``slot``, else 0."""
        normal = self.polygon_normals[slot]
        size = self.polygon_sizes[slot]
        inside = 1
        first = ti.cast(0.0, ti.f64)
        for k in range(size):
            v0 = self.polygon_vertices[slot, k]
            v1 = self.polygon_vertices[slot, (k + 1) % size]
            side = (v1 - v0).cross(point - v0).dot(normal)
            if ti.abs(side) < EPSILON:
                inside = 0
            elif k == 0:
                first = side
            elif (side > 0.0) != (first > 0.0):
                inside = 0
        return inside

    @ti.kernel
    def _trace(
        self,
        origins: ti.types.ndarray(dtype=ti.f64, ndim=2),
        directions: ti.types.ndarray(dtype=ti.f64, ndim=2),
        t_max: ti.f64,
        distances: ti.types.ndarray(dtype=ti.f64, ndim=1),
        indices: ti.types.ndarray(dtype=ti.i32, ndim=1),
    ):
        """Find the closest hit for every ray; one thread per ray."""
        for r in range(origins.shape[0]):
            origin = vec3(origins[r, 0], origins[r, 1], origins[r, 2])
            direction = vec3(directions[r, 0], directions[r, 1], directions[r, 2])

            closest = ti.cast(_FAR, ti.f64)
            hit_index = -1

            for i in range(self._count):
                kind = self.kinds[i]
                slot = self.slots[i]
                t = ti.cast(-1.0, ti.f64)

                if kind == _SPHERE:
                    t = _hit_sphere(
                        origin, direction, self.sphere_centers[slot], self.sphere_radii[slot]
                    )
                elif kind == _TUBE:
                    t = _hit_tube(
                        origin,
                        direction,
                        self.tube_origins[slot],
                        self.tube_directions[slot],
                        self.tube_radii[slot],
                    )
                elif kind == _PLANE:
                    t = _hit_plane(
                        origin, direction, self.plane_points[slot], self.plane_normals[slot]
                    )
                else:
                    t = _hit_plane(
                        origin,
                        direction,
                        self.polygon_vertices[slot, 0],
                        self.polygon_normals[slot],
                    )
                    if t > 0.0:
                        if self._inside_polygon(slot, origin + t * direction) == 0:
                            t = -1.0

                # Earlier primitives win ties within EPSILON
                if t > 0.0 and t - t_max < EPSILON and t < closest - EPSILON:
                    closest = t
                    hit_index = i

            distances[r] = closest
            indices[r] = hit_index

    def closest_hits(
        self,
        origins: npt.ArrayLike,
        directions: npt.ArrayLike,
        max_distance: float = math.inf,
    ) -> tuple[np.ndarray, np.ndarray]:
        """Find the nearest primitive hit along each ray.

        Args:
            origins: Ray origins, shape (n, 3).
            directions: Ray directions, shape (n, 3). Normalized here, so
                any non-zero magnitude is accepted.
            max_distance: Hits farther than this are ignored.

        Returns:
            A tuple (distances, indices): float64 distances of shape (n,)
            with ``inf`` for misses, and int32 indices into ``primitives``
            with -1 for misses.

        Raises:
            ValueError: If the arrays are not matching (n, 3) shapes.
            ZeroVectorError: If any direction is the zero vector.
        """
        origins = np.ascontiguousarray(origins, dtype=np.float64)
        directions = np.array(directions, dtype=np.float64)
        if origins.ndim != 2 or origins.shape[1] != 3 or origins.shape != directions.shape:
            raise ValueError(
                f"Expected matching (n, 3) origins and directions, got "
                f"{origins.shape} and {directions.shape}"
            )

        n = origins.shape[0]
        distances = np.full(n, np.inf)
        indices = np.full(n, -1, dtype=np.int32)
        if n == 0:
            return distances, indices

        lengths = np.linalg.norm(directions, axis=1)
        if np.any(lengths < EPSILON):
            raise ZeroVectorError("Ray direction cannot be the zero vector")
        directions = np.ascontiguousarray(directions / lengths[:, None])

        self._trace(origins, directions, float(min(max_distance, _FAR)), distances, indices)
        distances[indices < 0] = np.inf
        return distances, indices

    def closest_geo_points(
        self, rays: Sequence[Ray], max_distance: float = math.inf
    ) -> list[Optional[GeoPoint]]:
        """Nearest tagged hit for each ray, or None where the ray misses.

        Args:
            rays: The rays to cast.
            max_distance: Hits farther than this are ignored.

        Returns:
            One entry per ray, in input order.
        """
        if not rays:
            return []
        origins = np.stack([ray.origin.xyz for ray in rays])
        directions = np.stack([ray.direction.xyz for ray in rays])
        distances, indices = self.closest_hits(origins, directions, max_distance)

        results: list[Optional[GeoPoint]] = []
        for ray, t, index in zip(rays, distances, indices):
            if index < 0:
                results.append(None)
            else:
                results.append(GeoPoint(self.primitives[index], ray.point_at(float(t))))
        return results
