"""Point and Vector value types.

Both types wrap a read-only NumPy ``float64`` array of three components and
are immutable after construction. A Vector can never be the zero vector:
any constructor or operation that would produce one raises
``ZeroVectorError``. Equality is component-wise within ``EPSILON``, which is
why neither type is hashable.

Example:
    >>> from raygeom.core.vector import Point, Vector
    >>> p = Point(1, 2, 3)
    >>> v = Vector(0, 0, 2)
    >>> p + v
    Point(1.0, 2.0, 5.0)
    >>> v.normalize()
    Vector(0.0, 0.0, 1.0)
"""

from __future__ import annotations

import math
from typing import Iterator

import numpy as np
import numpy.typing as npt

from .errors import ZeroVectorError
from .tolerance import is_zero


def _frozen(values: npt.ArrayLike) -> np.ndarray:
    xyz = np.array(values, dtype=np.float64).reshape(3)
    xyz.flags.writeable = False
    return xyz


class _Triple:
    """Shared storage and comparison for Point and Vector."""

    __slots__ = ("_xyz",)

    _xyz: np.ndarray

    def __init__(self, x: float, y: float, z: float) -> None:
        object.__setattr__(self, "_xyz", _frozen((x, y, z)))

    @classmethod
    def from_array(cls, values: npt.ArrayLike):
        """Build an instance from any array-like of three numbers."""
        xyz = _frozen(values)
        return cls(xyz[0], xyz[1], xyz[2])

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def xyz(self) -> np.ndarray:
        """The components as a read-only (3,) float64 array."""
        return self._xyz

    @property
    def x(self) -> float:
        return float(self._xyz[0])

    @property
    def y(self) -> float:
        return float(self._xyz[1])

    @property
    def z(self) -> float:
        return float(self._xyz[2])

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        diff = self._xyz - other._xyz
        return is_zero(diff[0]) and is_zero(diff[1]) and is_zero(diff[2])

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.x}, {self.y}, {self.z})"


class Point(_Triple):
    """An immutable position in 3D space."""

    __slots__ = ()

    ZERO: Point

    def __add__(self, vector: Vector) -> Point:
        if not isinstance(vector, Vector):
            return NotImplemented
        return Point.from_array(self._xyz + vector.xyz)

    def __sub__(self, other):
        """``Point - Point`` gives the Vector between them, ``Point - Vector`` a Point.

        Raises:
            ZeroVectorError: If subtracting a Point from itself.
        """
        if isinstance(other, Point):
            return Vector.from_array(self._xyz - other.xyz)
        if isinstance(other, Vector):
            return Point.from_array(self._xyz - other.xyz)
        return NotImplemented

    def distance_squared(self, other: Point) -> float:
        """Squared Euclidean distance to another point."""
        diff = self._xyz - other.xyz
        return float(np.dot(diff, diff))

    def distance(self, other: Point) -> float:
        """Euclidean distance to another point."""
        return math.sqrt(self.distance_squared(other))


Point.ZERO = Point(0.0, 0.0, 0.0)


class Vector(_Triple):
    """An immutable, non-zero direction/magnitude in 3D space.

    Raises:
        ZeroVectorError: If all three components are (effectively) zero.
    """

    __slots__ = ()

    def __init__(self, x: float, y: float, z: float) -> None:
        super().__init__(x, y, z)
        if is_zero(self._xyz[0]) and is_zero(self._xyz[1]) and is_zero(self._xyz[2]):
            raise ZeroVectorError("Vector cannot be the zero vector")

    def __add__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector.from_array(self._xyz + other.xyz)

    def __sub__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector.from_array(self._xyz - other.xyz)

    def __mul__(self, scalar: float) -> Vector:
        if isinstance(scalar, _Triple):
            return NotImplemented
        return self.scale(scalar)

    __rmul__ = __mul__

    def __neg__(self) -> Vector:
        return Vector.from_array(-self._xyz)

    def scale(self, scalar: float) -> Vector:
        """Multiply every component by ``scalar``.

        Raises:
            ZeroVectorError: If ``scalar`` is zero.
        """
        return Vector.from_array(self._xyz * float(scalar))

    def dot(self, other: Vector) -> float:
        return float(np.dot(self._xyz, other.xyz))

    def cross(self, other: Vector) -> Vector:
        """Right-handed cross product.

        Raises:
            ZeroVectorError: If the two vectors are parallel.
        """
        return Vector.from_array(np.cross(self._xyz, other.xyz))

    def length_squared(self) -> float:
        return float(np.dot(self._xyz, self._xyz))

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> Vector:
        """Return the unit vector pointing the same way."""
        return Vector.from_array(self._xyz / self.length())
