"""
Vector3 class for 3D math operations.

This is the fundamental building block of the path tracer, used for:
- Points in 3D space
- Direction vectors
- RGB color values

Vectors are immutable: every operation returns a new instance.
"""

from __future__ import annotations
from typing import Union
import numpy as np


class Vec3:
    """An immutable 3D vector.

    Uses numpy internally for efficient computation while providing
    a clean, Pythonic API.
    """

    __slots__ = ('_data',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._data = np.array([x, y, z], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vec3:
        """Create Vec3 from numpy array."""
        v = cls.__new__(cls)
        v._data = np.asarray(arr, dtype=np.float64)
        return v

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    # Aliases for color operations
    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    def __repr__(self) -> str:
        return f"Vec3({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return bool(np.allclose(self._data, other._data))

    def __hash__(self) -> int:
        return hash(tuple(self._data))

    def __neg__(self) -> Vec3:
        return Vec3.from_array(-self._data)

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3.from_array(self._data + other._data)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3.from_array(self._data - other._data)

    def __mul__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3.from_array(self._data * other._data)
        return Vec3.from_array(self._data * other)

    def __rmul__(self, other: float) -> Vec3:
        return Vec3.from_array(other * self._data)

    def __truediv__(self, other: Union[Vec3, float]) -> Vec3:
        with np.errstate(divide='ignore', invalid='ignore'):
            if isinstance(other, Vec3):
                return Vec3.from_array(self._data / other._data)
            return Vec3.from_array(self._data / np.float64(other))

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __iter__(self):
        return iter(self._data.tolist())

    def length(self) -> float:
        """Return the magnitude (length) of the vector."""
        return float(np.sqrt(self.length_squared()))

    def length_squared(self) -> float:
        """Return the squared magnitude (avoids sqrt for comparisons)."""
        return float(np.dot(self._data, self._data))

    def normalize(self) -> Vec3:
        """Return a unit vector in the same direction.

        A zero-length vector yields NaN components, which are returned
        as they are.
        """
        with np.errstate(divide='ignore', invalid='ignore'):
            inv_length = np.float64(1.0) / np.float64(self.length())
            return Vec3.from_array(self._data * inv_length)

    def dot(self, other: Vec3) -> float:
        """Compute dot product with another vector."""
        return float(np.dot(self._data, other._data))

    def reflect(self, normal: Vec3) -> Vec3:
        """Reflect this vector around the given normal."""
        return self - normal * (2 * self.dot(normal))

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()

    def clamp(self, max_val: float = 1.0) -> Vec3:
        """Cap every component at max_val. There is no lower bound."""
        return Vec3.from_array(np.minimum(self._data, max_val))

    @staticmethod
    def lerp(start: Vec3, end: Vec3, t: float) -> Vec3:
        """Linear interpolation from start to end.

        t is not clamped, values outside [0, 1] extrapolate.
        """
        return start + (end - start) * t

    @staticmethod
    def random_unit(rng: np.random.Generator) -> Vec3:
        """Generate a random direction by normalizing a point of the [-1, 1] cube.

        Corner directions are more likely than on a uniform sphere.
        """
        return Vec3.from_array(rng.uniform(-1.0, 1.0, 3)).normalize()


# Convenience type aliases
Point3 = Vec3
Color = Vec3
