"""
Geometric shapes for the path tracer.

Each shape implements the Hittable interface: it can be intersected by a
ray, it can scatter a ray that hits it, and it shapes the colour of the
light travelling along that ray.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
import math

import numpy as np

from .vec3 import Vec3, Point3, Color
from .ray import Ray


@dataclass(frozen=True)
class Hit:
    """Stores the result of a ray-object intersection.

    Attributes:
        shape: The object that was hit
        distance: The ray parameter at the intersection
    """
    shape: Hittable
    distance: float


class Hittable(ABC):
    """Abstract base class for all objects that can be hit by rays."""

    @abstractmethod
    def intersect(self, ray: Ray) -> Optional[Hit]:
        """Test if ray intersects this object.

        Args:
            ray: The ray to test

        Returns:
            Hit if intersection found, None otherwise
        """
        pass

    @abstractmethod
    def scatter(self, ray: Ray, hit_point: Point3, rng: np.random.Generator) -> Ray:
        """Build the ray leaving the surface after a bounce.

        Args:
            ray: The incoming ray
            hit_point: Point of intersection
            rng: Random source for diffuse directions

        Returns:
            The scattered ray starting at hit_point
        """
        pass

    @abstractmethod
    def get_color(self, probe: Color) -> Color:
        """Return the colour leaving the surface given the incoming light."""
        pass


@dataclass(frozen=True)
class Sphere(Hittable):
    """A sphere with a mirror/diffuse blend material.

    Attributes:
        center: Center point of the sphere
        radius: Radius of the sphere
        color: Surface colour (RGB, each component 0-1)
        roughness: 0 is a perfect mirror, 1 a fully diffuse bounce
        emission: Light strength, anything above 0 makes the sphere a light
    """
    center: Point3
    radius: float
    color: Color
    roughness: float = 0.0
    emission: float = 0.0

    @property
    def is_light(self) -> bool:
        return self.emission > 0

    def intersect(self, ray: Ray) -> Optional[Hit]:
        """Test ray-sphere intersection geometrically.

        The center is projected onto the ray; the ray misses when that
        projection lies behind the origin or when the closest approach is
        not inside the sphere.
        """
        oc = self.center - ray.origin
        os = oc.dot(ray.direction)
        if os < 0:
            return None

        sc_squared = oc.length_squared() - os * os
        radius_squared = self.radius * self.radius
        if sc_squared >= radius_squared:
            return None

        oi = os - math.sqrt(radius_squared - sc_squared)
        return Hit(self, oi)

    def scatter(self, ray: Ray, hit_point: Point3, rng: np.random.Generator) -> Ray:
        normal = (hit_point - self.center).normalize()
        mirror = ray.direction.reflect(normal) * (1 - self.roughness)
        diffuse = (normal + Vec3.random_unit(rng)) * self.roughness
        return Ray(hit_point, (mirror + diffuse).normalize())

    def get_color(self, probe: Color) -> Color:
        # Lights ignore the incoming light.
        if self.emission > 0:
            return self.color * self.emission
        return self.color * probe

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"
