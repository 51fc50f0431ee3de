"""
Scene container and the path-tracing recursion.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from .vec3 import Vec3, Color
from .ray import Ray
from .shapes import Hit, Hittable

BLACK = Color(0, 0, 0)


@dataclass(frozen=True)
class Scene:
    """Everything needed to render one image.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        samples: Samples per pixel
        ray_bounces: Maximum recursion depth of a path
        bg_start: Sky colour at gradient parameter 0
        bg_end: Sky colour at gradient parameter 1
        geometry: Objects in the scene, intersected in order
    """
    width: int
    height: int
    samples: int
    ray_bounces: int
    bg_start: Color
    bg_end: Color
    geometry: Tuple[Hittable, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'geometry', tuple(self.geometry))

    def __len__(self) -> int:
        return len(self.geometry)

    @property
    def lights(self) -> Tuple[Hittable, ...]:
        return tuple(obj for obj in self.geometry if getattr(obj, 'is_light', False))

    def intersect(self, ray: Ray) -> Optional[Hit]:
        """Return the nearest hit over all objects, or None."""
        closest = None
        for obj in self.geometry:
            hit = obj.intersect(ray)
            if hit is not None and (closest is None or hit.distance < closest.distance):
                closest = hit
        return closest

    def sky_color(self, ray: Ray) -> Color:
        """Background gradient seen along the ray direction.

        The gradient parameter 0.5 * y + 1 is not limited to [0, 1].
        """
        t = 0.5 * ray.direction.y + 1.0
        return Vec3.lerp(self.bg_start, self.bg_end, t)

    def get_color(self, ray: Ray, depth: int, rng: np.random.Generator) -> Color:
        """Compute the colour carried back along a ray using path tracing.

        Args:
            ray: The ray to trace
            depth: Remaining number of bounces
            rng: Random source for scattering

        Returns:
            The estimated colour for this ray
        """
        if depth <= 0:
            return BLACK

        hit = self.intersect(ray)
        if hit is None:
            return self.sky_color(ray)

        hit_point = ray.point_at_parameter(hit.distance)
        scattered = hit.shape.scatter(ray, hit_point, rng)
        probe = self.get_color(scattered, depth - 1, rng)
        return hit.shape.get_color(probe)
