"""
Camera module for generating primary rays.

A fixed pinhole camera: eye at the origin, looking down -Z at an image
plane placed at z = -1. The image plane is WIDTH_UNITS wide and its
height follows the aspect ratio of the output image.
"""

from __future__ import annotations
import numpy as np

from .vec3 import Vec3, Point3
from .ray import Ray

WIDTH_UNITS = 4.0


class Camera:
    """A pinhole camera that maps pixels to jittered world-space rays."""

    def __init__(self, screen_width: int, screen_height: int, width_units: float = WIDTH_UNITS):
        """Create a camera.

        Args:
            screen_width: Output image width in pixels
            screen_height: Output image height in pixels
            width_units: Horizontal extent of the image plane in world units
        """
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.width_units = width_units

        self.origin = Point3(0, 0, 0)
        self.units_per_pixel = width_units / screen_width
        self.height_units = width_units * screen_height / screen_width
        self.screen_bottom_left = Point3(-width_units / 2, -self.height_units / 2, -1)

    def build_ray_through(self, x: float, y: float, rng: np.random.Generator) -> Ray:
        """Generate a ray through a random point of pixel (x, y).

        Args:
            x: Pixel column, counted from the left edge
            y: Pixel row, counted from the bottom edge
            rng: Random source for the sub-pixel jitter

        Returns:
            A normalized ray from the camera origin
        """
        jitter_x, jitter_y = rng.random(2)
        target = self.screen_bottom_left + Vec3(
            (x + jitter_x) * self.units_per_pixel,
            (y + jitter_y) * self.units_per_pixel,
            0.0
        )
        return Ray(self.origin, (target - self.origin).normalize())

    def __repr__(self) -> str:
        return f"Camera(screen={self.screen_width}x{self.screen_height}, bottom_left={self.screen_bottom_left})"
