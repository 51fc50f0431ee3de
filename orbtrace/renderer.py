"""
Renderer module - drives the Monte Carlo sampling loop.

Implements:
- Per-pixel sample averaging with sub-pixel jitter
- Multi-threaded tile-based rendering with independent random streams
- 8-bit conversion and image output
"""

from __future__ import annotations
import os
import platform
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Callable, Tuple, List
import numpy as np

from .vec3 import Color
from .camera import Camera
from .scene import Scene


@dataclass
class RenderSettings:
    """How a scene is rendered (the scene itself says what is rendered)."""
    tile_size: int = 32
    num_threads: int = 0  # 0 = auto-detect
    seed: Optional[int] = None

    def __post_init__(self):
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4


class Renderer:
    """Path tracing renderer with multi-threading support."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Scene, camera: Optional[Camera] = None) -> np.ndarray:
        """Render the scene and return the image as a numpy array.

        Args:
            scene: The scene to render
            camera: The camera to render from (built from the scene size if None)

        Returns:
            Averaged and clamped image of shape (height, width, 3)
        """
        width = scene.width
        height = scene.height
        if camera is None:
            camera = Camera(width, height)

        image = np.zeros((height, width, 3), dtype=np.float64)

        tiles = self._generate_tiles(width, height)
        total_tiles = len(tiles)
        # One random stream per tile, independent of the thread running it
        seeds = np.random.SeedSequence(self.settings.seed).spawn(total_tiles)
        completed_tiles = [0]
        lock = threading.Lock()

        def render_tile(job: Tuple[Tuple[int, int, int, int], np.random.SeedSequence]) -> Tuple[Tuple, np.ndarray]:
            """Render a single tile."""
            tile, seed = job
            x0, y0, x1, y1 = tile
            rng = np.random.default_rng(seed)
            tile_image = np.zeros((y1 - y0, x1 - x0, 3), dtype=np.float64)

            for y in range(y0, y1):
                for x in range(x0, x1):
                    tile_image[y - y0, x - x0] = self.render_pixel(
                        scene, camera, x, y, rng
                    ).to_array()

            if self._progress_callback:
                with lock:
                    completed_tiles[0] += 1
                    self._progress_callback(completed_tiles[0] / total_tiles)

            return tile, tile_image

        jobs = list(zip(tiles, seeds))
        if self.settings.num_threads > 1:
            with ThreadPoolExecutor(max_workers=self.settings.num_threads) as executor:
                results = list(executor.map(render_tile, jobs))
        else:
            results = [render_tile(job) for job in jobs]

        for tile, tile_image in results:
            x0, y0, x1, y1 = tile
            image[y0:y1, x0:x1] = tile_image

        return image

    @staticmethod
    def render_pixel(scene: Scene, camera: Camera, x: int, y: int,
                     rng: np.random.Generator) -> Color:
        """Average scene.samples paths through output pixel (x, y).

        Output rows count from the top, camera rows from the bottom,
        so row y is traced through camera row height - y.
        """
        pixel_color = Color(0, 0, 0)
        for _ in range(scene.samples):
            ray = camera.build_ray_through(x, scene.height - y, rng)
            pixel_color = pixel_color + scene.get_color(ray, scene.ray_bounces, rng)
        return (pixel_color / float(scene.samples)).clamp()

    def _generate_tiles(self, width: int, height: int) -> List[Tuple[int, int, int, int]]:
        """Generate tiles for parallel rendering.

        Args:
            width: Image width
            height: Image height

        Returns:
            List of tiles as (x0, y0, x1, y1) tuples
        """
        tile_size = self.settings.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles

    @staticmethod
    def to_ldr(image: np.ndarray) -> np.ndarray:
        """Convert a clamped float image to 8-bit.

        Channels are scaled by 255 and truncated. NaN and negative values
        map to 0.

        Args:
            image: Float image array

        Returns:
            LDR image as uint8 array
        """
        scaled = np.nan_to_num(image, nan=0.0, posinf=1.0, neginf=0.0) * 255
        return np.clip(np.trunc(scaled), 0, 255).astype(np.uint8)

    def save_image(self, image: np.ndarray, filename: str) -> None:
        """Save image to file.

        Args:
            image: Image array (float or uint8)
            filename: Output filename (extension determines format)
        """
        from PIL import Image as PILImage

        if image.dtype == np.float64 or image.dtype == np.float32:
            image = self.to_ldr(image)

        pil_image = PILImage.fromarray(np.ascontiguousarray(image))
        pil_image.save(filename)


def get_platform_info() -> dict:
    """Get information about the current platform.

    Returns:
        Dictionary with platform details
    """
    info = {
        'system': platform.system(),
        'machine': platform.machine(),
        'processor': platform.processor(),
        'python_version': platform.python_version(),
        'cpu_count': os.cpu_count(),
        'is_arm': platform.machine().lower() in ('arm64', 'aarch64'),
        'is_x86': platform.machine().lower() in ('x86_64', 'amd64', 'x86'),
    }

    if info['system'] == 'Darwin' and info['is_arm']:
        info['is_apple_silicon'] = True
    else:
        info['is_apple_silicon'] = False

    return info
