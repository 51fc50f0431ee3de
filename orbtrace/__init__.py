"""
orbtrace - A Python Path Tracer for Sphere Scenes

A small Monte Carlo path tracer with support for:
- Mirror/diffuse blended materials
- Emissive spheres as light sources
- Gradient sky backgrounds
- Multi-threaded tile rendering with reproducible random streams
- JSON/YAML scene files and 8-bit image output
"""

__version__ = "0.1.0"
__author__ = "orbtrace Team"

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .camera import Camera
from .shapes import Hit, Hittable, Sphere
from .scene import Scene
from .renderer import Renderer, RenderSettings, get_platform_info
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
