"""
Scene description parser.

Supports JSON and YAML scene files. Example scene file:
```yaml
width: 320
height: 240
samples: 64
ray_bounces: 5
bg_start: [1.0, 1.0, 1.0]
bg_end: [0.5, 0.7, 1.0]

geometry:
  - center: [0, -1001, -3]
    radius: 1000
    color: [0.8, 0.8, 0.8]
    roughness: 1.0

  - center: [0, 0, -3]
    radius: 1
    color: "#ff8040"
    roughness: 0.1

  - center: [0, 6, -3]
    radius: 2
    color: [1, 1, 1]
    roughness: 0
    emission: 4
```
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any, List
import json

import yaml

from .vec3 import Vec3, Point3, Color
from .shapes import Sphere
from .scene import Scene


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def parse_file(self, filepath: str) -> Scene:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            The loaded scene
        """
        path = Path(filepath)
        if not path.is_file():
            raise SceneParseError(f"Scene file not found: {filepath}")

        try:
            content = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                # YAML is a superset of JSON, so unknown suffixes go through it
                data = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SceneParseError(f"Invalid scene file {filepath}: {e}") from e

        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Scene:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            The loaded scene
        """
        if not isinstance(data, dict):
            raise SceneParseError(f"Scene must be a mapping, got {type(data).__name__}")

        return Scene(
            width=self._parse_int(data, 'width'),
            height=self._parse_int(data, 'height'),
            samples=self._parse_int(data, 'samples'),
            ray_bounces=self._parse_int(data, 'ray_bounces'),
            bg_start=self._parse_color(self._require(data, 'bg_start')),
            bg_end=self._parse_color(self._require(data, 'bg_end')),
            geometry=self._parse_geometry(data.get('geometry') or []),
        )

    @staticmethod
    def _require(data: Dict[str, Any], key: str) -> Any:
        if key not in data:
            raise SceneParseError(f"Missing required field: {key}")
        return data[key]

    def _parse_int(self, data: Dict[str, Any], key: str) -> int:
        value = self._require(data, key)
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise SceneParseError(f"Field {key} must be an integer, got {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError) as e:
            raise SceneParseError(f"Field {key} must be an integer, got {value!r}") from e

    def _parse_float(self, data: Dict[str, Any], key: str, default: Any = None) -> float:
        value = data.get(key, default)
        if value is None:
            raise SceneParseError(f"Missing required field: {key}")
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Field {key} must be a number, got {value!r}") from e

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from various formats."""
        try:
            if isinstance(data, (list, tuple)):
                if len(data) != 3:
                    raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
                return Vec3(float(data[0]), float(data[1]), float(data[2]))
            elif isinstance(data, dict):
                return Vec3(
                    float(data.get('x', 0)),
                    float(data.get('y', 0)),
                    float(data.get('z', 0))
                )
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}") from e
        raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from various formats."""
        if isinstance(data, dict):
            try:
                return Color(
                    float(data.get('r', 0)),
                    float(data.get('g', 0)),
                    float(data.get('b', 0))
                )
            except (TypeError, ValueError) as e:
                raise SceneParseError(f"Cannot parse Color from: {data}") from e
        elif isinstance(data, str):
            # Handle hex colors
            if data.startswith('#'):
                hex_color = data[1:]
                if len(hex_color) == 6:
                    try:
                        r = int(hex_color[0:2], 16) / 255.0
                        g = int(hex_color[2:4], 16) / 255.0
                        b = int(hex_color[4:6], 16) / 255.0
                    except ValueError as e:
                        raise SceneParseError(f"Cannot parse color from string: {data}") from e
                    return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        return self._parse_vec3(data)

    def _parse_geometry(self, geometry_data: Any) -> List[Sphere]:
        """Parse geometry section."""
        if not isinstance(geometry_data, list):
            raise SceneParseError("Field geometry must be a list")

        spheres = []
        for index, obj_data in enumerate(geometry_data):
            if not isinstance(obj_data, dict):
                raise SceneParseError(f"Geometry entry {index} must be a mapping")
            spheres.append(Sphere(
                center=self._parse_vec3(self._require(obj_data, 'center')),
                radius=self._parse_float(obj_data, 'radius'),
                color=self._parse_color(self._require(obj_data, 'color')),
                roughness=self._parse_float(obj_data, 'roughness'),
                emission=self._parse_float(obj_data, 'emission', 0.0),
            ))
        return spheres


def load_scene(filepath: str) -> Scene:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        The loaded scene
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Scene:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        The loaded scene
    """
    parser = SceneParser()
    return parser.parse_dict(data)
