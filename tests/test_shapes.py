"""Tests for geometric shapes."""

import pytest
import math
import dataclasses
import numpy as np

from orbtrace.vec3 import Vec3, Point3, Color
from orbtrace.ray import Ray
from orbtrace.shapes import Hit, Hittable, Sphere


def make_sphere(center=Point3(0, 0, -5), radius=1.0, **kwargs):
    kwargs.setdefault('color', Color(1, 1, 1))
    return Sphere(center, radius, **kwargs)


class TestSphereCreation:
    """Test Sphere construction."""

    def test_creation(self):
        center = Point3(0, 0, 0)
        sphere = Sphere(center, 1.0, Color(0.5, 0.5, 0.5), 0.3)
        assert sphere.center == center
        assert sphere.radius == 1.0
        assert sphere.roughness == 0.3

    def test_emission_defaults_to_zero(self):
        sphere = make_sphere()
        assert sphere.emission == 0.0
        assert sphere.is_light is False

    def test_emissive_is_light(self):
        assert make_sphere(emission=2.0).is_light is True

    def test_frozen(self):
        sphere = make_sphere()
        with pytest.raises(dataclasses.FrozenInstanceError):
            sphere.radius = 2.0

    def test_hittable_is_abstract(self):
        with pytest.raises(TypeError):
            Hittable()

    def test_sphere_is_hittable(self):
        assert isinstance(make_sphere(), Hittable)


class TestSphereIntersect:
    """Test Sphere.intersect()."""

    def test_hit_through_center(self):
        sphere = make_sphere(Point3(0, 0, -5), 1.0)
        hit = sphere.intersect(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)))

        assert hit is not None
        assert hit.shape is sphere
        assert abs(hit.distance - 4.0) < 1e-9

    def test_hit_distance_is_center_distance_minus_radius(self):
        origin = Point3(1, 2, 3)
        center = Point3(4, 6, 3)
        sphere = make_sphere(center, 2.0)
        direction = (center - origin).normalize()
        hit = sphere.intersect(Ray(origin, direction))

        assert hit is not None
        assert abs(hit.distance - ((center - origin).length() - 2.0)) < 1e-9

    def test_hit_point_is_on_surface(self):
        sphere = make_sphere(Point3(0, 0, -5), 1.0)
        ray = Ray(Point3(0, 0.5, 0), Vec3(0, 0, -1))
        hit = sphere.intersect(ray)

        assert hit is not None
        point = ray.point_at_parameter(hit.distance)
        assert abs((point - sphere.center).length() - 1.0) < 1e-9

    def test_miss(self):
        sphere = make_sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0, 5, -5), Vec3(0, 0, 1))  # Ray passes above sphere
        assert sphere.intersect(ray) is None

    def test_grazing_ray_misses(self):
        # Closest approach equals the radius
        sphere = make_sphere(Point3(0, 0, -5), 1.0)
        ray = Ray(Point3(0, 1, 0), Vec3(0, 0, -1))
        assert sphere.intersect(ray) is None

    def test_behind_ray(self):
        sphere = make_sphere(Point3(0, 0, -5), 1.0)
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, 1))  # Ray points away from sphere
        assert sphere.intersect(ray) is None

    def test_no_hit_when_leaving_surface(self):
        sphere = make_sphere(Point3(0, 0, -5), 1.0)
        ray = Ray(Point3(0, 0, -4), Vec3(0, 0, 1))
        assert sphere.intersect(ray) is None

    def test_hit_record(self):
        sphere = make_sphere()
        hit = Hit(sphere, 2.5)
        assert hit.shape is sphere
        assert hit.distance == 2.5


class TestSphereScatter:
    """Test Sphere.scatter()."""

    def test_mirror_head_on(self):
        sphere = make_sphere(Point3(0, 0, -5), 1.0, roughness=0.0)
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -1))
        hit_point = Point3(0, 0, -4)
        scattered = sphere.scatter(ray, hit_point, np.random.default_rng(0))

        assert scattered.origin == hit_point
        assert scattered.direction == Vec3(0, 0, 1)

    def test_mirror_at_45_degrees(self):
        sphere = make_sphere(Point3(0, -1, 0), 1.0, roughness=0.0)
        ray = Ray(Point3(-1, 1, 0), Vec3(1, -1, 0).normalize())
        scattered = sphere.scatter(ray, Point3(0, 0, 0), np.random.default_rng(0))

        expected = Vec3(1, 1, 0).normalize()
        assert abs(scattered.direction.dot(expected) - 1.0) < 1e-9

    def test_diffuse_leaves_surface(self):
        sphere = make_sphere(Point3(0, -1, 0), 1.0, roughness=1.0)
        ray = Ray(Point3(0, 1, 0), Vec3(0, -1, 0))
        normal = Vec3(0, 1, 0)
        rng = np.random.default_rng(9)

        for _ in range(100):
            scattered = sphere.scatter(ray, Point3(0, 0, 0), rng)
            assert scattered.direction.dot(normal) >= -1e-9
            assert abs(scattered.direction.length() - 1.0) < 1e-9

    def test_diffuse_directions_vary(self):
        sphere = make_sphere(Point3(0, -1, 0), 1.0, roughness=1.0)
        ray = Ray(Point3(0, 1, 0), Vec3(0, -1, 0))
        rng = np.random.default_rng(9)

        directions = {tuple(np.round(sphere.scatter(ray, Point3(0, 0, 0), rng).direction.to_array(), 6))
                      for _ in range(20)}
        assert len(directions) > 1

    def test_rough_blend_stays_near_mirror(self):
        sphere = make_sphere(Point3(0, -1, 0), 1.0, roughness=0.1)
        ray = Ray(Point3(-1, 1, 0), Vec3(1, -1, 0).normalize())
        mirror = Vec3(1, 1, 0).normalize()
        rng = np.random.default_rng(4)

        for _ in range(50):
            scattered = sphere.scatter(ray, Point3(0, 0, 0), rng)
            assert scattered.direction.dot(mirror) > 0.9

    def test_scatter_is_reproducible(self):
        sphere = make_sphere(Point3(0, -1, 0), 1.0, roughness=0.6)
        ray = Ray(Point3(0, 1, 0), Vec3(0, -1, 0))
        a = sphere.scatter(ray, Point3(0, 0, 0), np.random.default_rng(21))
        b = sphere.scatter(ray, Point3(0, 0, 0), np.random.default_rng(21))
        assert a.direction == b.direction


class TestSphereColor:
    """Test Sphere.get_color()."""

    def test_tints_incoming_light(self):
        sphere = make_sphere(color=Color(0.5, 0.25, 1.0))
        assert sphere.get_color(Color(1, 1, 0.5)) == Color(0.5, 0.25, 0.5)

    def test_black_probe_gives_black(self):
        sphere = make_sphere(color=Color(0.5, 0.5, 0.5))
        assert sphere.get_color(Color(0, 0, 0)) == Color(0, 0, 0)

    def test_light_ignores_probe(self):
        sphere = make_sphere(color=Color(1, 0.5, 0.25), emission=4.0)
        assert sphere.get_color(Color(0, 0, 0)) == Color(4, 2, 1)
        assert sphere.get_color(Color(7, 7, 7)) == Color(4, 2, 1)


class TestSphereRepr:
    """Test Sphere string representation."""

    def test_repr(self):
        s = repr(make_sphere())
        assert "Sphere" in s
        assert "radius" in s
