"""Unit tests for the shading engine.

Tests cover:
- Sky on miss and past the recursion limit
- Phong diffuse term and hard shadows
- Mirror reflection and the unclamped final blend
- Refraction with the total internal reflection fallback
- Texture sampling and normal mapping
"""

import numpy as np
import pytest

from core.vector import Vector3
from geometry.cube import Cube
from materials.material import Material
from materials.textures import TextureManager, flat_normal_map
from renderer.light import Light
from renderer.raytracer import (MAX_DEPTH, ORIGIN_BIAS, cast_ray, cast_shadow, offset_origin,
                                refraction_direction)
from renderer.skybox import Skybox
from conftest import assert_vec_close

DOWN = Vector3(0.0, -1.0, 0.0)
ABOVE = Vector3(0.0, 5.0, 0.0)


def material(albedo, diffuse=Vector3(0.5, 0.5, 0.5), texture_id=None, normal_map_id=None):
    return Material(diffuse, 10.0, albedo, 1.0, texture_id, normal_map_id)


class TestSkyFallback:
    """Tests for rays that end in the sky."""

    def test_miss_returns_sky(self, unit_cube, solid_sky, overhead_light):
        color = cast_ray(ABOVE, Vector3(0.0, 1.0, 0.0), [unit_cube], overhead_light, solid_sky)
        assert color == solid_sky.get_color(Vector3(0.0, 1.0, 0.0))

    def test_empty_scene_returns_sky(self, solid_sky, overhead_light):
        assert cast_ray(ABOVE, DOWN, [], overhead_light, solid_sky) == solid_sky.color

    def test_depth_limit_returns_sky_even_on_hit(self, unit_cube, solid_sky, overhead_light):
        color = cast_ray(ABOVE, DOWN, [unit_cube], overhead_light, solid_sky, depth=MAX_DEPTH + 1)
        assert color == solid_sky.color


class TestPhong:
    """Tests for direct lighting."""

    def test_diffuse_from_overhead_light(self, unit_cube, solid_sky, overhead_light):
        """Top face lit head-on: diffuse color times intensity."""
        color = cast_ray(ABOVE, DOWN, [unit_cube], overhead_light, solid_sky)
        assert_vec_close(color, Vector3(0.5, 0.5, 0.5))

    def test_light_behind_face_gives_black(self, unit_cube, solid_sky):
        light = Light(Vector3(0.0, -10.0, 0.0), Vector3(1.0, 1.0, 1.0), 1.0)
        color = cast_ray(ABOVE, DOWN, [unit_cube], light, solid_sky)
        assert_vec_close(color, Vector3(0.0, 0.0, 0.0))

    def test_specular_uses_light_color(self, solid_sky, overhead_light):
        shiny = Material(Vector3(0.0, 0.0, 0.0), 10.0, (0.0, 1.0, 0.0, 0.0), 1.0)
        cube = Cube(Vector3(0.0, 0.0, 0.0), 2.0, shiny)
        color = cast_ray(ABOVE, DOWN, [cube], overhead_light, solid_sky)
        assert_vec_close(color, Vector3(1.0, 1.0, 1.0))


class TestShadows:
    """Tests for the hard shadow test."""

    def make_scene(self, blocker_center):
        floor = Cube(Vector3(0.0, 0.0, 0.0), 2.0, material((1.0, 0.0, 0.0, 0.0)))
        blocker = Cube(blocker_center, 1.0, material((1.0, 0.0, 0.0, 0.0)))
        light = Light(Vector3(5.0, 10.0, 0.0), Vector3(1.0, 1.0, 1.0), 1.0)
        return [floor, blocker], light

    def test_blocked_light_is_shadowed(self, solid_sky):
        objects, light = self.make_scene(Vector3(2.5, 5.5, 0.0))
        hit = objects[0].ray_intersect(ABOVE, DOWN)
        assert cast_shadow(hit, light, objects) == 1.0
        assert_vec_close(cast_ray(ABOVE, DOWN, objects, light, solid_sky), Vector3(0.0, 0.0, 0.0))

    def test_occluder_past_the_light_is_ignored(self, solid_sky):
        objects, light = self.make_scene(Vector3(10.0, 19.0, 0.0))
        hit = objects[0].ray_intersect(ABOVE, DOWN)
        assert cast_shadow(hit, light, objects) == 0.0
        color = cast_ray(ABOVE, DOWN, objects, light, solid_sky)
        assert color.x > 0.0

    def test_offset_origin_follows_direction(self, unit_cube):
        hit = unit_cube.ray_intersect(ABOVE, DOWN)
        assert_vec_close(offset_origin(hit, Vector3(0.0, 1.0, 0.0)), Vector3(0.0, 1.0 + ORIGIN_BIAS, 0.0))
        assert_vec_close(offset_origin(hit, DOWN), Vector3(0.0, 1.0 - ORIGIN_BIAS, 0.0))


class TestReflectionAndBlend:
    """Tests for recursive reflection and the final mix."""

    def test_perfect_mirror_shows_sky(self, solid_sky, overhead_light):
        mirror = Cube(Vector3(0.0, 0.0, 0.0), 2.0, material((0.0, 0.0, 1.0, 0.0)))
        color = cast_ray(ABOVE, DOWN, [mirror], overhead_light, solid_sky)
        assert_vec_close(color, solid_sky.color)

    def test_blend_is_not_clamped(self, solid_sky, overhead_light):
        """kr = 1.5: phong * -0.5 + sky * 1.5, no renormalization."""
        over = Cube(Vector3(0.0, 0.0, 0.0), 2.0, material((1.0, 0.0, 1.5, 0.0)))
        color = cast_ray(ABOVE, DOWN, [over], overhead_light, solid_sky)
        assert_vec_close(color, Vector3(0.05, 0.2, 0.35))

    def test_mirrors_facing_each_other_terminate(self, solid_sky, overhead_light):
        mirror = material((0.0, 0.0, 1.0, 0.0))
        floor = Cube(Vector3(0.0, 0.0, 0.0), 2.0, mirror)
        ceiling = Cube(Vector3(0.0, 4.0, 0.0), 2.0, mirror)
        color = cast_ray(Vector3(0.0, 2.0, 0.0), DOWN, [floor, ceiling], overhead_light, solid_sky)
        # Every bounce hits a mirror; the chain ends at the depth limit with the sky
        assert_vec_close(color, solid_sky.color)


class TestRefraction:
    """Tests for transmitted rays."""

    def test_clear_glass_shows_what_is_behind(self, solid_sky, overhead_light):
        glass = Material(Vector3(0.0, 0.0, 0.0), 10.0, (0.0, 0.0, 0.0, 1.0), 1.5)
        cube = Cube(Vector3(0.0, 0.0, 0.0), 2.0, glass)
        color = cast_ray(ABOVE, DOWN, [cube], overhead_light, solid_sky)
        assert_vec_close(color, solid_sky.color)

    def test_total_internal_reflection_falls_back_to_mirror(self):
        incident = Vector3(1.0, 0.2, 0.0).normalize()
        d = refraction_direction(incident, Vector3(0.0, 1.0, 0.0), 1.5)
        assert_vec_close(d, Vector3(incident.x, -incident.y, 0.0))

    def test_grazing_exit_is_reflected_back_inside(self, overhead_light):
        """
        A ray inside a glass block skims the top face, is totally reflected
        downwards, and leaves through the side face heading below the horizon.
        """
        sky = Skybox.gradient(Vector3(1.0, 1.0, 1.0), Vector3(0.0, 0.0, 0.0))
        glass = Material(Vector3(0.0, 0.0, 0.0), 10.0, (0.0, 0.0, 0.0, 1.0), 1.5)
        block = Cube(Vector3(0.0, 0.0, 0.0), 10.0, glass)
        direction = Vector3(1.0, 0.2, 0.0).normalize()

        color = cast_ray(Vector3(-4.5, 4.0, 0.0), direction, [block], overhead_light, sky)

        mirrored = Vector3(direction.x, -direction.y, 0.0)
        exit_dir = refraction_direction(mirrored, Vector3(1.0, 0.0, 0.0), 1.5)
        assert exit_dir.y < 0.0
        assert_vec_close(color, sky.get_color(exit_dir))
        assert color.x < sky.get_color(direction).x

    def test_refraction_direction_through_surface(self):
        d = refraction_direction(DOWN, Vector3(0.0, 1.0, 0.0), 1.5)
        assert_vec_close(d, DOWN)


class TestTextures:
    """Tests for texture sampling and normal mapping in the shader."""

    def test_texture_replaces_diffuse(self, solid_sky, overhead_light):
        textures = TextureManager()
        textures.add_texture("red", np.tile(np.array([1.0, 0.0, 0.0], dtype=np.float32), (2, 2, 1)))
        cube = Cube(Vector3(0.0, 0.0, 0.0), 2.0, material((1.0, 0.0, 0.0, 0.0), texture_id="red"))
        color = cast_ray(ABOVE, DOWN, [cube], overhead_light, solid_sky, textures=textures)
        assert_vec_close(color, Vector3(1.0, 0.0, 0.0))

    def test_flat_normal_map_changes_nothing(self, unit_cube, solid_sky, overhead_light):
        textures = TextureManager()
        textures.add_texture("flat", flat_normal_map(4, 4))
        mapped = Cube(Vector3(0.0, 0.0, 0.0), 2.0,
                      material((1.0, 0.0, 0.0, 0.0), normal_map_id="flat"))
        plain = cast_ray(ABOVE, DOWN, [unit_cube], overhead_light, solid_sky)
        bumped = cast_ray(ABOVE, DOWN, [mapped], overhead_light, solid_sky, textures=textures)
        assert_vec_close(bumped, plain)

    def test_tilted_normal_map_darkens(self, solid_sky, overhead_light):
        textures = TextureManager()
        tilted = np.tile(np.array([1.0, 0.5, 0.5], dtype=np.float32), (4, 4, 1))
        textures.add_texture("tilted", tilted)
        cube = Cube(Vector3(0.0, 0.0, 0.0), 2.0, material((1.0, 0.0, 0.0, 0.0), normal_map_id="tilted"))
        color = cast_ray(ABOVE, DOWN, [cube], overhead_light, solid_sky, textures=textures)
        # Encoded normal points along the tangent, perpendicular to the light
        assert color.x == pytest.approx(0.0, abs=1e-6)

    def test_missing_texture_raises(self, solid_sky, overhead_light):
        cube = Cube(Vector3(0.0, 0.0, 0.0), 2.0, material((1.0, 0.0, 0.0, 0.0), texture_id="nope"))
        with pytest.raises(KeyError):
            cast_ray(ABOVE, DOWN, [cube], overhead_light, solid_sky, textures=TextureManager())
