"""Pytest configuration for raytracer tests.

Shared fixtures for scenes built from a single cube, a solid sky and an
overhead white light.
"""

import pytest

from core.vector import Vector3
from geometry.cube import Cube
from materials.material import Material
from renderer.light import Light
from renderer.skybox import Skybox


def assert_vec_close(actual, expected, tol=1e-6):
    """Component-wise comparison of two Vector3 values."""
    assert actual.x == pytest.approx(expected.x, abs=tol)
    assert actual.y == pytest.approx(expected.y, abs=tol)
    assert actual.z == pytest.approx(expected.z, abs=tol)


@pytest.fixture
def grey_diffuse():
    """Purely diffuse mid-grey material."""
    return Material(Vector3(0.5, 0.5, 0.5), 10.0, (1.0, 0.0, 0.0, 0.0), 1.0)


@pytest.fixture
def unit_cube(grey_diffuse):
    """Cube of edge 2 centered at the origin."""
    return Cube(Vector3(0.0, 0.0, 0.0), 2.0, grey_diffuse)


@pytest.fixture
def solid_sky():
    return Skybox.solid(Vector3(0.2, 0.3, 0.4))


@pytest.fixture
def overhead_light():
    """White light of intensity 1 straight above the origin."""
    return Light(Vector3(0.0, 10.0, 0.0), Vector3(1.0, 1.0, 1.0), 1.0)
