"""Unit tests for Vector3 and the reflect / refract helpers."""

import math

import pytest

from core.utils import lerp, reflect, refract
from core.vector import Vector3
from conftest import assert_vec_close


class TestVectorArithmetic:
    """Tests for the basic vector operators."""

    def test_add_sub_neg(self):
        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(4.0, 5.0, 6.0)
        assert a + b == Vector3(5.0, 7.0, 9.0)
        assert b - a == Vector3(3.0, 3.0, 3.0)
        assert -a == Vector3(-1.0, -2.0, -3.0)

    def test_scalar_and_componentwise_multiply(self):
        a = Vector3(1.0, 2.0, 3.0)
        assert a * 2 == Vector3(2.0, 4.0, 6.0)
        assert 2 * a == Vector3(2.0, 4.0, 6.0)
        assert a * Vector3(2.0, 0.5, -1.0) == Vector3(2.0, 1.0, -3.0)
        assert a / 2 == Vector3(0.5, 1.0, 1.5)

    def test_dot_and_cross(self):
        x = Vector3(1.0, 0.0, 0.0)
        y = Vector3(0.0, 1.0, 0.0)
        assert x.dot(y) == 0.0
        assert x.cross(y) == Vector3(0.0, 0.0, 1.0)
        assert y.cross(x) == Vector3(0.0, 0.0, -1.0)

    def test_length_and_normalize(self):
        v = Vector3(3.0, 0.0, 4.0)
        assert v.length() == pytest.approx(5.0)
        assert v.normalize().length() == pytest.approx(1.0)
        assert_vec_close(v.normalized(), Vector3(0.6, 0.0, 0.8))

    def test_normalize_zero_vector_is_zero(self):
        """The zero vector has no direction and comes back unchanged."""
        assert Vector3.zero().normalize() == Vector3.zero()

    def test_lerp_clamps_t(self):
        a = Vector3(0.0, 0.0, 0.0)
        b = Vector3(2.0, 4.0, 6.0)
        assert a.lerp(b, 0.5) == Vector3(1.0, 2.0, 3.0)
        assert lerp(a, b, 2.0) == b
        assert lerp(a, b, -1.0) == a

    def test_copy_is_independent_value(self):
        a = Vector3(1.0, 2.0, 3.0)
        c = a.copy()
        assert c == a
        assert c is not a
        assert tuple(a) == (1.0, 2.0, 3.0)


class TestReflect:
    """Tests for mirror reflection."""

    def test_reflect_off_floor(self):
        r = reflect(Vector3(1.0, -1.0, 0.0), Vector3(0.0, 1.0, 0.0))
        assert r == Vector3(1.0, 1.0, 0.0)

    def test_reflect_head_on(self):
        r = reflect(Vector3(0.0, 0.0, -1.0), Vector3(0.0, 0.0, 1.0))
        assert r == Vector3(0.0, 0.0, 1.0)


class TestRefract:
    """Tests for Snell refraction."""

    def test_normal_incidence_passes_straight(self):
        """Entering glass head-on does not bend the ray."""
        r = refract(Vector3(0.0, -1.0, 0.0), Vector3(0.0, 1.0, 0.0), 1.5)
        assert_vec_close(r, Vector3(0.0, -1.0, 0.0))

    def test_entering_medium_bends_toward_normal(self):
        incident = Vector3(1.0, -1.0, 0.0).normalize()
        r = refract(incident, Vector3(0.0, 1.0, 0.0), 1.5)
        assert r is not None
        sin_in = abs(incident.x)
        sin_out = abs(r.x) / r.length()
        assert sin_out == pytest.approx(sin_in / 1.5, rel=1e-6)

    def test_total_internal_reflection_returns_none(self):
        """A grazing ray leaving glass cannot escape."""
        incident = Vector3(1.0, 0.2, 0.0).normalize()
        assert refract(incident, Vector3(0.0, 1.0, 0.0), 1.5) is None

    def test_leaving_medium_below_critical_angle(self):
        incident = Vector3(0.1, 1.0, 0.0).normalize()
        r = refract(incident, Vector3(0.0, 1.0, 0.0), 1.5)
        assert r is not None
        assert r.y > 0.0
        assert abs(r.x) / r.length() == pytest.approx(abs(incident.x) * 1.5, rel=1e-6)

    def test_critical_angle_value(self):
        critical = math.asin(1.0 / 1.5)
        just_below = Vector3(math.sin(critical - 0.01), math.cos(critical - 0.01), 0.0)
        just_above = Vector3(math.sin(critical + 0.01), math.cos(critical + 0.01), 0.0)
        normal = Vector3(0.0, 1.0, 0.0)
        assert refract(just_below, normal, 1.5) is not None
        assert refract(just_above, normal, 1.5) is None
