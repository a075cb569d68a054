"""Tests for the coordconv.math_utils module."""

import jax.numpy as jnp
import pytest

from coordconv.math_utils import (
    POLAR_TOLERANCE,
    acosd,
    asind,
    atan2d,
    atand,
    compute_rotation_matrix,
    cosd,
    polar_from_xy,
    rot_2d,
    sind,
    tand,
    wrap_ctr,
    wrap_near,
    wrap_pos,
    xy_from_polar,
)

_ANGLES = [-1000.0, -720.0, -360.0, -359.9, -180.0, -1e-14, 0.0, 1e-14, 90.0, 179.999, 180.0, 359.999999, 360.0, 725.5, 1e6]


def _congruent(a, b, tol=1e-9):
    """True if a and b are equal modulo 360."""
    d = (a - b) % 360.0
    return d < tol or 360.0 - d < tol


class TestTrig:
    def test_sind_cosd(self):
        assert jnp.allclose(sind(30.0), 0.5)
        assert jnp.allclose(cosd(60.0), 0.5)

    def test_tand(self):
        assert jnp.allclose(tand(45.0), 1.0)

    def test_inverse(self):
        assert jnp.allclose(asind(0.5), 30.0)
        assert jnp.allclose(acosd(0.5), 60.0)
        assert jnp.allclose(atand(1.0), 45.0)

    def test_atan2d_quadrants(self):
        assert jnp.allclose(atan2d(1.0, 0.0), 90.0)
        assert jnp.allclose(atan2d(0.0, -1.0), 180.0)
        assert jnp.allclose(atan2d(-1.0, -1.0), -135.0)


class TestWrap:
    @pytest.mark.parametrize("ang", _ANGLES)
    def test_wrap_pos_range(self, ang):
        wrapped = float(wrap_pos(ang))
        assert 0.0 <= wrapped < 360.0
        assert _congruent(wrapped, ang)

    @pytest.mark.parametrize("ang", _ANGLES)
    def test_wrap_ctr_range(self, ang):
        wrapped = float(wrap_ctr(ang))
        assert -180.0 <= wrapped < 180.0
        assert _congruent(wrapped, ang)

    def test_wrap_pos_tiny_negative(self):
        assert float(wrap_pos(-1e-20)) == 0.0

    def test_wrap_ctr_half_open(self):
        assert float(wrap_ctr(180.0)) == -180.0
        assert float(wrap_ctr(-180.0)) == -180.0

    def test_wrap_near_example(self):
        assert float(wrap_near(350.0, 0.0)) == pytest.approx(-10.0)

    @pytest.mark.parametrize("ref", [-500.0, -180.0, 0.0, 10.0, 359.0, 1000.0])
    @pytest.mark.parametrize("ang", [-370.0, 0.0, 179.0, 181.0, 540.0])
    def test_wrap_near_range(self, ang, ref):
        wrapped = float(wrap_near(ang, ref))
        assert -180.0 <= wrapped - ref < 180.0
        assert _congruent(wrapped, ang, tol=1e-9)


class TestPolar:
    def test_origin_is_flagged(self):
        r, theta, at_origin = polar_from_xy(0.0, 0.0)
        assert float(r) == 0.0
        assert float(theta) == 0.0
        assert bool(at_origin)

    def test_below_tolerance_is_flagged(self):
        _, theta, at_origin = polar_from_xy(POLAR_TOLERANCE / 2.0, POLAR_TOLERANCE / 4.0)
        assert bool(at_origin)
        assert float(theta) == 0.0

    def test_regular(self):
        r, theta, at_origin = polar_from_xy(0.0, 2.0)
        assert jnp.allclose(r, 2.0)
        assert jnp.allclose(theta, 90.0)
        assert not bool(at_origin)

    @pytest.mark.parametrize("x, y", [(1.0, 0.0), (-3.0, 4.0), (1e-3, -2e-3), (-5.0, -5.0), (0.0, -7.5)])
    def test_roundtrip(self, x, y):
        r, theta, _ = polar_from_xy(x, y)
        x2, y2 = xy_from_polar(r, theta)
        assert jnp.allclose(x2, x, atol=1e-12)
        assert jnp.allclose(y2, y, atol=1e-12)


class TestRot2D:
    def test_quarter_turn(self):
        x, y = rot_2d(1.0, 0.0, 90.0)
        assert jnp.allclose(x, 0.0, atol=1e-12)
        assert jnp.allclose(y, 1.0)

    def test_frame_change_roundtrip(self):
        origin = jnp.array([3.0, -1.0])
        ang = 37.0
        p_a = jnp.array([0.5, 2.5])

        p_b = jnp.array(rot_2d(*(p_a - origin), -ang))
        back = origin + jnp.array(rot_2d(*p_b, ang))
        assert jnp.allclose(back, p_a)


class TestComputeRotationMatrix:
    @pytest.mark.parametrize("axis, ang", [
        ([1.0, 0.0, 0.0], 30.0),
        ([0.3, -2.0, 5.0], 123.4),
        ([1e-8, 1e-8, 0.0], -77.0),
        ([-1.0, 1.0, 1.0], 720.5),
    ])
    def test_orthogonal(self, axis, ang):
        R = compute_rotation_matrix(axis, ang)
        assert jnp.allclose(R @ R.T, jnp.eye(3), atol=1e-12)
        assert jnp.allclose(jnp.linalg.det(R), 1.0)

    def test_about_z(self):
        R = compute_rotation_matrix([0.0, 0.0, 2.0], 90.0)
        assert jnp.allclose(R @ jnp.array([1.0, 0.0, 0.0]), jnp.array([0.0, 1.0, 0.0]), atol=1e-12)

    def test_axis_is_fixed(self):
        axis = jnp.array([1.0, 2.0, 3.0])
        R = compute_rotation_matrix(axis, 42.0)
        assert jnp.allclose(R @ axis, axis)

    def test_zero_axis_raises(self):
        with pytest.raises(ValueError, match="nonzero"):
            compute_rotation_matrix([0.0, 0.0, 0.0], 10.0)

    def test_nan_axis_raises(self):
        with pytest.raises(ValueError, match="finite"):
            compute_rotation_matrix([jnp.nan, 0.0, 1.0], 10.0)

    def test_inf_axis_raises(self):
        with pytest.raises(ValueError, match="finite"):
            compute_rotation_matrix([0.0, jnp.inf, 1.0], 10.0)

    def test_bad_shape_raises(self):
        with pytest.raises(ValueError, match="shape"):
            compute_rotation_matrix([1.0, 0.0], 10.0)
