"""Tests for the PVT value type."""

import dataclasses
import math

import pytest

from coordconv.pvt import PVT, polar_from_xy_pvt, rot_2d_pvt


class TestPVT:
    def test_value_at(self):
        p = PVT(10.0, 0.5, 100.0)
        assert float(p.value_at(104.0)) == pytest.approx(12.0)
        assert float(p.value_at(100.0)) == pytest.approx(10.0)
        assert float(p.value_at(90.0)) == pytest.approx(5.0)

    def test_value_at_has_no_side_effects(self):
        p = PVT(1.0, 2.0, 0.0)
        p.value_at(50.0)
        assert p == PVT(1.0, 2.0, 0.0)

    def test_immutable(self):
        p = PVT(1.0, 2.0, 0.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.value = 3.0

    def test_rebase(self):
        p = PVT(10.0, 0.5, 100.0).rebase(120.0)
        assert p.tai == 120.0
        assert p.value == pytest.approx(20.0)
        assert p.velocity == 0.5

    def test_invalid(self):
        p = PVT.invalid(5.0)
        assert math.isnan(p.value)
        assert math.isnan(p.velocity)
        assert not p.is_finite()

    def test_is_finite(self):
        assert PVT(1.0, 0.0, 0.0).is_finite()

    def test_from_func(self):
        p = PVT.from_func(lambda t: 3.0 * t + 1.0, 2.0, delta_t=0.5)
        assert p.value == pytest.approx(7.0)
        assert p.velocity == pytest.approx(3.0)


class TestArithmetic:
    def test_add_rebases_right_operand(self):
        a = PVT(1.0, 1.0, 10.0)
        b = PVT(2.0, 3.0, 0.0)
        c = a + b
        assert c.tai == 10.0
        assert c.value == pytest.approx(1.0 + 32.0)
        assert c.velocity == pytest.approx(4.0)

    def test_sub(self):
        c = PVT(5.0, 1.0, 0.0) - PVT(2.0, 0.25, 0.0)
        assert c.value == pytest.approx(3.0)
        assert c.velocity == pytest.approx(0.75)

    def test_scalar_ops(self):
        p = PVT(2.0, 4.0, 1.0)
        assert (p + 1.0).value == 3.0
        assert (1.0 - p).value == -1.0
        assert (1.0 - p).velocity == -4.0
        assert (p * 2.0).velocity == 8.0
        assert (2.0 * p).value == 4.0
        assert (p / 2.0).velocity == 2.0
        assert (-p).value == -2.0


class TestLiftedPrimitives:
    def test_polar_unwraps_through_180(self):
        # A point moving counter-clockwise across the negative x-axis
        x = PVT(-1.0, 0.0, 0.0)
        y = PVT(1e-9, -1.0, 0.0)
        _, theta, at_origin = polar_from_xy_pvt(x, y, 0.0, delta_t=1e-6)
        assert not at_origin
        assert theta.value == pytest.approx(180.0, abs=1e-6)
        # d(theta)/dt = +1 rad/s
        assert theta.velocity == pytest.approx(math.degrees(1.0), rel=1e-3)

    def test_polar_origin(self):
        r, theta, at_origin = polar_from_xy_pvt(PVT(0.0, 0.0, 0.0), PVT(0.0, 0.0, 0.0), 0.0)
        assert at_origin
        assert r.value == 0.0
        assert theta.value == 0.0

    def test_rot_2d(self):
        x, y = rot_2d_pvt(PVT(1.0, 0.0, 0.0), PVT(0.0, 1.0, 0.0), 90.0, 0.0)
        assert x.value == pytest.approx(0.0, abs=1e-12)
        assert y.value == pytest.approx(1.0)
        assert x.velocity == pytest.approx(-1.0)
        assert y.velocity == pytest.approx(0.0, abs=1e-12)
