"""Tests for the coordconv.config module."""

import logging

import jax
import jax.numpy as jnp
import pytest

from coordconv.config import (
    get_angle_tolerance,
    get_dtype,
    get_min_site_elevation,
    get_refraction_floor,
    set_dtype,
    set_min_site_elevation,
    set_refraction_floor,
)
from coordconv.math_utils import wrap_pos


class TestGetSetDtype:
    def test_default_dtype(self):
        assert get_dtype() == jnp.float64

    def test_set_float32(self):
        set_dtype(jnp.float32)
        assert get_dtype() == jnp.float32

    def test_roundtrip(self):
        for dtype in (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64):
            set_dtype(dtype)
            assert get_dtype() == dtype

    def test_invalid_dtype_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.int32)

    def test_invalid_dtype_string_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype("float64")

    def test_float64_enables_x64(self):
        set_dtype(jnp.float64)
        assert jax.config.jax_enable_x64 is True

    def test_dtype_flows_to_outputs(self):
        set_dtype(jnp.float32)
        assert wrap_pos(370.0).dtype == jnp.float32
        set_dtype(jnp.float64)
        assert wrap_pos(370.0).dtype == jnp.float64

    def test_set_dtype_logs_at_info(self, caplog):
        caplog.set_level(logging.INFO, logger="coordconv.config")
        set_dtype(jnp.float32)
        records = [r for r in caplog.records if r.name == "coordconv.config"]
        assert records[-1].levelno == logging.INFO
        assert records[-1].getMessage() == "dtype set to float32"


class TestAngleTolerance:
    def test_float64_tolerance(self):
        assert get_angle_tolerance() == 1e-9

    def test_float32_tolerance(self):
        set_dtype(jnp.float32)
        assert get_angle_tolerance() == 1e-3

    def test_float16_tolerance(self):
        set_dtype(jnp.float16)
        assert get_angle_tolerance() == 0.5


class TestRefractionFloor:
    def test_default(self):
        assert get_refraction_floor() == 5.0

    def test_set(self):
        set_refraction_floor(2.5)
        assert get_refraction_floor() == 2.5

    @pytest.mark.parametrize("alt", [float("nan"), float("inf"), 90.0, -91.0])
    def test_invalid_raises(self, alt):
        with pytest.raises(ValueError, match="Refraction floor"):
            set_refraction_floor(alt)


class TestMinSiteElevation:
    def test_default(self):
        assert get_min_site_elevation() == -500.0

    def test_set(self):
        set_min_site_elevation(-1000.0)
        assert get_min_site_elevation() == -1000.0

    def test_non_finite_raises(self):
        with pytest.raises(ValueError, match="finite"):
            set_min_site_elevation(float("nan"))
