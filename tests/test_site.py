"""Tests for the Site data record."""

import dataclasses

import jax.numpy as jnp
import pytest

from coordconv.config import set_min_site_elevation
from coordconv.constants import WGS84_a
from coordconv.site import Site


class TestSiteValidation:
    def test_defaults(self):
        site = Site(10.0, 20.0)
        assert site.elevation == 0.0
        assert site.pressure == 1013.25
        assert site.temperature == 10.0
        assert site.humidity == 0.5
        assert site.wavelength == 0.55
        assert site.ut1_tai == 0.0

    def test_frozen(self):
        site = Site(10.0, 20.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            site.latitude = 0.0

    @pytest.mark.parametrize("field", [
        "longitude", "latitude", "elevation", "pressure", "temperature", "humidity", "wavelength", "ut1_tai",
    ])
    def test_non_finite_raises(self, field):
        kwargs = {"longitude": 0.0, "latitude": 0.0, field: float("nan")}
        with pytest.raises(ValueError, match="finite"):
            Site(**kwargs)

    @pytest.mark.parametrize("kwargs, match", [
        ({"latitude": 91.0}, "latitude"),
        ({"elevation": -600.0}, "elevation"),
        ({"pressure": -1.0}, "pressure"),
        ({"temperature": -273.15}, "temperature"),
        ({"humidity": 1.5}, "humidity"),
        ({"humidity": -0.1}, "humidity"),
        ({"wavelength": 0.0}, "wavelength"),
    ])
    def test_out_of_range_raises(self, kwargs, match):
        args = {"longitude": 0.0, "latitude": 0.0}
        args.update(kwargs)
        with pytest.raises(ValueError, match=match):
            Site(**args)

    def test_min_elevation_is_configurable(self):
        set_min_site_elevation(-1000.0)
        assert Site(0.0, 0.0, elevation=-600.0).elevation == -600.0

    def test_zero_pressure_allowed(self):
        assert Site(0.0, 0.0, pressure=0.0).pressure == 0.0


class TestSiteGeometry:
    def test_ecef_on_equator(self):
        assert jnp.allclose(Site(0.0, 0.0).position_ecef(), jnp.array([WGS84_a, 0.0, 0.0]))

    def test_ecef_elevation(self):
        r0 = jnp.linalg.norm(Site(90.0, 0.0).position_ecef())
        r1 = jnp.linalg.norm(Site(90.0, 0.0, elevation=1000.0).position_ecef())
        assert float(r1 - r0) == pytest.approx(1000.0, abs=1e-6)

    def test_ecef_pole(self):
        b = WGS84_a * (1.0 - 0.0033528106647474805)
        assert jnp.allclose(Site(0.0, 90.0).position_ecef(), jnp.array([0.0, 0.0, b]), atol=1e-6)

    def test_horizon_rotation_is_orthogonal(self):
        R = Site(-105.8, 32.8).rotation_ecef_to_horizon()
        assert jnp.allclose(R @ R.T, jnp.eye(3), atol=1e-15)

    def test_horizon_matrix_is_left_handed(self):
        # North, east, zenith rows form a left-handed triad
        R = Site(-105.8, 32.8).rotation_ecef_to_horizon()
        assert float(jnp.linalg.det(R)) == pytest.approx(-1.0, abs=1e-14)
        assert jnp.allclose(jnp.cross(R[0], R[1]), -R[2], atol=1e-15)

    def test_horizon_axes(self):
        R = Site(0.0, 0.0).rotation_ecef_to_horizon()
        # Zenith is +x, north is +z, east is +y
        assert jnp.allclose(R @ jnp.array([1.0, 0.0, 0.0]), jnp.array([0.0, 0.0, 1.0]), atol=1e-15)
        assert jnp.allclose(R @ jnp.array([0.0, 0.0, 1.0]), jnp.array([1.0, 0.0, 0.0]), atol=1e-15)
        assert jnp.allclose(R @ jnp.array([0.0, 1.0, 0.0]), jnp.array([0.0, 1.0, 0.0]), atol=1e-15)
