"""Tests for the atmospheric refraction model."""

import pytest

from coordconv.config import set_refraction_floor
from coordconv.refraction import model_limit, refraction, refraction_coefficients, unrefract
from coordconv.site import Site

_SITE = Site(longitude=0.0, latitude=45.0)


class TestCoefficients:
    def test_standard_conditions(self):
        refa, refb = refraction_coefficients(_SITE)
        # ~58.2 and ~-0.065 arcsec
        assert float(refa) * 206264.806 == pytest.approx(58.2, abs=0.3)
        assert -0.1 < float(refb) * 206264.806 < 0.0

    def test_zero_pressure(self):
        refa, refb = refraction_coefficients(Site(0.0, 45.0, pressure=0.0))
        assert float(refa) == 0.0
        assert float(refb) == 0.0

    def test_radio_exceeds_optical_when_humid(self):
        optical, _ = refraction_coefficients(Site(0.0, 45.0, humidity=1.0, temperature=25.0))
        radio, _ = refraction_coefficients(Site(0.0, 45.0, humidity=1.0, temperature=25.0, wavelength=2.0e4))
        assert float(radio) > float(optical)


class TestRefraction:
    def test_at_45_deg(self):
        assert refraction(45.0, _SITE) * 3600.0 == pytest.approx(58.1, abs=0.3)

    def test_zero_at_zenith(self):
        assert refraction(90.0, _SITE) == pytest.approx(0.0, abs=1e-12)

    def test_monotonic(self):
        values = [refraction(5.0 + 0.5 * i, _SITE) for i in range(171)]
        assert all(lo >= hi for lo, hi in zip(values, values[1:]))

    @pytest.mark.parametrize("site", [
        Site(0.0, 0.0, temperature=-40.0, pressure=1100.0),
        Site(0.0, 0.0, temperature=40.0, pressure=600.0, humidity=1.0),
        Site(0.0, 0.0, wavelength=1.0e5),
    ])
    def test_monotonic_extreme_weather(self, site):
        values = [refraction(5.0 + 0.25 * i, site) for i in range(41)]
        assert all(lo >= hi for lo, hi in zip(values, values[1:]))

    def test_below_floor_raises(self):
        with pytest.raises(ValueError, match="refraction floor"):
            refraction(4.9, _SITE)

    def test_floor_is_configurable(self):
        set_refraction_floor(10.0)
        with pytest.raises(ValueError, match="refraction floor"):
            refraction(9.0, _SITE)

    def test_no_refraction_in_vacuum(self):
        assert refraction(20.0, Site(0.0, 0.0, pressure=0.0)) == 0.0


class TestUnrefract:
    @pytest.mark.parametrize("el", [6.0, 10.0, 30.0, 60.0, 89.0])
    def test_roundtrip(self, el):
        observed = el + refraction(el, _SITE)
        assert unrefract(observed, _SITE) == pytest.approx(el, abs=1e-9)

    def test_observed_below_floor_raises(self):
        with pytest.raises(ValueError, match="refraction floor"):
            unrefract(3.0, _SITE)

    def test_result_below_floor_raises(self):
        # Observed just above the floor maps to a true elevation below it
        with pytest.raises(ValueError, match="refraction floor"):
            unrefract(5.05, _SITE)


class TestModelLimit:
    def test_standard_conditions(self):
        # The A tan z + B tan^3 z formula peaks near z = 86.7 deg
        assert model_limit(_SITE) == pytest.approx(3.3, abs=0.3)

    def test_no_limit_in_vacuum(self):
        assert model_limit(Site(0.0, 0.0, pressure=0.0)) == -90.0

    def test_lowered_floor_stays_monotonic(self):
        set_refraction_floor(1.0)
        limit = model_limit(_SITE)
        elevations = [1.0 + 0.25 * i for i in range(37)]
        accepted = [e for e in elevations if e >= limit]
        values = [refraction(e, _SITE) for e in accepted]
        assert all(lo >= hi for lo, hi in zip(values, values[1:]))
        assert values[0] > refraction(5.0, _SITE)

    def test_below_limit_raises_with_lowered_floor(self):
        set_refraction_floor(1.0)
        with pytest.raises(ValueError, match="refraction model limit"):
            refraction(2.0, _SITE)

    def test_unrefract_below_limit_raises(self):
        set_refraction_floor(1.0)
        with pytest.raises(ValueError, match="refraction model limit"):
            unrefract(2.0, _SITE)
