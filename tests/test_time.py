"""Tests for the coordconv.time module."""

import jax.numpy as jnp
import pytest

from coordconv.constants import MJD2000, SEC_PER_DAY, TAI_J2000, TT_TAI
from coordconv.time import (
    besselian_from_julian_epoch,
    caldate_to_mjd,
    julian_epoch_from_tai,
    julian_from_besselian_epoch,
    mjd_tt_from_tai,
    tai_from_caldate,
    tai_from_julian_epoch,
)


class TestCaldate:
    def test_j2000_day(self):
        assert float(caldate_to_mjd(2000, 1, 1)) == 51544.0

    def test_noon(self):
        assert jnp.allclose(caldate_to_mjd(2000, 1, 1, 12, 0, 0.0), MJD2000)

    def test_february(self):
        # 2024 is a leap year
        assert float(caldate_to_mjd(2024, 3, 1) - caldate_to_mjd(2024, 2, 28)) == 2.0

    def test_tai_seconds(self):
        assert float(tai_from_caldate(2000, 1, 2)) == 51545.0 * SEC_PER_DAY


class TestEpochs:
    def test_tai_j2000(self):
        assert float(mjd_tt_from_tai(TAI_J2000)) == pytest.approx(MJD2000, abs=1e-9)
        assert float(julian_epoch_from_tai(TAI_J2000)) == pytest.approx(2000.0, abs=1e-10)

    def test_tt_offset(self):
        tai = 51544.0 * SEC_PER_DAY
        assert float(mjd_tt_from_tai(tai)) == pytest.approx(51544.0 + TT_TAI / SEC_PER_DAY, abs=1e-9)

    @pytest.mark.parametrize("jep", [1900.0, 1975.5, 2000.0, 2024.3])
    def test_julian_roundtrip(self, jep):
        assert float(julian_epoch_from_tai(tai_from_julian_epoch(jep))) == pytest.approx(jep, abs=1e-9)

    def test_b1950(self):
        # B1950.0 = J1949.99979
        assert float(julian_from_besselian_epoch(1950.0)) == pytest.approx(1949.9997904, abs=1e-6)

    @pytest.mark.parametrize("bep", [1875.0, 1950.0, 2000.0])
    def test_besselian_roundtrip(self, bep):
        jep = julian_from_besselian_epoch(bep)
        assert float(besselian_from_julian_epoch(jep)) == pytest.approx(bep, abs=1e-9)
