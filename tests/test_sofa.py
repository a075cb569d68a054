"""Tests for the fundamental astronomy routines.

Checks the JAX translations against published values of the IAU models.
"""

import jax.numpy as jnp
import pytest

from coordconv.sofa import (
    DAS2R,
    DJ00,
    MJD_ZERO,
    bias_matrix,
    era00,
    fal03,
    faom03,
    fw2m,
    gmst06,
    gst06t,
    nut80t,
    obl06,
    pfw06,
    pmat76,
    pnm06t,
    prec76,
)

# 2024-03-20 00:00 TT
_MJD_TT = 60389.0


def _is_rotation(m, atol=1e-12):
    return bool(jnp.allclose(m @ m.T, jnp.eye(3), atol=atol)) and bool(jnp.allclose(jnp.linalg.det(m), 1.0))


class TestFundamentalArguments:
    def test_fal03_at_j2000(self):
        assert jnp.allclose(fal03(0.0), 485868.249036 * DAS2R)

    def test_faom03_at_j2000(self):
        assert jnp.allclose(faom03(0.0), 450160.398036 * DAS2R)


class TestPrecession:
    def test_obliquity_j2000(self):
        assert jnp.allclose(obl06(DJ00, 0.0), 84381.406 * DAS2R)

    def test_obliquity_decreases(self):
        assert float(obl06(DJ00, 36525.0)) < float(obl06(DJ00, 0.0))

    def test_prec76_one_century(self):
        zeta, z, theta = prec76(DJ00, 0.0, DJ00, 36525.0)
        assert float(zeta / DAS2R) == pytest.approx(2306.2181 + 0.30188 + 0.017998, abs=1e-6)
        assert float(z / DAS2R) == pytest.approx(2306.2181 + 1.09468 + 0.018203, abs=1e-6)
        assert float(theta / DAS2R) == pytest.approx(2004.3109 - 0.42665 - 0.041833, abs=1e-6)

    def test_pmat76_identity_at_same_date(self):
        assert jnp.allclose(pmat76(DJ00, 0.0, DJ00, 0.0), jnp.eye(3), atol=1e-15)

    def test_pmat76_inverse(self):
        fwd = pmat76(DJ00, -9131.25, DJ00, 0.0)
        back = pmat76(DJ00, 0.0, DJ00, -9131.25)
        assert jnp.allclose(fwd @ back, jnp.eye(3), atol=1e-12)
        assert _is_rotation(fwd)

    def test_fw2m_bias_only_at_j2000(self):
        gamb, phib, psib, epsa = pfw06(DJ00, 0.0)
        assert jnp.allclose(fw2m(gamb, phib, psib, epsa), bias_matrix(), atol=1e-9)


class TestBias:
    def test_bias_is_small_rotation(self):
        B = bias_matrix()
        assert _is_rotation(B)
        assert jnp.allclose(B, jnp.eye(3), atol=1e-7)
        assert not jnp.allclose(B, jnp.eye(3), atol=1e-9)


class TestNutation:
    def test_magnitude(self):
        dpsi, deps = nut80t(MJD_ZERO, _MJD_TT)
        assert abs(float(dpsi / DAS2R)) < 20.0
        assert abs(float(deps / DAS2R)) < 10.0

    def test_principal_term_dominates(self):
        # Over a full 18.6 year nodal cycle dpsi reaches ~17"
        days = jnp.linspace(0.0, 6798.0, 200)
        dpsi = jnp.array([nut80t(DJ00, d)[0] for d in days]) / DAS2R
        assert 15.0 < float(jnp.max(jnp.abs(dpsi))) < 20.0

    def test_matches_full_iau1980_series(self):
        # SOFA nut80 reference values at MJD 53736.0; the omitted terms sum to under 0.062"
        dpsi, deps = nut80t(MJD_ZERO, 53736.0)
        assert float(dpsi / DAS2R) == pytest.approx(-0.9643658353226563966e-5 / DAS2R, abs=0.07)
        assert float(deps / DAS2R) == pytest.approx(0.4060051006879713322e-4 / DAS2R, abs=0.07)

    def test_pnm06t_is_rotation(self):
        assert _is_rotation(pnm06t(MJD_ZERO, _MJD_TT))


class TestSiderealTime:
    def test_era_at_j2000(self):
        assert jnp.allclose(era00(DJ00, 0.0), 0.7790572732640 * 2.0 * jnp.pi)

    def test_gmst_at_j2000(self):
        gmst = jnp.rad2deg(gmst06(DJ00, 0.0, DJ00, 0.0))
        # ERA plus the constant term of the GMST polynomial
        expected = 0.7790572732640 * 360.0 + 0.014506 / 3600.0
        assert float(gmst) == pytest.approx(expected, abs=1e-9)

    def test_equation_of_equinoxes_is_small(self):
        gmst = gmst06(MJD_ZERO, _MJD_TT, MJD_ZERO, _MJD_TT)
        gast = gst06t(MJD_ZERO, _MJD_TT, MJD_ZERO, _MJD_TT)
        # At most ~1.1 s of time
        assert abs(float(gast - gmst) / DAS2R) < 18.0
