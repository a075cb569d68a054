"""Atmospheric refraction.

Refraction is modelled with the two-term formula

.. math::

    \\Delta e = A \\tan z + B \\tan^3 z

where ``z`` is the unrefracted zenith distance and the coefficients ``A``
and ``B`` depend on the site's pressure, temperature, humidity and
observing wavelength.  The correction raises the apparent elevation; it
grows as the elevation falls and is not used below the configured
refraction floor (see :func:`coordconv.config.set_refraction_floor`).
Independently of the floor, elevations below the peak of the formula
(:func:`model_limit`, about 3 deg in standard conditions) are rejected,
since the correction would shrink again towards the horizon.

References:
    1. P. T. Wallace, *SLALIB/C*, routine ``slaRefcoq``.
    2. R. M. Green, *Spherical Astronomy*, Cambridge, 1985, Sec. 4.31.
"""

from __future__ import annotations

import logging

import jax
import jax.numpy as jnp
from jax import Array

from coordconv.config import get_angle_tolerance, get_dtype, get_refraction_floor
from coordconv.math_utils import tand
from coordconv.site import Site

logger = logging.getLogger(__name__)

# Iterations used by unrefract
_UNREFRACT_ITERATIONS = 10


def refraction_coefficients(site: Site) -> tuple[Array, Array]:
    """Compute the refraction coefficients for a site.

    Out-of-range weather values are clamped to the limits of the
    formulation: temperature 100-500 K, pressure 0-10000 mbar, humidity
    0-1 and wavelength 0.1-1e6 micrometres.  Wavelengths above 100
    micrometres use the radio formula.

    Args:
        site: Observing site.

    Returns:
        Tuple of ``(A, B)`` in radians.

    Examples:
        ```python
        from coordconv.refraction import refraction_coefficients
        from coordconv.site import Site
        refa, refb = refraction_coefficients(Site(0.0, 45.0))
        ```
    """
    _float = get_dtype()
    optic = site.wavelength <= 100.0

    t = jnp.clip(jnp.asarray(site.temperature + 273.15, dtype=_float), 100.0, 500.0)
    p = jnp.clip(jnp.asarray(site.pressure, dtype=_float), 0.0, 10000.0)
    r = jnp.clip(jnp.asarray(site.humidity, dtype=_float), 0.0, 1.0)
    w = jnp.clip(jnp.asarray(site.wavelength, dtype=_float), 0.1, 1.0e6)

    # Water vapour pressure at the observer [mbar]
    if site.pressure > 0.0:
        tdc = t - 273.15
        ps = 10.0 ** ((0.7859 + 0.03477 * tdc) / (1.0 + 0.00412 * tdc)) * (
            1.0 + p * (4.5e-6 + 6.0e-10 * tdc * tdc)
        )
        pw = r * ps / (1.0 - (1.0 - r) * ps / p)
    else:
        pw = jnp.asarray(0.0, dtype=_float)

    # Refractive index minus one at the observer
    if optic:
        wlsq = w * w
        gamma = ((77.53484e-6 + (4.39108e-7 + 3.666e-9 / wlsq) / wlsq) * p - 11.2684e-6 * pw) / t
    else:
        gamma = (77.6890e-6 * p - (6.3938e-6 - 0.375463 / t) * pw) / t

    # Ratio of scale height to geocentric distance
    beta = 4.4474e-6 * t
    if not optic:
        beta = beta - 0.0074 * pw * beta

    refa = gamma * (1.0 - beta)
    refb = -gamma * (beta - gamma / 2.0)
    return refa, refb


def _refraction(el, refa, refb):
    """Refraction in degrees for unrefracted elevation ``el`` [deg]."""
    tan_z = tand(90.0 - el)
    return jnp.rad2deg(tan_z * (refa + refb * tan_z * tan_z))


def model_limit(site: Site) -> float:
    """Lowest elevation at which the refraction model is still monotonic.

    With ``B < 0`` the correction ``A tan z + B tan^3 z`` peaks where
    ``tan^2 z = -A / (3 B)`` and falls back towards zero at lower
    elevations.  Below this elevation the model is unphysical.

    Args:
        site: Observing site (weather and wavelength).

    Returns:
        float: Elevation of the peak [deg], or ``-90`` if the correction
        grows all the way to the horizon.
    """
    refa, refb = refraction_coefficients(site)
    return _model_limit(refa, refb)


def _model_limit(refa, refb) -> float:
    if not float(refb) < 0.0 or not float(refa) > 0.0:
        return -90.0
    return float(90.0 - jnp.rad2deg(jnp.arctan(jnp.sqrt(-refa / (3.0 * refb)))))


def _check_floor(el: float, label: str, refa, refb) -> None:
    floor = get_refraction_floor()
    if el < floor:
        raise ValueError(
            f"{label} elevation {el} deg is below the refraction floor of {floor} deg"
        )
    limit = _model_limit(refa, refb)
    if el < limit:
        raise ValueError(
            f"{label} elevation {el} deg is below the refraction model limit of {limit:.3f} deg"
        )


def refraction(apparent_elevation: float, site: Site) -> float:
    """Refraction correction for an unrefracted (apparent topocentric) elevation.

    Args:
        apparent_elevation: Elevation before refraction [deg].
        site: Observing site (weather and wavelength).

    Returns:
        float: Correction to add to the elevation [deg], non-negative.

    Raises:
        ValueError: If the elevation is below the refraction floor or below
            the elevation where the model stops increasing (see
            :func:`model_limit`).

    Examples:
        ```python
        from coordconv.refraction import refraction
        from coordconv.site import Site
        refraction(45.0, Site(0.0, 45.0)) * 3600.0  # ~58 arcsec
        ```
    """
    refa, refb = refraction_coefficients(site)
    _check_floor(apparent_elevation, "Apparent", refa, refb)
    el = jnp.asarray(apparent_elevation, dtype=get_dtype())
    return float(jnp.maximum(_refraction(el, refa, refb), 0.0))


def unrefract(observed_elevation: float, site: Site) -> float:
    """Remove refraction from an observed elevation.

    Solves ``e + refraction(e) = observed_elevation`` for ``e`` by
    fixed-point iteration.

    Args:
        observed_elevation: Refracted elevation [deg].
        site: Observing site (weather and wavelength).

    Returns:
        float: Unrefracted elevation [deg].

    Raises:
        ValueError: If the observed or the recovered elevation is below the
            refraction floor or the model limit.
    """
    refa, refb = refraction_coefficients(site)
    _check_floor(observed_elevation, "Observed", refa, refb)
    obs = jnp.asarray(observed_elevation, dtype=get_dtype())

    def body(_, el):
        return obs - jnp.maximum(_refraction(el, refa, refb), 0.0)

    el = jax.lax.fori_loop(0, _UNREFRACT_ITERATIONS, body, obs)

    residual = float(jnp.abs(el + jnp.maximum(_refraction(el, refa, refb), 0.0) - obs))
    if residual > get_angle_tolerance():
        logger.warning("Unrefraction did not converge: residual %.3e deg at %s deg", residual, observed_elevation)

    el = float(el)
    _check_floor(el, "Unrefracted", refa, refb)
    return el
