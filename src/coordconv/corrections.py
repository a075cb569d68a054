"""Apparent-place corrections.

Vector corrections used to go from a mean ICRS position to the apparent
direction seen by a geocentric or topocentric observer: light deflection
by the Sun, relativistic aberration, the bias-precession-nutation
rotation to the true equator and equinox of date, and Earth rotation.

Directions are unit vectors of shape ``(3,)``; observer velocities are
expressed as ``beta = v / c``.

References:
    1. IAU SOFA Board, *IAU SOFA Software Collection*, routines ``iauAb``,
       ``iauLd`` and ``iauPnm06a``.
    2. G. H. Kaplan, *The IAU Resolutions on Astronomical Reference
       Systems, Time Scales, and Earth Rotation Models*, USNO Circular
       179, 2005.
"""

from __future__ import annotations

import logging

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from coordconv.config import get_angle_tolerance, get_dtype
from coordconv.constants import AU, OMEGA_EARTH, SEC_PER_DAY, SEC_PER_YEAR, SUN_SCHWARZSCHILD_AU
from coordconv.rotations import Rz
from coordconv.site import Site
from coordconv.sofa import MJD_ZERO, gst06t, pnm06t
from coordconv.time import mjd_tt_from_tai

logger = logging.getLogger(__name__)

# Iterations used by remove_light_deflection
_DEFLECTION_ITERATIONS = 5

# Lower limit on (1 + p . e) in the deflection denominator
_DEFLECTION_LIMIT = 1.0e-6


def _normalize(v):
    return v / jnp.linalg.norm(v)


def rotation_icrs_to_true(tai: ArrayLike) -> Array:
    """Bias-precession-nutation matrix, ICRS to true equator and equinox of date.

    Args:
        tai: TAI as Modified Julian Date in seconds.

    Returns:
        3x3 rotation matrix.
    """
    return pnm06t(MJD_ZERO, mjd_tt_from_tai(tai))


def apparent_sidereal_time(tai: ArrayLike, ut1_tai: float = 0.0) -> Array:
    """Greenwich apparent sidereal time.

    Args:
        tai: TAI as Modified Julian Date in seconds.
        ut1_tai: UT1 - TAI [s].

    Returns:
        GAST in degrees, in ``[0, 360)``.

    Examples:
        ```python
        from coordconv.corrections import apparent_sidereal_time
        from coordconv.time import tai_from_caldate
        gast = apparent_sidereal_time(tai_from_caldate(2024, 1, 1))
        ```
    """
    tai = jnp.asarray(tai, dtype=get_dtype())
    mjd_ut1 = (tai + ut1_tai) / SEC_PER_DAY
    gast = gst06t(MJD_ZERO, mjd_ut1, MJD_ZERO, mjd_tt_from_tai(tai))
    return jnp.rad2deg(gast)


def apply_aberration(u: ArrayLike, beta: ArrayLike) -> Array:
    """Apply relativistic aberration to a direction.

    Uses the exact Lorentz-transformation formula, so
    ``apply_aberration(apply_aberration(u, beta), -beta)`` returns ``u``.

    Args:
        u: Unit vector towards the source (natural direction), shape ``(3,)``.
        beta: Observer velocity divided by the speed of light, shape ``(3,)``.

    Returns:
        Unit vector towards the source as seen by the moving observer.
    """
    u = jnp.asarray(u, dtype=get_dtype())
    beta = jnp.asarray(beta, dtype=get_dtype())

    bm1 = jnp.sqrt(1.0 - jnp.dot(beta, beta))
    pdv = jnp.dot(u, beta)
    w1 = 1.0 + pdv / (1.0 + bm1)
    return _normalize((bm1 * u + w1 * beta) / (1.0 + pdv))


def apply_light_deflection(u: ArrayLike, earth_pos: ArrayLike) -> Array:
    """Apply gravitational light deflection by the Sun.

    The source is taken to be far beyond the Sun, so the deflection depends
    only on its direction.

    Args:
        u: Unit vector towards the source, shape ``(3,)``.
        earth_pos: Heliocentric position of the observer [AU], shape ``(3,)``.

    Returns:
        Deflected unit vector.
    """
    u = jnp.asarray(u, dtype=get_dtype())
    earth_pos = jnp.asarray(earth_pos, dtype=get_dtype())

    em = jnp.linalg.norm(earth_pos)
    e = earth_pos / em
    pde = jnp.dot(u, e)
    w = SUN_SCHWARZSCHILD_AU / em / jnp.maximum(1.0 + pde, _DEFLECTION_LIMIT)
    return _normalize(u + w * (e - pde * u))


def remove_light_deflection(v: ArrayLike, earth_pos: ArrayLike) -> Array:
    """Remove gravitational light deflection by the Sun.

    Inverse of :func:`apply_light_deflection`, by fixed-point iteration.

    Args:
        v: Deflected unit vector, shape ``(3,)``.
        earth_pos: Heliocentric position of the observer [AU], shape ``(3,)``.

    Returns:
        Undeflected unit vector.
    """
    v = jnp.asarray(v, dtype=get_dtype())
    u = v
    for _ in range(_DEFLECTION_ITERATIONS):
        u = _normalize(u + v - apply_light_deflection(u, earth_pos))

    residual = float(jnp.rad2deg(jnp.linalg.norm(apply_light_deflection(u, earth_pos) - v)))
    if residual > get_angle_tolerance():
        logger.warning("Light deflection removal did not converge: residual %.3e deg", residual)
    return u


def observer_state(site: Site, tai: ArrayLike) -> tuple[Array, Array]:
    """Geocentric position and velocity of a site on the true equator of date.

    Polar motion is neglected.

    Args:
        site: Observing site.
        tai: TAI as Modified Julian Date in seconds.

    Returns:
        ``(pos, vel)``: position in AU and velocity in AU per Julian year,
        both shape ``(3,)``.
    """
    gast = apparent_sidereal_time(tai, site.ut1_tai)
    r_true = Rz(-gast, use_degrees=True) @ site.position_ecef()

    # Earth rotation: omega x r
    v_true = OMEGA_EARTH * jnp.array([-r_true[1], r_true[0], 0.0])

    return r_true / AU, v_true * SEC_PER_YEAR / AU


def rotation_true_to_horizon(site: Site, tai: ArrayLike) -> Array:
    """Rotation from the true equator of date to the local horizon.

    Earth rotation by the apparent sidereal time followed by
    :meth:`~coordconv.site.Site.rotation_ecef_to_horizon`.

    Args:
        site: Observing site.
        tai: TAI as Modified Julian Date in seconds.

    Returns:
        3x3 orthogonal (left-handed NEZ) matrix, determinant -1; not a
        proper rotation (true of date -> North-East-Zenith).
    """
    gast = apparent_sidereal_time(tai, site.ut1_tai)
    return site.rotation_ecef_to_horizon() @ Rz(gast, use_degrees=True)
