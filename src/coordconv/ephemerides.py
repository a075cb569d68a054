"""Low-precision analytical ephemeris of the Earth.

Provides the heliocentric position and velocity of the Earth in the ICRS
axes, needed for annual parallax, light deflection and annual aberration.
The position comes from the low-precision solar theory of Montenbruck &
Gill (~0.01 deg in longitude); the velocity is the exact derivative of the
same model, obtained with ``jax.jacfwd``, so the two are always
consistent.

The model is referred to the mean equator and equinox of J2000; the 23 mas
frame bias to the ICRS is far below its accuracy and is ignored.

References:
    1. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, 2012, Sec. 3.3.2.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from coordconv.config import get_dtype
from coordconv.constants import AU, DEG2RAD, MJD2000
from coordconv.rotations import Rx
from coordconv.time import mjd_tt_from_tai

# Obliquity of the J2000 ecliptic [rad]
_EPSILON = 23.43929111 * DEG2RAD


def _frac(x):
    """Fractional part of x: ``x - floor(x)``."""
    return x - jnp.floor(x)


def _earth_position(T: Array) -> Array:
    """Heliocentric Earth position [AU] at ``T`` Julian centuries from J2000."""
    _float = get_dtype()
    pi2 = _float(2.0) * jnp.pi

    # Mean anomaly of the Sun [rad]
    M = pi2 * _frac(_float(0.9931267) + _float(99.9973583) * T)

    # Ecliptic longitude of the Sun [rad]
    L = pi2 * _frac(
        _float(0.7859444)
        + M / pi2
        + (_float(6892.0) * jnp.sin(M) + _float(72.0) * jnp.sin(_float(2.0) * M))
        / _float(1296.0e3)
    )

    # Sun distance [m]
    r = (
        _float(149.619e9)
        - _float(2.499e9) * jnp.cos(M)
        - _float(0.021e9) * jnp.cos(_float(2.0) * M)
    )

    # The Earth is opposite the geocentric Sun
    r_ecliptic = -jnp.array([r * jnp.cos(L), r * jnp.sin(L), _float(0.0)]) / AU
    return Rx(-_EPSILON) @ r_ecliptic


def earth_heliocentric_state(tai: ArrayLike) -> tuple[Array, Array]:
    """Heliocentric position and velocity of the Earth.

    Args:
        tai: TAI as Modified Julian Date in seconds.

    Returns:
        ``(pos, vel)``: position in AU and velocity in AU per Julian year,
        both shape ``(3,)`` in the ICRS axes.

    Examples:
        ```python
        from coordconv.ephemerides import earth_heliocentric_state
        from coordconv.time import tai_from_caldate
        pos, vel = earth_heliocentric_state(tai_from_caldate(2024, 2, 25))
        float(jnp.linalg.norm(pos))  # ~1 AU
        ```
    """
    T = (mjd_tt_from_tai(tai) - MJD2000) / 36525.0
    pos = _earth_position(T)
    # d/dT is per Julian century
    vel = jax.jacfwd(_earth_position)(T) / 100.0
    return pos, vel
