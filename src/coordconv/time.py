"""Date helpers.

Every date accepted by the conversion engine is TAI expressed as a Modified
Julian Date in **seconds**.  These helpers translate calendar dates and
Julian/Besselian epochs into that form.  Leap seconds (UTC) are outside the
scope of this package: callers supply TAI.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from .config import get_dtype
from .constants import DAYS_PER_YEAR, JD_MJD_OFFSET, MJD2000, SEC_PER_DAY, TT_TAI

# Julian Date of B1900.0 and the length of the tropical year (days)
_JD_B1900 = 2415020.31352
_DAYS_PER_TROPICAL_YEAR = 365.242198781

_JD_J2000 = MJD2000 + JD_MJD_OFFSET


def caldate_to_mjd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a calendar date to Modified Julian Date. Algorithm is only valid from year 1583 onward.

    Args:
        year (ArrayLike): Year of the calendar date.
        month (ArrayLike): Month of the calendar date.
        day (ArrayLike): Day of the calendar date.
        hour (ArrayLike): Hour of the calendar date. Default: ``0``
        minute (ArrayLike): Minute of the calendar date. Default: ``0``
        second (ArrayLike): Second of the calendar date. Default: ``0.0``

    Returns:
        Modified Julian Date.

    References:

        1. Montenbruck, O., & Gill, E. (2012). *Satellite Orbits: Models, Methods and Applications*. Springer Science & Business Media.
    """

    is_jan_or_feb = month <= 2
    year = jnp.where(is_jan_or_feb, year - 1, year)
    month = jnp.where(is_jan_or_feb, month + 12, month)

    B = jnp.floor(year / 400) - jnp.floor(year / 100) + jnp.floor(year / 4)

    mjd = 365 * year - 679004 + B + jnp.floor(30.6001 * (month + 1)) + day

    frac_day = (hour + (minute + second / 60.0) / 60.0) / 24.0

    return jnp.asarray(jnp.floor(mjd), dtype=get_dtype()) + frac_day


def tai_from_caldate(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a calendar date, read on the TAI time scale, to TAI MJD seconds.

    Args:
        year (ArrayLike): Year.
        month (ArrayLike): Month.
        day (ArrayLike): Day.
        hour (ArrayLike): Hour. Default: ``0``
        minute (ArrayLike): Minute. Default: ``0``
        second (ArrayLike): Second. Default: ``0.0``

    Returns:
        TAI as Modified Julian Date in seconds.

    Examples:
        ```python
        from coordconv.time import tai_from_caldate
        tai = tai_from_caldate(2024, 3, 20, 4, 0, 0.0)
        ```
    """
    return caldate_to_mjd(year, month, day, hour, minute, second) * SEC_PER_DAY


def mjd_tt_from_tai(tai: ArrayLike) -> jax.Array:
    """Convert TAI (MJD seconds) to a TT Modified Julian Date in days."""
    tai = jnp.asarray(tai, dtype=get_dtype())
    return (tai + TT_TAI) / SEC_PER_DAY


def julian_epoch_from_tai(tai: ArrayLike) -> jax.Array:
    """Convert TAI (MJD seconds) to a Julian epoch (e.g. 2000.0).

    Julian epochs are defined on the TT time scale.

    Args:
        tai: TAI as Modified Julian Date in seconds.

    Returns:
        Julian epoch in years.
    """
    return 2000.0 + (mjd_tt_from_tai(tai) - MJD2000) / DAYS_PER_YEAR


def tai_from_julian_epoch(julian_epoch: ArrayLike) -> jax.Array:
    """Convert a Julian epoch to TAI (MJD seconds).

    Args:
        julian_epoch: Julian epoch in years.

    Returns:
        TAI as Modified Julian Date in seconds.
    """
    julian_epoch = jnp.asarray(julian_epoch, dtype=get_dtype())
    mjd_tt = MJD2000 + (julian_epoch - 2000.0) * DAYS_PER_YEAR
    return mjd_tt * SEC_PER_DAY - TT_TAI


def besselian_from_julian_epoch(julian_epoch: ArrayLike) -> jax.Array:
    """Convert a Julian epoch to a Besselian epoch.

    References:

        1. P. T. Wallace, *SLALIB/C*, routines ``slaEpj2d`` and ``slaEpb``.
    """
    julian_epoch = jnp.asarray(julian_epoch, dtype=get_dtype())
    jd = _JD_J2000 + (julian_epoch - 2000.0) * DAYS_PER_YEAR
    return 1900.0 + (jd - _JD_B1900) / _DAYS_PER_TROPICAL_YEAR


def julian_from_besselian_epoch(besselian_epoch: ArrayLike) -> jax.Array:
    """Convert a Besselian epoch to a Julian epoch.

    Inverse of :func:`besselian_from_julian_epoch`.
    """
    besselian_epoch = jnp.asarray(besselian_epoch, dtype=get_dtype())
    jd = _JD_B1900 + (besselian_epoch - 1900.0) * _DAYS_PER_TROPICAL_YEAR
    return 2000.0 + (jd - _JD_J2000) / DAYS_PER_YEAR
