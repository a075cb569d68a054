"""Module-wide configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used
throughout coordconv.  The default is ``jnp.float64``: sub-milliarcsecond
astrometry is not representable in single precision, so 64-bit mode
(``jax_enable_x64``) is enabled when this module is imported.

Also holds the two physical limits that callers may need to tune:

- the *refraction floor*, the lowest apparent elevation at which the
  refraction model is evaluated (see :mod:`coordconv.refraction`);
- the *minimum site elevation* accepted by :class:`coordconv.site.Site`.

Like the dtype, these are meant to be set once at start-up, before any
conversions run.
"""

from __future__ import annotations

import logging
import math

import jax
import jax.numpy as jnp

logger = logging.getLogger(__name__)

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

jax.config.update("jax_enable_x64", True)
_dtype = jnp.float64

_refraction_floor = 5.0  # [deg]
_min_site_elevation = -500.0  # [m]


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for coordconv.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is enabled via
    ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype
    logger.info("dtype set to %s", jnp.dtype(dtype).name)


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float64``).
    """
    return _dtype


def get_angle_tolerance() -> float:
    """Return the dtype-adaptive tolerance for angle comparisons.

    - ``float64``:  1e-9 deg (~4 microarcsec)
    - ``float32``:  1e-3 deg
    - ``float16``, ``bfloat16``: 0.5 deg

    Returns:
        float: Absolute tolerance in degrees.
    """
    if _dtype == jnp.float64:
        return 1e-9
    if _dtype == jnp.float32:
        return 1e-3
    return 0.5


def set_refraction_floor(alt: float) -> None:
    """Set the lowest apparent elevation at which refraction is defined.

    Args:
        alt: Elevation in degrees, within ``[-90, 90)``.

    Raises:
        ValueError: If *alt* is not finite or out of range.
    """
    global _refraction_floor
    if not math.isfinite(alt) or not -90.0 <= alt < 90.0:
        raise ValueError(f"Refraction floor must be finite and in [-90, 90), got {alt}")
    logger.info("Refraction floor set to %s deg", alt)
    _refraction_floor = float(alt)


def get_refraction_floor() -> float:
    """Return the refraction floor in degrees (default 5)."""
    return _refraction_floor


def set_min_site_elevation(elevation: float) -> None:
    """Set the lowest site elevation accepted by :class:`~coordconv.site.Site`.

    Args:
        elevation: Elevation in metres above the WGS84 ellipsoid.

    Raises:
        ValueError: If *elevation* is not finite.
    """
    global _min_site_elevation
    if not math.isfinite(elevation):
        raise ValueError(f"Minimum site elevation must be finite, got {elevation}")
    logger.info("Minimum site elevation set to %s m", elevation)
    _min_site_elevation = float(elevation)


def get_min_site_elevation() -> float:
    """Return the minimum site elevation in metres (default -500)."""
    return _min_site_elevation
