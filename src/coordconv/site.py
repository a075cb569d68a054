"""Observing site.

Provides :class:`Site`: the geodetic location of an observatory together
with the weather and wavelength data needed for refraction and the
UT1-TAI offset needed for Earth rotation.

The site position uses the WGS84 reference ellipsoid.  Longitude is
positive east; latitude is geodetic.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import jax.numpy as jnp
from jax import Array

from coordconv.config import get_dtype, get_min_site_elevation
from coordconv.constants import WGS84_a, WGS84_f

# First eccentricity squared of the WGS84 ellipsoid
ECC2 = WGS84_f * (2.0 - WGS84_f)

# Absolute zero [deg C]
_ABS_ZERO_C = -273.15


@dataclass(frozen=True)
class Site:
    """Observatory location, weather and Earth orientation data.

    Args:
        longitude: Geodetic longitude, positive east [deg].
        latitude: Geodetic latitude [deg], within ``[-90, 90]``.
        elevation: Height above the WGS84 ellipsoid [m].
        pressure: Atmospheric pressure [mbar].  0 disables refraction.
        temperature: Ambient temperature [deg C].
        humidity: Relative humidity, 0 to 1.
        wavelength: Effective wavelength [micrometre].  Values above 100
            select the radio refraction formula.
        ut1_tai: UT1 - TAI [s].

    Raises:
        ValueError: If a value is non-finite or outside its physical range.

    Examples:
        ```python
        from coordconv.site import Site
        site = Site(longitude=-105.82, latitude=32.78, elevation=2788.0)
        site.position_ecef()
        ```
    """

    longitude: float
    latitude: float
    elevation: float = 0.0
    pressure: float = 1013.25
    temperature: float = 10.0
    humidity: float = 0.5
    wavelength: float = 0.55
    ut1_tai: float = 0.0

    def __post_init__(self) -> None:
        for name in ("longitude", "latitude", "elevation", "pressure",
                     "temperature", "humidity", "wavelength", "ut1_tai"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"Site {name} must be finite, got {value}")
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Site latitude must be in [-90, 90], got {self.latitude}")
        if self.elevation < get_min_site_elevation():
            raise ValueError(
                f"Site elevation {self.elevation} m is below the minimum of "
                f"{get_min_site_elevation()} m"
            )
        if self.pressure < 0.0:
            raise ValueError(f"Site pressure must be non-negative, got {self.pressure}")
        if self.temperature <= _ABS_ZERO_C:
            raise ValueError(f"Site temperature must be above absolute zero, got {self.temperature}")
        if not 0.0 <= self.humidity <= 1.0:
            raise ValueError(f"Site humidity must be in [0, 1], got {self.humidity}")
        if self.wavelength <= 0.0:
            raise ValueError(f"Site wavelength must be positive, got {self.wavelength}")

    def position_ecef(self) -> Array:
        """Site position in Earth-fixed cartesian coordinates.

        Uses the WGS84 prime vertical radius of curvature
        ``N = a / sqrt(1 - e^2 sin^2 lat)``.

        Returns:
            jax.Array: ECEF position ``[x, y, z]`` in *m*.

        Example:
            >>> from coordconv.site import Site
            >>> float(Site(0.0, 0.0).position_ecef()[0])  # WGS84_a on the equator
            6378137.0
        """
        _float = get_dtype()
        lon = jnp.deg2rad(jnp.asarray(self.longitude, dtype=_float))
        lat = jnp.deg2rad(jnp.asarray(self.latitude, dtype=_float))
        alt = self.elevation

        sin_lat = jnp.sin(lat)
        cos_lat = jnp.cos(lat)

        N = WGS84_a / jnp.sqrt(1.0 - ECC2 * sin_lat * sin_lat)

        x = (N + alt) * cos_lat * jnp.cos(lon)
        y = (N + alt) * cos_lat * jnp.sin(lon)
        z = ((1.0 - ECC2) * N + alt) * sin_lat

        return jnp.array([x, y, z])

    def rotation_ecef_to_horizon(self) -> Array:
        """Matrix from Earth-fixed axes to local North-East-Zenith.

        Azimuth measured in the resulting frame runs from North towards
        East.  Zenith is the geodetic normal.

        Returns:
            3x3 orthogonal (left-handed NEZ) matrix, determinant -1; not a
            proper rotation (ECEF -> NEZ).
        """
        _float = get_dtype()
        lon = jnp.deg2rad(jnp.asarray(self.longitude, dtype=_float))
        lat = jnp.deg2rad(jnp.asarray(self.latitude, dtype=_float))

        sin_lon = jnp.sin(lon)
        cos_lon = jnp.cos(lon)
        sin_lat = jnp.sin(lat)
        cos_lat = jnp.cos(lat)

        # Rows are N, E, Z basis vectors expressed in ECEF
        return jnp.array([
            [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat],    # North
            [-sin_lon, cos_lon, 0.0],                             # East
            [cos_lat * cos_lon, cos_lat * sin_lon, sin_lat],      # Zenith
        ])
