"""Celestial positions.

Provides the ``Coord`` class: a direction on the sky with optional distance,
proper motion and radial velocity, valid at a given epoch.

Internally a ``Coord`` stores a cartesian position vector and a
proper-motion (space-velocity) vector, which is the representation every
frame rotation and correction acts on.  When the distance is defined the
vectors are in AU and AU per Julian year.  When it is undefined the object
is at infinity: the position is a unit vector, the proper-motion vector is
in radians per year, and proper motion, parallax and radial velocity
corrections do not apply.

This class is registered as a JAX pytree with ``(pos, pm, epoch)`` as
leaves and ``has_distance`` as auxiliary data.
"""

from __future__ import annotations

import math

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from coordconv.config import get_dtype
from coordconv.constants import (
    AS2RAD,
    KM_PER_AU,
    MIN_PARALLAX,
    RAD2AS,
    SEC_PER_YEAR,
    TAI_J2000,
)
from coordconv.math_utils import atan2d, cosd, polar_from_xy, sind, wrap_pos
from coordconv.pvt import PVT

# km/s -> AU per Julian year
_KMS_TO_AUYR = SEC_PER_YEAR / KM_PER_AU


def _sph_basis(lon, lat):
    """Unit position, east and north vectors at (lon, lat) in degrees."""
    sin_lon, cos_lon = sind(lon), cosd(lon)
    sin_lat, cos_lat = sind(lat), cosd(lat)
    u = jnp.array([cos_lat * cos_lon, cos_lat * sin_lon, sin_lat])
    e = jnp.array([-sin_lon, cos_lon, 0.0])
    n = jnp.array([-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat])
    return u, e, n


class Coord:
    """A celestial position, optionally with distance and space motion.

    Angles are degrees; ``lon`` is the longitude-like angle (RA, galactic
    longitude, azimuth) and ``lat`` the latitude-like angle (Dec, galactic
    latitude, elevation).

    Args:
        lon (float): Longitude-like angle (deg); wrapped into ``[0, 360)``.
        lat (float): Latitude-like angle (deg), within ``[-90, 90]``.
        distance (float | None): Distance in AU, or ``None`` for an object
            at infinity.
        pm_lon (float): Proper motion in longitude, ``dlon/dt * cos(lat)``
            (arcsec per Julian year).
        pm_lat (float): Proper motion in latitude (arcsec per Julian year).
        rad_vel (float): Radial velocity (km/s, positive receding).  Ignored
            when ``distance`` is ``None``.
        epoch (float): Date at which the position applies, TAI Modified
            Julian Date in seconds.  Default: J2000.0.

    Raises:
        ValueError: If any input is non-finite, ``lat`` is outside
            ``[-90, 90]`` or ``distance`` is not positive.
    """

    __slots__ = ('_pos', '_pm', '_has_distance', '_epoch', '_lon', '_lat', '_at_pole')

    def __init__(
        self,
        lon: float,
        lat: float,
        distance: float | None = None,
        pm_lon: float = 0.0,
        pm_lat: float = 0.0,
        rad_vel: float = 0.0,
        epoch: float = TAI_J2000,
    ) -> None:
        for label, value in (("lon", lon), ("lat", lat), ("pm_lon", pm_lon),
                             ("pm_lat", pm_lat), ("rad_vel", rad_vel), ("epoch", epoch)):
            if not math.isfinite(float(value)):
                raise ValueError(f"Coord {label} must be finite, got {value}")
        if not -90.0 <= float(lat) <= 90.0:
            raise ValueError(f"Coord lat must be in [-90, 90], got {lat}")
        if distance is not None and not (math.isfinite(float(distance)) and float(distance) > 0.0):
            raise ValueError(f"Coord distance must be finite and positive, got {distance}")

        has_distance = distance is not None
        scale = float(distance) if has_distance else 1.0

        u, e, n = _sph_basis(lon, lat)
        pos = scale * u
        pm = scale * AS2RAD * (pm_lon * e + pm_lat * n)
        if has_distance:
            pm = pm + rad_vel * _KMS_TO_AUYR * u

        self._set(pos, pm, has_distance, epoch)

    def _set(self, pos, pm, has_distance, epoch) -> None:
        _float = get_dtype()
        self._pos = jnp.asarray(pos, dtype=_float)
        self._pm = jnp.asarray(pm, dtype=_float)
        self._has_distance = bool(has_distance)
        self._epoch = epoch

        u = self._pos / jnp.linalg.norm(self._pos)
        rxy, theta, at_pole = polar_from_xy(u[0], u[1])
        self._lon = wrap_pos(theta)
        self._lat = atan2d(u[2], rxy)
        self._at_pole = at_pole

    @classmethod
    def _from_internal(cls, pos, pm, has_distance: bool, epoch) -> Coord:
        """Create from raw vectors without validation.

        Used by pytree unflatten and by frame conversions.
        """
        obj = object.__new__(cls)
        obj._set(pos, pm, has_distance, epoch)
        return obj

    # Factory methods

    @classmethod
    def from_parallax(
        cls,
        lon: float,
        lat: float,
        parallax: float = 0.0,
        pm_lon: float = 0.0,
        pm_lat: float = 0.0,
        rad_vel: float = 0.0,
        epoch: float = TAI_J2000,
    ) -> Coord:
        """Create from catalog quantities, with distance given as parallax.

        Args:
            lon (float): Longitude-like angle (deg).
            lat (float): Latitude-like angle (deg).
            parallax (float): Parallax (arcsec).  Values below
                ``MIN_PARALLAX`` mean the distance is undefined.
            pm_lon (float): Proper motion in longitude (arcsec/yr, includes cos(lat)).
            pm_lat (float): Proper motion in latitude (arcsec/yr).
            rad_vel (float): Radial velocity (km/s).
            epoch (float): TAI MJD seconds.

        Returns:
            Coord: New instance.
        """
        distance = RAD2AS / parallax if parallax >= MIN_PARALLAX else None
        return cls(lon, lat, distance, pm_lon, pm_lat, rad_vel, epoch)

    @classmethod
    def from_vectors(cls, pos: ArrayLike, pm: ArrayLike, has_distance: bool, epoch: float) -> Coord:
        """Create from cartesian position and proper-motion vectors.

        Args:
            pos: Position, shape ``(3,)``; AU if ``has_distance`` else any
                nonzero length.
            pm: Space velocity, shape ``(3,)``; AU/yr if ``has_distance``,
                else per unit of ``pos`` per year.
            has_distance: Whether the length of ``pos`` is meaningful.
            epoch: TAI MJD seconds.

        Returns:
            Coord: New instance.

        Raises:
            ValueError: If ``pos`` is zero or non-finite.
        """
        pos = jnp.asarray(pos, dtype=get_dtype())
        pm = jnp.asarray(pm, dtype=get_dtype())
        if not bool(jnp.all(jnp.isfinite(pos))) or not bool(jnp.all(jnp.isfinite(pm))):
            raise ValueError("Coord vectors must be finite")
        norm = jnp.linalg.norm(pos)
        if not bool(norm > 0.0):
            raise ValueError("Coord position vector must be nonzero")
        if not has_distance:
            pm = pm / norm
            pos = pos / norm
        return cls._from_internal(pos, pm, has_distance, epoch)

    # Properties

    @property
    def lon(self) -> float:
        """Longitude-like angle in ``[0, 360)`` deg (0 when :attr:`at_pole`)."""
        return float(self._lon)

    @property
    def lat(self) -> float:
        """Latitude-like angle in ``[-90, 90]`` deg."""
        return float(self._lat)

    @property
    def at_pole(self) -> bool:
        """``True`` if the position is so near a pole that ``lon`` is meaningless."""
        return bool(self._at_pole)

    @property
    def has_distance(self) -> bool:
        """``True`` if the distance is defined."""
        return self._has_distance

    @property
    def distance(self) -> float | None:
        """Distance in AU, or ``None`` if undefined."""
        if not self._has_distance:
            return None
        return float(jnp.linalg.norm(self._pos))

    @property
    def parallax(self) -> float:
        """Parallax in arcsec (0 if the distance is undefined)."""
        if not self._has_distance:
            return 0.0
        return float(RAD2AS / jnp.linalg.norm(self._pos))

    @property
    def epoch(self) -> float:
        """Date at which the position applies, TAI MJD seconds."""
        return float(self._epoch)

    @property
    def vector(self) -> jax.Array:
        """Position vector, shape ``(3,)``: AU, or unit length if no distance."""
        return self._pos

    @property
    def unit_vector(self) -> jax.Array:
        """Unit position vector, shape ``(3,)``."""
        return self._pos / jnp.linalg.norm(self._pos)

    @property
    def pm_vector(self) -> jax.Array:
        """Space-velocity vector, shape ``(3,)``, per Julian year."""
        return self._pm

    def _pm_components(self) -> tuple[float, float, float]:
        """Return (pm_lon arcsec/yr, pm_lat arcsec/yr, rad_vel km/s).

        All zero when the distance is undefined, since proper motion does
        not apply then.
        """
        if not self._has_distance:
            return 0.0, 0.0, 0.0
        r = jnp.linalg.norm(self._pos)
        u, e, n = _sph_basis(self._lon, self._lat)
        pm_lon = jnp.dot(self._pm, e) / r * RAD2AS
        pm_lat = jnp.dot(self._pm, n) / r * RAD2AS
        rad_vel = jnp.dot(self._pm, u) / _KMS_TO_AUYR
        return float(pm_lon), float(pm_lat), float(rad_vel)

    @property
    def pm_lon(self) -> float:
        """Proper motion in longitude, ``dlon/dt * cos(lat)`` (arcsec/yr); 0 if the distance is undefined."""
        return self._pm_components()[0]

    @property
    def pm_lat(self) -> float:
        """Proper motion in latitude (arcsec/yr); 0 if the distance is undefined."""
        return self._pm_components()[1]

    @property
    def rad_vel(self) -> float:
        """Radial velocity (km/s); 0 if the distance is undefined."""
        return self._pm_components()[2]

    # Time evolution

    def sph_pvt(self) -> tuple[PVT, PVT, PVT | None]:
        """Spherical components as PVTs referenced to :attr:`epoch`.

        Velocities are per second of TAI: deg/s for the angles and AU/s for
        the distance.  The longitude rate is 0 at a pole.

        Returns:
            ``(lon, lat, distance)``; ``distance`` is ``None`` if undefined.
        """
        pm_lon, pm_lat, rad_vel = self._pm_components()
        lon, lat, epoch = self.lon, self.lat, self.epoch

        cos_lat = float(cosd(lat))
        lon_rate = 0.0 if self.at_pole else pm_lon / cos_lat / 3600.0 / SEC_PER_YEAR
        lon_pvt = PVT(lon, lon_rate, epoch)
        lat_pvt = PVT(lat, pm_lat / 3600.0 / SEC_PER_YEAR, epoch)

        dist_pvt = None
        if self._has_distance:
            dist_pvt = PVT(self.distance, rad_vel / KM_PER_AU, epoch)
        return lon_pvt, lat_pvt, dist_pvt

    def position_at(self, tai: float) -> tuple[float, float, float | None]:
        """Evaluate the position at another date with the linear PVT model.

        When the distance is undefined proper motion does not apply and the
        stored position is returned unchanged.

        Args:
            tai: TAI MJD seconds.

        Returns:
            ``(lon, lat, distance)``; ``distance`` is ``None`` if undefined.
        """
        if not self._has_distance:
            return self.lon, self.lat, None

        lon_pvt, lat_pvt, dist_pvt = self.sph_pvt()
        lon = float(lon_pvt.value_at(tai))
        lat = float(lat_pvt.value_at(tai))
        # Motion carried over a pole
        if lat > 90.0:
            lat, lon = 180.0 - lat, lon + 180.0
        elif lat < -90.0:
            lat, lon = -180.0 - lat, lon + 180.0
        return float(wrap_pos(lon)), lat, float(dist_pvt.value_at(tai))

    def with_proper_motion_applied(self, tai: float) -> Coord:
        """Propagate the position to another date by linear space motion.

        When the distance is undefined the direction is unchanged and only
        the epoch moves.

        Args:
            tai: TAI MJD seconds.

        Returns:
            Coord: Position at ``tai``.
        """
        if not self._has_distance:
            return Coord._from_internal(self._pos, self._pm, False, tai)
        dt_years = (tai - self._epoch) / SEC_PER_YEAR
        return Coord._from_internal(self._pos + self._pm * dt_years, self._pm, True, tai)

    def with_proper_motion_removed(self) -> Coord:
        """Return a copy with zero proper motion and radial velocity."""
        return Coord._from_internal(self._pos, jnp.zeros(3, dtype=get_dtype()), self._has_distance, self._epoch)

    def angular_sep(self, other: Coord) -> float:
        """Angular separation from another coord, in degrees."""
        u1 = self.unit_vector
        u2 = other.unit_vector
        return float(atan2d(jnp.linalg.norm(jnp.cross(u1, u2)), jnp.dot(u1, u2)))

    # String representations

    def __str__(self) -> str:
        dist = "None" if not self._has_distance else f"{self.distance:.6e}"
        return f"Coord(lon={self.lon:.9f}, lat={self.lat:.9f}, distance={dist})"

    def __repr__(self) -> str:
        pm_lon, pm_lat, rad_vel = self._pm_components()
        return (
            f"Coord(lon={self.lon}, lat={self.lat}, distance={self.distance}, "
            f"pm_lon={pm_lon}, pm_lat={pm_lat}, rad_vel={rad_vel}, epoch={self.epoch})"
        )


# Register as JAX pytree
jax.tree_util.register_pytree_node(
    Coord,
    lambda c: ((c._pos, c._pm, c._epoch), c._has_distance),
    lambda has_distance, children: Coord._from_internal(children[0], children[1], has_distance, children[2]),
)
