"""Apparent coordinate systems: AppGeo, AppTopo and Obs.

Each system builds on the previous one:

- **AppGeo**: apparent geocentric RA/Dec on the true equator and equinox of
  date.  From the ICRS: annual parallax, light deflection by the Sun,
  annual aberration, then bias-precession-nutation.
- **AppTopo**: apparent topocentric azimuth/elevation.  From AppGeo:
  diurnal parallax, diurnal aberration, then Earth rotation and the site's
  horizon rotation.  Azimuth runs from North towards East.
- **Obs**: observed azimuth/elevation.  AppTopo with atmospheric refraction
  added to the elevation.

The inverse conversions undo each step in reverse order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar

import jax.numpy as jnp

from coordconv.constants import C_AU_PER_YEAR
from coordconv.coord import Coord
from coordconv.coordsys._base import CoordSys, FrameFamily
from coordconv.corrections import (
    apply_aberration,
    apply_light_deflection,
    observer_state,
    remove_light_deflection,
    rotation_icrs_to_true,
    rotation_true_to_horizon,
)
from coordconv.ephemerides import earth_heliocentric_state
from coordconv.refraction import refraction, unrefract
from coordconv.site import Site

logger = logging.getLogger(__name__)


def _with_lat(coord: Coord, lat: float) -> Coord:
    """Same coord with the latitude-like angle replaced."""
    return Coord(coord.lon, lat, coord.distance, coord.pm_lon, coord.pm_lat, coord.rad_vel, coord.epoch)


def _displace(coord: Coord, origin, beta, rot, tai: float) -> Coord:
    """Shift to a new origin, aberrate for velocity ``beta`` and rotate."""
    if coord.has_distance:
        pos = coord.vector - origin
    else:
        pos = coord.unit_vector
    radius = jnp.linalg.norm(pos)
    u = apply_aberration(pos / radius, beta)
    return Coord._from_internal(rot @ (radius * u), rot @ coord.pm_vector, coord.has_distance, tai)


def _undisplace(coord: Coord, origin, beta, rot, tai: float) -> Coord:
    """Inverse of :func:`_displace`; ``rot`` must be orthogonal."""
    pos = rot.T @ coord.vector
    radius = jnp.linalg.norm(pos)
    u = apply_aberration(pos / radius, -beta)
    if coord.has_distance:
        pos = radius * u + origin
    else:
        pos = u
    return Coord._from_internal(pos, rot.T @ coord.pm_vector, coord.has_distance, tai)


@dataclass(frozen=True)
class AppGeo(CoordSys):
    """Apparent geocentric coordinates."""

    name: ClassVar[str] = "geo"
    family: ClassVar[FrameFamily] = FrameFamily.APPARENT
    date: None = field(default=None, init=False)

    def convert_from(self, coord: Coord, tai: float, site: Site | None = None) -> Coord:
        coord = coord.with_proper_motion_applied(tai)
        earth_pos, earth_vel = earth_heliocentric_state(tai)

        if coord.has_distance:
            pos = coord.vector - earth_pos
        else:
            pos = coord.unit_vector
        radius = jnp.linalg.norm(pos)

        u = apply_light_deflection(pos / radius, earth_pos)
        u = apply_aberration(u, earth_vel / C_AU_PER_YEAR)

        rot = rotation_icrs_to_true(tai)
        return Coord._from_internal(rot @ (radius * u), rot @ coord.pm_vector, coord.has_distance, tai)

    def convert_to(self, coord: Coord, tai: float, site: Site | None = None) -> Coord:
        coord = coord.with_proper_motion_applied(tai)
        earth_pos, earth_vel = earth_heliocentric_state(tai)

        rot = rotation_icrs_to_true(tai)
        pos = rot.T @ coord.vector
        radius = jnp.linalg.norm(pos)

        u = apply_aberration(pos / radius, -earth_vel / C_AU_PER_YEAR)
        u = remove_light_deflection(u, earth_pos)

        if coord.has_distance:
            pos = radius * u + earth_pos
        else:
            pos = u
        return Coord._from_internal(pos, rot.T @ coord.pm_vector, coord.has_distance, tai)


@dataclass(frozen=True)
class AppTopo(CoordSys):
    """Apparent topocentric coordinates: azimuth and elevation."""

    name: ClassVar[str] = "topo"
    family: ClassVar[FrameFamily] = FrameFamily.APPARENT
    needs_site: ClassVar[bool] = True
    date: None = field(default=None, init=False)

    def convert_from(self, coord: Coord, tai: float, site: Site | None = None) -> Coord:
        site = self._check_site(site)
        geo = AppGeo().convert_from(coord, tai, site)

        obs_pos, obs_vel = observer_state(site, tai)
        rot = rotation_true_to_horizon(site, tai)
        return _displace(geo, obs_pos, obs_vel / C_AU_PER_YEAR, rot, tai)

    def convert_to(self, coord: Coord, tai: float, site: Site | None = None) -> Coord:
        site = self._check_site(site)
        coord = coord.with_proper_motion_applied(tai)

        obs_pos, obs_vel = observer_state(site, tai)
        rot = rotation_true_to_horizon(site, tai)
        geo = _undisplace(coord, obs_pos, obs_vel / C_AU_PER_YEAR, rot, tai)
        return AppGeo().convert_to(geo, tai, site)


@dataclass(frozen=True)
class Obs(CoordSys):
    """Observed coordinates: refracted azimuth and elevation.

    Conversions fail with ``ValueError`` below the refraction floor.
    """

    name: ClassVar[str] = "obs"
    family: ClassVar[FrameFamily] = FrameFamily.APPARENT
    needs_site: ClassVar[bool] = True
    date: None = field(default=None, init=False)

    def convert_from(self, coord: Coord, tai: float, site: Site | None = None) -> Coord:
        site = self._check_site(site)
        topo = AppTopo().convert_from(coord, tai, site)
        alt = topo.lat
        refracted = alt + refraction(alt, site)
        logger.debug("Refraction at %.6f deg elevation: %.3f arcsec", alt, (refracted - alt) * 3600.0)
        return _with_lat(topo, min(refracted, 90.0))

    def convert_to(self, coord: Coord, tai: float, site: Site | None = None) -> Coord:
        site = self._check_site(site)
        coord = coord.with_proper_motion_applied(tai)
        topo = _with_lat(coord, unrefract(coord.lat, site))
        return AppTopo().convert_to(topo, tai, site)
