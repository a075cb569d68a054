"""Conversion between coordinate systems.

All conversions go through the ICRS at the date of conversion::

    to_sys.convert_from(from_sys.convert_to(coord, tai, site), tai, site)

so each coordinate system only knows how to reach the ICRS.
"""

from __future__ import annotations

import logging

from coordconv.coord import Coord
from coordconv.coordsys import CoordSys
from coordconv.math_utils import wrap_near, wrap_pos
from coordconv.pvt import PVT
from coordconv.site import Site

logger = logging.getLogger(__name__)

DELTA_T = 0.01
"""Time step used to difference conversions into PVTs. Units: *s*"""


def convert(
    coord: Coord,
    from_sys: CoordSys,
    to_sys: CoordSys,
    tai: float,
    site: Site | None = None,
) -> Coord:
    """Convert a coord from one coordinate system to another.

    Args:
        coord: Position in ``from_sys``.
        from_sys: Coordinate system of ``coord``.
        to_sys: Desired coordinate system.
        tai: Date of conversion, TAI as Modified Julian Date in seconds.
        site: Observing site; required if either system needs one.

    Returns:
        Coord: Position in ``to_sys`` with epoch ``tai``.

    Raises:
        ValueError: If a required site is missing, or an observed elevation
            is below the refraction floor.

    Examples:
        ```python
        from coordconv import FK5, Coord, Galactic, convert
        from coordconv.time import tai_from_julian_epoch
        gal = convert(Coord(266.405, -28.936), FK5(), Galactic(), tai_from_julian_epoch(2000.0))
        ```
    """
    logger.debug("Converting %s -> %s at TAI %.3f", from_sys, to_sys, float(tai))
    icrs = from_sys.convert_to(coord, tai, site)
    return to_sys.convert_from(icrs, tai, site)


def convert_pvt(
    coord: Coord,
    from_sys: CoordSys,
    to_sys: CoordSys,
    tai: float,
    site: Site | None = None,
    delta_t: float = DELTA_T,
) -> tuple[PVT, PVT]:
    """Convert a coord and return its spherical position as PVTs.

    The conversion is run at ``tai`` and ``tai + delta_t`` and differenced.
    The longitude at the second date is unwrapped next to the first, so the
    longitude velocity never contains a 360 degree jump.

    Args:
        coord: Position in ``from_sys``.
        from_sys: Coordinate system of ``coord``.
        to_sys: Desired coordinate system.
        tai: Date of conversion, TAI MJD seconds.
        site: Observing site; required if either system needs one.
        delta_t: Time step for differencing (s).

    Returns:
        ``(lon, lat)`` PVTs referenced to ``tai``, velocities in deg/s.
    """
    if not delta_t > 0.0:
        raise ValueError(f"delta_t must be positive, got {delta_t}")

    c0 = convert(coord, from_sys, to_sys, tai, site)
    c1 = convert(coord, from_sys, to_sys, tai + delta_t, site)

    lon0 = float(wrap_pos(c0.lon))
    lon1 = float(wrap_near(c1.lon, lon0))
    lon = PVT(lon0, (lon1 - lon0) / delta_t, tai)
    lat = PVT(c0.lat, (c1.lat - c0.lat) / delta_t, tai)
    return lon, lat
