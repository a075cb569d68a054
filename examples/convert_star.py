# /// script
# requires-python = ">=3.10"
# dependencies = ["typer>=0.9.0", "coordconv"]
#
# [tool.uv.sources]
# coordconv = { path = ".." }
# ///
"""Convert a star position between coordinate systems and track it.

Converts a position from one coordinate system to another at a sequence of
dates, printing the converted position and its rate of change at each step.
Observed and topocentric systems need an observing site, given by
``--longitude``, ``--latitude`` and ``--elevation`` (plus weather options
for refraction).

Requires coordconv to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/convert_star.py LON LAT [OPTIONS]

Examples:
    # Sgr A* from ICRS to Galactic
    uv run examples/convert_star.py 266.41684 -29.00781 --to-sys gal

    # Vega as seen from Apache Point, every 10 minutes for an hour
    uv run examples/convert_star.py 279.2347 38.7837 --to-sys obs \\
        --longitude -105.82 --latitude 32.78 --elevation 2788 \\
        --date 2024-03-20T12:00:00 --step 600 --count 7

    # FK4 B1950 to FK5 J2000
    uv run examples/convert_star.py 0 0 --from-sys fk4 --from-date 1950 --to-sys fk5
"""

import logging
from datetime import datetime
from typing import Annotated

import jax.numpy as jnp
import typer

from coordconv import Coord, Site, convert_pvt, make_coord_sys, set_dtype
from coordconv.time import tai_from_caldate

set_dtype(jnp.float64)


def main(
    lon: Annotated[float, typer.Argument(help="Longitude in the source system (deg)")],
    lat: Annotated[float, typer.Argument(help="Latitude in the source system (deg)")],
    from_sys: Annotated[str, typer.Option(help="Source coordinate system")] = "icrs",
    from_date: Annotated[float | None, typer.Option(help="Source equinox or date")] = None,
    to_sys: Annotated[str, typer.Option(help="Destination coordinate system")] = "icrs",
    to_date: Annotated[float | None, typer.Option(help="Destination equinox or date")] = None,
    parallax: Annotated[float, typer.Option(help="Parallax (arcsec)")] = 0.0,
    pm_lon: Annotated[float, typer.Option(help="Proper motion in longitude, including cos(lat) (arcsec/yr)")] = 0.0,
    pm_lat: Annotated[float, typer.Option(help="Proper motion in latitude (arcsec/yr)")] = 0.0,
    rad_vel: Annotated[float, typer.Option(help="Radial velocity (km/s)")] = 0.0,
    date: Annotated[str, typer.Option(help="First conversion date, ISO 8601 on the TAI scale")] = "2024-03-20T04:00:00",
    step: Annotated[float, typer.Option(help="Time between conversions in seconds")] = 3600.0,
    count: Annotated[int, typer.Option(help="Number of conversions")] = 1,
    longitude: Annotated[float | None, typer.Option(help="Site longitude, east positive (deg)")] = None,
    latitude: Annotated[float | None, typer.Option(help="Site geodetic latitude (deg)")] = None,
    elevation: Annotated[float, typer.Option(help="Site elevation above the WGS84 ellipsoid (m)")] = 0.0,
    pressure: Annotated[float, typer.Option(help="Air pressure (hPa)")] = 1013.25,
    temperature: Annotated[float, typer.Option(help="Air temperature (C)")] = 10.0,
    humidity: Annotated[float, typer.Option(help="Relative humidity (0-1)")] = 0.5,
    verbose: Annotated[bool, typer.Option(help="Log each conversion")] = False,
):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    src = make_coord_sys(from_sys, from_date)
    dst = make_coord_sys(to_sys, to_date)

    site = None
    if longitude is not None and latitude is not None:
        site = Site(
            longitude,
            latitude,
            elevation=elevation,
            pressure=pressure,
            temperature=temperature,
            humidity=humidity,
        )
    elif src.needs_site or dst.needs_site:
        print(f"ERROR: {src} -> {dst} needs --longitude and --latitude. Exiting.")
        raise typer.Exit(code=1)

    coord = Coord.from_parallax(lon, lat, parallax=parallax, pm_lon=pm_lon, pm_lat=pm_lat, rad_vel=rad_vel)

    t = datetime.fromisoformat(date)
    tai0 = float(tai_from_caldate(t.year, t.month, t.day, t.hour, t.minute, t.second + t.microsecond * 1e-6))

    print(f"Converting {coord} from {src} to {dst}")
    if site is not None:
        print(f"  Site: {site.longitude:.4f} E, {site.latitude:.4f} N, {site.elevation:.0f} m")
    print()
    print("TAI - start (s)       lon (deg)       lat (deg)   dlon/dt (as/s)  dlat/dt (as/s)")

    for i in range(count):
        tai = tai0 + i * step
        try:
            lon_pvt, lat_pvt = convert_pvt(coord, src, dst, tai, site)
        except ValueError as exc:
            print(f"{tai - tai0:16.1f}  {exc}")
            continue
        print(
            f"{tai - tai0:16.1f}  {lon_pvt.value:14.8f}  {lat_pvt.value:14.8f}"
            f"  {lon_pvt.velocity * 3600.0:14.6f}  {lat_pvt.velocity * 3600.0:14.6f}"
        )


if __name__ == "__main__":
    typer.run(main)
