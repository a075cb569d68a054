"""Construct coordinate systems by name."""

from __future__ import annotations

from coordconv.coordsys._base import CoordSys
from coordconv.coordsys.apparent import AppGeo, AppTopo, Obs
from coordconv.coordsys.mean import FK4, FK5, ICRS, Galactic
from coordconv.coordsys.other import NoneCoordSys, Other

_DATED = {
    "fk5": FK5,
    "fk4": FK4,
}

_UNDATED = {
    "icrs": ICRS,
    "gal": Galactic,
    "galactic": Galactic,
    "geo": AppGeo,
    "appgeo": AppGeo,
    "topo": AppTopo,
    "apptopo": AppTopo,
    "obs": Obs,
    "none": NoneCoordSys,
}


def make_coord_sys(name: str, date: float | None = None) -> CoordSys:
    """Create a coordinate system from its name.

    Args:
        name: Case-insensitive name: ``"icrs"``, ``"fk5"``, ``"fk4"``,
            ``"gal"``/``"galactic"``, ``"geo"``/``"appgeo"``,
            ``"topo"``/``"apptopo"``, ``"obs"``, ``"other"`` or ``"none"``.
        date: Equinox for FK5 (Julian) or FK4 (Besselian); ``None`` uses
            the default.  Must be ``None`` for systems without a date.

    Returns:
        CoordSys: New coordinate system.

    Raises:
        ValueError: If the name is unknown, or a date is given for a system
            without one.

    Examples:
        ```python
        from coordconv.coordsys import make_coord_sys
        fk4 = make_coord_sys("FK4", 1950.0)
        ```
    """
    key = name.strip().lower()

    if key in _DATED:
        cls = _DATED[key]
        return cls() if date is None else cls(date=float(date))
    if key == "other":
        return Other(date=None if date is None else float(date))
    if key in _UNDATED:
        if date is not None:
            raise ValueError(f"Coordinate system {name!r} does not take a date")
        return _UNDATED[key]()

    valid = sorted(set(_DATED) | set(_UNDATED) | {"other"})
    raise ValueError(f"Unknown coordinate system {name!r}. Must be one of {valid}")
