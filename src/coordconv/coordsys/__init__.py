"""Coordinate systems.

Mean systems (:class:`ICRS`, :class:`FK5`, :class:`FK4`, :class:`Galactic`),
apparent systems (:class:`AppGeo`, :class:`AppTopo`, :class:`Obs`) and the
passthrough systems :class:`Other` and :class:`NoneCoordSys`.  Every
system converts to and from the ICRS.
"""

from coordconv.coordsys._base import CoordSys, FrameFamily
from coordconv.coordsys.apparent import AppGeo, AppTopo, Obs
from coordconv.coordsys.factory import make_coord_sys
from coordconv.coordsys.mean import FK4, FK5, ICRS, Galactic, MeanCoordSys
from coordconv.coordsys.other import NoneCoordSys, Other

__all__ = [
    "CoordSys",
    "FrameFamily",
    "MeanCoordSys",
    "ICRS",
    "FK5",
    "FK4",
    "Galactic",
    "AppGeo",
    "AppTopo",
    "Obs",
    "Other",
    "NoneCoordSys",
    "make_coord_sys",
]
