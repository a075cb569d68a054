"""
coordconv converts celestial coordinates between mean, apparent and observed reference frames, implemented in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    AS2RAD,
    RAD2AS,
    JD_MJD_OFFSET,
    MJD2000,
    TAI_J2000,
    C_LIGHT,
    AU,
    WGS84_a,
    WGS84_f,
    OMEGA_EARTH,
    DOUBLE_EPSILON,
    DOUBLE_MAX,
    DOUBLE_MIN,
    DOUBLE_NAN,
)

from .config import (
    set_dtype,
    get_dtype,
    set_refraction_floor,
    get_refraction_floor,
    set_min_site_elevation,
    get_min_site_elevation,
)

from .math_utils import (
    wrap_pos,
    wrap_ctr,
    wrap_near,
    polar_from_xy,
    xy_from_polar,
    rot_2d,
    compute_rotation_matrix,
)

from .rotations import Rx, Ry, Rz

from .time import (
    tai_from_caldate,
    julian_epoch_from_tai,
    tai_from_julian_epoch,
    besselian_from_julian_epoch,
    julian_from_besselian_epoch,
)

from .pvt import PVT
from .coord import Coord
from .site import Site
from .refraction import model_limit, refraction, unrefract

from .coordsys import (
    CoordSys,
    FrameFamily,
    ICRS,
    FK5,
    FK4,
    Galactic,
    AppGeo,
    AppTopo,
    Obs,
    Other,
    NoneCoordSys,
    make_coord_sys,
)

from .convert import convert, convert_pvt

__all__ = [
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "AS2RAD",
    "RAD2AS",
    "JD_MJD_OFFSET",
    "MJD2000",
    "TAI_J2000",
    "C_LIGHT",
    "AU",
    "WGS84_a",
    "WGS84_f",
    "OMEGA_EARTH",
    "DOUBLE_EPSILON",
    "DOUBLE_MAX",
    "DOUBLE_MIN",
    "DOUBLE_NAN",
    # Config
    "set_dtype",
    "get_dtype",
    "set_refraction_floor",
    "get_refraction_floor",
    "set_min_site_elevation",
    "get_min_site_elevation",
    # Math utilities
    "wrap_pos",
    "wrap_ctr",
    "wrap_near",
    "polar_from_xy",
    "xy_from_polar",
    "rot_2d",
    "compute_rotation_matrix",
    "Rx",
    "Ry",
    "Rz",
    # Time
    "tai_from_caldate",
    "julian_epoch_from_tai",
    "tai_from_julian_epoch",
    "besselian_from_julian_epoch",
    "julian_from_besselian_epoch",
    # Values
    "PVT",
    "Coord",
    "Site",
    "refraction",
    "unrefract",
    "model_limit",
    # Coordinate systems
    "CoordSys",
    "FrameFamily",
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
    # Conversion
    "convert",
    "convert_pvt",
]
