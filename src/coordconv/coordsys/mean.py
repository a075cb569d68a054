"""Mean (catalog) coordinate systems: ICRS, FK5, FK4 and Galactic.

Conversion propagates the position by its space motion to the date of
conversion, then applies a fixed (or equinox-dependent) rotation to the
position and proper-motion vectors.
"""

from __future__ import annotations

import math
from abc import abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

import jax.numpy as jnp
from jax import Array

from coordconv.config import get_dtype
from coordconv.coord import Coord
from coordconv.coordsys._base import CoordSys, FrameFamily
from coordconv.frames import (
    add_eterms,
    remove_eterms,
    rotation_fk4_to_fk5_j2000,
    rotation_fk5_to_icrs,
    rotation_galactic_to_icrs,
    rotation_icrs_to_fk5,
    rotation_icrs_to_galactic,
)
from coordconv.site import Site
from coordconv.sofa import bias_matrix
from coordconv.time import julian_epoch_from_tai


def _check_equinox(name: str, date: float) -> None:
    if not math.isfinite(date):
        raise ValueError(f"{name} equinox must be finite, got {date}")


class MeanCoordSys(CoordSys):
    """Mean coordinate system defined by a rotation from the ICRS."""

    family: ClassVar[FrameFamily] = FrameFamily.MEAN

    @abstractmethod
    def rotation_to_icrs(self) -> Array:
        """Rotation matrix from this system to the ICRS."""

    def rotation_from_icrs(self) -> Array:
        """Rotation matrix from the ICRS to this system."""
        return self.rotation_to_icrs().T

    def convert_to(self, coord: Coord, tai: float, site: Site | None = None) -> Coord:
        coord = coord.with_proper_motion_applied(tai)
        rot = self.rotation_to_icrs()
        return Coord._from_internal(rot @ coord.vector, rot @ coord.pm_vector, coord.has_distance, tai)

    def convert_from(self, coord: Coord, tai: float, site: Site | None = None) -> Coord:
        coord = coord.with_proper_motion_applied(tai)
        rot = self.rotation_from_icrs()
        return Coord._from_internal(rot @ coord.vector, rot @ coord.pm_vector, coord.has_distance, tai)


@dataclass(frozen=True)
class ICRS(MeanCoordSys):
    """International Celestial Reference System; the common frame."""

    name: ClassVar[str] = "icrs"
    date: None = field(default=None, init=False)

    def rotation_to_icrs(self) -> Array:
        return jnp.eye(3, dtype=get_dtype())


@dataclass(frozen=True)
class FK5(MeanCoordSys):
    """FK5 mean equator and equinox.

    Args:
        date: Julian equinox in years. Default: ``2000.0``
    """

    name: ClassVar[str] = "fk5"
    has_date: ClassVar[bool] = True
    date: float = 2000.0

    def __post_init__(self) -> None:
        _check_equinox("FK5", self.date)

    def rotation_to_icrs(self) -> Array:
        return rotation_fk5_to_icrs(self.date)

    def rotation_from_icrs(self) -> Array:
        return rotation_icrs_to_fk5(self.date)


@dataclass(frozen=True)
class FK4(MeanCoordSys):
    """FK4 mean equator and equinox, with E-terms of aberration.

    The FK4 system rotates slowly relative to the ICRS, so the rotation
    also depends on the date of conversion.

    Args:
        date: Besselian equinox in years. Default: ``1950.0``
    """

    name: ClassVar[str] = "fk4"
    has_date: ClassVar[bool] = True
    date: float = 1950.0

    def __post_init__(self) -> None:
        _check_equinox("FK4", self.date)

    def rotation_to_icrs(self, tai: float | None = None) -> Array:
        """Transformation from this system (E-terms removed) to the ICRS.

        Not orthogonal; see :func:`~coordconv.frames.rotation_fk4_to_fk5_j2000`.

        Args:
            tai: Date of the position, TAI MJD seconds.  ``None`` means B1950.
        """
        epoch = 1950.0 if tai is None else julian_epoch_from_tai(tai)
        return bias_matrix().T @ rotation_fk4_to_fk5_j2000(self.date, epoch)

    def rotation_from_icrs(self, tai: float | None = None) -> Array:
        return jnp.linalg.inv(self.rotation_to_icrs(tai))

    def convert_to(self, coord: Coord, tai: float, site: Site | None = None) -> Coord:
        coord = coord.with_proper_motion_applied(tai)
        mat = self.rotation_to_icrs(tai)
        radius = jnp.linalg.norm(coord.vector)

        u = mat @ remove_eterms(coord.unit_vector)
        pos = radius * u / jnp.linalg.norm(u)
        return Coord._from_internal(pos, mat @ coord.pm_vector, coord.has_distance, tai)

    def convert_from(self, coord: Coord, tai: float, site: Site | None = None) -> Coord:
        coord = coord.with_proper_motion_applied(tai)
        mat = self.rotation_from_icrs(tai)
        radius = jnp.linalg.norm(coord.vector)

        u = mat @ coord.unit_vector
        pos = radius * add_eterms(u / jnp.linalg.norm(u))
        return Coord._from_internal(pos, mat @ coord.pm_vector, coord.has_distance, tai)


@dataclass(frozen=True)
class Galactic(MeanCoordSys):
    """Galactic coordinates (IAU 1958 definition referred to the ICRS)."""

    name: ClassVar[str] = "gal"
    date: None = field(default=None, init=False)

    def rotation_to_icrs(self) -> Array:
        return rotation_galactic_to_icrs()

    def rotation_from_icrs(self) -> Array:
        return rotation_icrs_to_galactic()
