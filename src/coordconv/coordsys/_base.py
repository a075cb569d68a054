"""Coordinate system base class.

Every coordinate system converts coordinates to and from one common frame,
the ICRS at the date of conversion.  Converting from system A to system B
is always ``B.convert_from(A.convert_to(coord, tai, site), tai, site)``,
so adding a system only requires its two conversions.

The set of systems is closed: subclasses may only be defined inside the
:mod:`coordconv.coordsys` package.
"""

from __future__ import annotations

import dataclasses
import enum
from abc import ABC, abstractmethod
from typing import ClassVar

from coordconv.coord import Coord
from coordconv.site import Site


class FrameFamily(enum.Enum):
    """Kind of coordinate system."""

    MEAN = "mean"
    APPARENT = "apparent"
    OTHER = "other"
    NONE = "none"


class CoordSys(ABC):
    """Abstract coordinate system.

    Concrete systems are frozen dataclasses, so instances are immutable and
    may be shared freely between conversions.

    Attributes:
        name: Lower-case name of the system.
        family: :class:`FrameFamily` of the system.
        date: Equinox in years for FK5 (Julian) and FK4 (Besselian),
            otherwise ``None``.
        needs_site: ``True`` if conversions require a :class:`~coordconv.site.Site`.
    """

    name: ClassVar[str]
    family: ClassVar[FrameFamily]
    needs_site: ClassVar[bool] = False
    has_date: ClassVar[bool] = False

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if not cls.__module__.startswith(__package__ + "."):
            raise TypeError(
                f"{cls.__qualname__}: coordinate systems must be defined in {__package__}"
            )

    @abstractmethod
    def convert_to(self, coord: Coord, tai: float, site: Site | None = None) -> Coord:
        """Convert a coord in this system to the ICRS at ``tai``.

        Args:
            coord: Position in this system.
            tai: Date of conversion, TAI MJD seconds.
            site: Observing site; required when :attr:`needs_site`.

        Returns:
            Coord: ICRS position with epoch ``tai``.
        """

    @abstractmethod
    def convert_from(self, coord: Coord, tai: float, site: Site | None = None) -> Coord:
        """Convert a coord in the ICRS to this system at ``tai``.

        Args:
            coord: ICRS position.
            tai: Date of conversion, TAI MJD seconds.
            site: Observing site; required when :attr:`needs_site`.

        Returns:
            Coord: Position in this system with epoch ``tai``.
        """

    def copy(self, date: float | None = None) -> CoordSys:
        """Return a copy, optionally with a different date.

        Args:
            date: New equinox; ``None`` keeps the current one.

        Raises:
            ValueError: If ``date`` is given for a system without a date.
        """
        if date is None:
            return dataclasses.replace(self)
        if not self.has_date:
            raise ValueError(f"Coordinate system {self.name!r} has no date")
        return dataclasses.replace(self, date=date)

    def _check_site(self, site: Site | None) -> Site:
        if site is None:
            raise ValueError(f"Coordinate system {self.name!r} requires a site")
        return site

    def __str__(self) -> str:
        if self.date is None:
            return self.name
        return f"{self.name}({self.date})"
