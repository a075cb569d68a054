"""Passthrough coordinate systems: Other and None.

Both leave coordinates untouched.  ``Other`` labels coordinates expressed
in an externally defined system (for example instrument axes); ``None``
marks coordinates with no system at all.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import ClassVar

from coordconv.coord import Coord
from coordconv.coordsys._base import CoordSys, FrameFamily
from coordconv.site import Site


@dataclass(frozen=True)
class Other(CoordSys):
    """Externally defined coordinate system.

    Args:
        name: Label for the system. Default: ``"other"``
        date: Optional date carried along for the caller; not used in
            conversions.
    """

    family: ClassVar[FrameFamily] = FrameFamily.OTHER
    has_date: ClassVar[bool] = True
    name: str = "other"
    date: float | None = None

    def __post_init__(self) -> None:
        if self.date is not None and not math.isfinite(self.date):
            raise ValueError(f"Other date must be finite, got {self.date}")

    def convert_to(self, coord: Coord, tai: float, site: Site | None = None) -> Coord:
        return coord

    def convert_from(self, coord: Coord, tai: float, site: Site | None = None) -> Coord:
        return coord


@dataclass(frozen=True)
class NoneCoordSys(CoordSys):
    """No coordinate system."""

    name: ClassVar[str] = "none"
    family: ClassVar[FrameFamily] = FrameFamily.NONE
    date: None = field(default=None, init=False)

    def convert_to(self, coord: Coord, tai: float, site: Site | None = None) -> Coord:
        return coord

    def convert_from(self, coord: Coord, tai: float, site: Site | None = None) -> Coord:
        return coord
