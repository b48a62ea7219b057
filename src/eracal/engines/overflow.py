"""
eracal.engines.overflow
-----------------------
The representable instant range and the clamping rules derived from it.

The engine addresses instants as signed 64-bit millisecond counts, so the
open era does not end on a calendar fact but where the count runs out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

from ..core.errors import CalendarOverflowError
from ..core.time import from_jdn, instant_from_jdn, jdn_from_instant
from ..core.types import Era

if TYPE_CHECKING:
    from .era_table import EraTable

logger = logging.getLogger(__name__)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class RepresentableBound:
    floor: int = INT64_MIN
    ceiling: int = INT64_MAX

    def __post_init__(self) -> None:
        if self.floor >= self.ceiling:
            raise ValueError("floor must be below ceiling")


def last_representable_year(ceiling: int) -> int:
    """Gregorian year of the day containing the ceiling instant."""
    return from_jdn(jdn_from_instant(ceiling))[0]


def open_era_max_year(era: Era, ceiling: int) -> int:
    """Largest era-year of ``era`` whose January 1 is at or before ``ceiling``."""
    return era.era_year(last_representable_year(ceiling))


class OverflowGuard:
    def __init__(self, table: "EraTable"):
        self.table = table
        self.bound = table.bound

    @property
    def max_representable_instant(self) -> int:
        return self.bound.ceiling

    @property
    def min_representable_instant(self) -> int:
        # Era-years start at 1, so nothing before year 1 of the first era resolves.
        return max(self.bound.floor, instant_from_jdn(self.table[0].first_jdn))

    @property
    def ceiling_jdn(self) -> int:
        return jdn_from_instant(self.max_representable_instant)

    @property
    def floor_jdn(self) -> int:
        return jdn_from_instant(self.min_representable_instant)

    def check_instant(self, instant: int) -> int:
        lo, hi = self.min_representable_instant, self.max_representable_instant
        if not lo <= instant <= hi:
            raise CalendarOverflowError(f"Instant {instant} outside representable range [{lo}, {hi}]")
        return instant

    def clamp_instant(self, instant: int) -> Tuple[int, bool]:
        """
        Saturating counterpart of check_instant for callers that prefer the
        nearest representable instant to an error. The flag reports a clamp.
        """
        lo, hi = self.min_representable_instant, self.max_representable_instant
        if instant > hi:
            return hi, True
        if instant < lo:
            return lo, True
        return instant, False

    def max_era_year(self, era: Era) -> int:
        if era.is_open:
            return self.table.open_era_max_year()
        return era.era_year(from_jdn(self.table.last_jdn(era))[0])

    def clamp_era_year(self, era: Era, candidate: int) -> Tuple[int, bool]:
        """Pin ``candidate`` into 1..max_era_year(era), flagging any change."""
        hi = self.max_era_year(era)
        if candidate > hi:
            logger.debug("clamped %s year %d to %d", era.name, candidate, hi)
            return hi, True
        if candidate < 1:
            return 1, True
        return candidate, False
