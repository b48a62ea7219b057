from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Tuple

from .time import day_of_week, instant_from_jdn, jdn_from_instant, to_jdn

Field = Literal[
    "era",
    "year",
    "month",
    "day_of_month",
    "day_of_year",
    "day_of_week_in_month",
    "week_of_year",
    "week_of_month",
]

FIELDS: Tuple[str, ...] = (
    "era",
    "year",
    "month",
    "day_of_month",
    "day_of_year",
    "day_of_week_in_month",
    "week_of_year",
    "week_of_month",
)

@dataclass(frozen=True)
class CalendarId:
    family: Literal["imperial", "gregorian", "custom"]
    name: str
    version: str

@dataclass(frozen=True)
class Era:
    """
    One row of an era table.

    ``since`` is the first instant of the era, or None for the proleptic era
    that extends into the unbounded past. ``year_origin`` is the Gregorian
    year that the era numbers as year 1. Only the last era of a table is open.
    """
    name: str
    abbr: str
    index: int
    since: Optional[int]
    year_origin: int
    is_open: bool = False

    @property
    def is_proleptic(self) -> bool:
        return self.since is None

    @property
    def first_jdn(self) -> int:
        """First day of era-year 1."""
        if self.since is None:
            return to_jdn(self.year_origin, 1, 1)
        return jdn_from_instant(self.since)

    def absolute_year(self, era_year: int) -> int:
        return self.year_origin + era_year - 1

    def era_year(self, absolute_year: int) -> int:
        return absolute_year - self.year_origin + 1

@dataclass(frozen=True)
class ResolvedDate:
    calendar: CalendarId
    era: Era
    year: int
    month: int
    day: int
    millis: int = 0  # time of day

    @property
    def absolute_year(self) -> int:
        return self.era.absolute_year(self.year)

    @property
    def jdn(self) -> int:
        return to_jdn(self.absolute_year, self.month, self.day)

    @property
    def day_of_year(self) -> int:
        """Day number counted from the era-year's own first day."""
        first = to_jdn(self.absolute_year, 1, 1)
        if self.year == 1:
            first = max(first, self.era.first_jdn)
        return self.jdn - first + 1

    @property
    def day_of_week(self) -> int:
        return day_of_week(self.jdn)

    @property
    def day_of_week_in_month(self) -> int:
        """1 for the first seven days of the month, 2 for the next seven, ..."""
        return (self.day - 1) // 7 + 1

    def local_instant(self) -> int:
        return instant_from_jdn(self.jdn) + self.millis

    def label(self) -> str:
        tag = self.era.abbr or self.era.name
        return f"{tag}{self.year}.{self.month:02d}.{self.day:02d}"

@dataclass(frozen=True)
class Span:
    """
    Era-truncated range of days (JDN, inclusive) covered by one era-year or
    one month.

    ``natural_first``/``natural_last`` are the untruncated Gregorian limits of
    the same period. ``anchor`` is the day numbered 1 (the later of the
    natural start and the era start); it differs from ``first`` only when the
    representable floor cuts the period.
    """
    first: int
    last: int
    natural_first: int
    natural_last: int
    anchor: int
    starts_era: bool = False
    ends_era: bool = False
    clamped: bool = False

    @property
    def truncated_start(self) -> bool:
        return self.first > self.natural_first

    @property
    def truncated_end(self) -> bool:
        return self.last < self.natural_last

    @property
    def length(self) -> int:
        return self.last - self.first + 1

@dataclass(frozen=True)
class FieldRange:
    """
    Bounds of one field at one date.

    ``minimum``/``maximum`` are the Gregorian bounds of the date's own period
    (a 366-day year, a 53-week year, ...). ``greatest_minimum``/``least_maximum``
    are calendar-wide: no era-truncated period has an actual minimum above
    the former or an actual maximum below the latter. ``clamped`` marks
    actual bounds cut by the representable floor or ceiling.
    """
    field: str
    minimum: int
    greatest_minimum: int
    least_maximum: int
    maximum: int
    actual_minimum: int
    actual_maximum: int
    clamped: bool = False

    def __contains__(self, value: int) -> bool:
        return self.actual_minimum <= value <= self.actual_maximum

@dataclass(frozen=True)
class DayInfo:
    instant: int
    date: ResolvedDate
    day_of_year: int
    week_of_year: int
    week_of_month: int
    day_of_week: int
    attributes: Optional[Dict[str, Any]] = None
