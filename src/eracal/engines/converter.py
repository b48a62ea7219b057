"""
eracal.engines.converter
------------------------
Maps (era, era-year, month, day) to absolute instants and back.

Era identity only changes how years are numbered: the leap pattern is the
proleptic Gregorian one in every era, and era-year N of an era is the
Gregorian year ``year_origin + N - 1``.
"""

from __future__ import annotations

from ..core.errors import CalendarOverflowError, InvalidDateError
from ..core.time import MS_PER_DAY, from_jdn, instant_from_jdn, jdn_from_instant, month_length, to_jdn
from ..core.types import CalendarId, Era, ResolvedDate
from .era_table import EraTable
from .overflow import OverflowGuard


class DateConverter:
    def __init__(self, table: EraTable, guard: OverflowGuard, calendar_id: CalendarId):
        self.table = table
        self.guard = guard
        self.calendar_id = calendar_id

    # ---------------------------------------------------------
    # Forward: era date to day / instant
    # ---------------------------------------------------------

    def to_jdn(self, era: Era, era_year: int, month: int, day: int) -> int:
        """Validated JDN of an era date. Raises InvalidDateError or CalendarOverflowError."""
        if era_year < 1:
            raise InvalidDateError(f"{era.name} {era_year}: era years start at 1")
        if not 1 <= month <= 12:
            raise InvalidDateError(f"{era.name} {era_year}: month {month} not in 1..12")

        y = era.absolute_year(era_year)
        n = month_length(y, month)
        if not 1 <= day <= n:
            raise InvalidDateError(f"{era.name} {era_year}-{month:02d}: day {day} not in 1..{n}")

        jdn = to_jdn(y, month, day)
        if jdn > self.guard.ceiling_jdn or jdn < self.guard.floor_jdn:
            raise CalendarOverflowError(f"{era.name} {era_year}-{month:02d}-{day:02d} is not representable")
        if jdn < era.first_jdn:
            raise InvalidDateError(f"{era.name} {era_year}-{month:02d}-{day:02d} precedes the start of {era.name}")
        last = self.table.last_jdn(era)
        if last is not None and jdn > last:
            raise InvalidDateError(f"{era.name} {era_year}-{month:02d}-{day:02d} is after the end of {era.name}")
        return jdn

    def to_local(self, era: Era, era_year: int, month: int, day: int, millis: int = 0) -> int:
        """Wall-clock ms of an era date and time of day. Not checked against the bound."""
        if not 0 <= millis < MS_PER_DAY:
            raise InvalidDateError(f"time of day {millis} ms not in 0..{MS_PER_DAY - 1}")
        return instant_from_jdn(self.to_jdn(era, era_year, month, day)) + millis

    def to_instant(self, era: Era, era_year: int, month: int, day: int, millis: int = 0, zone_offset: int = 0) -> int:
        local = self.to_local(era, era_year, month, day, millis)
        return self.guard.check_instant(local - zone_offset)

    def date_to_instant(self, date: ResolvedDate, zone_offset: int = 0) -> int:
        return self.to_instant(date.era, date.year, date.month, date.day, date.millis, zone_offset)

    # ---------------------------------------------------------
    # Inverse: day / instant to era date
    # ---------------------------------------------------------

    def from_jdn(self, jdn: int, millis: int = 0) -> ResolvedDate:
        era = self.table.era_containing_jdn(jdn)
        y, m, d = from_jdn(jdn)
        return ResolvedDate(self.calendar_id, era, era.era_year(y), m, d, millis)

    def from_instant(self, instant: int, zone_offset: int = 0) -> ResolvedDate:
        """
        Era date of ``instant`` on a wall clock ``zone_offset`` ms ahead of it.

        Only the instant itself must be representable; the shifted wall-clock
        value may step past the ceiling. A wall-clock day before year 1 of the
        first era has no era date and raises CalendarOverflowError.
        """
        self.guard.check_instant(instant)
        local = instant + zone_offset
        jdn = jdn_from_instant(local)
        if jdn < self.guard.floor_jdn:
            raise CalendarOverflowError(f"Instant {instant} at offset {zone_offset} precedes year 1 of {self.table[0].name}")
        return self.from_jdn(jdn, local - instant_from_jdn(jdn))
