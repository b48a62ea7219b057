"""
eracal.engines.calendar
-----------------------
The Orchestrator. Binds the era table, converter, bounds resolver and week
calculator behind one object, and applies the caller's zone offset.

Internal computations run on the local timeline: ``local = instant + offset``.
"""

from __future__ import annotations

from typing import Any, Dict, Union

from ..core.errors import UnknownEraError
from ..core.time import instant_from_jdn, lenient_jdn, month_length, to_jdn
from ..core.types import FIELDS, CalendarId, DayInfo, Era, FieldRange, ResolvedDate
from .bounds import FieldBoundsResolver
from .converter import DateConverter
from .era_table import EraTable
from .overflow import OverflowGuard
from .weeks import WeekCalculator


class EraCalendar:
    def __init__(self, id: CalendarId, table: EraTable, weeks: WeekCalculator):
        self.id = id
        self.table = table
        self.weeks = weeks
        self.guard = OverflowGuard(table)
        self.converter = DateConverter(table, self.guard, id)
        self.bounds = FieldBoundsResolver(table, self.guard, weeks)

    def _era(self, era: Union[Era, str]) -> Era:
        if isinstance(era, str):
            return self.table.era_by_name(era)
        found = self.table.era_by_name(era.name)
        if found != era:
            raise UnknownEraError(f"Era '{era.name}' does not belong to calendar '{self.id.name}'")
        return found

    # ---------------------------------------------------------
    # Conversion
    # ---------------------------------------------------------

    def date(self, era: Union[Era, str], year: int, month: int, day: int, millis: int = 0) -> ResolvedDate:
        """Validated date constructor."""
        e = self._era(era)
        self.converter.to_local(e, year, month, day, millis)
        return ResolvedDate(self.id, e, year, month, day, millis)

    def resolve(self, instant: int, zone_offset: int = 0) -> ResolvedDate:
        return self.converter.from_instant(instant, zone_offset)

    def to_instant(self, date: ResolvedDate, zone_offset: int = 0) -> int:
        era = self._era(date.era)
        return self.converter.to_instant(era, date.year, date.month, date.day, date.millis, zone_offset)

    def era_info(self, key: Union[str, int], zone_offset: int = 0) -> Era:
        if isinstance(key, str):
            return self.table.era_by_name(key)
        return self.converter.from_instant(key, zone_offset).era

    # ---------------------------------------------------------
    # Fields
    # ---------------------------------------------------------

    def actual_bounds(self, date: ResolvedDate, field: str) -> FieldRange:
        return self.bounds.actual_bounds(date, field)

    def actual_minimum(self, date: ResolvedDate, field: str) -> int:
        return self.actual_bounds(date, field).actual_minimum

    def actual_maximum(self, date: ResolvedDate, field: str) -> int:
        return self.actual_bounds(date, field).actual_maximum

    def get(self, date: ResolvedDate, field: str) -> int:
        if field == "era":
            return date.era.index
        if field == "year":
            return date.year
        if field == "month":
            return date.month
        if field == "day_of_month":
            return date.day
        if field == "day_of_year":
            return date.day_of_year
        if field == "day_of_week_in_month":
            return date.day_of_week_in_month
        if field == "week_of_year":
            n = self.weeks.week_of_year(self.bounds.year_span(date.era, date.year), date.jdn)
            if n == 0:
                n = self.weeks.max_week_of_year(self.bounds.year_span(date.era, date.year - 1))
            return n
        if field == "week_of_month":
            return self.weeks.week_of_month(self.bounds.month_span(date.era, date.year, date.month), date.jdn)
        raise ValueError(f"Unknown field '{field}'. Available: {list(FIELDS)}")

    # ---------------------------------------------------------
    # Field changes (always renormalised through the instant)
    # ---------------------------------------------------------

    def _renormalize(self, jdn: int, millis: int) -> ResolvedDate:
        return self.converter.from_instant(instant_from_jdn(jdn) + millis)

    def with_field(self, date: ResolvedDate, field: str, value: int) -> ResolvedDate:
        """Lenient set: out-of-range values carry into the neighbouring month, year or era."""
        y, m, d = date.absolute_year, date.month, date.day
        if field == "era":
            if not 0 <= value < len(self.table):
                raise UnknownEraError(f"No era with index {value} in calendar '{self.id.name}'")
            jdn = lenient_jdn(self.table[value].absolute_year(date.year), m, d)
        elif field == "year":
            jdn = lenient_jdn(date.era.absolute_year(value), m, d)
        elif field == "month":
            jdn = lenient_jdn(y, value, d)
        elif field == "day_of_month":
            jdn = to_jdn(y, m, 1) + value - 1
        elif field == "day_of_year":
            jdn = self.bounds.year_span(date.era, date.year).anchor + value - 1
        elif field == "day_of_week_in_month":
            jdn = date.jdn + 7 * (value - date.day_of_week_in_month)
        else:
            raise ValueError(f"Field '{field}' cannot be set directly")
        return self._renormalize(jdn, date.millis)

    def add(self, date: ResolvedDate, field: str, amount: int) -> ResolvedDate:
        """Calendar addition; year/month steps pin the day to the target month's length."""
        if field == "era":
            return self.with_field(date, "era", date.era.index + amount)
        if field in ("year", "month"):
            step = amount * 12 if field == "year" else amount
            y, m0 = divmod(date.absolute_year * 12 + date.month - 1 + step, 12)
            m = m0 + 1
            jdn = to_jdn(y, m, min(date.day, month_length(y, m)))
        elif field in ("day_of_month", "day_of_year"):
            jdn = date.jdn + amount
        elif field in ("day_of_week_in_month", "week_of_year", "week_of_month"):
            jdn = date.jdn + 7 * amount
        else:
            raise ValueError(f"Unknown field '{field}'. Available: {list(FIELDS)}")
        return self._renormalize(jdn, date.millis)

    # ---------------------------------------------------------
    # High-Level API Methods (Required by CLI / api.py)
    # ---------------------------------------------------------

    def info(self) -> Dict[str, Any]:
        return {
            "id": self.id.__dict__,
            "eras": [e.name for e in self.table],
            "first_day_of_week": self.weeks.first_day_of_week,
            "minimal_days_in_first_week": self.weeks.minimal_days_in_first_week,
            "floor": self.guard.min_representable_instant,
            "ceiling": self.guard.max_representable_instant,
        }

    def day_info(self, instant: int, zone_offset: int = 0) -> DayInfo:
        date = self.resolve(instant, zone_offset)
        return DayInfo(
            instant=instant,
            date=date,
            day_of_year=date.day_of_year,
            week_of_year=self.get(date, "week_of_year"),
            week_of_month=self.get(date, "week_of_month"),
            day_of_week=date.day_of_week,
        )

    def explain(self, date: ResolvedDate) -> Dict[str, Any]:
        return {f: {"value": self.get(date, f), "bounds": self.actual_bounds(date, f)} for f in FIELDS}
