"""
eracal.engines.bounds
---------------------
Actual minimum / maximum of each calendar field at a given date.

Generic Gregorian bounds (12 months, 365/366 days, ...) hold only for
era-years that contain no era boundary. An era starting mid-year restarts
day-of-year numbering on its first day, an era ending mid-year cuts the
year short, and the open era is cut by the representable ceiling.

The calendar-wide greatest minimum / least maximum of a field fold the
Gregorian extremes together with every period an era boundary cuts.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

from ..core.time import from_jdn, month_length, to_jdn, year_length
from ..core.types import FIELDS, Era, FieldRange, ResolvedDate, Span
from .era_table import EraTable, WriteOnce
from .overflow import OverflowGuard
from .weeks import WeekCalculator

logger = logging.getLogger(__name__)

# minimum, actual_minimum, maximum, actual_maximum, clamped
Raw = Tuple[int, int, int, int, bool]

# Every weekday / leap-year combination of a Gregorian year occurs in here.
_CYCLE_YEARS = range(2001, 2029)


class FieldBoundsResolver:
    def __init__(self, table: EraTable, guard: OverflowGuard, weeks: WeekCalculator):
        self.table = table
        self.guard = guard
        self.weeks = weeks
        self._handlers: Dict[str, Callable[[Era, int, int], Raw]] = {
            "era": self._era,
            "year": self._year,
            "month": self._month,
            "day_of_month": self._day_of_month,
            "day_of_year": self._day_of_year,
            "day_of_week_in_month": self._day_of_week_in_month,
            "week_of_year": self._week_of_year,
            "week_of_month": self._week_of_month,
        }
        self._limits: WriteOnce[Dict[str, Tuple[int, int]]] = WriteOnce()

    # ---------------------------------------------------------
    # Spans
    # ---------------------------------------------------------

    def _span(self, natural_first: int, natural_last: int, era: Era) -> Span:
        era_first = era.first_jdn
        era_last: Optional[int] = self.table.last_jdn(era)

        anchor = max(natural_first, era_first)
        first = max(anchor, self.guard.floor_jdn)
        last = natural_last if era_last is None else min(natural_last, era_last)
        ends_era = era_last is not None and last == era_last
        floor_cut = first > anchor
        clamped = floor_cut

        ceiling = self.guard.ceiling_jdn
        if last > ceiling:
            last = ceiling
            ends_era = True
            clamped = True

        return Span(
            first=first,
            last=last,
            natural_first=natural_first,
            natural_last=natural_last,
            anchor=anchor,
            starts_era=(anchor == era_first or floor_cut),
            ends_era=ends_era,
            clamped=clamped,
        )

    def year_span(self, era: Era, era_year: int) -> Span:
        y = era.absolute_year(era_year)
        return self._span(to_jdn(y, 1, 1), to_jdn(y, 12, 31), era)

    def month_span(self, era: Era, era_year: int, month: int) -> Span:
        y = era.absolute_year(era_year)
        first = to_jdn(y, month, 1)
        return self._span(first, first + month_length(y, month) - 1, era)

    @staticmethod
    def natural(span: Span) -> Span:
        """The same period with no era or overflow truncation."""
        return Span(span.natural_first, span.natural_last, span.natural_first, span.natural_last, span.natural_first)

    # ---------------------------------------------------------
    # Public
    # ---------------------------------------------------------

    def actual_bounds(self, date: ResolvedDate, field: str) -> FieldRange:
        handler = self._handlers.get(field)
        if handler is None:
            raise ValueError(f"Unknown field '{field}'. Available: {list(FIELDS)}")
        lo, act_lo, hi, act_hi, clamped = handler(date.era, date.year, date.month)
        greatest_min, least_max = self.limits()[field]
        out = FieldRange(field, lo, greatest_min, least_max, hi, act_lo, act_hi, clamped)
        if out.clamped:
            logger.info("%s bounds at %s clamped at the representable range", field, date.label())
        return out

    def max_year(self) -> int:
        """Largest era-year of any era."""
        return max(self.guard.max_era_year(e) for e in self.table)

    def limits(self) -> Dict[str, Tuple[int, int]]:
        """Field -> (greatest minimum, least maximum) over the whole calendar."""
        return self._limits.get(self._compute_limits)

    # ---------------------------------------------------------
    # Calendar-wide limits
    # ---------------------------------------------------------

    def _cut_periods(self) -> List[Tuple[Era, int, int]]:
        """(era, era-year, month) of every era start and era end."""
        out: List[Tuple[Era, int, int]] = []
        for era in self.table:
            days = []
            if not era.is_proleptic:
                days.append(era.first_jdn)
            last = self.table.last_jdn(era)
            if last is not None:
                days.append(last)
            for jdn in days:
                y, m, _ = from_jdn(jdn)
                out.append((era, era.era_year(y), m))
        return out

    def _gregorian_limits(self) -> Dict[str, Tuple[int, int]]:
        woy = []
        wom_min = []
        wom_max = []
        for y in _CYCLE_YEARS:
            first, last = to_jdn(y, 1, 1), to_jdn(y, 12, 31)
            woy.append(self.weeks.max_week_of_year(Span(first, last, first, last, first)))
            for m in range(1, 13):
                first = to_jdn(y, m, 1)
                last = first + month_length(y, m) - 1
                span = Span(first, last, first, last, first)
                wom_min.append(self.weeks.min_week_of_month(span))
                wom_max.append(self.weeks.max_week_of_month(span))

        return {
            "era": (0, len(self.table) - 1),
            "year": (1, min(self.guard.max_era_year(e) for e in self.table)),
            "month": (1, 12),
            "day_of_month": (1, 28),
            "day_of_year": (1, 365),
            "day_of_week_in_month": (1, 4),
            "week_of_year": (1, min(woy)),
            "week_of_month": (max(wom_min), min(wom_max)),
        }

    def _compute_limits(self) -> Dict[str, Tuple[int, int]]:
        limits = self._gregorian_limits()
        for era, era_year, month in self._cut_periods():
            for field in ("month", "day_of_month", "day_of_year", "day_of_week_in_month",
                          "week_of_year", "week_of_month"):
                _, act_lo, _, act_hi, _ = self._handlers[field](era, era_year, month)
                greatest_min, least_max = limits[field]
                limits[field] = (max(greatest_min, act_lo), min(least_max, act_hi))
        logger.debug("field limits: %s", limits)
        return limits

    # ---------------------------------------------------------
    # Per field
    # ---------------------------------------------------------

    def _era(self, era: Era, era_year: int, month: int) -> Raw:
        last = len(self.table) - 1
        return 0, 0, last, last, False

    def _year(self, era: Era, era_year: int, month: int) -> Raw:
        return 1, 1, self.max_year(), self.guard.max_era_year(era), era.is_open

    def _month(self, era: Era, era_year: int, month: int) -> Raw:
        span = self.year_span(era, era_year)
        return 1, from_jdn(span.first)[1], 12, from_jdn(span.last)[1], span.clamped

    def _day_of_month(self, era: Era, era_year: int, month: int) -> Raw:
        span = self.month_span(era, era_year, month)
        n = month_length(era.absolute_year(era_year), month)
        return 1, from_jdn(span.first)[2], n, from_jdn(span.last)[2], span.clamped

    def _day_of_year(self, era: Era, era_year: int, month: int) -> Raw:
        span = self.year_span(era, era_year)
        n = year_length(era.absolute_year(era_year))
        return 1, span.first - span.anchor + 1, n, span.last - span.anchor + 1, span.clamped

    def _day_of_week_in_month(self, era: Era, era_year: int, month: int) -> Raw:
        span = self.month_span(era, era_year, month)
        n = month_length(era.absolute_year(era_year), month)
        lo = (from_jdn(span.first)[2] - 1) // 7 + 1
        hi = (from_jdn(span.last)[2] - 1) // 7 + 1
        return 1, lo, (n - 1) // 7 + 1, hi, span.clamped

    def _week_of_year(self, era: Era, era_year: int, month: int) -> Raw:
        span = self.year_span(era, era_year)
        generic = self.weeks.max_week_of_year(self.natural(span))
        return 1, 1, generic, self.weeks.max_week_of_year(span), span.clamped

    def _week_of_month(self, era: Era, era_year: int, month: int) -> Raw:
        span = self.month_span(era, era_year, month)
        nat = self.natural(span)
        return (
            self.weeks.min_week_of_month(nat),
            self.weeks.min_week_of_month(span),
            self.weeks.max_week_of_month(nat),
            self.weeks.max_week_of_month(span),
            span.clamped,
        )
