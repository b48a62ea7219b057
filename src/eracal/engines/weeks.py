"""
eracal.engines.weeks
--------------------
Week numbering inside an era-truncated span.

A week belongs to a period when at least ``minimal_days_in_first_week`` of
its days fall inside the period. Era boundaries never pass a week across:
a short leading week at an era start merges into week 1, and a final week
that would roll into the next year merges into the preceding week when the
next year belongs to another era.
"""

from __future__ import annotations

from typing import Optional

from ..core.time import SUNDAY, day_of_week
from ..core.types import Span


class WeekCalculator:
    def __init__(self, first_day_of_week: int = SUNDAY, minimal_days_in_first_week: int = 1):
        if not 1 <= first_day_of_week <= 7:
            raise ValueError("first_day_of_week must be in 1..7")
        if not 1 <= minimal_days_in_first_week <= 7:
            raise ValueError("minimal_days_in_first_week must be in 1..7")
        self.first_day_of_week = first_day_of_week
        self.minimal_days_in_first_week = minimal_days_in_first_week

    def position(self, jdn: int) -> int:
        """Offset of ``jdn`` from the start of its week (0..6)."""
        return (day_of_week(jdn) - self.first_day_of_week) % 7

    def week_start(self, jdn: int) -> int:
        return jdn - self.position(jdn)

    def week_number(self, anchor: int, jdn: int) -> int:
        """
        Week of ``jdn`` in a period whose day 1 is ``anchor``.
        Returns 0 (or less) for days before the first qualifying week.
        """
        week1 = self.week_start(anchor + 6)
        if week1 - anchor >= self.minimal_days_in_first_week:
            week1 -= 7
        return (jdn - week1) // 7 + 1

    def rolled_tail(self, natural_last: int) -> Optional[int]:
        """First day of the year's final week if that week counts as week 1 of the next year."""
        pos = self.position(natural_last + 1)
        if pos != 0 and 7 - pos >= self.minimal_days_in_first_week:
            return natural_last + 1 - pos
        return None

    # ---------------------------------------------------------
    # Week of year
    # ---------------------------------------------------------

    def week_of_year(self, span: Span, jdn: int) -> int:
        """
        Week of year of ``jdn``. 0 means the day belongs to the last week of
        the previous year of the same era.
        """
        tail = self.rolled_tail(span.natural_last)
        if tail is not None and jdn >= tail:
            if not span.ends_era:
                return 1
            jdn = tail - 1
        n = self.week_number(span.anchor, jdn)
        if n < 1:
            return 1 if span.starts_era else 0
        return n

    def max_week_of_year(self, span: Span) -> int:
        last = span.last
        tail = self.rolled_tail(span.natural_last)
        if tail is not None and last >= tail:
            last = tail - 1
        return max(self.week_number(span.anchor, last), 1)

    # ---------------------------------------------------------
    # Week of month
    # ---------------------------------------------------------

    def week_of_month(self, span: Span, jdn: int) -> int:
        """A short leading week merges into week 1 only when the month is cut at its start."""
        n = self.week_number(span.anchor, jdn)
        if span.truncated_start:
            return max(n, 1)
        return n

    def min_week_of_month(self, span: Span) -> int:
        return self.week_of_month(span, span.first)

    def max_week_of_month(self, span: Span) -> int:
        return self.week_of_month(span, span.last)
