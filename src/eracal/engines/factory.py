"""
eracal.engines.factory
----------------------
Transforms pure data specifications into live, executable calendar objects.
"""

from __future__ import annotations
from eracal.engines.calendar import EraCalendar
from eracal.engines.era_table import EraTable
from eracal.engines.specs import CalendarSpec
from eracal.engines.weeks import WeekCalculator


def build_era_table(spec: CalendarSpec) -> EraTable:
    return EraTable(spec.eras, spec.bound)


def make_calendar(spec: CalendarSpec) -> EraCalendar:
    """The universal entry point."""
    return EraCalendar(
        id=spec.id,
        table=build_era_table(spec),
        weeks=WeekCalculator(spec.first_day_of_week, spec.minimal_days_in_first_week),
    )
