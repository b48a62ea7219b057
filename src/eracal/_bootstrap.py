from __future__ import annotations
from eracal.core.engine import CalendarRegistry
from eracal.engines.specs import ALL_SPECS, apply_supplemental_era
from eracal.engines.factory import make_calendar

def build_registry() -> CalendarRegistry:
    calendars = {}
    for name, spec in ALL_SPECS.items():
        if name == "japanese":
            spec = apply_supplemental_era(spec)
        calendars[name] = make_calendar(spec)
    return CalendarRegistry(calendars)
