from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Union

from .attributes import compute_attributes
from .core.engine import CalendarProtocol, CalendarRegistry
from .core.time import instant_from_date
from .core.types import DayInfo, Era, FieldRange, ResolvedDate
from .engines.calendar import EraCalendar
from .engines.factory import make_calendar as _make_calendar
from .engines.specs import CalendarSpec

DEFAULT_CALENDAR = "japanese"
_registry: Optional[CalendarRegistry] = None

def set_registry(reg: CalendarRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> CalendarRegistry:
    if _registry is None:
        raise RuntimeError("Calendar registry not initialized")
    return _registry

def _cal(name: Optional[str], date_: Optional[ResolvedDate] = None) -> CalendarProtocol:
    if name is None:
        name = date_.calendar.name if date_ is not None else DEFAULT_CALENDAR
    return _reg().get(name)

def list_calendars() -> List[str]:
    return _reg().list()

def calendar_info(calendar: str = DEFAULT_CALENDAR) -> Dict[str, Any]:
    return _reg().get(calendar).info()

def get_calendar(name: str = DEFAULT_CALENDAR) -> CalendarProtocol:
    return _reg().get(name)

def make_calendar(spec: CalendarSpec) -> EraCalendar:
    return _make_calendar(spec)

def register_calendar(name: str, calendar: CalendarProtocol, *, overwrite: bool = False) -> None:
    _reg().register(name, calendar, overwrite=overwrite)

# ============================================================
# Conversion
# ============================================================

def resolve(instant: int, *, zone_offset: int = 0, calendar: str = DEFAULT_CALENDAR) -> ResolvedDate:
    return _reg().get(calendar).resolve(instant, zone_offset)

def to_instant(d: ResolvedDate, *, zone_offset: int = 0, calendar: Optional[str] = None) -> int:
    return _cal(calendar, d).to_instant(d, zone_offset)

def era_date(
    era: Union[str, Era], year: int, month: int, day: int, *, calendar: str = DEFAULT_CALENDAR
) -> ResolvedDate:
    return _reg().get(calendar).date(era, year, month, day)

def from_gregorian(d: date, *, calendar: str = DEFAULT_CALENDAR) -> ResolvedDate:
    return _reg().get(calendar).resolve(instant_from_date(d))

def era_info(key: Union[str, int], *, calendar: str = DEFAULT_CALENDAR) -> Era:
    return _reg().get(calendar).era_info(key)

# ============================================================
# Fields
# ============================================================

def actual_bounds(d: ResolvedDate, field: str, *, calendar: Optional[str] = None) -> FieldRange:
    return _cal(calendar, d).actual_bounds(d, field)

def get_field(d: ResolvedDate, field: str, *, calendar: Optional[str] = None) -> int:
    return _cal(calendar, d).get(d, field)

def with_field(d: ResolvedDate, field: str, value: int, *, calendar: Optional[str] = None) -> ResolvedDate:
    return _cal(calendar, d).with_field(d, field, value)

def add(d: ResolvedDate, field: str, amount: int, *, calendar: Optional[str] = None) -> ResolvedDate:
    return _cal(calendar, d).add(d, field, amount)

def day_info(
    instant: int,
    *,
    zone_offset: int = 0,
    calendar: str = DEFAULT_CALENDAR,
    attributes: Sequence[str] = (),
) -> DayInfo:
    info = _reg().get(calendar).day_info(instant, zone_offset)
    if attributes:
        attrs = compute_attributes(info, attributes)
        info = replace(info, attributes=attrs)
    return info

def explain(d: ResolvedDate, *, calendar: Optional[str] = None) -> Dict[str, Any]:
    return _cal(calendar, d).explain(d)
