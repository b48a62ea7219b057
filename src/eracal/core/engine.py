from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Protocol, Union

from .types import DayInfo, Era, FieldRange, ResolvedDate

class CalendarProtocol(Protocol):
    def info(self) -> Dict[str, Any]: ...
    def date(self, era: Union[Era, str], year: int, month: int, day: int, millis: int = 0) -> ResolvedDate: ...
    def resolve(self, instant: int, zone_offset: int = 0) -> ResolvedDate: ...
    def to_instant(self, date: ResolvedDate, zone_offset: int = 0) -> int: ...
    def era_info(self, key: Union[str, int], zone_offset: int = 0) -> Era: ...
    def actual_bounds(self, date: ResolvedDate, field: str) -> FieldRange: ...
    def get(self, date: ResolvedDate, field: str) -> int: ...
    def with_field(self, date: ResolvedDate, field: str, value: int) -> ResolvedDate: ...
    def add(self, date: ResolvedDate, field: str, amount: int) -> ResolvedDate: ...
    def day_info(self, instant: int, zone_offset: int = 0) -> DayInfo: ...
    def explain(self, date: ResolvedDate) -> Dict[str, Any]: ...

@dataclass
class CalendarRegistry:
    _calendars: Dict[str, CalendarProtocol]

    def get(self, name: str) -> CalendarProtocol:
        if name not in self._calendars:
            raise KeyError(f"Unknown calendar '{name}'. Available: {sorted(self._calendars)}")
        return self._calendars[name]

    def list(self) -> List[str]:
        return sorted(self._calendars.keys())

    def register(self, name: str, calendar: CalendarProtocol, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._calendars):
            raise KeyError(f"Calendar '{name}' already exists. Use overwrite=True to replace.")
        self._calendars[name] = calendar
