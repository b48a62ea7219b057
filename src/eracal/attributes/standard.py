from __future__ import annotations
from typing import Any, Dict

from ..core.time import from_jdn
from .registry import register_attribute

_WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

def weekday(info) -> Dict[str, Any]:
    # Convention: 1=Sunday..7=Saturday
    return {"weekday": info.day_of_week, "weekday_name": _WEEKDAY_NAMES[info.day_of_week - 1]}

def gregorian(info) -> Dict[str, Any]:
    y, m, d = from_jdn(info.date.jdn)
    return {"gregorian": f"{y:04d}-{m:02d}-{d:02d}"}

def era_label(info) -> Dict[str, Any]:
    return {"era_label": info.date.label(), "era_index": info.date.era.index}

register_attribute("weekday", weekday)
register_attribute("gregorian", gregorian)
register_attribute("era_label", era_label)
