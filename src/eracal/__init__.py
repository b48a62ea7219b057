"""eracal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    resolve,
    to_instant,
    era_date,
    from_gregorian,
    era_info,
    actual_bounds,
    get_field,
    with_field,
    add,
    day_info,
    explain,
    list_calendars,
    calendar_info,
    get_calendar,
    make_calendar,
    register_calendar,
)
from .core.errors import (
    EracalError,
    InvalidEraTableError,
    InvalidDateError,
    UnknownEraError,
    CalendarOverflowError,
)
from .core.types import Era, ResolvedDate, FieldRange, DayInfo
from .engines.era_table import EraDef
from .engines.specs import CalendarSpec

__all__ = [
    "resolve",
    "to_instant",
    "era_date",
    "from_gregorian",
    "era_info",
    "actual_bounds",
    "get_field",
    "with_field",
    "add",
    "day_info",
    "explain",
    "list_calendars",
    "calendar_info",
    "get_calendar",
    "make_calendar",
    "register_calendar",
    "EracalError",
    "InvalidEraTableError",
    "InvalidDateError",
    "UnknownEraError",
    "CalendarOverflowError",
    "Era",
    "ResolvedDate",
    "FieldRange",
    "DayInfo",
    "EraDef",
    "CalendarSpec",
]
