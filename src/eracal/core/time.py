"""
eracal.core.time
----------------
Proleptic Gregorian arithmetic on integer day numbers.

Days are counted as Julian Day Numbers (JDN). Instants are integer
milliseconds since 1970-01-01T00:00 on the engine's local timeline.
All functions use floor division, so they stay exact for years far
outside the range of ``datetime.date``.
"""

from __future__ import annotations
from datetime import date
from typing import Tuple

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR

# JDN of 1970-01-01
EPOCH_JDN = 2440588

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(1, 8)

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(y: int) -> bool:
    return y % 4 == 0 and (y % 100 != 0 or y % 400 == 0)


def year_length(y: int) -> int:
    return 366 if is_leap_year(y) else 365


def month_length(y: int, m: int) -> int:
    if m == 2 and is_leap_year(y):
        return 29
    return _MONTH_DAYS[m - 1]


def to_jdn(y: int, m: int, d: int) -> int:
    """Convert a Gregorian (y, m, d) to a Julian Day Number. No range checks."""
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    return d + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def from_jdn(jdn: int) -> Tuple[int, int, int]:
    """Fliegel-Van Flandern inverse of to_jdn (Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


def lenient_jdn(y: int, m: int, d: int) -> int:
    """
    JDN of (y, m, d) where month and day may overflow in either direction.

    Month 13 is January of y+1, day 0 is the last day of the previous month.
    """
    y += (m - 1) // 12
    m = (m - 1) % 12 + 1
    return to_jdn(y, m, 1) + d - 1


def day_of_week(jdn: int) -> int:
    """1=Sunday .. 7=Saturday."""
    return (jdn + 1) % 7 + 1


def jdn_from_instant(instant: int) -> int:
    return EPOCH_JDN + instant // MS_PER_DAY


def instant_from_jdn(jdn: int) -> int:
    """First instant (local midnight) of the given day."""
    return (jdn - EPOCH_JDN) * MS_PER_DAY


def jdn_from_date(d: date) -> int:
    return to_jdn(d.year, d.month, d.day)


def instant_from_date(d: date) -> int:
    return instant_from_jdn(jdn_from_date(d))
