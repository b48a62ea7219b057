# tests/test_weeks.py

import pytest

from eracal.core.time import MONDAY, SUNDAY, to_jdn
from eracal.core.types import Span
from eracal.engines.weeks import WeekCalculator


def year_span(y, first=None, last=None, *, starts_era=False, ends_era=False):
    nf, nl = to_jdn(y, 1, 1), to_jdn(y, 12, 31)
    first = nf if first is None else first
    last = nl if last is None else last
    return Span(first, last, nf, nl, first, starts_era=starts_era, ends_era=ends_era)

@pytest.fixture
def iso():
    return WeekCalculator(MONDAY, 4)

@pytest.fixture
def us():
    return WeekCalculator(SUNDAY, 1)

def test_rejects_bad_settings():
    with pytest.raises(ValueError):
        WeekCalculator(0, 1)
    with pytest.raises(ValueError):
        WeekCalculator(SUNDAY, 8)

def test_position_and_week_start(iso, us):
    jan8 = to_jdn(1989, 1, 8)  # Sunday
    assert us.position(jan8) == 0
    assert iso.position(jan8) == 6
    assert iso.week_start(jan8) == to_jdn(1989, 1, 2)

def test_iso_year_end_rolls_into_next_year(iso):
    span = year_span(2019)
    assert iso.rolled_tail(span.natural_last) == to_jdn(2019, 12, 30)
    assert iso.week_of_year(span, to_jdn(2019, 12, 29)) == 52
    assert iso.week_of_year(span, to_jdn(2019, 12, 30)) == 1
    assert iso.max_week_of_year(span) == 52

def test_rolled_tail_merges_when_year_ends_an_era(iso):
    span = year_span(2019, ends_era=True)
    assert iso.week_of_year(span, to_jdn(2019, 12, 31)) == 52

def test_leading_short_week(iso):
    span = year_span(2021)
    assert iso.week_of_year(span, to_jdn(2021, 1, 1)) == 0
    assert iso.week_of_year(span, to_jdn(2021, 1, 4)) == 1
    merged = year_span(2021, starts_era=True)
    assert iso.week_of_year(merged, to_jdn(2021, 1, 1)) == 1

def test_53_week_year(iso):
    assert iso.max_week_of_year(year_span(2020)) == 53

def test_211_day_span_has_31_weeks(us):
    span = year_span(1912, last=to_jdn(1912, 7, 29), ends_era=True)
    assert span.length == 211
    assert us.max_week_of_year(span) == 31
    assert us.week_of_year(span, to_jdn(1912, 1, 1)) == 1

def test_mid_year_start_numbers_from_era_start(us):
    # Heisei 1 starts on Sunday 1989-01-08
    first = to_jdn(1989, 1, 8)
    span = Span(first, to_jdn(1989, 12, 31), to_jdn(1989, 1, 1), to_jdn(1989, 12, 31), first, starts_era=True)
    assert us.week_of_year(span, first) == 1
    assert us.week_of_year(span, first + 6) == 1
    assert us.week_of_year(span, first + 7) == 2
    # 1989-12-31 is a Sunday and belongs to week 1 of 1990
    assert us.week_of_year(span, to_jdn(1989, 12, 31)) == 1
    assert us.max_week_of_year(span) == 51

def test_week_of_month(us, iso):
    jan = Span(to_jdn(1989, 1, 1), to_jdn(1989, 1, 31), to_jdn(1989, 1, 1), to_jdn(1989, 1, 31), to_jdn(1989, 1, 1))
    assert us.max_week_of_month(jan) == 5

    first = to_jdn(1989, 1, 8)
    cut = Span(first, to_jdn(1989, 1, 31), to_jdn(1989, 1, 1), to_jdn(1989, 1, 31), first, starts_era=True)
    assert us.min_week_of_month(cut) == 1
    assert us.max_week_of_month(cut) == 4

    feb = Span(to_jdn(2019, 2, 1), to_jdn(2019, 2, 28), to_jdn(2019, 2, 1), to_jdn(2019, 2, 28), to_jdn(2019, 2, 1))
    assert iso.min_week_of_month(feb) == 0
    assert iso.week_of_month(feb, to_jdn(2019, 2, 4)) == 1

def test_week_of_month_merges_only_when_month_is_cut(iso):
    # an era that starts on the 1st leaves its month whole
    first = to_jdn(2019, 2, 1)
    feb = Span(first, to_jdn(2019, 2, 28), first, to_jdn(2019, 2, 28), first, starts_era=True)
    assert iso.min_week_of_month(feb) == 0
    assert iso.week_of_month(feb, first) == 0

    cut_first = to_jdn(2019, 2, 2)
    cut = Span(cut_first, to_jdn(2019, 2, 28), first, to_jdn(2019, 2, 28), cut_first, starts_era=True)
    assert iso.min_week_of_month(cut) == 1
