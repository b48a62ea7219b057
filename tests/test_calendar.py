# tests/test_calendar.py

import random
from datetime import date

import pytest

import eracal
from eracal.core.errors import CalendarOverflowError, InvalidDateError, UnknownEraError
from eracal.core.time import MS_PER_HOUR, to_jdn
from eracal.engines.overflow import INT64_MAX

from conftest import at

JST = 9 * MS_PER_HOUR


def test_zone_offset(japanese):
    t = at(2019, 5, 1) - JST  # midnight in a UTC+9 zone
    d = japanese.resolve(t, JST)
    assert (d.era.name, d.year, d.month, d.day, d.millis) == ("Reiwa", 1, 5, 1, 0)
    assert japanese.to_instant(d, JST) == t
    prev = japanese.resolve(t - 1, JST)
    assert (prev.era.name, prev.year, prev.month, prev.day) == ("Heisei", 31, 4, 30)
    assert japanese.era_info(t - 1, JST).name == "Heisei"

def test_offset_applies_after_the_bound_check(japanese):
    reiwa_max = 292278994 - 2019 + 1
    d = japanese.resolve(INT64_MAX, JST)
    assert (d.era.name, d.year, d.month, d.day) == ("Reiwa", reiwa_max, 8, 17)
    assert japanese.to_instant(d, JST) == INT64_MAX
    assert japanese.era_info(INT64_MAX, JST).name == "Reiwa"
    with pytest.raises(CalendarOverflowError):
        japanese.resolve(INT64_MAX + 1, JST)

def test_to_instant_past_the_ceiling_raises(japanese):
    d = japanese.resolve(INT64_MAX)
    assert japanese.to_instant(d) == INT64_MAX
    with pytest.raises(CalendarOverflowError):
        japanese.to_instant(d, -JST)

def test_offset_before_year_one(japanese):
    floor = japanese.guard.min_representable_instant
    d = japanese.resolve(floor, JST)
    assert (d.era.name, d.year, d.month, d.day) == ("BeforeMeiji", 1, 1, 1)
    with pytest.raises(CalendarOverflowError):
        japanese.resolve(floor, -JST)

def test_resolve_roundtrip_with_offsets(japanese):
    random.seed(21)
    for _ in range(2000):
        t = random.randint(at(1850, 1, 1), at(2100, 1, 1))
        offset = random.randint(-12 * 60, 14 * 60) * 60 * 1000
        assert japanese.to_instant(japanese.resolve(t, offset), offset) == t

def test_date_validation(japanese):
    assert japanese.date("H", 31, 4, 30).label() == "H31.04.30"
    with pytest.raises(InvalidDateError):
        japanese.date("Heisei", 31, 5, 1)
    with pytest.raises(UnknownEraError):
        japanese.date("Edo", 1, 1, 1)

def test_foreign_era_rejected(japanese, gregorian):
    ce = gregorian.table[0]
    with pytest.raises(UnknownEraError):
        japanese.date(ce, 2000, 1, 1)

def test_era_info(japanese):
    assert japanese.era_info("Heisei").year_origin == 1989
    assert japanese.era_info(at(1950, 1, 1)).name == "Showa"
    with pytest.raises(UnknownEraError):
        japanese.era_info("Kamakura")

def test_get_fields(japanese):
    d = japanese.date("Heisei", 1, 1, 8)
    assert japanese.get(d, "year") == 1
    assert japanese.get(d, "month") == 1
    assert japanese.get(d, "day_of_month") == 8
    assert japanese.get(d, "day_of_year") == 1
    assert japanese.get(d, "week_of_year") == 1
    assert japanese.get(d, "week_of_month") == 1
    assert japanese.get(d, "era") == 4
    assert japanese.get(d, "day_of_week_in_month") == 2
    with pytest.raises(ValueError):
        japanese.get(d, "hour")

def test_leading_week_belongs_to_previous_year(gregorian):
    d = gregorian.resolve(at(2021, 1, 1))
    assert gregorian.get(d, "week_of_year") == 53
    assert gregorian.get(gregorian.resolve(at(2021, 1, 4)), "week_of_year") == 1
    assert gregorian.get(gregorian.resolve(at(2019, 12, 30)), "week_of_year") == 1

def test_add_across_eras(japanese):
    d = japanese.add(japanese.date("Heisei", 31, 4, 30), "day_of_month", 1)
    assert (d.era.name, d.year, d.month, d.day) == ("Reiwa", 1, 5, 1)
    d = japanese.add(japanese.date("Showa", 64, 1, 7), "year", 1)
    assert (d.era.name, d.year, d.month, d.day) == ("Heisei", 2, 1, 7)
    d = japanese.add(japanese.date("Reiwa", 1, 5, 1), "week_of_year", -1)
    assert (d.era.name, d.year, d.month, d.day) == ("Heisei", 31, 4, 24)

def test_add_pins_day_to_month_length(japanese):
    d = japanese.add(japanese.date("Reiwa", 2, 1, 31), "month", 1)
    assert (d.month, d.day) == (2, 29)
    d = japanese.add(japanese.date("Heisei", 12, 2, 29), "year", 1)
    assert (d.year, d.month, d.day) == (13, 2, 28)

def test_with_field_is_lenient(japanese):
    d = japanese.with_field(japanese.date("Heisei", 31, 4, 30), "month", 5)
    assert (d.era.name, d.year, d.month, d.day) == ("Reiwa", 1, 5, 30)
    d = japanese.with_field(japanese.date("Heisei", 1, 1, 20), "day_of_year", 0)
    assert (d.era.name, d.year, d.month, d.day) == ("Showa", 64, 1, 7)
    d = japanese.with_field(japanese.date("Heisei", 5, 3, 10), "day_of_month", 32)
    assert (d.month, d.day) == (4, 1)
    d = japanese.with_field(japanese.date("Heisei", 5, 3, 10), "year", 40)
    assert (d.era.name, d.year) == ("Reiwa", 10)
    with pytest.raises(ValueError):
        japanese.with_field(d, "week_of_year", 2)

def test_era_field_keeps_the_year_number(japanese):
    d = japanese.with_field(japanese.date("Showa", 10, 6, 1), "era", 4)
    assert (d.era.name, d.year, d.month, d.day) == ("Heisei", 10, 6, 1)
    d = japanese.add(d, "era", 1)
    assert (d.era.name, d.year, d.month, d.day) == ("Reiwa", 10, 6, 1)
    # 1989-01-05 precedes Heisei and re-resolves to Showa
    d = japanese.with_field(japanese.date("Meiji", 1, 1, 5), "era", 4)
    assert (d.era.name, d.year, d.month, d.day) == ("Showa", 64, 1, 5)
    with pytest.raises(UnknownEraError):
        japanese.with_field(d, "era", 6)

def test_day_of_week_in_month(japanese):
    d = japanese.date("Reiwa", 1, 5, 1)
    assert japanese.get(d, "day_of_week_in_month") == 1
    assert japanese.with_field(d, "day_of_week_in_month", 3).day == 15
    d = japanese.add(d, "day_of_week_in_month", 5)
    assert (d.month, d.day) == (6, 5)

def test_day_info(japanese):
    info = japanese.day_info(at(1989, 1, 8))
    assert info.date.label() == "H1.01.08"
    assert (info.day_of_year, info.week_of_year, info.week_of_month, info.day_of_week) == (1, 1, 1, 1)

def test_explain_covers_all_fields(japanese):
    out = japanese.explain(japanese.date("Showa", 64, 1, 7))
    assert set(out) == {
        "era", "year", "month", "day_of_month", "day_of_year",
        "day_of_week_in_month", "week_of_year", "week_of_month",
    }
    assert out["day_of_year"]["bounds"].actual_maximum == 7
    assert 7 in out["day_of_year"]["bounds"]

def test_info(japanese):
    info = japanese.info()
    assert info["eras"][-1] == "Reiwa"
    assert info["first_day_of_week"] == 1

# ============================================================
# Module-level API
# ============================================================

def test_api_roundtrip():
    d = eracal.from_gregorian(date(2019, 4, 30))
    assert d.label() == "H31.04.30"
    assert eracal.to_instant(d) == at(2019, 4, 30)
    assert eracal.resolve(at(2019, 4, 30)) == d
    assert eracal.era_date("Reiwa", 1, 5, 1) == eracal.add(d, "day_of_month", 1)
    assert eracal.get_field(d, "day_of_year") == 120
    assert eracal.actual_bounds(d, "day_of_year").actual_maximum == 120
    assert eracal.with_field(d, "day_of_month", 1).day == 1
    assert eracal.era_info("R").name == "Reiwa"
    assert "week_of_month" in eracal.explain(d)

def test_api_registry():
    assert eracal.list_calendars() == ["gregorian", "japanese"]
    assert eracal.calendar_info("gregorian")["minimal_days_in_first_week"] == 4
    with pytest.raises(KeyError):
        eracal.get_calendar("hijri")
    with pytest.raises(KeyError):
        eracal.register_calendar("japanese", eracal.get_calendar("japanese"))

def test_api_calendar_follows_date():
    d = eracal.resolve(at(2021, 1, 1), calendar="gregorian")
    assert d.calendar.name == "gregorian"
    assert eracal.get_field(d, "week_of_year") == 53

def test_day_info_attributes():
    info = eracal.day_info(at(2019, 5, 1), attributes=("weekday", "gregorian", "era_label"))
    assert info.attributes == {
        "weekday": 4,
        "weekday_name": "Wednesday",
        "gregorian": "2019-05-01",
        "era_label": "R1.05.01",
        "era_index": 5,
    }
    with pytest.raises(KeyError):
        eracal.day_info(0, attributes=("moon",))
    assert eracal.day_info(0).attributes is None
