# tests/test_overflow.py

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

from eracal.core.errors import CalendarOverflowError
from eracal.core.time import from_jdn, instant_from_jdn, to_jdn
from eracal.engines import era_table as era_table_mod
from eracal.engines.era_table import EraDef, EraTable
from eracal.engines.overflow import (
    INT64_MAX,
    OverflowGuard,
    RepresentableBound,
    last_representable_year,
)
from eracal.engines.specs import JAPANESE_ERAS, since

REIWA_MAX_YEAR = 292278994 - 2019 + 1


def test_int64_ceiling_day():
    assert last_representable_year(INT64_MAX) == 292278994
    guard = OverflowGuard(EraTable(JAPANESE_ERAS))
    assert from_jdn(guard.ceiling_jdn) == (292278994, 8, 17)

def test_open_era_max_year():
    table = EraTable(JAPANESE_ERAS)
    guard = OverflowGuard(table)
    assert table.open_era_max_year() == REIWA_MAX_YEAR
    assert guard.max_era_year(table.open_era) == REIWA_MAX_YEAR

def test_closed_era_max_year():
    table = EraTable(JAPANESE_ERAS)
    guard = OverflowGuard(table)
    assert guard.max_era_year(table.era_by_name("Meiji")) == 45
    assert guard.max_era_year(table.era_by_name("Taisho")) == 15
    assert guard.max_era_year(table.era_by_name("Showa")) == 64
    assert guard.max_era_year(table.era_by_name("Heisei")) == 31
    assert guard.max_era_year(table.era_by_name("BeforeMeiji")) == 1867

def test_open_era_max_year_concurrent_idempotence():
    table = EraTable(JAPANESE_ERAS)
    real = era_table_mod.open_era_max_year
    with patch.object(era_table_mod, "open_era_max_year", wraps=real) as spy:
        with ThreadPoolExecutor(max_workers=8) as pool:
            values = list(pool.map(lambda _: table.open_era_max_year(), range(200)))
    assert set(values) == {REIWA_MAX_YEAR}
    assert spy.call_count == 1

def test_floor_is_year_one_of_proleptic_era():
    guard = OverflowGuard(EraTable(JAPANESE_ERAS))
    assert guard.floor_jdn == to_jdn(1, 1, 1)
    assert guard.min_representable_instant == instant_from_jdn(to_jdn(1, 1, 1))

def test_check_and_clamp_instant():
    bound = RepresentableBound(floor=since(1900, 1, 1), ceiling=since(2100, 1, 1) - 1)
    guard = OverflowGuard(EraTable([EraDef("A", None), EraDef("B", since(2000, 1, 1))], bound))

    assert guard.check_instant(since(2050, 1, 1)) == since(2050, 1, 1)
    with pytest.raises(CalendarOverflowError):
        guard.check_instant(since(2100, 1, 1))
    with pytest.raises(CalendarOverflowError):
        guard.check_instant(since(1900, 1, 1) - 1)

    assert guard.clamp_instant(since(2200, 1, 1)) == (bound.ceiling, True)
    assert guard.clamp_instant(0) == (0, False)
    assert guard.clamp_instant(since(1800, 1, 1)) == (bound.floor, True)

def test_clamp_era_year():
    bound = RepresentableBound(ceiling=since(2100, 6, 15) - 1)
    table = EraTable(JAPANESE_ERAS, bound)
    guard = OverflowGuard(table)
    reiwa = table.open_era
    assert guard.max_era_year(reiwa) == 82
    assert guard.clamp_era_year(reiwa, 10) == (10, False)
    assert guard.clamp_era_year(reiwa, 500) == (82, True)
    assert guard.clamp_era_year(reiwa, 0) == (1, True)
