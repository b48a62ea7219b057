from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from ..core.errors import InvalidEraTableError
from ..core.time import MONDAY, SUNDAY, instant_from_jdn, to_jdn
from ..core.types import CalendarId
from .era_table import EraDef, EraTable
from .overflow import RepresentableBound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarSpec:
    """Pure data payload for constructing an era calendar."""
    id: CalendarId
    eras: Tuple[EraDef, ...]
    first_day_of_week: int = SUNDAY
    minimal_days_in_first_week: int = 1
    bound: RepresentableBound = RepresentableBound()
    meta: Dict[str, Any] = field(default_factory=dict)

    def tweak(self, **kwargs) -> "CalendarSpec":
        return replace(self, **kwargs)

    def with_era(self, era: EraDef) -> "CalendarSpec":
        return replace(self, eras=self.eras + (era,))


def since(y: int, m: int, d: int) -> int:
    """Local midnight of a Gregorian date, in ms since 1970-01-01."""
    return instant_from_jdn(to_jdn(y, m, d))


# ============================================================
# JAPANESE IMPERIAL ERAS
# ============================================================

# Transitions are applied at local midnight.
JAPANESE_ERAS: Tuple[EraDef, ...] = (
    EraDef("BeforeMeiji", None, year_origin=1, abbr="BM"),
    EraDef("Meiji", since(1868, 1, 1), abbr="M"),
    EraDef("Taisho", since(1912, 7, 30), abbr="T"),
    EraDef("Showa", since(1926, 12, 25), abbr="S"),
    EraDef("Heisei", since(1989, 1, 8), abbr="H"),
    EraDef("Reiwa", since(2019, 5, 1), abbr="R"),
)

JAPANESE = CalendarSpec(
    id=CalendarId("imperial", "japanese", "1"),
    eras=JAPANESE_ERAS,
    first_day_of_week=SUNDAY,
    minimal_days_in_first_week=1,
    meta={"transitions": "local midnight"},
)

# ============================================================
# PLAIN GREGORIAN (one open proleptic era, ISO-like weeks)
# ============================================================

GREGORIAN = CalendarSpec(
    id=CalendarId("gregorian", "gregorian", "1"),
    eras=(EraDef("CE", None, year_origin=1, abbr="CE"),),
    first_day_of_week=MONDAY,
    minimal_days_in_first_week=4,
)

ALL_SPECS: Dict[str, CalendarSpec] = {
    "japanese": JAPANESE,
    "gregorian": GREGORIAN,
}

# ============================================================
# SUPPLEMENTAL ERA
# ============================================================

SUPPLEMENTAL_ERA_ENV = "ERACAL_SUPPLEMENTAL_ERA"

_SINCE_RE = re.compile(r"^-?\d+$")


def parse_supplemental_era(text: str) -> EraDef:
    """
    Parse ``name=<name>,abbr=<abbr>,since=<ms>``.

    ``since`` is the era's first instant in ms since 1970-01-01 local time.
    Example: ``name=NewEra,abbr=N,since=253374307200000`` starts NewEra at
    9999-02-11T00:00.
    """
    items: Dict[str, str] = {}
    for part in text.split(","):
        key, sep, value = part.partition("=")
        if not sep:
            raise ValueError(f"malformed item '{part}'")
        items[key.strip()] = value.strip()

    unknown = sorted(set(items) - {"name", "abbr", "since"})
    if unknown:
        raise ValueError(f"unknown keys {unknown}")
    name = items.get("name", "")
    since_text = items.get("since", "")
    if not name or not _SINCE_RE.match(since_text):
        raise ValueError("both name and a numeric since are required")
    return EraDef(name, int(since_text), abbr=items.get("abbr", ""))


def apply_supplemental_era(spec: CalendarSpec, text: Optional[str] = None) -> CalendarSpec:
    """Append the supplemental era to ``spec``; invalid input is logged and ignored."""
    if text is None:
        text = os.environ.get(SUPPLEMENTAL_ERA_ENV, "")
    if not text:
        return spec

    try:
        era = parse_supplemental_era(text)
        extended = spec.with_era(era)
        EraTable(extended.eras, extended.bound)
    except (ValueError, InvalidEraTableError) as e:
        logger.warning("ignoring supplemental era %r: %s", text, e)
        return spec

    logger.debug("supplemental era '%s' added to '%s'", era.name, spec.id.name)
    return extended
