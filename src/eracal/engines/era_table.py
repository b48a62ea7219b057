"""
eracal.engines.era_table
------------------------
The ordered, immutable list of eras that partitions the instant axis.

Each era owns the half-open interval [since, next.since). The first era may
be proleptic (no start), the last one is always open (no end). A transition
instant belongs to the new era.
"""

from __future__ import annotations

import bisect
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Iterator, List, Optional, Sequence, Tuple, TypeVar

from ..core.errors import InvalidEraTableError, UnknownEraError
from ..core.time import MS_PER_DAY, from_jdn, instant_from_jdn, jdn_from_instant
from ..core.types import Era
from .overflow import RepresentableBound, open_era_max_year

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class EraDef:
    """Construction payload for one era. ``since=None`` marks the proleptic era."""
    name: str
    since: Optional[int] = None
    year_origin: Optional[int] = None
    abbr: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("era name must be non-empty")


class WriteOnce(Generic[T]):
    """A lazily computed value that is published exactly once."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ready = False
        self._value: Optional[T] = None

    def get(self, compute: Callable[[], T]) -> T:
        if self._ready:
            return self._value  # type: ignore[return-value]
        with self._lock:
            if not self._ready:
                self._value = compute()
                self._ready = True
        return self._value  # type: ignore[return-value]


def _build_eras(defs: Sequence[EraDef], bound: RepresentableBound) -> Tuple[Era, ...]:
    if not defs:
        raise InvalidEraTableError("era table must contain at least one era")

    seen: Dict[str, int] = {}
    eras: List[Era] = []
    prev: Optional[EraDef] = None
    last = len(defs) - 1

    for i, d in enumerate(defs):
        if d.name in seen:
            raise InvalidEraTableError(f"Duplicate era name '{d.name}'")
        seen[d.name] = i

        if d.since is None:
            if i > 0:
                raise InvalidEraTableError(f"Era '{d.name}': only the first era may start in the unbounded past")
            origin = 1 if d.year_origin is None else d.year_origin
        else:
            if d.since % MS_PER_DAY != 0:
                raise InvalidEraTableError(f"Era '{d.name}': since={d.since} is not at a day boundary")
            if prev is not None and prev.since is not None and d.since <= prev.since:
                raise InvalidEraTableError(
                    f"Era '{d.name}' (since={d.since}) does not start after '{prev.name}' (since={prev.since})"
                )
            if not bound.floor <= d.since <= bound.ceiling:
                raise InvalidEraTableError(f"Era '{d.name}': since={d.since} outside representable range")
            origin = from_jdn(jdn_from_instant(d.since))[0]
            if d.year_origin is not None and d.year_origin != origin:
                raise InvalidEraTableError(
                    f"Era '{d.name}': year_origin={d.year_origin} but the era starts in year {origin}"
                )

        eras.append(Era(name=d.name, abbr=d.abbr, index=i, since=d.since, year_origin=origin, is_open=(i == last)))
        prev = d

    return tuple(eras)


class EraTable:
    def __init__(self, defs: Sequence[EraDef], bound: RepresentableBound = RepresentableBound()):
        self.bound = bound
        self.eras = _build_eras(defs, bound)
        self._starts = [e.since for e in self.eras if e.since is not None]
        self._base = 1 if self.eras[0].is_proleptic else 0
        self._by_name = {e.name: e for e in self.eras}
        self._by_abbr = {e.abbr: e for e in self.eras if e.abbr}
        self._open_max_year: WriteOnce[int] = WriteOnce()
        logger.debug("era table built: %s", [e.name for e in self.eras])

    def __len__(self) -> int:
        return len(self.eras)

    def __iter__(self) -> Iterator[Era]:
        return iter(self.eras)

    def __getitem__(self, index: int) -> Era:
        return self.eras[index]

    @property
    def open_era(self) -> Era:
        return self.eras[-1]

    def era_containing(self, instant: int) -> Era:
        """The era whose interval holds ``instant``. Instants before a bounded first era map to it."""
        i = bisect.bisect_right(self._starts, instant) - 1 + self._base
        return self.eras[max(i, 0)]

    def era_containing_jdn(self, jdn: int) -> Era:
        return self.era_containing(instant_from_jdn(jdn))

    def era_by_name(self, name: str) -> Era:
        era = self._by_name.get(name) or self._by_abbr.get(name)
        if era is None:
            raise UnknownEraError(f"Unknown era '{name}'. Available: {[e.name for e in self.eras]}")
        return era

    def next_era_start(self, era: Era) -> Optional[int]:
        if era.is_open:
            return None
        return self.eras[era.index + 1].since

    def era_end(self, era: Era) -> Optional[int]:
        """Last instant of ``era``; None for the open era."""
        nxt = self.next_era_start(era)
        return None if nxt is None else nxt - 1

    def last_jdn(self, era: Era) -> Optional[int]:
        end = self.era_end(era)
        return None if end is None else jdn_from_instant(end)

    def open_era_max_year(self) -> int:
        def compute() -> int:
            value = open_era_max_year(self.open_era, self.bound.ceiling)
            logger.debug("open era '%s' max year = %d", self.open_era.name, value)
            return value
        return self._open_max_year.get(compute)
