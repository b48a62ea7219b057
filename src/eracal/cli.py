from __future__ import annotations

import argparse
from datetime import date
import sys
import re
import importlib
import inspect

from .core.types import FIELDS


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_INT_RE = re.compile(r"^-?\d+$")


def _parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _parse_point(s: str) -> int:
    """YYYY-MM-DD (local midnight) or a raw instant in ms."""
    from .core.time import instant_from_date

    if _DATE_RE.match(s):
        return instant_from_date(_parse_ymd(s))
    if _INT_RE.match(s):
        return int(s)
    raise SystemExit(f"Expected YYYY-MM-DD or an integer instant, got '{s}'")


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _calendar(name: str, first_day_of_week: int | None = None, min_days: int | None = None):
    import eracal
    from .engines.specs import ALL_SPECS

    if first_day_of_week is None and min_days is None:
        return eracal.get_calendar(name)
    if name not in ALL_SPECS:
        raise SystemExit(f"Week overrides need a built-in calendar. Available: {sorted(ALL_SPECS)}")
    spec = ALL_SPECS[name]
    kw = {}
    if first_day_of_week is not None:
        kw["first_day_of_week"] = first_day_of_week
    if min_days is not None:
        kw["minimal_days_in_first_week"] = min_days
    return eracal.make_calendar(spec.tweak(**kw))


def cmd_resolve(argv: list[str]) -> int:
    import eracal

    p = argparse.ArgumentParser(prog="eracal resolve", description="Instant or Gregorian date -> era date")
    p.add_argument("point", help="YYYY-MM-DD or instant in ms")
    p.add_argument("--calendar", default="japanese")
    p.add_argument("--offset", type=int, default=0, help="zone offset in ms")
    p.add_argument("--attr", action="append", default=[], help="attribute name (repeatable)")
    args = p.parse_args(argv)

    info = eracal.day_info(
        _parse_point(args.point),
        zone_offset=args.offset,
        calendar=args.calendar,
        attributes=tuple(args.attr),
    )
    print(info)
    return 0


def cmd_instant(argv: list[str]) -> int:
    import eracal

    p = argparse.ArgumentParser(prog="eracal instant", description="Era date -> instant (ms)")
    p.add_argument("era")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int)
    p.add_argument("day", type=int)
    p.add_argument("--calendar", default="japanese")
    p.add_argument("--offset", type=int, default=0, help="zone offset in ms")
    args = p.parse_args(argv)

    d = eracal.era_date(args.era, args.year, args.month, args.day, calendar=args.calendar)
    print(eracal.to_instant(d, zone_offset=args.offset))
    return 0


def cmd_bounds(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="eracal bounds", description="Actual field bounds at a date")
    p.add_argument("point", help="YYYY-MM-DD or instant in ms")
    p.add_argument("--calendar", default="japanese")
    p.add_argument("--offset", type=int, default=0, help="zone offset in ms")
    p.add_argument("--field", action="append", choices=FIELDS, default=[], help="field (repeatable, default: all)")
    p.add_argument("--first-day-of-week", type=int, choices=range(1, 8), default=None, help="1=Sunday..7=Saturday")
    p.add_argument("--min-days", type=int, choices=range(1, 8), default=None, help="minimal days in first week")
    args = p.parse_args(argv)

    cal = _calendar(args.calendar, args.first_day_of_week, args.min_days)
    d = cal.resolve(_parse_point(args.point), args.offset)

    print(f"{d.label()}  ({d.era.name} {d.year}, Gregorian {d.absolute_year}-{d.month:02d}-{d.day:02d})")
    print(f"{'field':<21} {'value':>10} {'min':>6} {'gr.min':>7} {'act.min':>8} "
          f"{'l.max':>10} {'act.max':>10} {'max':>10}")
    for f in args.field or FIELDS:
        r = cal.actual_bounds(d, f)
        flag = "  (clamped)" if r.clamped else ""
        print(
            f"{f:<21} {cal.get(d, f):>10} {r.minimum:>6} {r.greatest_minimum:>7} {r.actual_minimum:>8} "
            f"{r.least_maximum:>10} {r.actual_maximum:>10} {r.maximum:>10}{flag}"
        )
    return 0


def cmd_eras(argv: list[str]) -> int:
    import eracal
    from .core.time import from_jdn

    p = argparse.ArgumentParser(prog="eracal eras", description="List the era table")
    p.add_argument("--calendar", default="japanese")
    args = p.parse_args(argv)

    cal = eracal.get_calendar(args.calendar)
    for era in cal.table:
        if era.since is None:
            start = "(unbounded past)"
        else:
            y, m, d = from_jdn(era.first_jdn)
            start = f"{y:04d}-{m:02d}-{d:02d}"
        tag = " open" if era.is_open else ""
        print(f"{era.index:>2}  {era.name:<12} {era.abbr:<3} since {start:<17} origin {era.year_origin:<5} "
              f"max year {cal.guard.max_era_year(era)}{tag}")
    return 0


def main(argv: list[str] | None = None) -> int:
    from .core.errors import EracalError

    if argv is None:
        argv = sys.argv[1:]

    # Shortcut: `eracal YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        argv = ["resolve"] + argv

    p = argparse.ArgumentParser(prog="eracal", description="Era calendar toolkit CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("resolve", help="Instant or Gregorian date -> era date")
    sub.add_parser("instant", help="Era date -> instant (ms)")
    sub.add_parser("bounds", help="Actual field bounds at a date")
    sub.add_parser("eras", help="List the era table")

    # diagnostics
    sub.add_parser("month", help="Print a month grid with week numbers (diagnostics)")
    sub.add_parser("era-table", help="Print era transition table (diagnostics)")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "span-plot"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    commands = {
        "resolve": cmd_resolve,
        "instant": cmd_instant,
        "bounds": cmd_bounds,
        "eras": cmd_eras,
    }
    modules = {
        "month": "eracal.diagnostics.pretty_month",
        "era-table": "eracal.diagnostics.era_table",
    }
    tool_map = {
        "round-trip": "eracal.diagnostics.round_trip",
        "span-plot": "eracal.diagnostics.span_plot",
    }

    try:
        if args.cmd in commands:
            return commands[args.cmd](rest)
        if args.cmd in modules:
            return _run_module_main(modules[args.cmd], rest)
        if args.cmd == "diag":
            return _run_module_main(tool_map[args.tool], rest)
    except EracalError as e:
        raise SystemExit(f"error: {e}")

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
