from __future__ import annotations

import argparse

import eracal
from eracal.core.time import day_of_week, month_length, to_jdn, instant_from_jdn


DOW_NAMES = ("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa")


def dow_header(first_day_of_week: int) -> str:
    names = [DOW_NAMES[(first_day_of_week - 1 + i) % 7] for i in range(7)]
    return "wy wm  " + " ".join(n.ljust(6) for n in names)


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, header: str, weeks: list[tuple[str, list[tuple[str, str]]]]) -> None:
    print(title)
    print(header)
    print("-" * len(header))
    for tag, wk in weeks:
        print(tag + " ".join(c[0] for c in wk))
        print(" " * len(tag) + " ".join(c[1] for c in wk))
    print()


def gregorian_month_calendar(calendar: str, gy: int, gm: int) -> None:
    cal = eracal.get_calendar(calendar)
    fdw = cal.weeks.first_day_of_week
    first = to_jdn(gy, gm, 1)
    last = first + month_length(gy, gm) - 1

    weeks: list[tuple[str, list[tuple[str, str]]]] = []
    wk: list[tuple[str, str]] = []
    tag: str | None = None
    pad = (day_of_week(first) - fdw) % 7
    for _ in range(pad):
        wk.append(cell("", ""))
    for jdn in range(first, last + 1):
        d = cal.resolve(instant_from_jdn(jdn))
        if tag is None:
            tag = f"{cal.get(d, 'week_of_year'):>2} {cal.get(d, 'week_of_month'):>2}  "
        top = f"{d.day:2d}"
        bot = f"{d.era.abbr or d.era.name[:2]}{d.year}"
        wk.append(cell(top, bot))
        if len(wk) == 7:
            weeks.append((tag, wk))
            wk = []
            tag = None
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append((tag or "", wk))

    title = f"{calendar} Gregorian month  {gy}-{gm:02d}"
    print_grid(title, dow_header(fdw), weeks)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a Gregorian month grid with era labels and week-of-year / week-of-month numbers."
    )
    p.add_argument("--calendar", default="japanese")
    p.add_argument("--greg", nargs=2, type=int, metavar=("GY", "GM"),
                   help="Gregorian month to print: GY GM (e.g. 1989 1)")
    args = p.parse_args(argv)

    if not args.greg:
        # sensible default demo: the Showa -> Heisei transition
        gregorian_month_calendar(args.calendar, gy=1989, gm=1)
        return 0

    gy, gm = args.greg
    gregorian_month_calendar(args.calendar, gy=gy, gm=gm)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
