from __future__ import annotations

import argparse

import eracal
from eracal.core.time import from_jdn, instant_from_jdn


def iso(jdn: int) -> str:
    y, m, d = from_jdn(jdn)
    return f"{y:04d}-{m:02d}-{d:02d}"


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print every era transition with the truncated bounds of the years on both sides."
    )
    p.add_argument("--calendar", default="japanese")
    args = p.parse_args(argv)

    cal = eracal.get_calendar(args.calendar)

    headers = ["Transition", "Date", "Old last", "mon", "doy", "woy", "New first", "mon", "doy", "woy"]
    colw = [20, 10, 12, 4, 4, 4, 12, 4, 4, 4]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    eras = list(cal.table)
    for old, new in zip(eras, eras[1:]):
        first = new.first_jdn
        before = cal.resolve(instant_from_jdn(first - 1))
        after = cal.resolve(instant_from_jdn(first))

        def cols(d):
            return [
                d.label(),
                f"{cal.actual_minimum(d, 'month')}-{cal.actual_maximum(d, 'month')}",
                str(cal.actual_maximum(d, "day_of_year")),
                str(cal.actual_maximum(d, "week_of_year")),
            ]

        row = [f"{old.name} -> {new.name}", iso(first)] + cols(before) + cols(after)
        print("  ".join(c.ljust(w) for c, w in zip(row, colw)))

    last = cal.table.open_era
    print(f"\nOpen era: {last.name}, max year {cal.guard.max_era_year(last)} "
          f"(ceiling {iso(cal.guard.ceiling_jdn)})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
