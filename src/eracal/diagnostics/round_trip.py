from __future__ import annotations

import argparse
import random
from typing import List

import eracal
from eracal.core.time import MS_PER_DAY, instant_from_jdn, to_jdn


def parse_calendars(s: str) -> List[str]:
    # "japanese,gregorian" -> ["japanese", "gregorian"]
    return [x.strip() for x in s.split(",") if x.strip()]


def roundtrip_test(
    calendar: str,
    N: int,
    start_year: int,
    end_year: int,
    seed: int,
    *,
    max_failures: int,
) -> int:
    random.seed(seed)
    cal = eracal.get_calendar(calendar)
    lo = instant_from_jdn(to_jdn(start_year, 1, 1))
    hi = instant_from_jdn(to_jdn(end_year + 1, 1, 1)) - 1
    failures = 0

    for _ in range(N):
        t0 = random.randint(lo, hi)
        offset = random.randint(-13, 14) * 3600 * 1000

        d = cal.resolve(t0, offset)
        back = cal.to_instant(d, offset)
        if back != t0:
            failures += 1
            print("\nFAIL (instant)")
            print("calendar:", calendar)
            print("t0:", t0, "offset:", offset)
            print("date:", d)
            print("back:", back)
            if failures >= max_failures:
                return failures

        again = cal.date(d.era, d.year, d.month, d.day, d.millis)
        if again != d or not 0 <= d.millis < MS_PER_DAY:
            failures += 1
            print("\nFAIL (fields)")
            print("calendar:", calendar)
            print("date:", d)
            print("again:", again)
            if failures >= max_failures:
                return failures

    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: instant -> era date -> instant.")
    p.add_argument("--calendars", type=str, default="japanese,gregorian",
                   help="Comma-separated calendar list.")
    p.add_argument("--N", type=int, default=2000, help="Trials per calendar.")
    p.add_argument("--start-year", type=int, default=1800, help="First Gregorian year sampled.")
    p.add_argument("--end-year", type=int, default=2200, help="Last Gregorian year sampled.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per calendar.")
    args = p.parse_args(argv)

    if args.end_year < args.start_year:
        raise SystemExit("--end-year must be >= --start-year")

    total_fail = 0
    for name in parse_calendars(args.calendars):
        print(f"Testing {name} ...")
        f = roundtrip_test(name, N=args.N, start_year=args.start_year, end_year=args.end_year,
                           seed=args.seed, max_failures=args.max_failures)
        total_fail += f

    if total_fail == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {total_fail}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
