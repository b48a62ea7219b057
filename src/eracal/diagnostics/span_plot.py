#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

import eracal
from eracal.core.time import instant_from_jdn, to_jdn


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "eracal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "eracal[diagnostics]"') from e


def build_series(np, calendar: str, start_year: int, end_year: int, *, field: str) -> Tuple["np.ndarray", "np.ndarray", "np.ndarray"]:
    """
    For every era-year touching [start_year, end_year], the Gregorian year,
    the actual maximum of ``field`` and its generic maximum.
    """
    cal = eracal.get_calendar(calendar)
    xs: List[float] = []
    actual: List[float] = []
    generic: List[float] = []

    for gy in range(start_year, end_year + 1):
        # one sample per era that owns part of the Gregorian year
        seen = set()
        for jdn in (to_jdn(gy, 1, 1), to_jdn(gy, 12, 31)):
            d = cal.resolve(instant_from_jdn(jdn))
            if d.era.index in seen:
                continue
            seen.add(d.era.index)
            r = cal.actual_bounds(d, field)
            xs.append(gy + (0.25 if jdn != to_jdn(gy, 1, 1) else 0.0))
            actual.append(r.actual_maximum)
            generic.append(r.maximum)

    return np.asarray(xs), np.asarray(actual, dtype=float), np.asarray(generic, dtype=float)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Scatter plot of actual vs generic field maxima across era transitions.")
    p.add_argument("--calendar", default="japanese")
    p.add_argument("--start-year", type=int, default=1860)
    p.add_argument("--end-year", type=int, default=2030)
    p.add_argument("--field", choices=("month", "day_of_year", "week_of_year"), default="day_of_year")
    p.add_argument("--outbase", default="era_spans", help="Output base name (writes .png)")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    x, actual, generic = build_series(np, args.calendar, args.start_year, args.end_year, field=args.field)
    cut = actual < generic

    plt.rcParams.update({
        "font.size": 10,
        "axes.labelsize": 11,
        "axes.titlesize": 12,
        "legend.fontsize": 10,
        "axes.linewidth": 0.8,
    })

    fig, ax = plt.subplots(figsize=(9.2, 4.8), constrained_layout=True)
    ax.set_axisbelow(True)
    ax.grid(True, which="major", color="0.88", linewidth=0.7)

    ax.set_xlabel("Gregorian year")
    ax.set_ylabel(f"actual maximum of {args.field}")
    ax.set_title(f"{args.calendar}: era-truncated {args.field}")

    ax.scatter(x[~cut], actual[~cut], s=10, c="tab:blue", alpha=0.35, linewidths=0.0, label="full year")
    ax.scatter(x[cut], actual[cut], s=28, c="tab:red", marker="x", linewidths=1.2, label="era boundary")
    ax.plot(x, generic, color="0.45", linewidth=0.8, alpha=0.8, label="generic maximum")

    ax.legend(loc="center left", bbox_to_anchor=(1.02, 0.5), frameon=False)

    fig.savefig(args.outbase + ".png", dpi=300)
    print(f"Saved: {args.outbase}.png")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
