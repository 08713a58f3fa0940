#!/usr/bin/env python3
"""
Input: text with one "lat,lon" pair per line (other lines are skipped).
Output:
  CSV rows lat,lon,bearing_deg,mph (stdout or --csv-out)
  optional PNG of raw vs filtered track (--plot, needs matplotlib)
Note:
  The format carries no timestamps, so every fix is taken to be --dt
  seconds after the previous one.

Usage:
  python -m scripts.filter_track track.txt --noise 1.0 --csv-out artifacts/track_filtered.csv
  cat track.txt | python -m scripts.filter_track -
"""

from __future__ import annotations

import argparse
import csv
import logging
import os
import sys
from typing import List, TextIO, Tuple

from gpsfilter.config import load_config
from gpsfilter.domain.geo import distance_miles
from gpsfilter.estimators.gps_cv import GPSFilter
from gpsfilter.io.latlon_reader import iter_fixes
from gpsfilter.types import NavSolution

try:
    import matplotlib.pyplot as plt  # optional
except Exception:
    plt = None

log = logging.getLogger("filter_track")

FIELDS = ["lat", "lon", "bearing_deg", "mph"]


def run_filter(
    stream: TextIO, noise: float, dt: float, params=None
) -> Tuple[List[Tuple[float, float]], List[NavSolution]]:
    gf = GPSFilter(noise, params)
    raw: List[Tuple[float, float]] = []
    out: List[NavSolution] = []
    for fix in iter_fixes(stream, dt):
        gf.ingest_fix(fix.lat, fix.lon, fix.dt)
        raw.append((fix.lat, fix.lon))
        out.append(gf.solution())
    return raw, out


def write_csv(f: TextIO, sols: List[NavSolution]) -> None:
    w = csv.writer(f)
    w.writerow(FIELDS)
    for s in sols:
        w.writerow([f"{s.lat:.7f}", f"{s.lon:.7f}", f"{s.bearing:.2f}", f"{s.mph:.3f}"])


def plot_track(png: str, raw, sols: List[NavSolution]) -> None:
    if plt is None:
        raise SystemExit("matplotlib is required for plotting. Try: pip install matplotlib")
    plt.figure()
    plt.plot([p[1] for p in raw], [p[0] for p in raw], label="fixes", linestyle="--")
    plt.plot([s.lon for s in sols], [s.lat for s in sols], label="filtered")
    plt.xlabel("lon [deg]")
    plt.ylabel("lat [deg]")
    plt.title("GPS Kalman track")
    plt.legend()
    plt.tight_layout()
    plt.savefig(png, dpi=120)
    plt.close()


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Kalman-filter a lat,lon track and derive bearing/speed")
    ap.add_argument("input", nargs="?", default="-", help="lat,lon text file ('-' = stdin)")
    ap.add_argument("--config", default="configs/gps_filter.yaml")
    ap.add_argument("--noise", type=float, default=None, help="override filter.noise")
    ap.add_argument("--dt", type=float, default=None, help="override reader.dt (s)")
    ap.add_argument("--csv-out", default=None)
    ap.add_argument("--plot", default=None, help="PNG path for raw vs filtered track")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    fparams, rparams = load_config(args.config)
    noise = fparams.noise if args.noise is None else args.noise
    dt = rparams.dt if args.dt is None else args.dt

    if args.input == "-":
        raw, sols = run_filter(sys.stdin, noise, dt, fparams)
    else:
        if not os.path.exists(args.input):
            raise SystemExit(f"Input not found: {args.input}")
        with open(args.input, "r") as f:
            raw, sols = run_filter(f, noise, dt, fparams)

    if not sols:
        print("No lat,lon pairs in input", file=sys.stderr)
        return 1
    log.info("filtered %d fixes (noise=%s, dt=%s)", len(sols), noise, dt)

    if args.csv_out:
        if os.path.dirname(args.csv_out):
            os.makedirs(os.path.dirname(args.csv_out), exist_ok=True)
        with open(args.csv_out, "w", newline="") as f:
            write_csv(f, sols)
    else:
        write_csv(sys.stdout, sols)

    if args.plot:
        plot_track(args.plot, raw, sols)

    dist = sum(distance_miles(a.lat, a.lon, b.lat, b.lon) for a, b in zip(sols, sols[1:]))
    last = sols[-1]
    summary = (
        f"Fixes: {len(sols)} | Move: {dist:.3f} mi | "
        f"Last: {last.lat:.6f},{last.lon:.6f} hdg {last.bearing:.1f} deg {last.mph:.1f} mph"
    )
    print(summary, file=sys.stderr if not args.csv_out else sys.stdout)
    if args.csv_out:
        print(f"Wrote: {args.csv_out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
