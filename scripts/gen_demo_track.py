#!/usr/bin/env python3
"""
gen_demo_track.py - deterministic noisy lat,lon track

Writes one "lat,lon" pair per line along a straight path with Gaussian
jitter, suitable as input for scripts/filter_track.py.

Usage:
  python3 scripts/gen_demo_track.py --out artifacts/demo_track.txt --speed-mph 30 --heading 45
"""

import argparse
import math
from pathlib import Path

from gpsfilter.domain.geo import EARTH_RADIUS_MILES, SECONDS_PER_HOUR
from gpsfilter.sim.track import TrackParams, constant_velocity_track


def rate_deg_per_s(lat_deg: float, speed_mph: float, heading_deg: float):
    """(dlat, dlon) per second for a ground speed and compass heading near lat_deg."""
    miles_per_s = speed_mph / SECONDS_PER_HOUR
    ang = math.degrees(miles_per_s / EARTH_RADIUS_MILES)
    h = math.radians(heading_deg)
    dlat = ang * math.cos(h)
    dlon = ang * math.sin(h) / (math.cos(math.radians(lat_deg)) + 1e-12)
    return dlat, dlon


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Generate a noisy straight-line lat,lon track")
    ap.add_argument("--lat0", type=float, default=37.4275)
    ap.add_argument("--lon0", type=float, default=-122.1697)
    ap.add_argument("--speed-mph", type=float, default=30.0)
    ap.add_argument("--heading", type=float, default=90.0, help="deg clockwise from north")
    ap.add_argument("--n", type=int, default=120)
    ap.add_argument("--dt", type=float, default=1.0)
    ap.add_argument("--noise-deg", type=float, default=2e-5)
    ap.add_argument("--seed", type=int, default=0)
    ap.add_argument("--out", default="artifacts/demo_track.txt")
    args = ap.parse_args(argv)

    dlat, dlon = rate_deg_per_s(args.lat0, args.speed_mph, args.heading)
    fixes = constant_velocity_track(
        TrackParams(args.lat0, args.lon0, dlat, dlon, args.dt, args.noise_deg),
        args.n,
        seed=args.seed,
    )

    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w") as f:
        for fx in fixes:
            f.write(f"{fx.lat:.7f},{fx.lon:.7f}\n")
    print(f"Wrote {len(fixes)} fixes -> {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
