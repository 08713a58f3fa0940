from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List

from gpsfilter.types import Fix


@dataclass
class TrackParams:
    lat0: float = 0.0
    lon0: float = 0.0
    dlat: float = 0.0  # deg per second
    dlon: float = 0.0  # deg per second
    dt: float = 1.0  # s between fixes
    noise_deg: float = 0.0  # std of Gaussian jitter on each fix


def constant_velocity_track(p: TrackParams, n: int, seed: int | None = None) -> List[Fix]:
    """n fixes along a straight lat/lon path; first fix is at (lat0, lon0)."""
    rng = random.Random(seed)
    out: List[Fix] = []
    for k in range(n):
        t = k * p.dt
        lat = p.lat0 + p.dlat * t
        lon = p.lon0 + p.dlon * t
        if p.noise_deg > 0.0:
            lat += rng.gauss(0.0, p.noise_deg)
            lon += rng.gauss(0.0, p.noise_deg)
        out.append(Fix(lat, lon, p.dt))
    return out
