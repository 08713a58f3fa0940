from __future__ import annotations

from dataclasses import dataclass

# Units: degrees for lat/lon, seconds for dt, degrees per second for rates.


@dataclass(frozen=True)
class Fix:
    lat: float
    lon: float
    dt: float = 1.0  # seconds since the previous fix


@dataclass(frozen=True)
class NavSolution:
    lat: float
    lon: float
    bearing: float  # deg, [0, 360)
    mph: float
