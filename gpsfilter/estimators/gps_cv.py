#!/usr/bin/env python3
from __future__ import annotations

import logging
import math
from typing import Tuple

from gpsfilter.config import FilterParams
from gpsfilter.domain import geo
from gpsfilter.errors import InvalidInterval, InvalidNoise
from gpsfilter.estimators.kalman import KalmanFilter
from gpsfilter.linalg.matrix import Matrix
from gpsfilter.types import NavSolution

log = logging.getLogger(__name__)


class GPSFilter:
    """Constant-velocity Kalman filter on (lat, lon, dlat/dt, dlon/dt).

    Position units are thousandths of a degree; velocity units are
    thousandths of a position unit per second, so a typical position is
    hundreds of thousands of units and a typical velocity is around ten.
    The axes are treated as rectilinear, which is poor near the poles but
    avoids converting between lat/lon and a local frame.

    Not thread-safe: serialise access when sharing an instance.
    """

    def __init__(self, noise: float = 1.0, params: FilterParams | None = None) -> None:
        noise = float(noise)
        if not math.isfinite(noise) or noise < 0.0:
            raise InvalidNoise(f"noise must be a finite value >= 0, got {noise}")
        self.noise = noise
        self.p = params or FilterParams()

        kf = KalmanFilter(4, 2)
        # fmt: off
        kf.F.set_identity()
        # observe (x, y) only
        kf.H.set_values(
            1.0, 0.0, 0.0, 0.0,
            0.0, 1.0, 0.0, 0.0,
        )
        pos, vel = self.p.pos_noise, self.p.vel_noise
        kf.Q.set_values(
            pos, 0.0, 0.0, 0.0,
            0.0, pos, 0.0, 0.0,
            0.0, 0.0, vel, 0.0,
            0.0, 0.0, 0.0, vel,
        )
        kf.R.set_values(
            pos * noise, 0.0,
            0.0, pos * noise,
        )
        # fmt: on
        kf.x.set_zero()
        kf.P.set_identity()
        kf.P.scale_inplace(self.p.initial_variance)
        self._kf = kf
        self.set_interval(1.0)

    # ---------- model ----------
    def _transition(self, dt: float) -> Matrix:
        F = self._kf.F.copy()
        F[0, 2] = self.p.unit_scale * dt
        F[1, 3] = self.p.unit_scale * dt
        return F

    @staticmethod
    def _check_interval(dt: float) -> float:
        dt = float(dt)
        if not math.isfinite(dt) or dt <= 0.0:
            raise InvalidInterval(f"elapsed time must be > 0 s, got {dt}")
        return dt

    def set_interval(self, dt: float) -> None:
        """Rewrite the position/velocity coupling of F for `dt` seconds."""
        self._kf.F = self._transition(self._check_interval(dt))

    def ingest_fix(self, lat: float, lon: float, dt: float) -> None:
        dt = self._check_interval(dt)
        s = self.p.position_scale
        z = Matrix.column([lat * s, lon * s])
        self._kf.step(z, transition=self._transition(dt))
        log.debug(
            "fix #%d lat=%.7f lon=%.7f dt=%.3f -> trace(P)=%.3e",
            self._kf.timestep,
            lat,
            lon,
            dt,
            self._kf.P.trace(),
        )

    # ---------- accessors ----------
    @property
    def timestep(self) -> int:
        return self._kf.timestep

    def position(self) -> Tuple[float, float]:
        s = self.p.position_scale
        return self._kf.x[0, 0] / s, self._kf.x[1, 0] / s

    def velocity(self) -> Tuple[float, float]:
        """Estimated (dlat, dlon) in degrees per second."""
        k = self.p.unit_scale / self.p.position_scale
        return self._kf.x[2, 0] * k, self._kf.x[3, 0] * k

    def state_estimate(self) -> Matrix:
        return self._kf.x.copy()

    def estimate_covariance(self) -> Matrix:
        return self._kf.P.copy()

    def covariance_trace(self) -> float:
        return self._kf.P.trace()

    def bearing(self) -> float:
        lat, lon = self.position()
        dlat, dlon = self.velocity()
        return geo.bearing_deg(lat, lon, dlat, dlon)

    def speed_mph(self) -> float:
        lat, lon = self.position()
        dlat, dlon = self.velocity()
        return geo.speed_mph(lat, lon, dlat, dlon)

    def solution(self) -> NavSolution:
        lat, lon = self.position()
        return NavSolution(lat=lat, lon=lon, bearing=self.bearing(), mph=self.speed_mph())
