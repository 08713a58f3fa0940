#!/usr/bin/env python3
from __future__ import annotations

from typing import Optional, Tuple

from gpsfilter.errors import DimensionMismatch
from gpsfilter.linalg.matrix import Matrix


class KalmanFilter:
    """Discrete linear Kalman filter with n states and m observations.

    predict: x <- F x, P <- F P F^T + Q
    correct: y = z - H x, S = H P H^T + R, K = P H^T S^-1,
             x <- x + K y, P <- (I - K H) P

    Holds x (n x 1), P (n x n), F (n x n), Q (n x n), H (m x n), R (m x m).
    The caller configures F/Q/H/R and the initial x/P, then feeds one
    observation per `step`.
    """

    def __init__(self, n: int, m: int) -> None:
        self.n = int(n)
        self.m = int(m)
        self.x = Matrix(self.n, 1)
        self.P = Matrix(self.n, self.n)
        self.F = Matrix.identity(self.n)
        self.Q = Matrix(self.n, self.n)
        self.H = Matrix(self.m, self.n)
        self.R = Matrix(self.m, self.m)
        self._I = Matrix.identity(self.n)
        self.timestep = 0

    def _predicted(self, F: Matrix) -> Tuple[Matrix, Matrix]:
        x = F @ self.x
        P = F @ self.P @ F.T + self.Q
        return x, P

    def _corrected(self, x: Matrix, P: Matrix, z: Matrix) -> Tuple[Matrix, Matrix]:
        if z.shape != (self.m, 1):
            raise DimensionMismatch(f"observation must be {self.m}x1, got {z.rows}x{z.cols}")
        y = z - (self.H @ x)
        S = self.H @ P @ self.H.T + self.R
        K = P @ self.H.T @ S.invert()
        x = x + K @ y
        # Joseph form of (I - K H) P; equal for the optimal K but stays PSD
        # when P is ~1e12 and (I - K H) rounds to ~1e-16.
        I_KH = self._I - K @ self.H
        P = I_KH @ P @ I_KH.T + K @ self.R @ K.T
        P = (P + P.T).scale(0.5)
        return x, P

    def predict(self) -> None:
        """Advance the estimate one interval and grow P by Q."""
        self.x, self.P = self._predicted(self.F)

    def correct(self, z: Matrix) -> None:
        """Blend observation z into the current estimate."""
        self.x, self.P = self._corrected(self.x, self.P, z)

    def step(self, z: Matrix, transition: Optional[Matrix] = None) -> None:
        """One predict+correct cycle, optionally installing a new F first.

        Everything is computed before assignment so a failure leaves the
        filter as it was.
        """
        F = self.F if transition is None else transition
        if F.shape != (self.n, self.n):
            raise DimensionMismatch(f"transition must be {self.n}x{self.n}, got {F.rows}x{F.cols}")
        x, P = self._predicted(F)
        x, P = self._corrected(x, P, z)
        if transition is not None:
            self.F = transition.copy()
        self.x, self.P = x, P
        self.timestep += 1
