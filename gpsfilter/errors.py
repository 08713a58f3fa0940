from __future__ import annotations


class GPSFilterError(Exception):
    """Base class for all gpsfilter errors."""


class DimensionMismatch(GPSFilterError, ValueError):
    """Matrix operation on incompatible shapes (a configuration bug)."""


class Singular(GPSFilterError, ArithmeticError):
    """Inversion of a (near) singular matrix, e.g. a degenerate innovation covariance."""


class InvalidInterval(GPSFilterError, ValueError):
    """Non-positive or non-finite elapsed time between fixes."""


class InvalidNoise(GPSFilterError, ValueError):
    """Negative or non-finite observation noise multiplier."""
