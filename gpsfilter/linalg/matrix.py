#!/usr/bin/env python3
from __future__ import annotations

from typing import Iterable, Sequence, Tuple

import numpy as np

from gpsfilter.errors import DimensionMismatch, Singular

# |det| below this fraction of the Hadamard bound (product of row norms) is singular.
SINGULAR_EPS = 1e-12


class Matrix:
    """Real-valued matrix with a shape fixed at construction.

    Arithmetic returns new matrices; only ``set_*``, ``scale_inplace`` and
    item assignment mutate. The backing array is never shared with callers.
    """

    __slots__ = ("_a",)

    def __init__(self, rows: int, cols: int) -> None:
        if rows <= 0 or cols <= 0:
            raise DimensionMismatch(f"matrix shape must be positive, got {rows}x{cols}")
        self._a = np.zeros((int(rows), int(cols)), dtype=float)

    # ---------- construction ----------
    @classmethod
    def _wrap(cls, a: np.ndarray) -> "Matrix":
        m = cls.__new__(cls)
        m._a = a
        return m

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "Matrix":
        a = np.array(rows, dtype=float)
        if a.ndim != 2 or a.size == 0:
            raise DimensionMismatch("from_rows expects a non-empty rectangular 2D sequence")
        return cls._wrap(a)

    @classmethod
    def column(cls, values: Iterable[float]) -> "Matrix":
        a = np.array(list(values), dtype=float).reshape(-1, 1)
        if a.size == 0:
            raise DimensionMismatch("column vector needs at least one value")
        return cls._wrap(a)

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        m = cls(n, n)
        m.set_identity()
        return m

    @classmethod
    def zeros(cls, rows: int, cols: int) -> "Matrix":
        return cls(rows, cols)

    # ---------- shape / access ----------
    @property
    def rows(self) -> int:
        return self._a.shape[0]

    @property
    def cols(self) -> int:
        return self._a.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._a.shape  # type: ignore[return-value]

    def __getitem__(self, ij: Tuple[int, int]) -> float:
        return float(self._a[ij])

    def __setitem__(self, ij: Tuple[int, int], value: float) -> None:
        self._a[ij] = float(value)

    def copy(self) -> "Matrix":
        return Matrix._wrap(self._a.copy())

    def to_numpy(self) -> np.ndarray:
        return self._a.copy()

    def __repr__(self) -> str:
        return f"Matrix({self._a.tolist()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._a, other._a))

    __hash__ = None  # type: ignore[assignment]

    # ---------- in-place setters ----------
    def set_identity(self) -> None:
        if self.rows != self.cols:
            raise DimensionMismatch(f"identity needs a square matrix, got {self.rows}x{self.cols}")
        self._a[:] = np.eye(self.rows)

    def set_zero(self) -> None:
        self._a[:] = 0.0

    def set_values(self, *values: float) -> None:
        """Fill row-major; the number of values must equal rows * cols."""
        if len(values) != self._a.size:
            raise DimensionMismatch(
                f"{self.rows}x{self.cols} matrix needs {self._a.size} values, got {len(values)}"
            )
        self._a[:] = np.array(values, dtype=float).reshape(self.shape)

    def scale_inplace(self, k: float) -> None:
        self._a *= float(k)

    # ---------- arithmetic ----------
    def _check_same_shape(self, other: "Matrix", op: str) -> None:
        if self.shape != other.shape:
            raise DimensionMismatch(
                f"cannot {op} {self.rows}x{self.cols} and {other.rows}x{other.cols}"
            )

    def add(self, other: "Matrix") -> "Matrix":
        self._check_same_shape(other, "add")
        return Matrix._wrap(self._a + other._a)

    def subtract(self, other: "Matrix") -> "Matrix":
        self._check_same_shape(other, "subtract")
        return Matrix._wrap(self._a - other._a)

    def multiply(self, other: "Matrix") -> "Matrix":
        if self.cols != other.rows:
            raise DimensionMismatch(
                f"cannot multiply {self.rows}x{self.cols} by {other.rows}x{other.cols}"
            )
        return Matrix._wrap(self._a @ other._a)

    def scale(self, k: float) -> "Matrix":
        return Matrix._wrap(self._a * float(k))

    def transpose(self) -> "Matrix":
        return Matrix._wrap(self._a.T.copy())

    @property
    def T(self) -> "Matrix":
        return self.transpose()

    def trace(self) -> float:
        if self.rows != self.cols:
            raise DimensionMismatch(f"trace needs a square matrix, got {self.rows}x{self.cols}")
        return float(np.trace(self._a))

    def determinant(self) -> float:
        if self.rows != self.cols:
            raise DimensionMismatch(
                f"determinant needs a square matrix, got {self.rows}x{self.cols}"
            )
        if self.rows == 2:
            a = self._a
            return float(a[0, 0] * a[1, 1] - a[0, 1] * a[1, 0])
        return float(np.linalg.det(self._a))

    def invert(self) -> "Matrix":
        det = self.determinant()
        bound = float(np.prod(np.linalg.norm(self._a, axis=1)))
        if det == 0.0 or not np.isfinite(det) or abs(det) <= SINGULAR_EPS * bound:
            raise Singular(f"matrix is singular (det={det:.3e})")
        if self.rows == 2:
            a = self._a
            inv = np.array([[a[1, 1], -a[0, 1]], [-a[1, 0], a[0, 0]]], dtype=float) / det
            return Matrix._wrap(inv)
        try:
            return Matrix._wrap(np.linalg.inv(self._a))
        except np.linalg.LinAlgError as e:
            raise Singular(str(e)) from e

    def __add__(self, other: "Matrix") -> "Matrix":
        return self.add(other)

    def __sub__(self, other: "Matrix") -> "Matrix":
        return self.subtract(other)

    def __matmul__(self, other: "Matrix") -> "Matrix":
        return self.multiply(other)

    def __mul__(self, k: float) -> "Matrix":
        return self.scale(k)

    __rmul__ = __mul__
