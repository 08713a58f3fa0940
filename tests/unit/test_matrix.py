import numpy as np
import pytest

from gpsfilter.errors import DimensionMismatch, Singular
from gpsfilter.linalg.matrix import Matrix


def test_new_matrix_is_zero_filled():
    m = Matrix(3, 2)
    assert m.shape == (3, 2)
    assert np.all(m.to_numpy() == 0.0)


def test_identity_scale_and_trace():
    m = Matrix.identity(4)
    m.scale_inplace(2.5)
    assert m.trace() == pytest.approx(10.0)
    assert m.scale(2.0)[3, 3] == pytest.approx(5.0)
    assert m[3, 3] == pytest.approx(2.5)  # scale() did not mutate


def test_set_values_row_major_and_count_checked():
    m = Matrix(2, 3)
    m.set_values(1, 2, 3, 4, 5, 6)
    assert m[0, 2] == 3.0 and m[1, 0] == 4.0
    with pytest.raises(DimensionMismatch):
        m.set_values(1, 2, 3)


def test_multiply_and_transpose():
    a = Matrix.from_rows([[1, 2], [3, 4], [5, 6]])
    b = Matrix.from_rows([[1, 0, 2], [0, 1, 3]])
    c = a @ b
    assert c.shape == (3, 3)
    assert np.allclose(c.to_numpy(), a.to_numpy() @ b.to_numpy())
    assert a.T.shape == (2, 3) and a.T[1, 2] == 6.0


def test_dimension_mismatch_on_bad_shapes():
    a = Matrix(2, 3)
    b = Matrix(2, 3)
    with pytest.raises(DimensionMismatch):
        a @ b
    with pytest.raises(DimensionMismatch):
        a + Matrix(3, 2)
    with pytest.raises(DimensionMismatch):
        a - Matrix(2, 2)
    with pytest.raises(DimensionMismatch):
        a.invert()


def test_invert_2x2_and_4x4():
    s = Matrix.from_rows([[4.0, 1.0], [2.0, 3.0]])
    assert np.allclose((s @ s.invert()).to_numpy(), np.eye(2))

    rng = np.random.default_rng(3)
    a = rng.normal(size=(4, 4)) + 4 * np.eye(4)
    m = Matrix.from_rows(a.tolist())
    assert np.allclose((m @ m.invert()).to_numpy(), np.eye(4))


def test_invert_tiny_but_well_conditioned_is_not_singular():
    s = Matrix.from_rows([[2e-6, 0.0], [0.0, 2e-6]])
    inv = s.invert()
    assert inv[0, 0] == pytest.approx(5e5)


def test_singular_raises():
    with pytest.raises(Singular):
        Matrix.from_rows([[1.0, 2.0], [2.0, 4.0]]).invert()
    with pytest.raises(Singular):
        Matrix(2, 2).invert()
    with pytest.raises(Singular):
        Matrix.from_rows([[1, 2, 3], [2, 4, 6], [0, 0, 1]]).invert()


def test_copies_do_not_alias():
    a = Matrix.identity(2)
    b = a.copy()
    b[0, 1] = 7.0
    arr = a.to_numpy()
    arr[0, 0] = 99.0
    assert a[0, 1] == 0.0 and a[0, 0] == 1.0
    assert a != b
    assert a == Matrix.identity(2)
