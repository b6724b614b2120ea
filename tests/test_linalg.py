import pytest

from hpckernels.linalg import (
    NotPositiveDefiniteError,
    SingularMatrixError,
    cholesky,
    gauss_jordan,
)


def _matmul(x, y):
    return [[sum(a * b for a, b in zip(row, col)) for col in zip(*y)] for row in x]


def _transpose(x):
    return [list(col) for col in zip(*x)]


SPD = [[4.0, 2.0, 0.4], [2.0, 3.0, 0.5], [0.4, 0.5, 2.0]]


def test_cholesky_reconstructs_matrix():
    low = cholesky(SPD)
    product = _matmul(low, _transpose(low))
    for got, want in zip(product, SPD):
        assert got == pytest.approx(want)


def test_cholesky_is_lower_triangular():
    low = cholesky(SPD)
    assert all(low[i][j] == 0.0 for i in range(3) for j in range(i + 1, 3))
    assert all(low[i][i] > 0 for i in range(3))
    assert low[0][0] == 2.0


def test_cholesky_leaves_input_alone():
    a = [row[:] for row in SPD]
    cholesky(a)
    assert a == SPD


def test_cholesky_rejects_indefinite():
    with pytest.raises(NotPositiveDefiniteError):
        cholesky([[1.0, 2.0], [2.0, 1.0]])


def test_cholesky_rejects_non_square():
    with pytest.raises(ValueError):
        cholesky([[1.0, 2.0]])


def test_gauss_jordan_inverse_and_solution():
    a = [[0.0, 2.0, 1.0], [1.0, 1.0, 0.0], [3.0, 0.0, 1.0]]
    b = [[1.0, 0.5], [2.0, -1.0], [3.0, 4.0]]
    inverse, solution = gauss_jordan(a, b)
    identity = _matmul(a, inverse)
    for i, row in enumerate(identity):
        assert row == pytest.approx([1.0 if j == i else 0.0 for j in range(3)])
    for got, want in zip(_matmul(a, solution), b):
        assert got == pytest.approx(want)


def test_gauss_jordan_identity():
    eye = [[1.0, 0.0], [0.0, 1.0]]
    inverse, solution = gauss_jordan(eye, [[5.0], [6.0]])
    assert inverse == eye
    assert solution == [[5.0], [6.0]]


def test_gauss_jordan_singular():
    with pytest.raises(SingularMatrixError):
        gauss_jordan([[1.0, 2.0], [2.0, 4.0]], [[1.0], [2.0]])


def test_gauss_jordan_row_mismatch():
    with pytest.raises(ValueError):
        gauss_jordan([[1.0, 0.0], [0.0, 1.0]], [[1.0]])