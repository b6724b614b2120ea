"""Cholesky decomposition and Gauss-Jordan elimination with full pivoting."""

from __future__ import annotations

import math
from typing import Sequence


class SingularMatrixError(ValueError):
    """Raised when a matrix has no inverse."""


class NotPositiveDefiniteError(ValueError):
    """Raised when a matrix is not positive definite."""


def _square_copy(a: Sequence[Sequence[float]]) -> list[list[float]]:
    n = len(a)
    if any(len(row) != n for row in a):
        raise ValueError("matrix must be square")
    return [list(map(float, row)) for row in a]


def cholesky(a: Sequence[Sequence[float]]) -> list[list[float]]:
    """Return the lower triangular L with L @ L.T == a.

    Only the upper triangle (with the diagonal) of ``a`` is read.
    """
    m = _square_copy(a)
    n = len(m)
    for i in range(n):
        for j in range(i, n):
            s = m[i][j]
            for k in range(i - 1, -1, -1):
                s -= m[i][k] * m[j][k]
            if i == j:
                if s <= 0.0:
                    raise NotPositiveDefiniteError("matrix is not positive definite")
                m[i][i] = math.sqrt(s)
            else:
                m[j][i] = s / m[i][i]
    for i, row in enumerate(m):
        row[i + 1 :] = [0.0] * (n - i - 1)
    return m


def gauss_jordan(
    a: Sequence[Sequence[float]], b: Sequence[Sequence[float]]
) -> tuple[list[list[float]], list[list[float]]]:
    """Solve a @ X == b for every column of b.

    Returns the inverse of ``a`` and the solutions X.
    """
    m = _square_copy(a)
    n = len(m)
    rhs = [list(map(float, row)) for row in b]
    if len(rhs) != n:
        raise ValueError("right-hand side must have as many rows as the matrix")

    ipiv = [0] * n
    indxr: list[int] = []
    indxc: list[int] = []
    for _ in range(n):
        big = 0.0
        irow = icol = -1
        for j in range(n):
            if ipiv[j] == 1:
                continue
            for k in range(n):
                if ipiv[k] == 0:
                    if abs(m[j][k]) >= big:
                        big = abs(m[j][k])
                        irow, icol = j, k
                elif ipiv[k] > 1:
                    raise SingularMatrixError("gaussj: Singular Matrix-1")
        if icol < 0:
            raise SingularMatrixError("gaussj: Singular Matrix-1")
        ipiv[icol] += 1
        if irow != icol:
            m[irow], m[icol] = m[icol], m[irow]
            rhs[irow], rhs[icol] = rhs[icol], rhs[irow]
        indxr.append(irow)
        indxc.append(icol)
        if m[icol][icol] == 0.0:
            raise SingularMatrixError("gaussj: Singular Matrix-2")
        pivinv = 1.0 / m[icol][icol]
        m[icol][icol] = 1.0
        m[icol] = [v * pivinv for v in m[icol]]
        rhs[icol] = [v * pivinv for v in rhs[icol]]
        pivot_row, pivot_rhs = m[icol], rhs[icol]
        for ll in range(n):
            if ll == icol:
                continue
            dum = m[ll][icol]
            m[ll][icol] = 0.0
            m[ll] = [v - p * dum for v, p in zip(m[ll], pivot_row)]
            rhs[ll] = [v - p * dum for v, p in zip(rhs[ll], pivot_rhs)]

    for r, c in reversed(list(zip(indxr, indxc))):
        if r != c:
            for row in m:
                row[r], row[c] = row[c], row[r]
    return m, rhs