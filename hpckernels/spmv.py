"""Sparse matrix-vector multiplication in compressed sparse row form."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import pairwise
from typing import Sequence


@dataclass(frozen=True)
class CsrMatrix:
    """Matrix in CSR form: row ``r`` holds ``values[row_ptr[r]:row_ptr[r+1]]``."""

    values: Sequence[float]
    row_ptr: Sequence[int]
    col_idx: Sequence[int]

    def __post_init__(self) -> None:
        if len(self.values) != len(self.col_idx):
            raise ValueError("values and col_idx must have the same length")
        if not self.row_ptr:
            raise ValueError("row_ptr must hold at least one entry")
        if any(c < 0 for c in self.col_idx):
            raise ValueError("column indices must be non-negative")

    @property
    def nrows(self) -> int:
        """Number of rows."""
        return len(self.row_ptr) - 1


def spmv(matrix: CsrMatrix, x: Sequence[float]) -> list[float]:
    """Return the product of a CSR matrix with a dense vector."""
    values, cols = matrix.values, matrix.col_idx
    result = []
    for start, end in pairwise(matrix.row_ptr):
        total = 0.0
        for a, j in zip(values[start:end], cols[start:end]):
            total += a * x[j]
        result.append(total)
    return result