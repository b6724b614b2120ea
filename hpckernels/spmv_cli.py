"""Command-line driver: multiply a Matrix Market matrix by a vector of ones."""

from __future__ import annotations

import re
import sys
import time
from itertools import islice
from os import PathLike
from typing import Sequence

from hpckernels.spmv import CsrMatrix, spmv

TOLERANCE = 1e-6

_USAGE = "Usage: <file.mtx> <file.verif> \n *.verif is optional \n"


def read_matrix_market(path: str | PathLike[str]) -> tuple[CsrMatrix, int]:
    """Read a coordinate Matrix Market file into CSR form.

    Entries are read as ``col row value`` and must be grouped by ``row``;
    indices are used as they are stored. Returns the matrix and the number
    of columns from the header.
    """
    with open(path, encoding="ascii", errors="replace") as f:
        lines = f.read().splitlines()

    header_at = next((n for n, line in enumerate(lines) if not line.startswith("%")), None)
    if header_at is None:
        raise ValueError("missing size line")
    header = lines[header_at].split()
    try:
        nrows, ncols, nnz = (int(v) for v in header[:3])
    except ValueError:
        raise ValueError(f"malformed size line: {lines[header_at]!r}") from None
    if min(nrows, ncols, nnz) < 0:
        raise ValueError("sizes must not be negative")

    tokens = iter(" ".join(lines[header_at + 1 :]).split())
    values: list[float] = []
    cols: list[int] = []
    row_ptr = [0] * (nrows + 1)
    current = 0
    for i in range(nnz):
        triple = list(islice(tokens, 3))
        try:
            col, row, value = int(triple[0]), int(triple[1]), float(triple[2])
        except (IndexError, ValueError):
            raise ValueError(f"Error reading file at line {i}") from None
        if col < 0 or row < 0:
            raise ValueError(f"Error reading file at line {i}")
        if row > nrows:
            raise ValueError(f"row index {row} exceeds {nrows} rows")
        cols.append(col)
        values.append(value)
        while current < row:
            current += 1
            row_ptr[current] = i

    if current < nrows - 1:
        while current < nrows:
            current += 1
            row_ptr[current] = nnz
    row_ptr[nrows] = nnz
    return CsrMatrix(values, row_ptr, cols), ncols


def read_verification(path: str | PathLike[str], count: int) -> list[float]:
    """Read ``count`` reference values separated by commas or whitespace."""
    with open(path, encoding="ascii", errors="replace") as f:
        tokens = (t for t in re.split(r"[,\s]+", f.read()) if t)
        result = []
        for i in range(count):
            token = next(tokens, None)
            try:
                result.append(float(token))  # type: ignore[arg-type]
            except (TypeError, ValueError):
                raise ValueError(f"Error reading file at line {i}") from None
    return result


def verify(
    y: Sequence[float], expected: Sequence[float], tolerance: float = TOLERANCE
) -> int | None:
    """Return the index of the first value off by more than tolerance, or None."""
    return next(
        (i for i, (a, b) in enumerate(zip(y, expected)) if abs(a - b) > tolerance),
        None,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point; returns the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(_USAGE)
        return 1

    try:
        matrix, ncols = read_matrix_market(args[0])
    except OSError:
        print(f"ERROR: Unable to open file `{args[0]}'.")
        return 1
    except ValueError as exc:
        print(exc)
        return 1

    expected: list[float] | None = None
    if len(args) > 1:
        try:
            expected = read_verification(args[1], matrix.nrows)
        except OSError:
            print(f"ERROR: Unable to open file `{args[1]}'.")
            return 1
        except ValueError as exc:
            print(exc)
            return 1

    # Column indices are used as stored, so the vector spans the largest one.
    width = max([ncols, *(c + 1 for c in matrix.col_idx)])
    x = [1.0] * width

    start = time.perf_counter()
    y = spmv(matrix, x)
    elapsed = time.perf_counter() - start
    print(f"spmv_serial time: {elapsed:f}")

    if expected is not None:
        failed = verify(y, expected, TOLERANCE)
        if failed is not None:
            print("Verification fail ")
            print(f"{y[failed]:.17f}  -  {expected[failed]:.17f} ")
            return failed + 1
        print("Verification pass ")

    print("done")
    return 0