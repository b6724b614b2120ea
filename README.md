# hpckernels

Small, self-contained numerical kernels written with the standard library
only:

- **Sparse matrix-vector multiplication** over a CSR matrix read from a
  Matrix Market file, with optional verification against reference values.
- **Streaming k-median clustering**: points arrive in chunks, each chunk is
  reduced to weighted centres by local search, and the collected centres are
  clustered again at the end.
- **Heath-Jarrow-Morton building blocks**: yield/forward curve conversion,
  drift corrections, correlations, discount factors and forward-rate path
  simulation, together with two inverse normal CDF approximations.
- **Dense linear algebra helpers**: Cholesky factorisation and Gauss-Jordan
  elimination with full pivoting.

The random generators (`Rand48` for clustering, `ParkMiller` for the rate
paths) reproduce the classic rand48 and Park-Miller sequences, so runs with
the same seed are repeatable.

## Installation

```
pip install .
```

Nothing beyond the standard library is needed. For the tests:

```
pip install .[test]
pytest
```

## Command line

### Sparse matrix-vector product

```
hpc-spmv matrix.mtx [reference.verif]
```

Reads the matrix, multiplies it by a vector of ones and prints the time the
product took. Entries are read as `col row value` triples that must be
grouped by row; indices are used as stored. With a second file of expected
values (separated by commas or whitespace) each result is checked to within
`1e-6`: the first mismatch is printed and the exit status is its row number
plus one, otherwise `Verification pass` is printed.

### Streaming clustering

```
hpc-streamcluster k1 k2 d n chunksize clustersize infile outfile nproc
```

| argument      | meaning                                                  |
|---------------|----------------------------------------------------------|
| `k1`, `k2`    | minimum and maximum number of centres                    |
| `d`           | dimension of each point                                  |
| `n`           | number of points; if `n > 0` they are generated randomly |
| `chunksize`   | points handled per step                                  |
| `clustersize` | maximum number of intermediate centres                   |
| `infile`      | file of native 32-bit floats, read when `n <= 0`         |
| `outfile`     | where the final centres are written                      |
| `nproc`       | required, but the work always runs in a single thread    |

For example:

```
hpc-streamcluster 10 20 128 4096 4096 1000 none centres.txt 1
```

For each final median the output file holds its global id, its weight and
its coordinates, followed by a blank line.

## Library use

```python
from hpckernels.spmv import spmv
from hpckernels.spmv_cli import read_matrix_market

matrix, ncols = read_matrix_market("matrix.mtx")
y = spmv(matrix, [1.0] * ncols)
```

```python
from hpckernels.cluster_points import Rand48
from hpckernels.streamcluster import SimStream, stream_cluster

rng = Rand48(1)
stream = SimStream(4096, rng)
centers, center_ids = stream_cluster(stream, 10, 20, 16, 4096, 1000, "centres.txt", rng)
```

```python
from hpckernels.hjm import sim_path_yield, discount_factors
from hpckernels.park_miller import ParkMiller

factors = [[0.01] * 10, [0.009] * 10, [0.001] * 10]
yields = [0.1 + 0.005 * i for i in range(11)]
path = sim_path_yield(5.5, yields, factors, ParkMiller(1979))
discounts = discount_factors(5.5, [row[0] for row in path])
```

Other modules:

- `hpckernels.kmedian` — `LocalSearch` and `local_search`, the k-median
  local search used for each chunk.
- `hpckernels.cluster_points` — `Point`, `Rand48`, distances, shuffles and
  centre bookkeeping.
- `hpckernels.normal_inverse` — `cum_normal_inv` (Moro's method).
- `hpckernels.icdf` — `icdf` and `icdf_many` (rational approximation).
- `hpckernels.linalg` — `cholesky`, `gauss_jordan`, `SingularMatrixError`,
  `NotPositiveDefiniteError`.

## What is not included

The package simulates HJM forward-rate paths and computes discount factors,
but it has no swaption pricer and no command that prices a portfolio of
swaptions by Monte Carlo. Pricing has to be assembled from the `hjm`
functions by the caller.