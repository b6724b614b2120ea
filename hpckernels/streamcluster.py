"""Streaming k-median clustering of points read in fixed-size chunks."""

from __future__ import annotations

import re
import sys
import time
from array import array
from os import PathLike
from pathlib import Path
from typing import Protocol, Sequence

from hpckernels.cluster_points import (
    INT_MAX,
    Point,
    Rand48,
    contcenters,
    copycenters,
)
from hpckernels.kmedian import local_search

SEED = 1

_FLOAT_SIZE = array("f").itemsize

_USAGE = """\
usage: streamcluster k1 k2 d n chunksize clustersize infile outfile nproc
  k1:          Min. number of centers allowed
  k2:          Max. number of centers allowed
  d:           Dimension of each data point
  n:           Number of data points
  chunksize:   Number of data points to handle per step
  clustersize: Maximum number of intermediate centers
  infile:      Input file (if n<=0)
  outfile:     Output file
  nproc:       Number of threads to use

if n > 0, points will be randomly generated instead of reading from infile.
"""


class _PointStream(Protocol):
    def read(self, dim: int, num: int) -> list[list[float]]: ...

    def at_end(self) -> bool: ...


class SimStream:
    """Synthetic stream of ``n`` points with uniform coordinates in [0, 1]."""

    def __init__(self, n: int, rng: Rand48) -> None:
        self.n = n
        self.rng = rng

    def read(self, dim: int, num: int) -> list[list[float]]:
        """Return up to ``num`` new points of ``dim`` coordinates each."""
        rows: list[list[float]] = []
        while len(rows) < num and self.n > 0:
            rows.append([self.rng.lrand48() / INT_MAX for _ in range(dim)])
            self.n -= 1
        return rows

    def at_end(self) -> bool:
        """Tell whether every point has been produced."""
        return self.n <= 0


class FileStream:
    """Stream of points stored as consecutive native 32-bit floats."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = Path(path)
        self._fp = open(self.path, "rb")
        self._eof = False

    def read(self, dim: int, num: int) -> list[list[float]]:
        """Return up to ``num`` whole records of ``dim`` floats each."""
        if dim <= 0:
            raise ValueError(f"dimension must be positive: {dim}")
        record = dim * _FLOAT_SIZE
        wanted = record * max(num, 0)
        data = self._fp.read(wanted)
        if len(data) < wanted:
            self._eof = True
        count = len(data) // record
        values = array("f")
        values.frombytes(data[: count * record])
        return [list(row) for row in zip(*[iter(values)] * dim)]

    def at_end(self) -> bool:
        """Tell whether a read has run into the end of the file."""
        return self._eof

    def close(self) -> None:
        """Close the underlying file."""
        self._fp.close()

    def __enter__(self) -> FileStream:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def write_center_ids(
    centers: Sequence[Point],
    center_ids: Sequence[int],
    path: str | PathLike[str],
) -> None:
    """Write id, weight and coordinates of every median among the centers."""
    medians = {c.assign for c in centers}
    with open(path, "w", encoding="ascii") as out:
        for i, (center, cid) in enumerate(zip(centers, center_ids)):
            if i in medians:
                out.write(f"{cid}\n{center.weight:f}\n")
                out.write("".join(f"{c:f} " for c in center.coord))
                out.write("\n\n")


def stream_cluster(
    stream: _PointStream,
    kmin: int,
    kmax: int,
    dim: int,
    chunksize: int,
    centersize: int,
    outfile: str | PathLike[str],
    rng: Rand48,
) -> tuple[list[Point], list[int]]:
    """Cluster a stream chunk by chunk, then cluster the collected centers.

    The result is written to ``outfile``; the final centers and their
    global ids are returned.
    """
    centers: list[Point] = []
    center_ids: list[int] = []
    offset = 0

    while True:
        rows = stream.read(dim, chunksize)
        print(f"read {len(rows)} points", file=sys.stderr)
        if len(rows) < chunksize and not stream.at_end():
            raise OSError("error reading data")

        points = [Point(coord=row, weight=1.0) for row in rows]
        kfinal = local_search(points, kmin, kmax, rng)
        contcenters(points)
        if kfinal + len(centers) > centersize:
            raise RuntimeError("no more space for centers")

        copycenters(points, centers, center_ids, offset)
        offset += len(rows)

        if stream.at_end():
            break

    local_search(centers, kmin, kmax, rng)
    contcenters(centers)
    write_center_ids(centers, center_ids, outfile)
    return centers, center_ids


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point; returns the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    print("PARSEC Benchmark Suite", file=sys.stderr)
    if len(args) < 9:
        sys.stderr.write(_USAGE)
        return 1

    kmin, kmax, dim, n, chunksize, clustersize = (_atoi(a) for a in args[:6])
    infile, outfile = args[6], args[7]

    rng = Rand48(SEED)
    file_stream: FileStream | None = None
    stream: _PointStream
    if n > 0:
        stream = SimStream(n, rng)
    else:
        try:
            file_stream = FileStream(infile)
        except OSError:
            print(f"error opening file {infile}.", file=sys.stderr)
            return 1
        stream = file_stream

    start = time.perf_counter()
    try:
        stream_cluster(stream, kmin, kmax, dim, chunksize, clustersize, outfile, rng)
    except (OSError, RuntimeError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        if file_stream is not None:
            print("closing file stream", file=sys.stderr)
            file_stream.close()
    elapsed = time.perf_counter() - start
    print(f"\n\nstreamCluster Kernel took {elapsed:8.8f} secs   ")
    return 0