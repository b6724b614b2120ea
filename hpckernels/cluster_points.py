"""Points, the 48-bit generator and the sequential helpers used by stream clustering."""

from __future__ import annotations

import math
from bisect import bisect_right
from dataclasses import dataclass, field
from itertools import accumulate
from typing import MutableSequence, Sequence

INT_MAX = 2147483647
ITER = 3

_MULTIPLIER = 0x5DEECE66D
_INCREMENT = 0xB
_MASK48 = (1 << 48) - 1


class Rand48:
    """Linear congruential generator with the 48-bit rand48 recurrence."""

    def __init__(self, seed: int) -> None:
        self._state = (((seed & 0xFFFFFFFF) << 16) | 0x330E) & _MASK48

    def lrand48(self) -> int:
        """Return the next non-negative integer in [0, 2**31)."""
        self._state = (_MULTIPLIER * self._state + _INCREMENT) & _MASK48
        return self._state >> 17


@dataclass
class Point:
    """A weighted point with its current assignment and assignment cost."""

    coord: list[float]
    weight: float = 1.0
    assign: int = 0
    cost: float = 0.0


def dist(p1: Point, p2: Point) -> float:
    """Squared Euclidean distance between two points."""
    return sum((a - b) * (a - b) for a, b in zip(p1.coord, p2.coord))


def is_identical(a: Sequence[float], b: Sequence[float]) -> bool:
    """Tell whether two coordinate sequences are equal in every dimension."""
    return len(a) == len(b) and all(x == y for x, y in zip(a, b))


def shuffle(points: MutableSequence[Point], rng: Rand48) -> None:
    """Put the points into random order, in place."""
    num = len(points)
    for i in range(num - 1):
        j = rng.lrand48() % (num - i) + i
        points[i], points[j] = points[j], points[i]


def intshuffle(values: MutableSequence[int], rng: Rand48) -> None:
    """Put a sequence of integers into random order, in place."""
    length = len(values)
    for i in range(length):
        j = rng.lrand48() % (length - i) + i
        values[i], values[j] = values[j], values[i]


def select_feasible(points: Sequence[Point], kmin: int, rng: Rand48) -> list[int]:
    """Choose indices of points that may become centers, sampled by weight."""
    if kmin <= 0:
        raise ValueError("kmin must be positive")
    num = len(points)
    limit = ITER * kmin * math.log(kmin)
    numfeasible = int(limit) if num > limit else num

    if numfeasible == num:
        return list(range(num))

    accumweight = list(accumulate(p.weight for p in points))
    totalweight = accumweight[-1]

    feasible = []
    for _ in range(numfeasible):
        w = (rng.lrand48() / INT_MAX) * totalweight
        if accumweight[0] > w:
            feasible.append(0)
        else:
            feasible.append(bisect_right(accumweight, w, 1, max(num - 1, 1)))
    return feasible


def contcenters(points: Sequence[Point]) -> None:
    """Move every center to the weighted mean of its members, in place."""
    for i, p in enumerate(points):
        if p.assign == i:
            continue
        center = points[p.assign]
        relweight = p.weight / (center.weight + p.weight)
        center.coord[:] = [
            c * (1.0 - relweight) + x * relweight
            for c, x in zip(center.coord, p.coord)
        ]
        center.weight += p.weight


def copycenters(
    points: Sequence[Point],
    centers: list[Point],
    center_ids: list[int],
    offset: int,
) -> None:
    """Append the centers among points to centers, recording their global ids."""
    medians = {p.assign for p in points}
    for i, p in enumerate(points):
        if i in medians:
            centers.append(Point(coord=list(p.coord), weight=p.weight))
            center_ids.append(i + offset)