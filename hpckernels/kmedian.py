"""Approximate k-median by facility location with local search."""

from __future__ import annotations

import math
from collections import defaultdict
from typing import MutableSequence

from hpckernels.cluster_points import (
    INT_MAX,
    ITER,
    Point,
    Rand48,
    dist,
    intshuffle,
    select_feasible,
    shuffle,
)

SP = 1


def _opens(rng: Rand48, cost: float, z: float) -> bool:
    """Draw once and decide whether a point with this cost opens a facility."""
    draw = rng.lrand48() / INT_MAX
    if z:
        ratio = cost / z
    else:
        ratio = math.inf if cost > 0 else math.nan
    return draw < ratio


def _ratio_exceeds(change: float, cost: float, epsilon: float) -> bool:
    if cost == 0:
        return change > 0
    return change / cost > epsilon


class LocalSearch:
    """State of one k-median run over a list of points.

    ``is_center`` marks the points that are currently facilities and ``k``
    holds the current number of facilities.
    """

    def __init__(self, points: MutableSequence[Point], rng: Rand48) -> None:
        self.points = points
        self.rng = rng
        self.is_center = [False] * len(points)
        self.k = 0
        self._center_table = [0] * len(points)

    def speedy(self, z: float) -> float:
        """Open facilities at random in one pass; return the solution's cost."""
        pts = self.points
        first = pts[0]
        for p in pts:
            p.cost = dist(p, first) * p.weight
            p.assign = 0
        self.k = 1

        for i in range(1, len(pts)):
            candidate = pts[i]
            if _opens(self.rng, candidate.cost, z):
                self.k += 1
                for p in pts:
                    cost = dist(candidate, p) * p.weight
                    if cost < p.cost:
                        p.cost = cost
                        p.assign = i

        return z * self.k + sum(p.cost for p in pts)

    def gain(self, x: int, z: float) -> float:
        """Open a facility at point x if that lowers the cost; return the saving."""
        pts = self.points
        table = self._center_table
        count = 0
        for i, centre in enumerate(self.is_center):
            if centre:
                table[i] = count
                count += 1

        target = pts[x]
        switch = [False] * len(pts)
        lower: defaultdict[int, float] = defaultdict(float)
        opening = 0.0

        for i, p in enumerate(pts):
            x_cost = dist(p, target) * p.weight
            if x_cost < p.cost:
                switch[i] = True
                opening += x_cost - p.cost
            else:
                lower[table[p.assign]] += p.cost - x_cost

        gl_lower: defaultdict[int, float] = defaultdict(float)
        closing = 0
        for i, centre in enumerate(self.is_center):
            if centre:
                low = z + lower[table[i]]
                gl_lower[table[i]] = low
                if low > 0:
                    closing += 1
                    opening -= low

        total = z + opening
        if not total < 0:
            return 0.0

        for i, p in enumerate(pts):
            if switch[i] or gl_lower[table[p.assign]] > 0:
                p.cost = p.weight * dist(p, target)
                p.assign = x
        for i, centre in enumerate(self.is_center):
            if centre and gl_lower[table[i]] > 0:
                self.is_center[i] = False
        self.is_center[x] = True
        self.k += 1 - closing
        return -total

    def facility_location(
        self,
        feasible: MutableSequence[int],
        z: float,
        cost: float,
        iterations: int,
        epsilon: float,
    ) -> float:
        """Improve the solution with gain steps until the improvement is below epsilon."""
        change = cost
        while _ratio_exceeds(change, cost, epsilon):
            change = 0.0
            intshuffle(feasible, self.rng)
            for i in range(iterations):
                change += self.gain(feasible[i % len(feasible)], z)
            cost -= change
        return cost

    def kmedian(self, kmin: int, kmax: int) -> tuple[float, int]:
        """Cluster the points into between kmin and kmax centers.

        Returns the final cost and the number of centers.
        """
        if kmin < 1 or kmax < 1:
            raise ValueError("kmin and kmax must be at least 1")
        pts = self.points
        hiz = sum(dist(p, pts[0]) * p.weight for p in pts) if pts else 0.0
        loz = 0.0
        z = (hiz + loz) / 2.0

        if len(pts) <= kmax:
            for i, p in enumerate(pts):
                p.assign = i
                p.cost = 0.0
            self.is_center = [True] * len(pts)
            self.k = len(pts)
            return 0.0, self.k

        shuffle(pts, self.rng)
        cost = self.speedy(z)

        tries = 0
        while self.k < kmin and tries < SP:
            cost = self.speedy(z)
            tries += 1

        while self.k < kmin:
            if tries >= SP:
                hiz = z
                z = (hiz + loz) / 2.0
                tries = 0
                if z == 0:
                    raise ValueError(
                        f"cannot open {kmin} centers: too few distinct points"
                    )
            shuffle(pts, self.rng)
            cost = self.speedy(z)
            tries += 1

        feasible = select_feasible(pts, kmin, self.rng)
        for p in pts:
            self.is_center[p.assign] = True

        iterations = int(ITER * kmax * math.log(kmax))
        while True:
            cost = self.facility_location(feasible, z, cost, iterations, 0.1)
            k = self.k
            if (0.9 * kmin <= k <= 1.1 * kmax) or (kmin - 2 <= k <= kmax + 2):
                cost = self.facility_location(feasible, z, cost, iterations, 0.001)

            if self.k > kmax:
                loz = z
                z = (hiz + loz) / 2.0
                cost += (z - loz) * self.k
            if self.k < kmin:
                hiz = z
                z = (hiz + loz) / 2.0
                cost += (z - hiz) * self.k

            if kmin <= self.k <= kmax or loz >= 0.999 * hiz:
                break

        return cost, self.k


def local_search(
    points: MutableSequence[Point], kmin: int, kmax: int, rng: Rand48
) -> int:
    """Run k-median on the points in place and return the number of centers."""
    return LocalSearch(points, rng).kmedian(kmin, kmax)[1]