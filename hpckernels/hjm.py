"""Heath-Jarrow-Morton framework: curves, drifts, discounting and path simulation."""

from __future__ import annotations

import math
from itertools import accumulate
from typing import Sequence

from hpckernels.normal_inverse import cum_normal_inv
from hpckernels.park_miller import ParkMiller


def yield_to_forward(yields: Sequence[float]) -> list[float]:
    """Compute the forward curve from a yield curve."""
    if not yields:
        raise ValueError("yield curve must not be empty")
    forward = [yields[0]]
    forward.extend(
        (i + 1) * yields[i] - i * yields[i - 1] for i in range(1, len(yields))
    )
    return forward


def forward_to_yield(forwards: Sequence[float]) -> list[float]:
    """Compute the yield curve from a forward curve."""
    if not forwards:
        raise ValueError("forward curve must not be empty")
    yields = [forwards[0]]
    for i, f in enumerate(forwards[1:], start=1):
        yields.append((i * yields[-1] + f) / (i + 1))
    return yields


def factor_volatilities(
    vols: Sequence[float], breakdown: Sequence[Sequence[float]]
) -> list[list[float]]:
    """Split total volatilities into per-factor volatilities by variance weights."""
    return [
        [math.sqrt(w * v * v) for w, v in zip(weights, vols)] for weights in breakdown
    ]


def drifts(
    n_steps: int, years: float, factors: Sequence[Sequence[float]]
) -> tuple[list[float], list[list[float]]]:
    """Compute drift corrections from factor volatilities.

    Returns the total drift per maturity and the drift per factor and maturity;
    both cover ``n_steps - 1`` maturities.
    """
    if n_steps < 2:
        raise ValueError(f"at least two time steps are needed: {n_steps}")
    width = n_steps - 1
    if any(len(row) < width for row in factors):
        raise ValueError(f"every factor row needs {width} volatilities")
    ddelt = years / n_steps

    per_factor: list[list[float]] = []
    for row in factors:
        row_drifts: list[float] = [0.5 * ddelt * row[0] * row[0]]
        for j in range(1, width):
            d = 0.0
            for prev in row_drifts:
                d -= prev
            vol_sum = 0.0
            for f in row[: j + 1]:
                vol_sum += f
            d += 0.5 * ddelt * vol_sum * vol_sum
            row_drifts.append(d)
        per_factor.append(row_drifts)

    total = []
    for i in range(width):
        s = 0.0
        for row_drifts in per_factor:
            s += row_drifts[i]
        total.append(s)
    return total, per_factor


def correlations(factors: Sequence[Sequence[float]]) -> list[list[float]]:
    """Correlations between maturities implied by factor volatilities.

    Only the upper triangle (including the diagonal) is filled; the rest is zero.
    """
    if not factors:
        raise ValueError("at least one factor is needed")
    width = len(factors[0])
    columns = [[row[i] for row in factors] for i in range(width)]
    total_vol = [math.sqrt(sum(f * f for f in col)) for col in columns]
    weights = [[f / tv for f in col] for col, tv in zip(columns, total_vol)]

    corr = [[0.0] * width for _ in range(width)]
    for i in range(width):
        for j in range(i, width):
            acc = 0.0
            for wi, wj in zip(weights[i], weights[j]):
                acc += wi * wj
            corr[i][j] = acc
    return corr


def discount_factors(years: float, rate_path: Sequence[float]) -> list[float]:
    """Discount factors along a rate path of ``len(rate_path)`` steps."""
    if not rate_path:
        raise ValueError("rate path must not be empty")
    ddelt = years / len(rate_path)
    growth = (math.exp(-r * ddelt) for r in rate_path[:-1])
    return list(accumulate(growth, lambda acc, e: acc * e, initial=1.0))


def discount_factors_blocking(
    years: float, rate_path: Sequence[float], blocksize: int
) -> list[float]:
    """Discount factors for ``blocksize`` interleaved rate paths.

    Element ``i * blocksize + b`` of the input and the result belongs to
    time step ``i`` of path ``b``.
    """
    if blocksize <= 0:
        raise ValueError(f"block size must be positive: {blocksize}")
    if not rate_path or len(rate_path) % blocksize:
        raise ValueError("rate path length must be a positive multiple of the block size")
    n = len(rate_path) // blocksize
    ddelt = years / n

    row = [1.0] * blocksize
    result = list(row)
    for i in range(1, n):
        base = (i - 1) * blocksize
        row = [
            acc * math.exp(-rate_path[base + b] * ddelt) for b, acc in enumerate(row)
        ]
        result.extend(row)
    return result


def sim_path_forward(
    years: float,
    forward: Sequence[float],
    total_drift: Sequence[float],
    factors: Sequence[Sequence[float]],
    rng: ParkMiller,
) -> list[list[float]]:
    """Simulate one HJM path starting from a forward curve.

    Row ``j`` of the result is the forward curve at time step ``j``.
    """
    n = len(forward)
    if n == 0:
        raise ValueError("forward curve must not be empty")
    ddelt = years / n
    sqrt_ddelt = math.sqrt(ddelt)

    path = [list(forward)] + [[0.0] * n for _ in range(n - 1)]
    for j in range(1, n):
        shocks = [cum_normal_inv(rng.uniform()) for _ in factors]
        prev, cur = path[j - 1], path[j]
        for l in range(n - j):
            total_shock = 0.0
            for row, z in zip(factors, shocks):
                total_shock += row[l] * z
            cur[l] = prev[l + 1] + total_drift[l] * ddelt + sqrt_ddelt * total_shock
    return path


def sim_path_yield(
    years: float,
    yields: Sequence[float],
    factors: Sequence[Sequence[float]],
    rng: ParkMiller,
) -> list[list[float]]:
    """Simulate one HJM path starting from a yield curve."""
    forward = yield_to_forward(yields)
    total_drift, _ = drifts(len(yields), years, factors)
    return sim_path_forward(years, forward, total_drift, factors, rng)