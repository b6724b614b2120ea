"""Rational approximation of the inverse standard normal distribution."""

from __future__ import annotations

import math
from typing import Iterable

_A = (
    -3.969683028665376e01,
    2.209460984245205e02,
    -2.759285104469687e02,
    1.383577518672690e02,
    -3.066479806614716e01,
    2.506628277459239e00,
)
_B = (
    -5.447609879822406e01,
    1.615858368580409e02,
    -1.556989798598866e02,
    6.680131188771972e01,
    -1.328068155288572e01,
)
_C = (
    -7.784894002430293e-03,
    -3.223964580411365e-01,
    -2.400758277161838e00,
    -2.549732539343734e00,
    4.374664141464968e00,
    2.938163982698783e00,
)
_D = (
    7.784695709041462e-03,
    3.224671290700398e-01,
    2.445134137142996e00,
    3.754408661907416e00,
)

U_LOW = 0.02425
U_HIGH = 1.0 - U_LOW


def _tail(z: float) -> float:
    c1, c2, c3, c4, c5, c6 = _C
    d1, d2, d3, d4 = _D
    return (((((c1 * z + c2) * z + c3) * z + c4) * z + c5) * z + c6) / (
        (((d1 * z + d2) * z + d3) * z + d4) * z + 1.0
    )


def icdf(u: float) -> float:
    """Return the standard normal quantile of a probability in (0, 1)."""
    if not 0.0 < u < 1.0:
        raise ValueError(f"probability must lie strictly between 0 and 1: {u}")
    if u < U_LOW:
        return _tail(math.sqrt(-2.0 * math.log(u)))
    if u <= U_HIGH:
        a1, a2, a3, a4, a5, a6 = _A
        b1, b2, b3, b4, b5 = _B
        z = u - 0.5
        r = z * z
        return (((((a1 * r + a2) * r + a3) * r + a4) * r + a5) * r + a6) * z / (
            ((((b1 * r + b2) * r + b3) * r + b4) * r + b5) * r + 1.0
        )
    return -_tail(math.sqrt(-2.0 * math.log(1.0 - u)))


def icdf_many(values: Iterable[float]) -> list[float]:
    """Apply icdf to every value."""
    return [icdf(u) for u in values]