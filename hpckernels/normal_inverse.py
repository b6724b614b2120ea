"""Inverse of the cumulative standard normal distribution (Moro's method)."""

from __future__ import annotations

import math

_A = (2.50662823884, -18.61500062529, 41.39119773534, -25.44106049637)
_B = (-8.47351093090, 23.08336743743, -21.06224101826, 3.13082909833)
_C = (
    0.3374754822726147,
    0.9761690190917186,
    0.1607979714918209,
    0.0276438810333863,
    0.0038405729373609,
    0.0003951896511919,
    0.0000321767881768,
    0.0000002888167364,
    0.0000003960315187,
)

_CENTRAL = 0.42


def cum_normal_inv(u: float) -> float:
    """Return the standard normal quantile of a probability in (0, 1)."""
    if not 0.0 < u < 1.0:
        raise ValueError(f"probability must lie strictly between 0 and 1: {u}")
    x = u - 0.5
    if abs(x) < _CENTRAL:
        a0, a1, a2, a3 = _A
        b0, b1, b2, b3 = _B
        r = x * x
        return x * (((a3 * r + a2) * r + a1) * r + a0) / (
            (((b3 * r + b2) * r + b1) * r + b0) * r + 1.0
        )

    r = 1.0 - u if x > 0.0 else u
    r = math.log(-math.log(r))
    c = _C
    r = c[0] + r * (
        c[1]
        + r
        * (
            c[2]
            + r * (c[3] + r * (c[4] + r * (c[5] + r * (c[6] + r * (c[7] + r * c[8])))))
        )
    )
    return -r if x < 0.0 else r