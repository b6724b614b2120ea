"""Park-Miller minimal standard uniform random number generator."""

from __future__ import annotations

_Q = 127773
_A = 16807
_R = 2836
_M = 2147483647
_SCALE = 4.656612875e-10


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _step(seed: int) -> int:
    k1 = _trunc_div(seed, _Q)
    ix = _A * (seed - k1 * _Q) - k1 * _R
    if ix < 0:
        ix += _M
    return ix


def ran_unif(seed: int) -> tuple[float, int]:
    """Return the next uniform value and the new seed."""
    nxt = _step(seed)
    return nxt * _SCALE, nxt


class ParkMiller:
    """Stateful uniform generator; the current state is kept in ``seed``."""

    def __init__(self, seed: int) -> None:
        self.seed = seed

    def uniform(self) -> float:
        """Advance the state and return a value in (0, 1)."""
        value, self.seed = ran_unif(self.seed)
        return value