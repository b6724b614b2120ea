import math

import pytest

from hpckernels.hjm import (
    correlations,
    discount_factors,
    discount_factors_blocking,
    drifts,
    factor_volatilities,
    forward_to_yield,
    sim_path_forward,
    sim_path_yield,
    yield_to_forward,
)
from hpckernels.park_miller import ParkMiller

FACTORS = [
    [0.01] * 10,
    [0.009048, 0.008187, 0.007408, 0.006703, 0.006065,
     0.005488, 0.004966, 0.004493, 0.004066, 0.003679],
    [0.001000, 0.000750, 0.000500, 0.000250, 0.000000,
     -0.000250, -0.000500, -0.000750, -0.001000, -0.001250],
]
YIELDS = [0.1 + 0.005 * i for i in range(11)]


def test_yield_forward_round_trip():
    back = forward_to_yield(yield_to_forward(YIELDS))
    assert back == pytest.approx(YIELDS, abs=1e-12)


def test_flat_yield_gives_flat_forward():
    assert yield_to_forward([0.07] * 5) == pytest.approx([0.07] * 5)


def test_empty_curves_rejected():
    with pytest.raises(ValueError):
        yield_to_forward([])
    with pytest.raises(ValueError):
        forward_to_yield([])


def test_factor_volatilities_preserve_total_variance():
    vols = [0.0135, 0.013, 0.0125, 0.012]
    breakdown = [[0.55, 0.60, 0.65, 0.69], [0.44, 0.39, 0.34, 0.30],
                 [0.01, 0.01, 0.01, 0.01]]
    result = factor_volatilities(vols, breakdown)
    assert len(result) == 3
    for j, v in enumerate(vols):
        assert sum(row[j] ** 2 for row in result) == pytest.approx(v * v)


def test_drifts_shapes_and_total():
    total, per_factor = drifts(11, 5.5, FACTORS)
    assert len(total) == 10
    assert [len(r) for r in per_factor] == [10, 10, 10]
    for i, t in enumerate(total):
        assert t == pytest.approx(sum(r[i] for r in per_factor))


def test_drifts_cumulative_invariant():
    n, years = 11, 5.5
    ddelt = years / n
    _, per_factor = drifts(n, years, FACTORS)
    for row, vols in zip(per_factor, FACTORS):
        for j in range(10):
            assert sum(row[: j + 1]) == pytest.approx(
                0.5 * ddelt * sum(vols[: j + 1]) ** 2, abs=1e-15
            )


def test_drifts_zero_for_zero_volatility():
    total, _ = drifts(4, 2.0, [[0.0, 0.0, 0.0]])
    assert total == [0.0, 0.0, 0.0]


def test_drifts_rejects_short_rows():
    with pytest.raises(ValueError):
        drifts(11, 5.5, [[0.01] * 5])


def test_correlations_structure():
    corr = correlations(FACTORS)
    assert len(corr) == 10
    for i in range(10):
        assert corr[i][i] == pytest.approx(1.0)
        for j in range(10):
            if j < i:
                assert corr[i][j] == 0.0
            else:
                assert -1.0 - 1e-12 <= corr[i][j] <= 1.0 + 1e-12


def test_discount_factors_zero_rates():
    assert discount_factors(3.0, [0.0] * 6) == [1.0] * 6


def test_discount_factors_constant_rate():
    rate, years, n = 0.05, 5.0, 10
    result = discount_factors(years, [rate] * n)
    ddelt = years / n
    assert result[0] == 1.0
    for i, d in enumerate(result):
        assert d == pytest.approx(math.exp(-rate * ddelt * i))


def test_discount_factors_decrease_for_positive_rates():
    result = discount_factors(5.5, YIELDS)
    assert all(a > b for a, b in zip(result, result[1:]))


def test_blocking_matches_single_paths():
    paths = [YIELDS, [0.05] * 11, [0.02 * i for i in range(11)]]
    interleaved = [paths[b][i] for i in range(11) for b in range(3)]
    result = discount_factors_blocking(5.5, interleaved, 3)
    assert len(result) == 33
    for b, path in enumerate(paths):
        assert result[b::3] == pytest.approx(discount_factors(5.5, path))


def test_blocking_rejects_bad_lengths():
    with pytest.raises(ValueError):
        discount_factors_blocking(1.0, [0.1] * 5, 2)
    with pytest.raises(ValueError):
        discount_factors_blocking(1.0, [0.1] * 4, 0)


def test_sim_path_without_volatility_shifts_curve():
    forward = yield_to_forward(YIELDS)
    zero = [[0.0] * 10]
    path = sim_path_forward(5.5, forward, [0.0] * 10, zero, ParkMiller(7))
    assert path[0] == forward
    for j in range(1, 11):
        assert path[j][: 11 - j] == pytest.approx(forward[j:])
        assert path[j][11 - j:] == [0.0] * j


def test_sim_path_consumes_expected_draws():
    rng = ParkMiller(1979)
    forward = yield_to_forward(YIELDS)
    total, _ = drifts(11, 5.5, FACTORS)
    sim_path_forward(5.5, forward, total, FACTORS, rng)
    reference = ParkMiller(1979)
    for _ in range(10 * 3):
        reference.uniform()
    assert rng.seed == reference.seed


def test_sim_path_reproducible():
    forward = yield_to_forward(YIELDS)
    total, _ = drifts(11, 5.5, FACTORS)
    a = sim_path_forward(5.5, forward, total, FACTORS, ParkMiller(42))
    b = sim_path_forward(5.5, forward, total, FACTORS, ParkMiller(42))
    assert a == b
    assert a[1] != a[0]


def test_sim_path_yield_matches_forward_form():
    forward = yield_to_forward(YIELDS)
    total, _ = drifts(11, 5.5, FACTORS)
    expected = sim_path_forward(5.5, forward, total, FACTORS, ParkMiller(5))
    assert sim_path_yield(5.5, YIELDS, FACTORS, ParkMiller(5)) == expected


def test_sim_path_rejects_empty_forward():
    with pytest.raises(ValueError):
        sim_path_forward(1.0, [], [], [[]], ParkMiller(1))