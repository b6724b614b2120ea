from statistics import NormalDist

import pytest

from hpckernels.icdf import icdf, icdf_many

PROBS = [1e-6, 0.001, 0.02, 0.02425, 0.1, 0.3, 0.5, 0.7, 0.9, 0.97575, 0.99, 0.999999]


def test_median_is_zero():
    assert icdf(0.5) == 0.0


@pytest.mark.parametrize("u", PROBS)
def test_matches_reference_quantile(u):
    assert icdf(u) == pytest.approx(NormalDist().inv_cdf(u), rel=1e-8, abs=1e-8)


@pytest.mark.parametrize("u", [0.001, 0.01, 0.2, 0.4])
def test_symmetry(u):
    assert icdf(1.0 - u) == pytest.approx(-icdf(u), rel=1e-9)


def test_monotonic():
    values = icdf_many(PROBS)
    assert values == sorted(values)
    assert len(set(values)) == len(values)


def test_many_matches_single():
    assert icdf_many(PROBS) == [icdf(u) for u in PROBS]


@pytest.mark.parametrize("u", [0.0, 1.0, -0.5, 1.5])
def test_out_of_range_raises(u):
    with pytest.raises(ValueError):
        icdf(u)