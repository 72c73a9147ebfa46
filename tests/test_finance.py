import numpy as np
import pytest

from plot.finance import MIN_MATURITY, STRIKE, bs_call, bs_delta


@pytest.mark.parametrize("t", [1e-6, 1e-8, 0.0])
def test_at_the_money_delta_tends_to_half(t):
    assert abs(bs_delta(100.0, t) - 0.5) < 1e-3


@pytest.mark.parametrize("s", [60.0, 100.0, 120.0, 150.0])
def test_price_tends_to_intrinsic_value(s):
    assert bs_call(s, 1e-8) == pytest.approx(max(s - STRIKE, 0.0), abs=1e-2)


def test_zero_maturity_is_clamped():
    assert np.isfinite(bs_call(100.0, 0.0))
    assert bs_call(100.0, 0.0) == pytest.approx(bs_call(100.0, MIN_MATURITY))


def test_known_value_one_year_at_the_money():
    # K=100, r=5%, sigma=20%, T=1: textbook value 10.4506
    assert bs_call(100.0, 1.0) == pytest.approx(10.4506, abs=1e-3)
    assert bs_delta(100.0, 1.0) == pytest.approx(0.6368, abs=1e-3)


def test_price_grid_is_monotone_in_spot():
    s = np.linspace(60, 150, 60)
    prices = bs_call(s, 0.5)
    deltas = bs_delta(s, 0.5)
    assert np.all(np.diff(prices) > 0)
    assert np.all((deltas > 0) & (deltas < 1))
