"""Tests for strategy interest cost evaluation."""

import numpy as np
import pytest

from config import RENEWAL_RATE_FLOOR, VARIABLE_RATE_FLOOR
from costs import (
    cumulative_interest,
    evaluate_costs,
    evaluate_strategy,
    renewal_blocks,
    strategy_rate_matrix,
)
from rates import generate_constant_rate_paths, generate_rate_paths
from strategies import FixedStrategy, VariableStrategy, renewal_spread

LOAN = 500_000.0


def test_renewal_blocks():
    assert renewal_blocks(24, 60) == [(0, 24), (24, 24), (48, 12)]
    assert renewal_blocks(120, 120) == [(0, 120)]
    assert renewal_blocks(120, 60) == [(0, 60)]
    assert renewal_blocks(24, 0) == []


@pytest.mark.parametrize(
    "duration, spread",
    [(12, 0.006), (24, 0.006), (36, 0.008), (60, 0.008), (61, 0.012), (120, 0.012)],
)
def test_renewal_spread_buckets(duration, spread):
    assert renewal_spread(duration) == spread


def test_variable_flat_path():
    path = np.full(120, 0.01)
    monthly, total = evaluate_strategy(VariableStrategy(margin=0.008), path, LOAN)
    np.testing.assert_allclose(monthly, 750.0)
    assert total == pytest.approx(90_000.0)


def test_variable_rate_floor():
    path = np.full(12, -0.01)
    rates = strategy_rate_matrix(VariableStrategy(margin=0.005), path[None, :])
    np.testing.assert_array_equal(rates, VARIABLE_RATE_FLOOR)


def test_single_block_fixed_is_path_independent():
    rng = np.random.default_rng(2)
    paths = generate_rate_paths(0.01, 120, 20, 0.05, 0.02, 0.015, rng)
    totals = evaluate_costs(FixedStrategy(rate=0.015, duration_months=120), paths, LOAN)
    np.testing.assert_array_equal(totals, LOAN * 0.015 / 12 * 120)


def test_fixed_renewal_uses_rate_at_renewal_month():
    path = np.zeros(48)
    path[24] = 0.02          # only the renewal month matters
    path[30] = 0.10
    strategy = FixedStrategy(rate=0.015, duration_months=24)
    rates = strategy_rate_matrix(strategy, path[None, :])[0]
    np.testing.assert_allclose(rates[:24], 0.015)
    np.testing.assert_allclose(rates[24:], 0.02 + 0.006)


def test_fixed_renewal_floor_and_partial_block():
    path = np.full(30, -0.01)
    strategy = FixedStrategy(rate=0.02, duration_months=24)
    monthly, total = evaluate_strategy(strategy, path, 120_000.0)
    assert len(monthly) == 30
    np.testing.assert_allclose(monthly[:24], 120_000.0 * 0.02 / 12)
    np.testing.assert_allclose(monthly[24:], 120_000.0 * RENEWAL_RATE_FLOOR / 12)
    assert total == pytest.approx(24 * 200.0 + 6 * 50.0)


def test_evaluate_costs_matches_single_path_evaluation():
    rng = np.random.default_rng(4)
    paths = generate_rate_paths(0.01, 60, 8, 0.05, 0.01, 0.015, rng)
    for strategy in (VariableStrategy(0.008), FixedStrategy(0.018, 24)):
        totals = evaluate_costs(strategy, paths, LOAN)
        assert totals.shape == (8,)
        for i in range(8):
            _, total = evaluate_strategy(strategy, paths[i], LOAN)
            assert totals[i] == pytest.approx(total)


def test_zero_month_horizon():
    paths = generate_constant_rate_paths(3, 0, 0.01)
    np.testing.assert_array_equal(evaluate_costs(VariableStrategy(0.008), paths, LOAN), 0.0)
    np.testing.assert_array_equal(evaluate_costs(FixedStrategy(0.02, 60), paths, LOAN), 0.0)


def test_cumulative_interest_is_prefix_sum():
    np.testing.assert_allclose(cumulative_interest(np.array([1.0, 2.0, 3.0])), [1.0, 3.0, 6.0])


def test_unknown_strategy_type():
    with pytest.raises(TypeError):
        strategy_rate_matrix(object(), np.zeros((1, 3)))


@pytest.mark.parametrize("loan", [250_000.0, 800_000.0, 1_234_567.0])
@pytest.mark.parametrize("rate", [0.0125, 0.017, 0.0235])
@pytest.mark.parametrize("years", [1, 3, 10])
def test_single_block_total_is_exact_closed_form(loan, rate, years):
    months = years * 12
    paths = generate_constant_rate_paths(2, months, 0.01)
    strategy = FixedStrategy(rate=rate, duration_months=120)
    totals = evaluate_costs(strategy, paths, loan)
    assert totals[0] == loan * rate / 12 * months
    _, total = evaluate_strategy(strategy, paths[0], loan)
    assert total == loan * rate / 12 * months


def test_strategies_have_no_free_form_tag():
    with pytest.raises(TypeError):
        VariableStrategy(0.01, kind="fixed")
    with pytest.raises(TypeError):
        FixedStrategy(0.02, 24, kind="variable")
