"""Smoke tests for the matplotlib renderer."""

import os

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from params import SimulationParameters  # noqa: E402
from plots import plot_all, plot_cost_distribution  # noqa: E402
from simulate import run_mortgage_simulation  # noqa: E402


@pytest.fixture
def small_result():
    params = SimulationParameters(n_simulations=30, projection_years=3)
    return run_mortgage_simulation(params, seed=3)


def test_plot_all_writes_pngs(small_result, tmp_path):
    paths = plot_all(small_result, plot_dir=str(tmp_path / "plots"))
    assert len(paths) == 3
    for p in paths:
        assert os.path.exists(p)
        assert p.endswith(".png")


def test_cost_distribution_with_constant_costs(tmp_path):
    params = SimulationParameters(n_simulations=4, projection_years=1,
                                  volatility=0.0, mean_reversion=0.0)
    result = run_mortgage_simulation(params, seed=0)
    path = plot_cost_distribution(result, plot_dir=str(tmp_path))
    assert os.path.exists(path)
