"""Tests for simulation parameter validation."""

import math

import numpy as np
import pytest

from errors import ParameterError
from params import SimulationParameters


def test_defaults_are_valid():
    params = SimulationParameters()
    assert params.horizon_months == params.projection_years * 12
    assert set(params.fixed_rates) == {24, 60, 120}


@pytest.mark.parametrize(
    "changes, field",
    [
        ({"loan_amount": 0.0}, "loan_amount"),
        ({"loan_amount": -1.0}, "loan_amount"),
        ({"loan_amount": math.inf}, "loan_amount"),
        ({"projection_years": 0}, "projection_years"),
        ({"projection_years": 2.5}, "projection_years"),
        ({"n_simulations": 0}, "n_simulations"),
        ({"n_simulations": 100_001}, "n_simulations"),
        ({"volatility": -0.01}, "volatility"),
        ({"mean_reversion": -0.1}, "mean_reversion"),
        ({"saron_rate": math.nan}, "saron_rate"),
        ({"loan_amount": "500000"}, "loan_amount"),
        ({"loan_amount": None}, "loan_amount"),
        ({"volatility": None}, "volatility"),
        ({"saron_margin": "0.008"}, "saron_margin"),
        ({"fixed_rate_10y": True}, "fixed_rate_10y"),
        ({"projection_years": "10"}, "projection_years"),
        ({"n_simulations": None}, "n_simulations"),
    ],
)
def test_invalid_parameters_rejected(changes, field):
    with pytest.raises(ParameterError, match=field):
        SimulationParameters(**changes)


def test_parameter_error_is_value_error():
    with pytest.raises(ValueError):
        SimulationParameters(n_simulations=-5)


def test_negative_rates_are_valid_inputs():
    params = SimulationParameters(saron_rate=-0.0075, long_term_mean=-0.002)
    assert params.saron_rate == -0.0075


def test_replace_revalidates():
    params = SimulationParameters()
    assert params.replace(n_simulations=5).n_simulations == 5
    with pytest.raises(ParameterError):
        params.replace(projection_years=-1)


def test_numpy_scalars_accepted():
    params = SimulationParameters(loan_amount=np.float64(400_000.0),
                                  volatility=np.float64(0.02),
                                  n_simulations=np.int64(10))
    assert params.loan_amount == 400_000.0
