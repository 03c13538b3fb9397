import math
import numbers
import dataclasses
from dataclasses import dataclass
from typing import Dict

import numpy as np

from config import (
    LOAN_AMOUNT,
    PROJECTION_YEARS,
    SARON_RATE,
    SARON_MARGIN,
    FIXED_RATE_2Y,
    FIXED_RATE_5Y,
    FIXED_RATE_10Y,
    N_SIMULATIONS,
    MAX_SIMULATIONS,
    MEAN_REVERSION,
    VOLATILITY,
    LONG_TERM_MEAN,
)
from errors import ParameterError


def _is_integer(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


REAL_FIELDS = (
    "loan_amount", "saron_rate", "saron_margin", "fixed_rate_2y",
    "fixed_rate_5y", "fixed_rate_10y", "mean_reversion", "volatility",
    "long_term_mean",
)


@dataclass(frozen=True)
class SimulationParameters:
    """
    Inputs for one simulation run.

    All rates are plain fractions (0.015 for 1.5%). The set is validated on
    construction, so an instance that exists is safe to simulate.

    Attributes
    ----------
    loan_amount : float
        Outstanding mortgage principal, held constant (interest-only).
    projection_years : int
        Horizon in whole years.
    saron_rate : float
        Current reference rate, the first value of every path.
    saron_margin : float
        Margin added to SARON for the variable strategy.
    fixed_rate_2y, fixed_rate_5y, fixed_rate_10y : float
        Quoted rates for the fixed products.
    n_simulations : int
        Number of simulated SARON paths.
    mean_reversion : float
        Monthly pull toward ``long_term_mean``.
    volatility : float
        Annualized volatility of the rate shocks.
    long_term_mean : float
        Level the reference rate reverts to.
    """
    loan_amount: float = LOAN_AMOUNT
    projection_years: int = PROJECTION_YEARS
    saron_rate: float = SARON_RATE
    saron_margin: float = SARON_MARGIN
    fixed_rate_2y: float = FIXED_RATE_2Y
    fixed_rate_5y: float = FIXED_RATE_5Y
    fixed_rate_10y: float = FIXED_RATE_10Y
    n_simulations: int = N_SIMULATIONS
    mean_reversion: float = MEAN_REVERSION
    volatility: float = VOLATILITY
    long_term_mean: float = LONG_TERM_MEAN

    def __post_init__(self):
        self.validate()

    @property
    def horizon_months(self) -> int:
        return int(self.projection_years) * 12

    @property
    def fixed_rates(self) -> Dict[int, float]:
        """Quoted fixed rate per product duration in months."""
        return {
            24: self.fixed_rate_2y,
            60: self.fixed_rate_5y,
            120: self.fixed_rate_10y,
        }

    def validate(self) -> None:
        """Raise ParameterError on the first invalid field."""
        for name in REAL_FIELDS:
            value = getattr(self, name)
            if not _is_real(value):
                raise ParameterError(
                    f"{name} must be a real number, got {value!r}"
                )
            if not math.isfinite(value):
                raise ParameterError(f"{name} must be finite, got {value!r}")

        if self.loan_amount <= 0:
            raise ParameterError(
                f"loan_amount must be positive, got {self.loan_amount!r}"
            )

        if not _is_integer(self.projection_years) or self.projection_years <= 0:
            raise ParameterError(
                f"projection_years must be a positive integer, "
                f"got {self.projection_years!r}"
            )

        if not _is_integer(self.n_simulations) or self.n_simulations <= 0:
            raise ParameterError(
                f"n_simulations must be a positive integer, "
                f"got {self.n_simulations!r}"
            )
        if self.n_simulations > MAX_SIMULATIONS:
            raise ParameterError(
                f"n_simulations must not exceed {MAX_SIMULATIONS}, "
                f"got {self.n_simulations}"
            )

        if self.volatility < 0:
            raise ParameterError(
                f"volatility must be non-negative, got {self.volatility}"
            )
        if self.mean_reversion < 0:
            raise ParameterError(
                f"mean_reversion must be non-negative, got {self.mean_reversion}"
            )

    def replace(self, **changes) -> "SimulationParameters":
        return dataclasses.replace(self, **changes)
