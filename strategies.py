from dataclasses import dataclass
from typing import Dict, Union

from config import RENEWAL_SPREADS, FIXED_DURATIONS_MONTHS
from params import SimulationParameters

VARIABLE_NAME = "SARON Variable"


@dataclass(frozen=True)
class VariableStrategy:
    """
    Floating-rate mortgage pegged to SARON.

    Attributes
    ----------
    margin : float
        Spread over SARON, paid every month. The resulting rate is
        floored at VARIABLE_RATE_FLOOR.
    """
    margin: float


@dataclass(frozen=True)
class FixedStrategy:
    """
    Fixed-rate mortgage renewed at market terms at every expiry.

    Attributes
    ----------
    rate : float
        Quoted rate for the first contract period.
    duration_months : int
        Nominal contract length. Renewals are priced at SARON at the
        renewal month plus the spread for this duration.
    """
    rate: float
    duration_months: int


Strategy = Union[VariableStrategy, FixedStrategy]


def renewal_spread(duration_months: int) -> float:
    """
    Spread over SARON used to price a renewal, keyed by the original
    nominal duration (longer contracts carry a higher spread).
    """
    for max_months, spread in RENEWAL_SPREADS:
        if max_months is None or duration_months <= max_months:
            return spread
    raise ValueError("RENEWAL_SPREADS needs a catch-all (None) bucket")


def fixed_strategy_name(duration_months: int) -> str:
    years = duration_months / 12
    years_label = f"{years:g}"
    return f"{years_label}-Year Fixed"


def build_strategies(params: SimulationParameters) -> Dict[str, Strategy]:
    """
    Build the strategy set for a run: SARON variable first, then one fixed
    product per entry of FIXED_DURATIONS_MONTHS, in that order.
    """
    strategies: Dict[str, Strategy] = {
        VARIABLE_NAME: VariableStrategy(margin=params.saron_margin),
    }

    fixed_rates = params.fixed_rates
    for duration in FIXED_DURATIONS_MONTHS:
        strategies[fixed_strategy_name(duration)] = FixedStrategy(
            rate=fixed_rates[duration],
            duration_months=duration,
        )

    return strategies
