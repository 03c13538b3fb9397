import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np

from config import RISK_HIGH, RISK_MODERATE
from aggregate import StrategyResult
from strategies import VARIABLE_NAME, fixed_strategy_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonEntry:
    """
    Strategy ``name`` against strategy ``other``.

    win_probability
        Fraction of ranks where ``name`` costs strictly less.
    tie_probability
        Fraction of ranks where both cost exactly the same. Ties count as
        a win for neither side, so
        win(A, B) + win(B, A) + tie(A, B) == 1.
    expected_savings
        median(other) - median(name); positive means ``name`` is cheaper.
    """
    name: str
    other: str
    win_probability: float
    tie_probability: float
    expected_savings: float


def compare_pair(a: StrategyResult, b: StrategyResult) -> ComparisonEntry:
    """
    Compare two strategies rank by rank.

    The sorted cost arrays are paired positionally (cheapest outcome of A
    against cheapest outcome of B, and so on), not by the underlying SARON
    path.
    """
    if len(a.costs) != len(b.costs):
        raise ValueError(
            f"{a.name} has {len(a.costs)} costs but {b.name} has {len(b.costs)}"
        )

    n = len(a.costs)
    wins = int(np.count_nonzero(a.costs < b.costs))
    ties = int(np.count_nonzero(a.costs == b.costs))

    return ComparisonEntry(
        name=a.name,
        other=b.name,
        win_probability=wins / n,
        tie_probability=ties / n,
        expected_savings=b.median_cost - a.median_cost,
    )


def compare_strategies(results: Dict[str, StrategyResult]
                       ) -> Dict[Tuple[str, str], ComparisonEntry]:
    """
    ComparisonEntry for every ordered pair (A, B) with A != B.
    (A, B) and (B, A) are computed independently.
    """
    comparisons: Dict[Tuple[str, str], ComparisonEntry] = {}
    for name_a, res_a in results.items():
        for name_b, res_b in results.items():
            if name_a == name_b:
                continue
            comparisons[(name_a, name_b)] = compare_pair(res_a, res_b)
    return comparisons


# Recommendation
@dataclass(frozen=True)
class Recommendation:
    """
    Lowest-median strategy and how the others stack up against it.

    savings_vs_best[name] = median(name) - median(best), zero for best.
    best_win_probability[name] = win probability of best over name.
    """
    best: str
    savings_vs_best: Dict[str, float]
    best_win_probability: Dict[str, float]


def recommend(results: Dict[str, StrategyResult],
              comparisons: Dict[Tuple[str, str], ComparisonEntry]) -> Recommendation:
    """Pick the strategy with the lowest median cost (first one on ties)."""
    if not results:
        raise ValueError("No strategy results to recommend from")

    best = min(results, key=lambda name: results[name].median_cost)
    best_median = results[best].median_cost

    savings = {name: res.median_cost - best_median for name, res in results.items()}
    win_prob = {
        name: comparisons[(best, name)].win_probability
        for name in results if name != best
    }

    logger.info("Lowest median cost: %s (%.2f)", best, best_median)
    return Recommendation(best=best, savings_vs_best=savings, best_win_probability=win_prob)


# Risk assessment
@dataclass(frozen=True)
class RiskAssessment:
    level: str
    variable_risk: Optional[float]
    fixed_risk: Optional[float]
    message: str


RISK_MESSAGES = {
    "high": ("The variable rate strategy has high uncertainty. If you prefer "
             "stability and predictability in your payments, consider a fixed "
             "rate despite the potentially higher cost."),
    "moderate": ("The variable rate strategy has moderate uncertainty. Consider "
                 "your risk tolerance when deciding between variable and fixed "
                 "rates."),
    "low": ("Current projections show relatively low uncertainty in interest "
            "rate movements. The variable rate strategy presents a reasonable "
            "risk profile."),
    "unknown": "Unable to assess risk with the current strategies.",
}


def assess_risk(results: Dict[str, StrategyResult],
                variable_name: str = VARIABLE_NAME,
                fixed_name: Optional[str] = None) -> RiskAssessment:
    """
    Classify the spread of the variable strategy's cost distribution,
    (p90 - p10) / median, against RISK_HIGH and RISK_MODERATE. The same
    ratio for the longest fixed product is reported alongside.
    """
    if fixed_name is None:
        fixed_name = fixed_strategy_name(120)

    variable = results.get(variable_name)
    fixed = results.get(fixed_name)
    if variable is None or fixed is None:
        return RiskAssessment("unknown", None, None, RISK_MESSAGES["unknown"])

    variable_risk = variable.spread_ratio
    fixed_risk = fixed.spread_ratio

    if variable_risk > RISK_HIGH:
        level = "high"
    elif variable_risk > RISK_MODERATE:
        level = "moderate"
    else:
        level = "low"

    return RiskAssessment(level, variable_risk, fixed_risk, RISK_MESSAGES[level])
