from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from config import HISTOGRAM_BINS
from costs import evaluate_strategy, cumulative_interest
from strategies import Strategy


@dataclass
class StrategyResult:
    """
    Cost distribution of one strategy across all simulated paths.

    Attributes
    ----------
    name : str
        Display name, e.g. "5-Year Fixed".
    strategy : VariableStrategy or FixedStrategy
        Definition the costs were computed from.
    costs : np.ndarray
        Total interest per path, sorted ascending.
    path_costs : np.ndarray
        Same totals in path order.
    mean_cost, median_cost : float
    percentile10, percentile25, percentile75, percentile90 : float
        Nearest-rank percentiles of ``costs``.
    representative_index : int
        Path whose total is closest to the median.
    monthly_interest, accumulated_interest : np.ndarray
        Month-by-month and cumulative interest on the representative path.
    """
    name: str
    strategy: Strategy
    costs: np.ndarray
    path_costs: np.ndarray
    mean_cost: float
    median_cost: float
    percentile10: float
    percentile25: float
    percentile75: float
    percentile90: float
    representative_index: int
    monthly_interest: np.ndarray = field(repr=False)
    accumulated_interest: np.ndarray = field(repr=False)

    @property
    def n_simulations(self) -> int:
        return len(self.costs)

    @property
    def spread_ratio(self) -> float:
        """(p90 - p10) / median, the width of the cost distribution."""
        width = self.percentile90 - self.percentile10
        if width == 0:
            return 0.0
        if self.median_cost == 0:
            return float("inf")
        return width / self.median_cost


def nearest_rank(sorted_values: np.ndarray, p: float) -> float:
    """
    Percentile p of an ascending array: element floor(n * p), clamped to
    the last index. p = 0.5 gives the median convention used everywhere
    here (no averaging of the two middle values).
    """
    n = len(sorted_values)
    if n == 0:
        raise ValueError("Cannot take a percentile of an empty array")
    idx = min(int(np.floor(n * p)), n - 1)
    return float(sorted_values[idx])


def representative_path_index(path_costs: np.ndarray, median_cost: float) -> int:
    """
    Index of the path whose cost is closest to the median.
    Ties go to the lowest index.
    """
    distances = np.abs(np.asarray(path_costs, dtype=float) - median_cost)
    return int(np.argmin(distances))


def aggregate_costs(name: str,
                    strategy: Strategy,
                    path_costs: np.ndarray,
                    r_paths: np.ndarray,
                    loan_amount: float) -> StrategyResult:
    """
    Summarize per-path costs of one strategy.

    Parameters
    ----------
    name : str
        Display name.
    strategy : VariableStrategy or FixedStrategy
        Used to rebuild the representative path's monthly series.
    path_costs : np.ndarray
        Total cost per path, in path order (output of evaluate_costs).
    r_paths : np.ndarray
        The SARON paths the costs were computed on.
    loan_amount : float

    Returns
    -------
    StrategyResult
    """
    path_costs = np.asarray(path_costs, dtype=float)
    sorted_costs = np.sort(path_costs)

    median_cost = nearest_rank(sorted_costs, 0.5)
    rep_idx = representative_path_index(path_costs, median_cost)

    # Only the representative path's monthly series is kept
    monthly, _ = evaluate_strategy(strategy, r_paths[rep_idx], loan_amount)

    return StrategyResult(
        name=name,
        strategy=strategy,
        costs=sorted_costs,
        path_costs=path_costs,
        mean_cost=float(sorted_costs.mean()),
        median_cost=median_cost,
        percentile10=nearest_rank(sorted_costs, 0.10),
        percentile25=nearest_rank(sorted_costs, 0.25),
        percentile75=nearest_rank(sorted_costs, 0.75),
        percentile90=nearest_rank(sorted_costs, 0.90),
        representative_index=rep_idx,
        monthly_interest=monthly,
        accumulated_interest=cumulative_interest(monthly),
    )


# Histogram for the cost distribution chart
def histogram(values: np.ndarray,
              n_bins: int = HISTOGRAM_BINS) -> List[Tuple[float, int, float]]:
    """
    Equal-width bins between min and max.

    Returns a list of (left_edge, count, width). Values equal to the max
    fall in the last bin. If every value is the same, one bin of width 0
    holds them all.
    """
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return []
    if n_bins < 1:
        raise ValueError(f"n_bins must be positive, got {n_bins}")

    lo = float(values.min())
    hi = float(values.max())
    if hi == lo:
        return [(lo, int(values.size), 0.0)]

    counts, edges = np.histogram(values, bins=n_bins)
    widths = np.diff(edges)

    return [(float(edges[i]), int(counts[i]), float(widths[i])) for i in range(n_bins)]
