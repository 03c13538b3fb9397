import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np
import pandas as pd

from config import N_WORKERS, RANDOM_SEED, SAMPLE_PATHS
from params import SimulationParameters
from errors import SimulationResourceError
from rates import generate_rate_paths, generate_rate_paths_parallel, median_rate_path
from strategies import build_strategies
from costs import evaluate_costs
from aggregate import StrategyResult, aggregate_costs
from compare import (
    ComparisonEntry,
    Recommendation,
    RiskAssessment,
    compare_strategies,
    recommend,
    assess_risk,
)

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """
    Everything a presentation layer needs from one run.

    Attributes
    ----------
    strategies : dict
        Strategy name -> StrategyResult, in strategy order.
    comparisons : dict
        (name, other) -> ComparisonEntry for every ordered pair.
    sample_paths : np.ndarray
        First SAMPLE_PATHS simulated SARON paths, shape (k, n_months).
    median_path : np.ndarray
        Element-wise median SARON path, shape (n_months,).
    projection_years : int
    recommendation : Recommendation
    risk : RiskAssessment
    """
    strategies: Dict[str, StrategyResult]
    comparisons: Dict[Tuple[str, str], ComparisonEntry]
    sample_paths: np.ndarray
    median_path: np.ndarray
    projection_years: int
    recommendation: Recommendation
    risk: RiskAssessment

    @property
    def horizon_months(self) -> int:
        return self.projection_years * 12

    def sample_paths_percent(self) -> np.ndarray:
        return self.sample_paths * 100.0

    def median_path_percent(self) -> np.ndarray:
        return self.median_path * 100.0


# Rate paths
def _simulate_rate_paths(params: SimulationParameters,
                         rng: Optional[np.random.Generator],
                         seed: Optional[int],
                         n_workers: int) -> np.ndarray:
    if n_workers > 1:
        if rng is not None:
            seed = int(rng.integers(0, 2**63 - 1))
        return generate_rate_paths_parallel(
            current_rate=params.saron_rate,
            n_months=params.horizon_months,
            n_paths=params.n_simulations,
            mean_reversion=params.mean_reversion,
            volatility=params.volatility,
            long_term_mean=params.long_term_mean,
            seed=seed,
            n_workers=n_workers,
        )

    if rng is None:
        rng = np.random.default_rng(seed)
    return generate_rate_paths(
        current_rate=params.saron_rate,
        n_months=params.horizon_months,
        n_paths=params.n_simulations,
        mean_reversion=params.mean_reversion,
        volatility=params.volatility,
        long_term_mean=params.long_term_mean,
        rng=rng,
    )


# Core engine
def run_mortgage_simulation(params: Optional[SimulationParameters] = None,
                            rng: Optional[np.random.Generator] = None,
                            seed: Optional[int] = RANDOM_SEED,
                            n_workers: int = N_WORKERS) -> SimulationResult:
    """
    Run the full Monte Carlo comparison of mortgage strategies.

    Parameters
    ----------
    params : SimulationParameters, optional
        Validated inputs; defaults from config.py if None.
    rng : np.random.Generator, optional
        Random source. Takes precedence over ``seed``.
    seed : int, optional
        Seed used when ``rng`` is None.
    n_workers : int
        Number of processes for path generation (1 = in-process).

    Returns
    -------
    SimulationResult
    """
    if params is None:
        params = SimulationParameters()
    else:
        params.validate()

    logger.info(
        "Simulating %d SARON paths over %d months (%d worker(s))",
        params.n_simulations, params.horizon_months, n_workers,
    )

    strategies = build_strategies(params)

    try:
        r_paths = _simulate_rate_paths(params, rng, seed, n_workers)

        results: Dict[str, StrategyResult] = {}
        for name, strategy in strategies.items():
            path_costs = evaluate_costs(strategy, r_paths, params.loan_amount)
            results[name] = aggregate_costs(
                name, strategy, path_costs, r_paths, params.loan_amount
            )

        median_path = median_rate_path(r_paths)
    except MemoryError as exc:
        raise SimulationResourceError(
            f"Not enough memory for {params.n_simulations} simulations over "
            f"{params.horizon_months} months"
        ) from exc

    comparisons = compare_strategies(results)

    return SimulationResult(
        strategies=results,
        comparisons=comparisons,
        sample_paths=r_paths[:SAMPLE_PATHS].copy(),
        median_path=median_path,
        projection_years=params.projection_years,
        recommendation=recommend(results, comparisons),
        risk=assess_risk(results),
    )


# Summary tables
def summary_frame(result: SimulationResult) -> pd.DataFrame:
    """
    One row per strategy, sorted by median cost (best first).
    """
    rec = result.recommendation
    rows = []
    for name, res in result.strategies.items():
        rows.append({
            "strategy": name,
            "median_cost": res.median_cost,
            "mean_cost": res.mean_cost,
            "p10": res.percentile10,
            "p25": res.percentile25,
            "p75": res.percentile75,
            "p90": res.percentile90,
            "vs_best": rec.savings_vs_best[name],
            "best_win_probability": rec.best_win_probability.get(name, np.nan),
        })

    df = pd.DataFrame(rows).set_index("strategy")
    return df.sort_values("median_cost", kind="stable")


def comparison_frame(result: SimulationResult,
                     field: str = "win_probability") -> pd.DataFrame:
    """
    Square matrix: row strategy vs column strategy, e.g. win probability
    of the row over the column. The diagonal is NaN.
    """
    names = list(result.strategies.keys())
    df = pd.DataFrame(np.nan, index=names, columns=names, dtype=float)
    for (a, b), entry in result.comparisons.items():
        df.loc[a, b] = getattr(entry, field)
    return df


def savings_frame(result: SimulationResult) -> pd.DataFrame:
    return comparison_frame(result, field="expected_savings")


def main():
    logging.basicConfig(level=logging.INFO)

    params = SimulationParameters()
    result = run_mortgage_simulation(params)

    pd.set_option("display.float_format", "{:,.2f}".format)

    print(f"\nBased on {result.projection_years} years of projections:\n")
    print(summary_frame(result))

    print("\nWin probability (row beats column):\n")
    print(comparison_frame(result))

    print("\nExpected savings, median(column) - median(row):\n")
    print(savings_frame(result))

    rec = result.recommendation
    print(f"\nRecommended: {rec.best}")
    print(f"Risk assessment ({result.risk.level}): {result.risk.message}\n")

    return result


if __name__ == "__main__":
    main()
