import numpy as np
from typing import List, Tuple

from config import VARIABLE_RATE_FLOOR, RENEWAL_RATE_FLOOR
from strategies import Strategy, VariableStrategy, FixedStrategy, renewal_spread


# Contract periods for fixed strategies
def renewal_blocks(duration_months: int, n_months: int) -> List[Tuple[int, int]]:
    """
    Split the horizon into consecutive contract periods.

    Returns a list of (start_month, length) with
    length = min(duration_months, months remaining). The first block is
    the initial contract, every later block is a renewal.
    """
    if duration_months < 1:
        raise ValueError(f"duration_months must be positive, got {duration_months}")

    blocks = []
    start = 0
    while start < n_months:
        length = min(duration_months, n_months - start)
        blocks.append((start, length))
        start += length
    return blocks


# Rate per contract period
def fixed_block_rates(strategy: FixedStrategy,
                      r_paths: np.ndarray) -> List[Tuple[int, int, np.ndarray]]:
    """
    Rate of every contract period of a fixed strategy, for every path.

    Returns a list of (start_month, length, block_rate) where block_rate
    has shape (n_paths,). The first period uses the quoted rate; each
    renewal uses SARON at the renewal month plus renewal_spread(duration),
    floored at RENEWAL_RATE_FLOOR.
    """
    n_paths, n_months = r_paths.shape
    spread = renewal_spread(strategy.duration_months)

    blocks = []
    for start, length in renewal_blocks(strategy.duration_months, n_months):
        if start == 0:
            block_rate = np.full(n_paths, strategy.rate, dtype=float)
        else:
            block_rate = np.maximum(r_paths[:, start] + spread, RENEWAL_RATE_FLOOR)
        blocks.append((start, length, block_rate))
    return blocks


# Rate schedule per strategy
def strategy_rate_matrix(strategy: Strategy, r_paths: np.ndarray) -> np.ndarray:
    """
    Annual mortgage rate paid each month, for every path.

    Parameters
    ----------
    strategy : VariableStrategy or FixedStrategy
    r_paths : np.ndarray
        Shape (n_paths, n_months) SARON paths.

    Returns
    -------
    np.ndarray
        Shape (n_paths, n_months) of annual rates.

    Variable: SARON + margin each month, floored at VARIABLE_RATE_FLOOR.
    Fixed: the quoted rate for the first period; each renewal uses SARON
    at the renewal month plus renewal_spread(duration), floored at
    RENEWAL_RATE_FLOOR, held for the whole period.
    """
    r_paths = np.asarray(r_paths, dtype=float)
    if r_paths.ndim != 2:
        raise ValueError(f"r_paths must be 2-D (n_paths, n_months), got shape {r_paths.shape}")

    if isinstance(strategy, VariableStrategy):
        return np.maximum(r_paths + strategy.margin, VARIABLE_RATE_FLOOR)

    if isinstance(strategy, FixedStrategy):
        n_paths, n_months = r_paths.shape
        rates = np.empty((n_paths, n_months), dtype=float)
        for start, length, block_rate in fixed_block_rates(strategy, r_paths):
            rates[:, start:start + length] = block_rate[:, None]

        return rates

    raise TypeError(f"Unknown strategy type: {type(strategy).__name__}")


# Interest costs
def evaluate_strategy(strategy: Strategy,
                      r_path: np.ndarray,
                      loan_amount: float) -> Tuple[np.ndarray, float]:
    """
    Monthly interest and total interest for one SARON path.

    Monthly interest = loan_amount * annual_rate / 12 (interest-only,
    principal stays constant over the horizon).
    """
    r_path = np.asarray(r_path, dtype=float)
    rates = strategy_rate_matrix(strategy, r_path[None, :])[0]
    monthly_interest = loan_amount * rates / 12.0
    total = evaluate_costs(strategy, r_path[None, :], loan_amount)[0]
    return monthly_interest, float(total)


def cumulative_interest(monthly_interest: np.ndarray) -> np.ndarray:
    """Running total of interest paid."""
    return np.cumsum(monthly_interest)


def evaluate_costs(strategy: Strategy,
                   r_paths: np.ndarray,
                   loan_amount: float) -> np.ndarray:
    """
    Total interest cost of a strategy on every path.

    Only the totals are kept. The monthly series of a single path can be
    rebuilt later with evaluate_strategy.

    Fixed strategies are totalled per contract period as
    loan_amount * rate / 12 * length, so a single-period total is exactly
    the closed-form product. Variable strategies sum the monthly interest.

    Returns
    -------
    np.ndarray
        Shape (n_paths,), in path order (unsorted).
    """
    r_paths = np.asarray(r_paths, dtype=float)

    if isinstance(strategy, FixedStrategy):
        if r_paths.ndim != 2:
            raise ValueError(f"r_paths must be 2-D (n_paths, n_months), got shape {r_paths.shape}")
        totals = np.zeros(r_paths.shape[0], dtype=float)
        for _, length, block_rate in fixed_block_rates(strategy, r_paths):
            totals += loan_amount * block_rate / 12.0 * length
        return totals

    rates = strategy_rate_matrix(strategy, r_paths)
    return (loan_amount * rates / 12.0).sum(axis=1)
