import logging
from concurrent.futures import ProcessPoolExecutor
from typing import Optional, Tuple, Union

import numpy as np

from config import RATE_FLOOR, RANDOM_SEED, N_WORKERS

logger = logging.getLogger(__name__)


# Standard normal draws
def standard_normals(rng: np.random.Generator,
                     size: Union[int, Tuple[int, ...]]) -> np.ndarray:
    """
    Standard normal draws via the Box-Muller transform.

        z = sqrt(-2 ln u1) * cos(2 pi u2)

    u1 is taken on (0, 1] so the log is always finite.
    """
    u1 = 1.0 - rng.random(size)
    u2 = rng.random(size)
    return np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)


# Constant-rate paths
def generate_constant_rate_paths(n_paths: int,
                                 n_steps: int,
                                 r0: float) -> np.ndarray:
    """
    Generate flat SARON paths (r_t = r0), e.g. for deterministic checks.
    """
    return np.full((n_paths, n_steps), r0, dtype=float)


# Mean-reverting SARON model
def generate_rate_paths(current_rate: float,
                        n_months: int,
                        n_paths: int,
                        mean_reversion: float,
                        volatility: float,
                        long_term_mean: float,
                        rng: np.random.Generator) -> np.ndarray:
    """
    Simulate monthly SARON paths with a discrete mean-reverting process:

        r_{m} = max(r_{m-1} + k (theta - r_{m-1}) + sigma / sqrt(12) * z_m, -1%)

    where:
        - k is the monthly mean-reversion speed
        - theta is the long-term mean
        - sigma is the annualized volatility
        - z_m ~ N(0, 1)

    The floor is applied after each step and is not renormalized, so paths
    can sit exactly at -1%.

    Parameters
    ----------
    current_rate : float
        First value of every path.
    n_months : int
        Path length. Zero gives empty paths.
    n_paths : int
        Number of independent paths.
    mean_reversion : float
        Reversion speed k per month.
    volatility : float
        Annualized volatility sigma.
    long_term_mean : float
        Long-run mean theta.
    rng : np.random.Generator
        Source of all randomness.

    Returns
    -------
    np.ndarray
        Shape: (n_paths, n_months) array of SARON rates.
    """
    if n_paths < 1:
        raise ValueError(f"n_paths must be at least 1, got {n_paths}")
    if n_months < 0:
        raise ValueError(f"n_months must be non-negative, got {n_months}")

    r_paths = np.zeros((n_paths, n_months), dtype=float)
    if n_months == 0:
        return r_paths

    r_paths[:, 0] = current_rate
    monthly_vol = volatility / np.sqrt(12.0)

    # Pre-draw all shocks
    eps = standard_normals(rng, (n_paths, n_months - 1))

    for t in range(n_months - 1):
        r_t = r_paths[:, t]
        drift = mean_reversion * (long_term_mean - r_t)
        r_next = r_t + drift + monthly_vol * eps[:, t]
        r_paths[:, t + 1] = np.maximum(r_next, RATE_FLOOR)

    return r_paths


def _generate_chunk(args) -> np.ndarray:
    """Worker entry point: one chunk of paths from its own seed stream."""
    seed_seq, current_rate, n_months, n_paths, k, sigma, theta = args
    rng = np.random.default_rng(seed_seq)
    return generate_rate_paths(current_rate, n_months, n_paths, k, sigma, theta, rng)


def generate_rate_paths_parallel(current_rate: float,
                                 n_months: int,
                                 n_paths: int,
                                 mean_reversion: float,
                                 volatility: float,
                                 long_term_mean: float,
                                 seed: Optional[int] = RANDOM_SEED,
                                 n_workers: int = N_WORKERS) -> np.ndarray:
    """
    Same model as generate_rate_paths, split across worker processes.

    Paths are cut into ``n_workers`` contiguous chunks. Each chunk gets its
    own child of ``SeedSequence(seed)``, so streams never overlap, and the
    chunks are stacked back in order. The output is reproducible for a
    given (seed, n_workers) pair.
    """
    if n_workers < 1:
        raise ValueError(f"n_workers must be at least 1, got {n_workers}")
    if n_paths < 1:
        raise ValueError(f"n_paths must be at least 1, got {n_paths}")

    n_chunks = min(n_workers, n_paths)
    chunk_sizes = [len(c) for c in np.array_split(np.arange(n_paths), n_chunks)]
    children = np.random.SeedSequence(seed).spawn(n_chunks)

    jobs = [
        (ss, current_rate, n_months, size, mean_reversion, volatility, long_term_mean)
        for ss, size in zip(children, chunk_sizes)
    ]

    if n_chunks == 1:
        return _generate_chunk(jobs[0])

    logger.debug("Generating %d paths in %d worker processes", n_paths, n_chunks)
    with ProcessPoolExecutor(max_workers=n_chunks) as executor:
        chunks = list(executor.map(_generate_chunk, jobs))

    return np.vstack(chunks)


# Display helpers
def median_rate_path(r_paths: np.ndarray) -> np.ndarray:
    """
    Element-wise median across paths, month by month.

    Uses the nearest-rank convention: the sorted value at index
    floor(n / 2), so with an even number of paths the upper of the two
    middle values is taken rather than their average.
    """
    n_paths = r_paths.shape[0]
    sorted_by_month = np.sort(r_paths, axis=0)
    return sorted_by_month[n_paths // 2, :].copy()
