# Importing the libraries
import os
import numpy as np
import matplotlib.pyplot as plt

from config import HISTOGRAM_BINS
from simulate import SimulationResult, run_mortgage_simulation

PLOT_DIR = "plots"


# Utility
def ensure_plot_dir(plot_dir: str = PLOT_DIR):
    if not os.path.exists(plot_dir):
        os.makedirs(plot_dir)


def save_fig(fig, name, plot_dir: str = PLOT_DIR) -> str:
    """Save and close a figure, return the file path."""
    ensure_plot_dir(plot_dir)
    path = os.path.join(plot_dir, f"{name}.png")
    fig.tight_layout()
    fig.savefig(path, dpi=180)
    plt.close(fig)
    return path


# (A) Cost distribution per strategy
def plot_cost_distribution(result: SimulationResult,
                           n_bins: int = HISTOGRAM_BINS,
                           plot_dir: str = PLOT_DIR) -> str:
    fig, ax = plt.subplots(figsize=(10, 5))

    for name, res in result.strategies.items():
        ax.hist(res.costs, bins=n_bins, alpha=0.5, label=name)

    ax.set_title("Total Interest Cost Distribution")
    ax.set_xlabel("Total interest (CHF)")
    ax.set_ylabel("Simulations")
    ax.legend()
    return save_fig(fig, "cost_distribution", plot_dir)


# (B) Cumulative interest on the representative path
def plot_cumulative_cost(result: SimulationResult, plot_dir: str = PLOT_DIR) -> str:
    fig, ax = plt.subplots(figsize=(10, 5))

    for name, res in result.strategies.items():
        years = (np.arange(len(res.accumulated_interest)) + 1) / 12.0
        ax.plot(years, res.accumulated_interest, lw=2, label=name)

    ax.set_title("Cumulative Interest – Median Scenario")
    ax.set_xlabel("Years")
    ax.set_ylabel("Interest paid (CHF)")
    ax.legend()
    return save_fig(fig, "cumulative_cost", plot_dir)


# (C) SARON projections
def plot_rate_projections(result: SimulationResult, plot_dir: str = PLOT_DIR) -> str:
    fig, ax = plt.subplots(figsize=(10, 5))
    years = np.arange(result.median_path.shape[0]) / 12.0

    samples = result.sample_paths_percent()
    if samples.size:
        ax.plot(years, samples.T, color="grey", alpha=0.4, lw=1)
    ax.plot(years, result.median_path_percent(), color="black", lw=2.5, label="Median")

    ax.set_title(f"SARON Sample Paths ({samples.shape[0]} drawn) and Median")
    ax.set_xlabel("Years")
    ax.set_ylabel("SARON (%)")
    ax.legend()
    return save_fig(fig, "rate_projections", plot_dir)


def plot_all(result: SimulationResult, plot_dir: str = PLOT_DIR) -> list:
    return [
        plot_cost_distribution(result, plot_dir=plot_dir),
        plot_cumulative_cost(result, plot_dir=plot_dir),
        plot_rate_projections(result, plot_dir=plot_dir),
    ]


# MAIN PLOTTING SCRIPT
def main():
    print("Running Monte Carlo + generating plots\n")
    result = run_mortgage_simulation()
    paths = plot_all(result)
    for p in paths:
        print(f"  saved {p}")
    print(f"\n✓ All plots saved to: /{PLOT_DIR} directory\n")


if __name__ == "__main__":
    main()
