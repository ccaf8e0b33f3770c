"""
Monte Carlo batch: many independent runs of the same configuration.

Each run gets its own child generator spawned from one SeedSequence, so a
batch seed reproduces every path.
"""

from dataclasses import dataclass
from typing import List

import numpy as np

from hedge_gym.config import INITIAL_PORTFOLIO_VALUE, SimulationConfig
from hedge_gym.simulation.controller import SimulationController


@dataclass
class RunSummary:
    run: int
    final_value: float
    unhedged_final_value: float
    max_drawdown_pct: float
    annualized_volatility_pct: float
    annualized_return_pct: float
    sharpe_ratio: float | None


@dataclass
class BatchResult:
    config: SimulationConfig
    runs: List[RunSummary]
    n_runs: int
    seed: int | None


def run_batch(config: SimulationConfig, n_runs: int = 100,
              seed: int | None = None) -> BatchResult:
    if n_runs < 1:
        raise ValueError(f"n_runs must be at least 1, got {n_runs}")

    children = np.random.SeedSequence(seed).spawn(n_runs)
    runs: List[RunSummary] = []
    for i, child in enumerate(children):
        controller = SimulationController(config, rng=np.random.default_rng(child))
        metrics = controller.run_to_completion()
        last = controller.history[-1]
        runs.append(RunSummary(
            run=i,
            final_value=metrics.final_portfolio_value,
            unhedged_final_value=last.unhedged_portfolio,
            max_drawdown_pct=metrics.max_drawdown_pct,
            annualized_volatility_pct=metrics.annualized_volatility_pct,
            annualized_return_pct=metrics.annualized_return_pct,
            sharpe_ratio=metrics.sharpe_ratio,
        ))

    return BatchResult(config=config, runs=runs, n_runs=n_runs, seed=seed)


def summary_stats(
    result: BatchResult,
    percentiles: tuple[int, ...] = (10, 25, 50, 75, 90),
) -> dict:
    finals = np.array([r.final_value for r in result.runs])
    unhedged = np.array([r.unhedged_final_value for r in result.runs])
    drawdowns = np.array([r.max_drawdown_pct for r in result.runs])

    stats = {
        "n_runs": result.n_runs,
        "initial_value": INITIAL_PORTFOLIO_VALUE,
        "hedge_enabled": result.config.hedge_enabled,
        "mean_final": float(np.mean(finals)),
        "median_final": float(np.median(finals)),
        "std_final": float(np.std(finals)),
        "min_final": float(np.min(finals)),
        "max_final": float(np.max(finals)),
        "prob_above_initial": float(np.mean(finals > INITIAL_PORTFOLIO_VALUE)),
        "prob_hedge_outperforms": float(np.mean(finals > unhedged)),
        "mean_max_drawdown_pct": float(np.mean(drawdowns)),
        "worst_max_drawdown_pct": float(np.max(drawdowns)),
    }

    for p in percentiles:
        stats[f"P{p}"] = float(np.percentile(finals, p))

    return stats
