"""Tests for the Monte Carlo batch runner."""
import pytest

from hedge_gym.config import SimulationConfig
from hedge_gym.simulation.batch import BatchResult, run_batch, summary_stats


@pytest.fixture
def small_batch():
    cfg = SimulationConfig(total_days=60, hedge_enabled=True, market_volatility_pct=30.0)
    return run_batch(cfg, n_runs=20, seed=42)


def test_batch_shape(small_batch):
    assert isinstance(small_batch, BatchResult)
    assert small_batch.n_runs == 20
    assert len(small_batch.runs) == 20
    assert [r.run for r in small_batch.runs] == list(range(20))


def test_batch_seed_reproducibility():
    cfg = SimulationConfig(total_days=50)
    r1 = run_batch(cfg, n_runs=5, seed=7)
    r2 = run_batch(cfg, n_runs=5, seed=7)
    assert [r.final_value for r in r1.runs] == [r.final_value for r in r2.runs]


def test_runs_are_independent(small_batch):
    finals = {r.final_value for r in small_batch.runs}
    assert len(finals) == 20


def test_summary_stats_keys(small_batch):
    stats = summary_stats(small_batch)
    for key in ["median_final", "mean_final", "std_final", "prob_above_initial",
                "prob_hedge_outperforms", "mean_max_drawdown_pct", "P10", "P50", "P90"]:
        assert key in stats


def test_probabilities_bounded(small_batch):
    stats = summary_stats(small_batch)
    assert 0.0 <= stats["prob_above_initial"] <= 1.0
    assert 0.0 <= stats["prob_hedge_outperforms"] <= 1.0
    assert stats["min_final"] <= stats["P50"] <= stats["max_final"]


def test_unhedged_batch_never_outperforms_itself():
    cfg = SimulationConfig(total_days=50)
    stats = summary_stats(run_batch(cfg, n_runs=5, seed=1))
    assert stats["prob_hedge_outperforms"] == 0.0


def test_invalid_run_count():
    with pytest.raises(ValueError, match="at least 1"):
        run_batch(SimulationConfig(), n_runs=0)
