"""
Tabular exports of simulation output.

Usage:
    from hedge_gym.reporting import history_to_frame, write_history_csv
    df = history_to_frame(controller.history)
"""

from dataclasses import asdict
from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd

HISTORY_COLUMNS = [
    "market_price",
    "portfolio_value",
    "hedged_portfolio",
    "unhedged_portfolio",
    "daily_return",
    "drawdown_pct",
]


def history_to_frame(history: Sequence) -> pd.DataFrame:
    """One row per simulated day, indexed by day."""
    if len(history) == 0:
        raise ValueError("history is empty")

    df = pd.DataFrame([asdict(r) for r in history]).set_index("day")
    df["hedged_portfolio"] = df["hedged_portfolio"].astype(float)

    values = df["portfolio_value"].to_numpy(dtype=float)
    df["daily_return"] = df["portfolio_value"].pct_change().fillna(0.0)
    peak = np.maximum.accumulate(values)
    df["drawdown_pct"] = (peak - values) / peak * 100
    return df[HISTORY_COLUMNS]


def write_history_csv(history: Sequence, path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    history_to_frame(history).to_csv(path, float_format="%.6f")
    return path


def batch_to_frame(batch) -> pd.DataFrame:
    """Per-run metrics of a Monte Carlo batch, indexed by run number."""
    return pd.DataFrame([asdict(r) for r in batch.runs]).set_index("run")


def write_batch_csv(batch, path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    batch_to_frame(batch).to_csv(path, float_format="%.6f")
    return path
