"""Risk/performance metrics recomputed from the full portfolio value history."""

import math
from dataclasses import dataclass, replace
from typing import Optional, Sequence

import numpy as np

from hedge_gym.config import TRADING_DAYS

ZERO_VOL_TOLERANCE = 1e-9  # annualized vol, percent


@dataclass(frozen=True)
class MetricsSnapshot:
    max_drawdown_pct: Optional[float] = None
    annualized_volatility_pct: Optional[float] = None
    annualized_return_pct: Optional[float] = None
    sharpe_ratio: Optional[float] = None      # None when volatility is zero
    final_portfolio_value: Optional[float] = None


@dataclass(frozen=True)
class HedgeComparison:
    live: MetricsSnapshot
    unhedged: MetricsSnapshot
    live_final: float
    unhedged_final: float
    hedge_pnl: float
    drawdown_reduction_pct: Optional[float]


def max_drawdown_pct(values: Sequence[float]) -> float:
    """Largest peak-to-trough decline, in percent."""
    v = np.asarray(values, dtype=float)
    peak = np.maximum.accumulate(v)
    dd = (peak - v) / peak
    return float(np.max(dd)) * 100


def daily_returns(values: Sequence[float]) -> np.ndarray:
    v = np.asarray(values, dtype=float)
    return np.diff(v) / v[:-1]


def annualized_volatility_pct(returns: np.ndarray) -> float:
    """Population std of daily returns, scaled by sqrt(252), in percent."""
    return float(np.std(returns)) * math.sqrt(TRADING_DAYS) * 100


def annualized_return_pct(current_value: float, initial_value: float, n_records: int) -> float:
    # Exponent uses the record count (day 0 included), not elapsed days.
    return ((current_value / initial_value) ** (TRADING_DAYS / n_records) - 1) * 100


def sharpe_ratio(ann_return_pct: float, risk_free_rate_pct: float,
                 ann_volatility_pct: float) -> Optional[float]:
    # Constant returns leave ~1e-14 of float noise in the std.
    if math.isclose(ann_volatility_pct, 0.0, abs_tol=ZERO_VOL_TOLERANCE):
        return None
    return (ann_return_pct - risk_free_rate_pct) / ann_volatility_pct


def compute_metrics(
    values: Sequence[float],
    current_value: float,
    initial_value: float,
    risk_free_rate_pct: float,
    previous: MetricsSnapshot | None = None,
) -> MetricsSnapshot:
    """
    Fresh snapshot from the portfolio value series (one entry per record).

    With fewer than two points nothing can be measured and the previous
    snapshot is returned unchanged.
    """
    previous = previous if previous is not None else MetricsSnapshot()
    if len(values) < 2:
        return previous

    max_dd = max_drawdown_pct(values)

    returns = daily_returns(values)
    if len(returns) < 1:
        vol = previous.annualized_volatility_pct
    else:
        vol = annualized_volatility_pct(returns)

    ann_return = annualized_return_pct(current_value, initial_value, len(values))
    sharpe = sharpe_ratio(ann_return, risk_free_rate_pct, vol) if vol is not None else None

    return replace(
        previous,
        max_drawdown_pct=max_dd,
        annualized_volatility_pct=vol,
        annualized_return_pct=ann_return,
        sharpe_ratio=sharpe,
    )


def compare_hedge(history, initial_value: float, risk_free_rate_pct: float) -> HedgeComparison:
    """Live track versus the unhedged counterfactual over the same market path."""
    if len(history) < 1:
        raise ValueError("Need at least 1 history record")

    live_values = [r.portfolio_value for r in history]
    unhedged_values = [r.unhedged_portfolio for r in history]
    live_final = live_values[-1]
    unhedged_final = unhedged_values[-1]

    live = compute_metrics(live_values, live_final, initial_value, risk_free_rate_pct)
    unhedged = compute_metrics(unhedged_values, unhedged_final, initial_value, risk_free_rate_pct)

    dd_reduction = None
    if live.max_drawdown_pct is not None and unhedged.max_drawdown_pct is not None:
        dd_reduction = unhedged.max_drawdown_pct - live.max_drawdown_pct

    return HedgeComparison(
        live=live,
        unhedged=unhedged,
        live_final=live_final,
        unhedged_final=unhedged_final,
        hedge_pnl=live_final - unhedged_final,
        drawdown_reduction_pct=dd_reduction,
    )
