"""Single-run visualization — portfolio tracks + underwater curve, saved to file."""

from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker


def plot_run(history, metrics=None, path="hedge_run.png", title=None) -> Path:
    """
    Two-panel plot:
      1. Live portfolio vs unhedged counterfactual, market price on twin axis
      2. Drawdown of the live track (%)
    """
    if len(history) == 0:
        raise ValueError("history is empty")

    days = np.array([r.day for r in history])
    live = np.array([r.portfolio_value for r in history])
    unhedged = np.array([r.unhedged_portfolio for r in history])
    price = np.array([r.market_price for r in history])
    hedged = history[-1].hedged_portfolio is not None

    fig, (ax_val, ax_dd) = plt.subplots(
        2, 1, figsize=(12, 8), height_ratios=[2, 1], sharex=True,
    )

    if title is None:
        title = "Hedged Portfolio Simulation" if hedged else "Unhedged Portfolio Simulation"
    if metrics is not None and metrics.max_drawdown_pct is not None:
        sharpe = "n/a" if metrics.sharpe_ratio is None else f"{metrics.sharpe_ratio:.2f}"
        title += (
            f"  |  MaxDD {metrics.max_drawdown_pct:.1f}%"
            f"  Vol {metrics.annualized_volatility_pct:.1f}%  Sharpe {sharpe}"
        )
    fig.suptitle(title, fontsize=11, fontweight="bold")

    # ── Panel 1: value tracks ──
    ax_val.plot(days, live, color="#2c3e50", linewidth=1.6,
                label="Hedged" if hedged else "Portfolio")
    if hedged:
        ax_val.plot(days, unhedged, color="#e67e22", linewidth=1.0, alpha=0.8,
                    linestyle="--", label="Unhedged")
    ax_val.axhline(y=live[0], color="red", linestyle=":", linewidth=0.8, alpha=0.7,
                   label=f"Start ${live[0]:,.0f}")
    ax_val.set_ylabel("Portfolio Value ($)", fontsize=10)
    ax_val.yaxis.set_major_formatter(mticker.FuncFormatter(lambda x, _: f"${x:,.0f}"))
    ax_val.grid(True, alpha=0.25, linestyle="--")

    ax_px = ax_val.twinx()
    ax_px.plot(days, price, color="gray", linewidth=0.7, alpha=0.5, label="Market")
    ax_px.set_ylabel("Market Price", fontsize=9, color="gray")

    lines = ax_val.get_legend_handles_labels()
    px_lines = ax_px.get_legend_handles_labels()
    ax_val.legend(lines[0] + px_lines[0], lines[1] + px_lines[1],
                  loc="upper left", fontsize=9, framealpha=0.9)

    # ── Panel 2: underwater ──
    peak = np.maximum.accumulate(live)
    dd = -(peak - live) / peak * 100
    ax_dd.fill_between(days, dd, 0, color="#c0392b", alpha=0.35)
    ax_dd.plot(days, dd, color="#c0392b", linewidth=0.8)
    ax_dd.set_ylabel("Drawdown (%)", fontsize=10)
    ax_dd.set_xlabel("Trading Day", fontsize=10)
    ax_dd.grid(True, alpha=0.25, linestyle="--")
    ax_dd.margins(x=0.01)

    plt.tight_layout()
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=120, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    return path
