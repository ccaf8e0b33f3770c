"""
CLI runner for the hedged portfolio simulation.

Usage:
    python -m hedge_gym.simulation.runner --volatility 25 --days 252

    # Hedged, rebalanced monthly, with exports
    python -m hedge_gym.simulation.runner --hedge --hedge-ratio 0.8 \
        --hedge-cost 3 --hedge-effectiveness 0.9 --rebalance-days 21 \
        --seed 7 --csv out/history.csv --plot out/run.png

    # Monte Carlo batch of 500 independent runs
    python -m hedge_gym.simulation.runner --hedge --runs 500 --seed 42
"""

import argparse
import logging
import time

from hedge_gym.config import INITIAL_PORTFOLIO_VALUE, SimulationConfig
from hedge_gym.metrics.risk_metrics import compare_hedge
from hedge_gym.simulation.controller import RunStatus, SimulationController

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Day-by-day portfolio simulation with an optional hedge overlay"
    )
    parser.add_argument("--volatility", type=float, default=20.0,
                        help="Annualized market volatility in %% (default: 20)")
    parser.add_argument("--days", type=int, default=252,
                        help="Trading days to simulate (default: 252)")
    parser.add_argument("--hedge", action="store_true",
                        help="Enable the hedge overlay")
    parser.add_argument("--hedge-ratio", type=float, default=1.0,
                        help="Hedge ratio 0-1.5 (default: 1.0)")
    parser.add_argument("--hedge-cost", type=float, default=2.0,
                        help="Annual hedge cost in %% (default: 2)")
    parser.add_argument("--hedge-effectiveness", type=float, default=0.8,
                        help="Hedge effectiveness 0-1 (default: 0.8)")
    parser.add_argument("--rebalance-days", type=int, default=21,
                        help="Days between hedge rebalances (default: 21)")
    parser.add_argument("--risk-free", type=float, default=2.0,
                        help="Risk-free rate in %% (default: 2)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed (default: fresh entropy)")
    parser.add_argument("--tick-ms", type=int, default=0,
                        help="Delay between ticks in ms (default: 0)")
    parser.add_argument("--runs", type=int, default=1,
                        help="Number of independent runs; >1 switches to batch mode")
    parser.add_argument("--csv", default=None,
                        help="Write the day-by-day history to this CSV path")
    parser.add_argument("--plot", default=None,
                        help="Save a chart of the run to this PNG path")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="-v for INFO, -vv for DEBUG logging")
    return parser


def config_from_args(parsed) -> SimulationConfig:
    return SimulationConfig(
        market_volatility_pct=parsed.volatility,
        total_days=parsed.days,
        hedge_enabled=parsed.hedge,
        hedge_ratio=parsed.hedge_ratio,
        hedge_cost_annual_pct=parsed.hedge_cost,
        hedge_effectiveness=parsed.hedge_effectiveness,
        rebalancing_frequency_days=parsed.rebalance_days,
        risk_free_rate_pct=parsed.risk_free,
        seed=parsed.seed,
        tick_interval_ms=parsed.tick_ms,
    )


def drive(controller: SimulationController) -> None:
    """Tick until the run completes, honouring the configured cadence."""
    delay = controller.config.tick_interval_ms / 1000.0
    controller.start()
    while controller.status is RunStatus.RUNNING:
        controller.tick()
        if delay > 0:
            time.sleep(delay)


def _fmt_pct(value):
    return "n/a" if value is None else f"{value:>+8.2f}%"


def _print_single(config: SimulationConfig, controller: SimulationController) -> dict:
    metrics = controller.metrics
    history = controller.history
    comparison = compare_hedge(history, INITIAL_PORTFOLIO_VALUE, config.risk_free_rate_pct)
    sharpe = "n/a" if metrics.sharpe_ratio is None else f"{metrics.sharpe_ratio:>9.3f}"

    print("\n" + "=" * 60)
    print("  PORTFOLIO SIMULATION" + ("  (HEDGED)" if config.hedge_enabled else ""))
    print("=" * 60)
    print(f"  Days:            {config.total_days}")
    print(f"  Volatility:      {config.market_volatility_pct:.1f}% annualized")
    if config.hedge_enabled:
        print(f"  Hedge:           ratio {config.hedge_ratio:.2f}, "
              f"effectiveness {config.hedge_effectiveness:.2f}, "
              f"cost {config.hedge_cost_annual_pct:.1f}%/yr, "
              f"rebalance every {config.rebalancing_frequency_days}d")
    print("  " + "-" * 56)
    print(f"  Initial Value:   ${INITIAL_PORTFOLIO_VALUE:>14,.2f}")
    print(f"  Final Value:     ${metrics.final_portfolio_value:>14,.2f}")
    print(f"  Final Market:    {history[-1].market_price:>15,.2f}")
    print("  " + "-" * 56)
    print(f"  Max Drawdown:    {_fmt_pct(metrics.max_drawdown_pct)}")
    print(f"  Volatility:      {_fmt_pct(metrics.annualized_volatility_pct)}")
    print(f"  Ann. Return:     {_fmt_pct(metrics.annualized_return_pct)}")
    print(f"  Sharpe:          {sharpe}")
    if config.hedge_enabled:
        print("  " + "-" * 56)
        print(f"  Unhedged Final:  ${comparison.unhedged_final:>14,.2f}")
        print(f"  Hedge P&L:       ${comparison.hedge_pnl:>+14,.2f}")
        print(f"  DD Reduction:    {_fmt_pct(comparison.drawdown_reduction_pct)}")
    print("=" * 60)

    return {
        "final_value": metrics.final_portfolio_value,
        "max_drawdown_pct": metrics.max_drawdown_pct,
        "annualized_volatility_pct": metrics.annualized_volatility_pct,
        "annualized_return_pct": metrics.annualized_return_pct,
        "sharpe_ratio": metrics.sharpe_ratio,
        "hedge_pnl": comparison.hedge_pnl,
    }


def _print_batch(stats: dict) -> None:
    print("\n" + "=" * 60)
    print(f"  MONTE CARLO BATCH  ({stats['n_runs']:,} runs)")
    print("=" * 60)
    print(f"  Median Final:    ${stats['median_final']:>14,.2f}")
    print(f"  Mean Final:      ${stats['mean_final']:>14,.2f}")
    print(f"  Std Dev:         ${stats['std_final']:>14,.2f}")
    print(f"  Min Final:       ${stats['min_final']:>14,.2f}")
    print(f"  Max Final:       ${stats['max_final']:>14,.2f}")
    print("  " + "-" * 56)
    for key in sorted(k for k in stats if k.startswith("P")):
        print(f"  {key:>14}:  ${stats[key]:>14,.2f}")
    print("  " + "-" * 56)
    print(f"  Prob of Profit:     {stats['prob_above_initial'] * 100:>8.1f}%")
    if stats["hedge_enabled"]:
        print(f"  Hedge Outperforms:  {stats['prob_hedge_outperforms'] * 100:>8.1f}%")
    print(f"  Mean Max DD:        {stats['mean_max_drawdown_pct']:>8.2f}%")
    print("=" * 60)


def run(args=None):
    parser = build_parser()
    parsed = parser.parse_args(args)

    level = logging.WARNING
    if parsed.verbose == 1:
        level = logging.INFO
    elif parsed.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = config_from_args(parsed)
    except ValueError as e:
        parser.error(str(e))

    if parsed.runs > 1 and parsed.plot:
        parser.error("--plot charts a single run; it cannot be combined with --runs > 1")

    if parsed.runs > 1:
        from hedge_gym.reporting import write_batch_csv
        from hedge_gym.simulation.batch import run_batch, summary_stats

        print(f"\nSimulating {parsed.runs:,} runs x {config.total_days} days...")
        batch = run_batch(config, n_runs=parsed.runs, seed=config.seed)
        stats = summary_stats(batch)
        _print_batch(stats)
        if parsed.csv:
            path = write_batch_csv(batch, parsed.csv)
            logger.info("Wrote batch results to %s", path)
        return stats

    controller = SimulationController(config)
    drive(controller)
    summary = _print_single(config, controller)

    if parsed.csv:
        from hedge_gym.reporting import write_history_csv
        path = write_history_csv(controller.history, parsed.csv)
        logger.info("Wrote history to %s", path)
    if parsed.plot:
        from hedge_gym.simulation.plotting import plot_run
        path = plot_run(controller.history, controller.metrics, parsed.plot)
        logger.info("Saved chart to %s", path)

    return summary


def main():
    run()


if __name__ == "__main__":
    main()
