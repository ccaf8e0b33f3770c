"""Configuration for the hedged portfolio simulation."""

from dataclasses import dataclass, replace


TRADING_DAYS = 252
INITIAL_PORTFOLIO_VALUE = 1_000_000.0
INITIAL_MARKET_PRICE = 100.0
REBALANCE_FEE = 0.001  # 10bps flat per rebalance

# Allowed ranges (inclusive). Volatility 0 gives a drift-only path; the
# interactive slider range is narrower.
MARKET_VOLATILITY_RANGE = (0.0, 40.0)
VOLATILITY_SLIDER_RANGE = (5.0, 40.0)
TOTAL_DAYS_RANGE = (50, 504)
HEDGE_RATIO_RANGE = (0.0, 1.5)
HEDGE_COST_RANGE = (0.0, 10.0)
HEDGE_EFFECTIVENESS_RANGE = (0.0, 1.0)
REBALANCE_DAYS_RANGE = (1, 63)


def _check_range(name, value, bounds):
    lo, hi = bounds
    if not lo <= value <= hi:
        raise ValueError(f"{name} must be in [{lo}, {hi}], got {value}")


@dataclass(frozen=True)
class SimulationConfig:
    # Market
    market_volatility_pct: float = 20.0    # annualized, percent
    total_days: int = 252
    drift_annual: float = 0.05             # fraction, not percent

    # Hedge overlay
    hedge_enabled: bool = False
    hedge_ratio: float = 1.0
    hedge_cost_annual_pct: float = 2.0
    hedge_effectiveness: float = 0.8
    rebalancing_frequency_days: int = 21

    # Metrics
    risk_free_rate_pct: float = 2.0

    # Run control
    seed: int | None = None
    tick_interval_ms: int = 100            # cadence hint for whoever drives tick()

    def __post_init__(self):
        _check_range("market_volatility_pct", self.market_volatility_pct, MARKET_VOLATILITY_RANGE)
        _check_range("total_days", self.total_days, TOTAL_DAYS_RANGE)
        _check_range("hedge_ratio", self.hedge_ratio, HEDGE_RATIO_RANGE)
        _check_range("hedge_cost_annual_pct", self.hedge_cost_annual_pct, HEDGE_COST_RANGE)
        _check_range("hedge_effectiveness", self.hedge_effectiveness, HEDGE_EFFECTIVENESS_RANGE)
        _check_range("rebalancing_frequency_days", self.rebalancing_frequency_days, REBALANCE_DAYS_RANGE)
        if int(self.total_days) != self.total_days:
            raise ValueError(f"total_days must be an integer, got {self.total_days}")
        if int(self.rebalancing_frequency_days) != self.rebalancing_frequency_days:
            raise ValueError(
                f"rebalancing_frequency_days must be an integer, got {self.rebalancing_frequency_days}"
            )
        if self.tick_interval_ms < 0:
            raise ValueError(f"tick_interval_ms must be non-negative, got {self.tick_interval_ms}")

    def with_changes(self, **changes) -> "SimulationConfig":
        """Validated copy with the given fields replaced."""
        return replace(self, **changes)
