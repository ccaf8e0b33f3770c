"""
Daily valuation of the hedged and unhedged portfolio tracks.

The hedge is modelled as an overlay rather than an option book:
  - a continuous cost drag of hedge_cost_annual_pct per year,
  - on down days, ratio * effectiveness of the loss is given back,
  - on up/flat days, the gain is capped by ratio * (1 - effectiveness),
  - a flat REBALANCE_FEE whenever the hedge is rebalanced.
"""

from dataclasses import dataclass

from hedge_gym.config import REBALANCE_FEE, TRADING_DAYS, SimulationConfig


@dataclass
class DayValuation:
    hedged: float
    unhedged: float
    rebalanced: bool = False


def is_rebalance_due(current_day: int, last_rebalance_day: int, frequency_days: int) -> bool:
    """Rebalance is decided against the day being processed, before it increments."""
    return current_day - last_rebalance_day >= frequency_days


def daily_hedge_cost(hedge_cost_annual_pct: float) -> float:
    """Daily fractional drag equivalent to the annual hedge cost (<= 0)."""
    return (1 - hedge_cost_annual_pct / 100) ** (1 / TRADING_DAYS) - 1


def hedged_return_factor(market_return: float, hedge_ratio: float,
                         hedge_effectiveness: float) -> float:
    """Growth factor applied to the hedged value for the day's market move."""
    if market_return < 0:
        loss_protection = -market_return * hedge_ratio * hedge_effectiveness
        return 1 + market_return + loss_protection
    upside_cap = hedge_ratio * (1 - hedge_effectiveness)
    return 1 + market_return * (1 - upside_cap)


def valuate_day(
    prior_value: float,
    market_return: float,
    config: SimulationConfig,
    is_rebalance_day: bool,
    prior_unhedged: float | None = None,
) -> DayValuation:
    """
    Value both tracks after one day's market move.

    prior_value is the live track (hedged when hedging is on). The unhedged
    counterfactual advances from prior_unhedged, its own cumulative value,
    rather than from prior_value. Only when prior_unhedged is omitted does it
    fall back to prior_value, i.e. unhedged = prior_value * (1 + market_return).
    """
    if prior_unhedged is None:
        prior_unhedged = prior_value
    unhedged = prior_unhedged * (1 + market_return)

    if not config.hedge_enabled:
        live = prior_value * (1 + market_return)
        return DayValuation(hedged=live, unhedged=unhedged)

    value = prior_value * (1 + daily_hedge_cost(config.hedge_cost_annual_pct))
    value *= hedged_return_factor(market_return, config.hedge_ratio, config.hedge_effectiveness)

    if is_rebalance_day:
        value *= 1 - REBALANCE_FEE

    return DayValuation(hedged=value, unhedged=unhedged, rebalanced=is_rebalance_day)
