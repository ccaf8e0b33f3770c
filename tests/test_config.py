import dataclasses

import pytest

from hedge_gym.config import SimulationConfig


def test_defaults_valid():
    cfg = SimulationConfig()
    assert cfg.total_days == 252
    assert cfg.drift_annual == 0.05
    assert cfg.risk_free_rate_pct == 2.0
    assert cfg.hedge_enabled is False


def test_frozen():
    cfg = SimulationConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.total_days = 100


def test_with_changes_validates():
    cfg = SimulationConfig().with_changes(hedge_ratio=1.5)
    assert cfg.hedge_ratio == 1.5
    with pytest.raises(ValueError, match="hedge_ratio"):
        SimulationConfig().with_changes(hedge_ratio=1.6)


@pytest.mark.parametrize("field,value", [
    ("market_volatility_pct", -1.0),
    ("market_volatility_pct", 41.0),
    ("total_days", 49),
    ("total_days", 505),
    ("hedge_ratio", -0.1),
    ("hedge_cost_annual_pct", 10.5),
    ("hedge_effectiveness", 1.01),
    ("rebalancing_frequency_days", 0),
    ("rebalancing_frequency_days", 64),
    ("tick_interval_ms", -5),
])
def test_out_of_range_rejected(field, value):
    with pytest.raises(ValueError, match=field):
        SimulationConfig(**{field: value})


def test_boundaries_accepted():
    SimulationConfig(market_volatility_pct=40.0, total_days=504, hedge_ratio=0.0,
                     hedge_cost_annual_pct=10.0, hedge_effectiveness=1.0,
                     rebalancing_frequency_days=63)
    SimulationConfig(market_volatility_pct=0.0, total_days=50, rebalancing_frequency_days=1)


def test_fractional_days_rejected():
    with pytest.raises(ValueError, match="integer"):
        SimulationConfig(total_days=100.5)
