import pytest

from hedge_gym.config import SimulationConfig


class FixedRng:
    """Stands in for a numpy Generator: every uniform draw is the same value."""

    def __init__(self, value=0.0):
        self.value = value

    def uniform(self, low, high, size):
        return [self.value] * size


@pytest.fixture
def base_config():
    return SimulationConfig(seed=42)


@pytest.fixture
def hedged_config():
    return SimulationConfig(
        seed=42,
        hedge_enabled=True,
        hedge_ratio=1.0,
        hedge_cost_annual_pct=2.0,
        hedge_effectiveness=0.8,
        rebalancing_frequency_days=21,
    )


@pytest.fixture
def zero_vol_config():
    return SimulationConfig(market_volatility_pct=0.0, total_days=252, seed=1)


@pytest.fixture
def fixed_rng():
    return FixedRng
