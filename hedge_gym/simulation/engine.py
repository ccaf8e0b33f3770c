"""
Daily market step under a discretized Geometric Brownian Motion.

Model: dS = mu * S * dt + sigma * S * dW
Step:  r = exp((mu/252 - 0.5*(sigma_d/100)^2) + (sigma_d/100)*Z) - 1
       sigma_d = sigma_annual_pct / sqrt(252)
"""

import math

import numpy as np

from hedge_gym.config import TRADING_DAYS
from hedge_gym.simulation.sampler import sample_normal


def step_market_return(
    annual_volatility_pct: float,
    rng: np.random.Generator,
    drift_annual: float = 0.05,
) -> float:
    """Fractional market return for one trading day."""
    daily_vol = annual_volatility_pct / math.sqrt(TRADING_DAYS)
    z = sample_normal(rng)
    sigma = daily_vol / 100
    return math.exp((drift_annual / TRADING_DAYS - 0.5 * sigma ** 2) + sigma * z) - 1


class MarketStepper:
    """Advances a single market price one day at a time."""

    def __init__(self, drift_annual: float = 0.05, seed: int | None = None,
                 rng: np.random.Generator | None = None):
        self.drift_annual = drift_annual
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def step(self, annual_volatility_pct: float) -> float:
        return step_market_return(annual_volatility_pct, self.rng, self.drift_annual)

    @staticmethod
    def next_price(price: float, market_return: float) -> float:
        return price * (1 + market_return)
