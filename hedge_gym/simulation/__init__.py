"""Day-stepped hedged portfolio simulation."""
from .controller import (
    HistoryRecord,
    RunState,
    RunStatus,
    SimulationController,
    SimulationSnapshot,
)
from .engine import MarketStepper, step_market_return
from .sampler import sample_normal
from .valuation import DayValuation, valuate_day
