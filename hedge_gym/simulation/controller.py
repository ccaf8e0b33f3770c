"""
Simulation controller: owns config, run state and history; advanced one day
per external tick().

    Idle -> Running <-> Paused
    Running -> Completed   (tick at current_day == total_days)
    Completed -> Idle      (reset or configure; start resets first)

No timer or thread lives here. Whatever drives tick() (UI timer, test, batch
loop) sets the cadence; the lock only serializes calls on one instance.
"""

import logging
import threading
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from hedge_gym.config import (
    INITIAL_MARKET_PRICE,
    INITIAL_PORTFOLIO_VALUE,
    SimulationConfig,
)
from hedge_gym.metrics.risk_metrics import MetricsSnapshot, compute_metrics
from hedge_gym.simulation.engine import MarketStepper
from hedge_gym.simulation.valuation import is_rebalance_due, valuate_day

logger = logging.getLogger(__name__)


class RunStatus(Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class HistoryRecord:
    day: int
    market_price: float
    portfolio_value: float              # live track
    unhedged_portfolio: float
    hedged_portfolio: Optional[float] = None


@dataclass
class RunState:
    current_day: int = 0
    market_price: float = INITIAL_MARKET_PRICE
    portfolio_value: float = INITIAL_PORTFOLIO_VALUE
    last_rebalance_day: int = 0
    status: RunStatus = RunStatus.IDLE


@dataclass(frozen=True)
class SimulationSnapshot:
    current_day: int
    total_days: int
    market_price: float
    portfolio_value: float
    last_rebalance_day: int
    status: RunStatus
    latest: HistoryRecord
    history_length: int
    metrics: MetricsSnapshot = field(default_factory=MetricsSnapshot)


def _seed_record(config: SimulationConfig) -> HistoryRecord:
    return HistoryRecord(
        day=0,
        market_price=INITIAL_MARKET_PRICE,
        portfolio_value=INITIAL_PORTFOLIO_VALUE,
        unhedged_portfolio=INITIAL_PORTFOLIO_VALUE,
        hedged_portfolio=INITIAL_PORTFOLIO_VALUE if config.hedge_enabled else None,
    )


class SimulationController:
    """Single-portfolio, day-stepped simulation with an optional hedge overlay."""

    def __init__(self, config: SimulationConfig | None = None,
                 rng: np.random.Generator | None = None):
        self._lock = threading.Lock()
        self._config = config if config is not None else SimulationConfig()
        self._external_rng = rng
        self._reset_locked()

    # ── Read-only views ──

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def status(self) -> RunStatus:
        with self._lock:
            return self._state.status

    @property
    def history(self) -> Tuple[HistoryRecord, ...]:
        with self._lock:
            return tuple(self._history)

    @property
    def metrics(self) -> MetricsSnapshot:
        with self._lock:
            return self._metrics

    def get_snapshot(self) -> SimulationSnapshot:
        with self._lock:
            s = self._state
            return SimulationSnapshot(
                current_day=s.current_day,
                total_days=self._config.total_days,
                market_price=s.market_price,
                portfolio_value=s.portfolio_value,
                last_rebalance_day=s.last_rebalance_day,
                status=s.status,
                latest=self._history[-1],
                history_length=len(self._history),
                metrics=self._metrics,
            )

    # ── Operations ──

    def configure(self, config: SimulationConfig) -> bool:
        """
        Swap configuration. Returns False (state unchanged) while running, or
        when paused and total_days would fall below the day already reached.
        A completed run is cleared back to Idle under the new config.
        """
        with self._lock:
            status = self._state.status
            if status is RunStatus.RUNNING:
                logger.warning("configure() rejected while running; pause first")
                return False
            if status is RunStatus.PAUSED and config.total_days < self._state.current_day:
                logger.warning(
                    "configure() rejected: total_days=%d is before current day %d",
                    config.total_days, self._state.current_day,
                )
                return False
            self._config = config
            if status in (RunStatus.IDLE, RunStatus.COMPLETED):
                # No run in progress: seed record and RNG follow the new config.
                self._reset_locked()
            logger.info("Configuration updated (status=%s)", self._state.status.value)
            return True

    def start(self) -> None:
        with self._lock:
            if self._state.status is RunStatus.COMPLETED:
                self._reset_locked()
            if self._state.status is not RunStatus.RUNNING:
                self._state.status = RunStatus.RUNNING
                logger.info("Simulation running from day %d", self._state.current_day)

    def pause(self) -> None:
        with self._lock:
            if self._state.status is RunStatus.RUNNING:
                self._state.status = RunStatus.PAUSED
                logger.info("Simulation paused at day %d", self._state.current_day)

    def reset(self) -> None:
        with self._lock:
            self._reset_locked()
            logger.info("Simulation reset")

    def tick(self) -> Optional[HistoryRecord]:
        """
        Advance one day. Returns the appended record, or None when nothing was
        appended (not running, or this tick completed the run).
        """
        with self._lock:
            state = self._state
            if state.status is not RunStatus.RUNNING:
                return None

            if state.current_day >= self._config.total_days:
                self._complete_locked()
                return None

            return self._step_locked()

    def run_to_completion(self) -> MetricsSnapshot:
        """Start (or resume) and tick until Completed."""
        self.start()
        while self.status is RunStatus.RUNNING:
            self.tick()
        return self._metrics

    # ── Internals (caller holds the lock) ──

    def _reset_locked(self):
        config = self._config
        if self._external_rng is not None:
            rng = self._external_rng
        else:
            rng = np.random.default_rng(config.seed)
        self._stepper = MarketStepper(drift_annual=config.drift_annual, rng=rng)
        self._state = RunState()
        self._history: List[HistoryRecord] = [_seed_record(config)]
        self._unhedged_value = INITIAL_PORTFOLIO_VALUE
        self._metrics = MetricsSnapshot()

    def _step_locked(self) -> HistoryRecord:
        config = self._config
        state = self._state

        market_return = self._stepper.step(config.market_volatility_pct)
        market_price = MarketStepper.next_price(state.market_price, market_return)

        rebalance = config.hedge_enabled and is_rebalance_due(
            state.current_day, state.last_rebalance_day, config.rebalancing_frequency_days,
        )
        valuation = valuate_day(
            state.portfolio_value,
            market_return,
            config,
            rebalance,
            prior_unhedged=self._unhedged_value,
        )
        if rebalance:
            state.last_rebalance_day = state.current_day

        state.current_day += 1
        state.market_price = market_price
        state.portfolio_value = valuation.hedged
        self._unhedged_value = valuation.unhedged

        record = HistoryRecord(
            day=state.current_day,
            market_price=market_price,
            portfolio_value=valuation.hedged,
            unhedged_portfolio=valuation.unhedged,
            hedged_portfolio=valuation.hedged if config.hedge_enabled else None,
        )
        self._history.append(record)

        self._metrics = compute_metrics(
            [r.portfolio_value for r in self._history],
            state.portfolio_value,
            INITIAL_PORTFOLIO_VALUE,
            config.risk_free_rate_pct,
            previous=self._metrics,
        )
        logger.debug(
            "day %d: market %+.4f%% price %.2f value %.2f%s",
            record.day, market_return * 100, market_price, record.portfolio_value,
            " (rebalanced)" if rebalance else "",
        )
        return record

    def _complete_locked(self):
        self._state.status = RunStatus.COMPLETED
        self._metrics = replace(
            compute_metrics(
                [r.portfolio_value for r in self._history],
                self._state.portfolio_value,
                INITIAL_PORTFOLIO_VALUE,
                self._config.risk_free_rate_pct,
                previous=self._metrics,
            ),
            final_portfolio_value=self._state.portfolio_value,
        )
        logger.info(
            "Simulation completed after %d days: final value %.2f",
            self._state.current_day, self._state.portfolio_value,
        )
