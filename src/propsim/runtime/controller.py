"""Incremental, pausable driver for the resampling engine."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Optional

from propsim.monitoring.audit import AuditLog
from propsim.monitoring.monitor import Monitor
from propsim.simulator.engine import run_batch
from propsim.simulator.models import HistoricalTrade, SimulationConfig, SimulationResult
from propsim.simulator.prng import Mulberry32, create_prng
from propsim.statistics.aggregator import compute_statistics
from propsim.statistics.models import AggregateStatistics

BATCH_SIZE = 50
MIN_BATCHES_FOR_CONVERGENCE = 2


class SimulationStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    CONVERGED = "converged"

    @property
    def is_finished(self) -> bool:
        return self in {SimulationStatus.COMPLETED, SimulationStatus.CONVERGED}


@dataclass
class ResultAccumulator:
    results: list[SimulationResult] = field(default_factory=list)
    previous_mean: Optional[float] = None
    batches: int = 0

    def append(self, batch: list[SimulationResult]) -> None:
        self.results.extend(batch)
        self.batches += 1

    def mean_final_equity(self) -> float:
        if not self.results:
            return 0.0
        return sum(result.final_equity for result in self.results) / len(self.results)


@dataclass(frozen=True)
class SimulationFinished:
    status: SimulationStatus
    trades: tuple[HistoricalTrade, ...]
    config: SimulationConfig
    results: tuple[SimulationResult, ...]


Listener = Callable[[SimulationFinished], None]


class IncrementalSimulation:
    """Runs ``config.num_simulations`` resampled runs in bounded batches.

    Each ``step`` executes one batch to completion. ``pause`` only prevents the
    next batch from being scheduled; ``resume`` keeps the PRNG of the current
    session, so a paused run yields the same results as an uninterrupted one.
    Listeners fire exactly once when a session completes or converges.
    """

    def __init__(
        self,
        trades: Iterable[HistoricalTrade],
        config: SimulationConfig,
        batch_size: int = BATCH_SIZE,
        audit_log: Optional[AuditLog] = None,
        monitor: Optional[Monitor] = None,
    ) -> None:
        self.trades = tuple(trades)
        self.config = config
        self.batch_size = max(1, batch_size)
        self.status = SimulationStatus.IDLE
        self.accumulator = ResultAccumulator()
        self._rng: Optional[Mulberry32] = None
        self._listeners: list[Listener] = []
        self._finish_notified = False
        self._audit_log = audit_log
        self.monitor = monitor

    def _log(self, event: str, payload: dict) -> None:
        if self._audit_log is None:
            return
        self._audit_log.log(event, payload)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    @property
    def results(self) -> tuple[SimulationResult, ...]:
        return tuple(self.accumulator.results)

    @property
    def progress(self) -> float:
        if self.status.is_finished or self.config.num_simulations <= 0:
            return 1.0
        return min(1.0, len(self.accumulator.results) / self.config.num_simulations)

    def start(self) -> bool:
        if self.status not in {SimulationStatus.IDLE, SimulationStatus.COMPLETED, SimulationStatus.CONVERGED}:
            return False
        self.accumulator = ResultAccumulator()
        self._rng = create_prng(self.config.seed)
        self._finish_notified = False
        self.status = SimulationStatus.RUNNING
        self._log(
            "simulation_start",
            {"seed": self.config.seed, "num_simulations": self.config.num_simulations},
        )
        return True

    def pause(self) -> bool:
        if self.status != SimulationStatus.RUNNING:
            return False
        self.status = SimulationStatus.PAUSED
        self._log("simulation_pause", {"runs": len(self.accumulator.results)})
        return True

    def resume(self) -> bool:
        if self.status != SimulationStatus.PAUSED:
            return False
        self.status = SimulationStatus.RUNNING
        self._log("simulation_resume", {"runs": len(self.accumulator.results)})
        return True

    def step(self) -> bool:
        """Run one batch; returns True while further batches are due."""
        if self.status != SimulationStatus.RUNNING or self._rng is None:
            return False

        accumulator = self.accumulator
        done = len(accumulator.results)
        remaining = self.config.num_simulations - done
        if remaining <= 0:
            self._finish(SimulationStatus.COMPLETED)
            return False

        batch = run_batch(self.trades, self.config, min(self.batch_size, remaining), done, self._rng)
        if not batch:
            # empty trade pool
            self._finish(SimulationStatus.COMPLETED)
            return False
        accumulator.append(batch)
        self._log("simulation_batch", {"batch": accumulator.batches, "runs": len(accumulator.results)})

        if self._has_converged(accumulator):
            self._finish(SimulationStatus.CONVERGED)
            return False
        if len(accumulator.results) >= self.config.num_simulations:
            self._finish(SimulationStatus.COMPLETED)
            return False
        return True

    def _has_converged(self, accumulator: ResultAccumulator) -> bool:
        if len(accumulator.results) <= self.batch_size * MIN_BATCHES_FOR_CONVERGENCE:
            return False
        current = accumulator.mean_final_equity()
        previous = accumulator.previous_mean
        accumulator.previous_mean = current
        tolerance = self.config.convergence_tolerance
        if previous is None or previous == 0 or tolerance <= 0:
            return False
        return abs((current - previous) / previous) * 100.0 < tolerance

    def _finish(self, status: SimulationStatus) -> None:
        self.status = status
        if self._finish_notified:
            return
        self._finish_notified = True
        runs = len(self.accumulator.results)
        self._log("simulation_finished", {"status": status.value, "runs": runs})
        if self.monitor is not None:
            self.monitor.simulation_finished(status.value, runs)
        event = SimulationFinished(
            status=status,
            trades=self.trades,
            config=self.config,
            results=self.results,
        )
        for listener in list(self._listeners):
            listener(event)

    async def run(self) -> SimulationStatus:
        """Drive batches cooperatively, yielding to the event loop between them."""
        while self.step():
            await asyncio.sleep(0)
        return self.status

    def run_to_end(self) -> SimulationStatus:
        if self.status == SimulationStatus.PAUSED:
            self.resume()
        elif self.status != SimulationStatus.RUNNING:
            self.start()
        while self.step():
            pass
        return self.status

    def statistics(self, duration_years: float = 1.0) -> AggregateStatistics:
        stats = compute_statistics(
            self.accumulator.results,
            self.config.initial_equity,
            duration_years=duration_years,
            confidence_level=self.config.confidence_level,
            trades_per_simulation=self.config.trades_per_simulation,
        )
        if self.monitor is not None and stats.num_results:
            self.monitor.ruin_probability(stats.ruin_probability)
        return stats
