"""Simulation data structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class RiskModel(str, Enum):
    FIXED_PNL = "fixed_pnl"
    PERCENT_EQUITY = "percent_equity"


class TradeSide(str, Enum):
    LONG = "Long"
    SHORT = "Short"


@dataclass(frozen=True)
class HistoricalTrade:
    pnl: float
    pnl_percent: Optional[float] = None  # signed fraction, 0.02 == +2%
    entry_time: Optional[datetime] = None
    side: Optional[TradeSide] = None

    def outcome(self, risk_model: RiskModel) -> float:
        if risk_model == RiskModel.PERCENT_EQUITY:
            return float(self.pnl_percent or 0.0)
        return float(self.pnl)


@dataclass(frozen=True)
class SimulationConfig:
    initial_equity: float = 10000.0
    num_simulations: int = 1000
    trades_per_simulation: int = 100
    seed: int = 12345
    convergence_tolerance: float = 0.1  # percent change of the running mean
    confidence_level: float = 95.0  # percent
    risk_model: RiskModel = RiskModel.FIXED_PNL

    def validate(self) -> None:
        if self.num_simulations <= 0:
            raise ValueError("num_simulations must be positive")
        if self.trades_per_simulation <= 0:
            raise ValueError("trades_per_simulation must be positive")
        if not 0 < self.confidence_level < 100:
            raise ValueError("confidence_level must be between 0 and 100")
        if self.convergence_tolerance < 0:
            raise ValueError("convergence_tolerance must not be negative")


@dataclass(frozen=True)
class SimulationResult:
    id: int
    equity_curve: tuple[float, ...]
    final_equity: float
    max_drawdown: float
    max_drawdown_percent: float
    win_rate: float
    profit_factor: float
    max_consecutive_losses: int
    is_ruined: bool
    sharpe_ratio: float
    sortino_ratio: float

    @property
    def trades_taken(self) -> int:
        return len(self.equity_curve) - 1
