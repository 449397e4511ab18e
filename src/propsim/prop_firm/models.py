"""Data models for prop-firm career simulation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Phase(str, Enum):
    EVAL = "EVAL"
    EXPRESS = "EXPRESS"
    LIVE = "LIVE"


@dataclass(frozen=True)
class PropFirmConfig:
    account_size: float = 50000.0
    max_daily_loss: float = 1000.0
    max_total_loss: float = 2000.0
    profit_target_eval: float = 3000.0
    max_daily_profit_eval: float = 1500.0
    express_payout_threshold: float = 150.0
    express_payouts_required: int = 5
    express_days_for_payout: int = 5
    trades_per_day: float = 3.0

    def loss_limit_level(self) -> float:
        return self.account_size - self.max_total_loss


@dataclass
class VirtualTraderCareer:
    account_size: float
    phase: Phase = Phase.EVAL
    balance: float = 0.0
    eval_progress: float = 0.0
    express_qualifying_days: int = 0
    express_payouts: int = 0
    career_attempt: int = 1
    phase_attempt_counted: bool = False
    reached_express: bool = False
    received_payout: bool = False

    def __post_init__(self) -> None:
        self.balance = self.account_size

    def _reset_account(self) -> None:
        self.balance = self.account_size
        self.eval_progress = 0.0
        self.express_qualifying_days = 0
        self.express_payouts = 0
        self.phase_attempt_counted = False

    def restart(self) -> None:
        """Blow-up in any phase sends the career back to a fresh evaluation."""
        self.phase = Phase.EVAL
        self.career_attempt += 1
        self._reset_account()

    def promote_to_express(self) -> None:
        self.phase = Phase.EXPRESS
        self.reached_express = True
        self._reset_account()

    def record_payout(self, payouts_required: int) -> bool:
        """Book a payout; returns True when the trader graduates to LIVE."""
        self.express_payouts += 1
        self.express_qualifying_days = 0
        self.received_payout = True
        if self.express_payouts >= payouts_required:
            self.phase = Phase.LIVE
            return True
        return False


@dataclass(frozen=True)
class AggregatePropFirmStats:
    total_traders: int
    eval_attempts: int
    eval_blown: int
    eval_passed: int
    eval_pass_rate: float
    express_attempts: int
    express_blown: int
    express_payouts_total: int
    express_pass_rate: float
    live_reached: int
    live_reached_rate: float
    avg_attempts_to_express: float
    avg_attempts_to_first_payout: float
    avg_attempts_to_live: float
    blown_after_first_payout: int
