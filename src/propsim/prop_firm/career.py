"""Prop-firm career simulator: EVAL -> EXPRESS -> LIVE funnel."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Iterable, Sequence

from propsim.prop_firm.models import AggregatePropFirmStats, Phase, PropFirmConfig, VirtualTraderCareer
from propsim.simulator.models import HistoricalTrade
from propsim.simulator.prng import create_prng

# Hard caps that turn unreachable targets into bounded, truncated careers.
MAX_CAREER_DAYS = 2000
MAX_CAREER_ATTEMPTS = 100


def simulate_day(pool: Sequence[float], rng: Callable[[], float], trades_per_day: float) -> float:
    """Aggregate P&L of one day made of 0.5x-1.5x ``trades_per_day`` draws."""
    num_trades = max(1, math.floor(trades_per_day * (0.5 + rng()) + 0.5))
    size = len(pool)
    day_pnl = 0.0
    for _ in range(num_trades):
        day_pnl += pool[int(rng() * size)]
    return day_pnl


@dataclass
class _Funnel:
    eval_attempts: int = 0
    eval_blown: int = 0
    eval_passed: int = 0
    express_attempts: int = 0
    express_blown: int = 0
    express_payouts_total: int = 0
    live_reached: int = 0
    blown_after_first_payout: int = 0
    attempts_to_express: list[int] = field(default_factory=list)
    attempts_to_first_payout: list[int] = field(default_factory=list)
    attempts_to_live: list[int] = field(default_factory=list)

    def open_attempt(self, career: VirtualTraderCareer) -> None:
        if career.phase_attempt_counted:
            return
        career.phase_attempt_counted = True
        if career.phase == Phase.EVAL:
            self.eval_attempts += 1
        elif career.phase == Phase.EXPRESS:
            self.express_attempts += 1

    def blow_up(self, career: VirtualTraderCareer) -> None:
        if career.phase == Phase.EVAL:
            self.eval_blown += 1
        elif career.phase == Phase.EXPRESS:
            self.express_blown += 1
            if career.received_payout:
                self.blown_after_first_payout += 1
        career.restart()


def _average(values: list[int]) -> float:
    return sum(values) / len(values) if values else 0.0


def _rate(numerator: int, denominator: int) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def _advance_career(
    career: VirtualTraderCareer,
    pool: Sequence[float],
    rng: Callable[[], float],
    config: PropFirmConfig,
    funnel: _Funnel,
) -> None:
    day = 0
    loss_limit = config.loss_limit_level()
    while career.phase != Phase.LIVE and day < MAX_CAREER_DAYS and career.career_attempt <= MAX_CAREER_ATTEMPTS:
        day += 1
        funnel.open_attempt(career)
        day_pnl = simulate_day(pool, rng, config.trades_per_day)

        if day_pnl <= -config.max_daily_loss:
            funnel.blow_up(career)
            continue

        career.balance += day_pnl
        if career.balance < loss_limit:
            funnel.blow_up(career)
            continue

        if career.phase == Phase.EVAL:
            career.eval_progress += min(day_pnl, config.max_daily_profit_eval)
            if career.eval_progress >= config.profit_target_eval:
                funnel.eval_passed += 1
                if not career.reached_express:
                    funnel.attempts_to_express.append(career.career_attempt)
                career.promote_to_express()
        elif career.phase == Phase.EXPRESS:
            if day_pnl >= config.express_payout_threshold:
                career.express_qualifying_days += 1
            if career.express_qualifying_days >= config.express_days_for_payout:
                funnel.express_payouts_total += 1
                if not career.received_payout:
                    funnel.attempts_to_first_payout.append(career.career_attempt)
                if career.record_payout(config.express_payouts_required):
                    funnel.live_reached += 1
                    funnel.attempts_to_live.append(career.career_attempt)


def run_prop_firm_simulation(
    trades: Iterable[HistoricalTrade],
    config: PropFirmConfig,
    num_traders: int = 1000,
    seed: int = 12345,
) -> AggregatePropFirmStats:
    """Advance ``num_traders`` independent careers over the trade pool.

    The simulator owns its PRNG, built from ``seed``; it never shares a stream
    with the Monte-Carlo controller even when both use the same seed value.
    """
    pool = [trade.pnl for trade in trades]
    funnel = _Funnel()
    if pool:
        rng = create_prng(seed)
        for _ in range(max(num_traders, 0)):
            _advance_career(VirtualTraderCareer(config.account_size), pool, rng, config, funnel)

    return AggregatePropFirmStats(
        total_traders=num_traders,
        eval_attempts=funnel.eval_attempts,
        eval_blown=funnel.eval_blown,
        eval_passed=funnel.eval_passed,
        eval_pass_rate=_rate(funnel.eval_passed, funnel.eval_attempts),
        express_attempts=funnel.express_attempts,
        express_blown=funnel.express_blown,
        express_payouts_total=funnel.express_payouts_total,
        express_pass_rate=_rate(funnel.live_reached, funnel.express_attempts),
        live_reached=funnel.live_reached,
        live_reached_rate=_rate(funnel.live_reached, num_traders),
        avg_attempts_to_express=_average(funnel.attempts_to_express),
        avg_attempts_to_first_payout=_average(funnel.attempts_to_first_payout),
        avg_attempts_to_live=_average(funnel.attempts_to_live),
        blown_after_first_payout=funnel.blown_after_first_payout,
    )
