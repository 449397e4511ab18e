"""Bootstrap resampling of historical trade outcomes."""

from __future__ import annotations

import math
from typing import Callable, Iterable, Sequence

from propsim.simulator.models import HistoricalTrade, RiskModel, SimulationConfig, SimulationResult
from propsim.simulator.prng import create_prng

Random = Callable[[], float]

# Compounding a balance this small is terminal for the run.
RUIN_EXIT_EQUITY = 1.0


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def outcome_pool(trades: Iterable[HistoricalTrade], risk_model: RiskModel) -> list[float]:
    return [trade.outcome(risk_model) for trade in trades]


def _ratios(pnls: Sequence[float]) -> tuple[float, float]:
    count = len(pnls)
    if count == 0:
        return 0.0, 0.0
    mean = sum(pnls) / count
    if count > 1:
        std_dev = math.sqrt(sum((pnl - mean) ** 2 for pnl in pnls) / (count - 1))
    else:
        std_dev = 0.0
    if std_dev == 0 or not math.isfinite(std_dev):
        return 0.0, 0.0
    downside_dev = math.sqrt(sum(pnl * pnl for pnl in pnls if pnl < 0) / count)
    sharpe = mean / std_dev
    sortino = 0.0 if downside_dev == 0 else mean / downside_dev
    return _finite(sharpe), _finite(sortino)


def _max_drawdown_percent(equity_curve: Sequence[float], initial_equity: float) -> float:
    peak = initial_equity
    worst = 0.0
    for equity in equity_curve:
        if equity > peak:
            peak = equity
        if peak <= 0:
            continue
        drawdown = (peak - equity) / peak
        if drawdown > worst:
            worst = drawdown
    return _finite(worst * 100.0)


def simulate_run(
    pool: Sequence[float],
    rng: Random,
    trades_per_simulation: int,
    initial_equity: float,
    risk_model: RiskModel,
    run_id: int = 0,
) -> SimulationResult:
    """Roll one equity curve by drawing with replacement from ``pool``.

    The pool must be non-empty. Under ``percent_equity`` pool values are
    fractional returns and the run stops as soon as equity drops to
    ``RUIN_EXIT_EQUITY`` or below, so the curve can be shorter than
    ``trades_per_simulation + 1``.
    """
    size = len(pool)
    compounding = risk_model == RiskModel.PERCENT_EQUITY

    equity = initial_equity
    peak = initial_equity
    max_drawdown = 0.0
    wins = 0
    gross_profit = 0.0
    gross_loss = 0.0
    loss_streak = 0
    max_loss_streak = 0
    is_ruined = False
    equity_curve = [initial_equity]
    pnls: list[float] = []

    for _ in range(trades_per_simulation):
        outcome = pool[int(rng() * size)]
        pnl = equity * outcome if compounding else outcome
        equity += pnl
        equity_curve.append(equity)
        pnls.append(pnl)

        if equity > peak:
            peak = equity
        drawdown = peak - equity
        if drawdown > max_drawdown:
            max_drawdown = drawdown

        if pnl > 0:
            wins += 1
            gross_profit += pnl
            loss_streak = 0
        else:
            gross_loss += abs(pnl)
            loss_streak += 1
            max_loss_streak = max(max_loss_streak, loss_streak)

        if equity <= 0:
            is_ruined = True
        if compounding and equity <= RUIN_EXIT_EQUITY:
            is_ruined = True
            break

    sharpe, sortino = _ratios(pnls)
    taken = len(pnls)
    return SimulationResult(
        id=run_id,
        equity_curve=tuple(equity_curve),
        final_equity=equity,
        max_drawdown=_finite(max_drawdown),
        max_drawdown_percent=_max_drawdown_percent(equity_curve, initial_equity),
        win_rate=0.0 if taken == 0 else wins / taken * 100.0,
        profit_factor=_finite(gross_profit if gross_loss == 0 else gross_profit / gross_loss),
        max_consecutive_losses=max_loss_streak,
        is_ruined=is_ruined,
        sharpe_ratio=sharpe,
        sortino_ratio=sortino,
    )


def run_batch(
    trades: Sequence[HistoricalTrade],
    config: SimulationConfig,
    batch_size: int,
    start_index: int,
    rng: Random,
) -> list[SimulationResult]:
    pool = outcome_pool(trades, config.risk_model)
    if not pool:
        return []
    return [
        simulate_run(
            pool,
            rng,
            config.trades_per_simulation,
            config.initial_equity,
            config.risk_model,
            run_id=start_index + offset,
        )
        for offset in range(batch_size)
    ]


def run_monte_carlo(trades: Sequence[HistoricalTrade], config: SimulationConfig) -> list[SimulationResult]:
    return run_batch(trades, config, config.num_simulations, 0, create_prng(config.seed))
