"""Descriptive statistics for the historical trade sample."""

from __future__ import annotations

import math
from typing import Sequence

from propsim.simulator.models import HistoricalTrade, TradeSide
from propsim.statistics.models import (
    DistributionStats,
    HistoricalSummary,
    RegressionResult,
    SegmentedAnalysis,
)

SECONDS_PER_YEAR = 60 * 60 * 24 * 365.25
MIN_HISTORY_YEARS = 0.0027  # about one day
SQN_TRADE_CAP = 100
SQN_GOOD = 2.5
SQN_AVERAGE = 1.6
MIN_REGRESSION_TRADES = 5
DEFAULT_ENTRY_HOUR = 12


def _sample_std(values: Sequence[float], mean: float) -> float:
    if len(values) <= 1:
        return 0.0
    return math.sqrt(sum((value - mean) ** 2 for value in values) / (len(values) - 1))


def history_years(trades: Sequence[HistoricalTrade]) -> float | None:
    stamps = sorted(trade.entry_time.timestamp() for trade in trades if trade.entry_time is not None)
    if len(stamps) < 2:
        return None
    return max((stamps[-1] - stamps[0]) / SECONDS_PER_YEAR, MIN_HISTORY_YEARS)


def estimate_simulated_years(trades: Sequence[HistoricalTrade], trades_per_simulation: int) -> float:
    """Years covered by one simulated run at the historical trade frequency."""
    years = history_years(trades)
    if years is None:
        return 1.0
    trades_per_year = len(trades) / years
    return trades_per_simulation / trades_per_year


def system_quality_number(pnls: Sequence[float]) -> float:
    count = len(pnls)
    if count < 2:
        return 0.0
    mean = sum(pnls) / count
    std_dev = _sample_std(pnls, mean)
    if std_dev == 0:
        return 0.0
    return math.sqrt(min(count, SQN_TRADE_CAP)) * mean / std_dev


def sqn_rating(score: float) -> str:
    if score > SQN_GOOD:
        return "good"
    if score > SQN_AVERAGE:
        return "average"
    return "poor"


def historical_summary(trades: Sequence[HistoricalTrade]) -> HistoricalSummary:
    count = len(trades)
    if count == 0:
        return HistoricalSummary(0, 0.0, 0.0, 0.0, 0.0, sqn_rating(0.0), 0.0, 0.0)

    pnls = [trade.pnl for trade in trades]
    total = sum(pnls)
    gross_profit = sum(pnl for pnl in pnls if pnl > 0)
    gross_loss = abs(sum(pnl for pnl in pnls if pnl <= 0))
    wins = sum(1 for pnl in pnls if pnl > 0)

    years = history_years(trades) or 1.0
    annual_factor = math.sqrt(count / years)
    mean = total / count
    std_dev = math.sqrt(sum((pnl - mean) ** 2 for pnl in pnls) / count)
    downside_dev = math.sqrt(sum(pnl * pnl for pnl in pnls if pnl < 0) / count)
    sqn = system_quality_number(pnls)

    return HistoricalSummary(
        trade_count=count,
        total_pnl=total,
        win_rate=wins / count * 100.0,
        profit_factor=gross_profit / (gross_loss or 1.0),
        sqn=sqn,
        sqn_rating=sqn_rating(sqn),
        sharpe_ratio=(0.0 if std_dev == 0 else mean / std_dev) * annual_factor,
        sortino_ratio=(0.0 if downside_dev == 0 else mean / downside_dev) * annual_factor,
    )


def distribution_stats(values: Sequence[float]) -> DistributionStats:
    count = len(values)
    if count < 2:
        return DistributionStats(0.0, 0.0, 0.0, 0.0)
    mean = sum(values) / count
    m2 = sum((value - mean) ** 2 for value in values) / count
    if m2 == 0:
        return DistributionStats(mean, 0.0, 0.0, 0.0)
    m3 = sum((value - mean) ** 3 for value in values) / count
    m4 = sum((value - mean) ** 4 for value in values) / count
    return DistributionStats(
        mean=mean,
        std_dev=math.sqrt(m2),
        skew=m3 / m2**1.5,
        kurtosis=m4 / m2**2 - 3.0,
    )


def _fit_feature(feature: str, xs: Sequence[float], ys: Sequence[float]) -> RegressionResult:
    count = len(xs)
    if count < 2 or len(set(xs)) < 2:
        return RegressionResult(feature, 0.0, 0.0, 0.0, 0.0)

    mean_x = sum(xs) / count
    mean_y = sum(ys) / count
    std_x = _sample_std(xs, mean_x)
    std_y = _sample_std(ys, mean_y)
    covariance = sum((x - mean_x) * (y - mean_y) for x, y in zip(xs, ys)) / (count - 1)

    correlation = 0.0 if std_x * std_y == 0 else covariance / (std_x * std_y)
    slope = 0.0 if std_x == 0 else correlation * std_y / std_x
    return RegressionResult(
        feature=feature,
        coefficient=slope,
        correlation=correlation,
        importance=abs(correlation),
        r_squared=correlation * correlation,
    )


def _feature_regressions(trades: Sequence[HistoricalTrade]) -> tuple[RegressionResult, ...]:
    if len(trades) < MIN_REGRESSION_TRADES:
        return ()

    pnls = [trade.pnl for trade in trades]
    # missing timestamps fall back to midday and day 0
    hours = [DEFAULT_ENTRY_HOUR if t.entry_time is None else t.entry_time.hour for t in trades]
    weekdays = [0 if t.entry_time is None else t.entry_time.isoweekday() for t in trades]
    sequence = list(range(len(trades)))
    previous = [0] + [1 if pnl > 0 else -1 for pnl in pnls[:-1]]

    results = [
        _fit_feature("entry_hour", hours, pnls),
        _fit_feature("day_of_week", weekdays, pnls),
        _fit_feature("sequence", sequence, pnls),
        _fit_feature("previous_outcome", previous, pnls),
    ]
    return tuple(sorted(results, key=lambda result: -result.importance))


def regression_analysis(trades: Sequence[HistoricalTrade]) -> SegmentedAnalysis:
    """Correlate trade P&L with timing, trend and streak features.

    Each feature gets its own simple linear fit; results are ordered by
    ``|r|``. Segments with fewer than five trades yield no results.
    """
    return SegmentedAnalysis(
        all_trades=_feature_regressions(trades),
        longs=_feature_regressions([t for t in trades if t.side == TradeSide.LONG]),
        shorts=_feature_regressions([t for t in trades if t.side == TradeSide.SHORT]),
    )
