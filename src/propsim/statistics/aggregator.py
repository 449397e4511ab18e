"""Percentile risk and return statistics over a batch of simulated runs."""

from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence

from propsim.simulator.models import SimulationResult
from propsim.statistics.models import BENCHMARK_CAGR, AggregateStatistics


def percentile(sorted_values: Sequence[float], fraction: float) -> float:
    """Nearest-rank percentile of an ascending sequence, no interpolation."""
    if not sorted_values:
        return 0.0
    index = math.floor(fraction * len(sorted_values))
    index = min(max(index, 0), len(sorted_values) - 1)
    return sorted_values[index]


def cagr(final_value: float, initial_equity: float, years: float) -> float:
    if initial_equity <= 0 or final_value <= 0 or years <= 0:
        return 0.0
    try:
        growth = (final_value / initial_equity) ** (1.0 / years) - 1.0
    except OverflowError:
        return 0.0
    return growth if math.isfinite(growth) else 0.0


def compute_statistics(
    results: Iterable[SimulationResult],
    initial_equity: float,
    duration_years: float = 1.0,
    confidence_level: float = 95.0,
    trades_per_simulation: Optional[int] = None,
) -> AggregateStatistics:
    results_list = list(results)
    total = len(results_list)
    if total == 0:
        return AggregateStatistics.empty(confidence_level)

    final_equities = sorted(result.final_equity for result in results_list)
    drawdowns = sorted(result.max_drawdown_percent for result in results_list)
    sharpes = sorted(result.sharpe_ratio for result in results_list)
    sortinos = sorted(result.sortino_ratio for result in results_list)
    ruined = sum(1 for result in results_list if result.is_ruined)

    level = confidence_level / 100.0
    equity_05 = percentile(final_equities, 0.05)
    equity_50 = percentile(final_equities, 0.5)
    equity_95 = percentile(final_equities, 0.95)
    equity_custom = percentile(final_equities, 1.0 - level)

    if trades_per_simulation is None:
        trades_per_simulation = max(result.trades_taken for result in results_list)
    trades_per_year = trades_per_simulation / duration_years if duration_years > 0 else trades_per_simulation
    annual_factor = math.sqrt(max(trades_per_year, 0.0))

    cagr_median = cagr(equity_50, initial_equity, duration_years)
    return AggregateStatistics(
        num_results=total,
        median_equity=equity_50,
        best_equity=final_equities[-1],
        worst_equity=final_equities[0],
        median_drawdown=percentile(drawdowns, 0.5),
        worst_drawdown=drawdowns[-1],
        ruin_probability=ruined / total,
        cagr_05=cagr(equity_05, initial_equity, duration_years),
        cagr_median=cagr_median,
        cagr_95=cagr(equity_95, initial_equity, duration_years),
        var_95=percentile(drawdowns, 0.95),
        var_99=percentile(drawdowns, 0.99),
        custom_confidence_level=confidence_level,
        var_custom=percentile(drawdowns, level),
        cagr_custom=cagr(equity_custom, initial_equity, duration_years),
        sharpe_ratio=percentile(sharpes, 0.5) * annual_factor,
        sortino_ratio=percentile(sortinos, 0.5) * annual_factor,
        benchmark_cagr=BENCHMARK_CAGR,
        cagr_vs_benchmark=cagr_median - BENCHMARK_CAGR,
    )
