import math

import pytest

from propsim.simulator import HistoricalTrade, SimulationConfig, SimulationResult, run_monte_carlo
from propsim.statistics import BENCHMARK_CAGR, AggregateStatistics, cagr, compute_statistics, percentile


def _result(run_id, final_equity, drawdown_pct=0.0, ruined=False, sharpe=0.0, sortino=0.0, trades=4):
    curve = tuple([1000.0] * trades + [final_equity])
    return SimulationResult(
        id=run_id,
        equity_curve=curve,
        final_equity=final_equity,
        max_drawdown=0.0,
        max_drawdown_percent=drawdown_pct,
        win_rate=50.0,
        profit_factor=1.0,
        max_consecutive_losses=1,
        is_ruined=ruined,
        sharpe_ratio=sharpe,
        sortino_ratio=sortino,
    )


def test_percentile_is_nearest_rank_without_interpolation():
    values = list(range(1000))
    assert percentile(values, 0.95) == 950
    assert percentile(values, 0.5) == 500
    assert percentile([1, 2, 3, 4], 0.5) == 3


def test_percentile_index_is_clamped():
    values = [1.0, 2.0, 3.0]
    assert percentile(values, 1.0) == 3.0
    assert percentile(values, 1.5) == 3.0
    assert percentile(values, -0.2) == 1.0
    assert percentile([], 0.5) == 0.0


def test_cagr_guards_degenerate_inputs():
    assert cagr(2000, 1000, 1) == pytest.approx(1.0)
    assert cagr(1210, 1000, 2) == pytest.approx(0.1)
    assert cagr(2000, 0, 1) == 0.0
    assert cagr(0, 1000, 1) == 0.0
    assert cagr(-50, 1000, 1) == 0.0
    assert cagr(2000, 1000, 0) == 0.0


def test_empty_results_yield_zero_record():
    stats = compute_statistics([], 10000, 1.0, 90)
    assert stats == AggregateStatistics.empty(90)
    assert stats.custom_confidence_level == 90
    assert stats.ruin_probability == 0.0
    assert stats.sharpe_ratio == 0.0


def test_extremes_and_ruin_probability():
    results = [
        _result(0, 900.0, drawdown_pct=20.0, ruined=False),
        _result(1, -10.0, drawdown_pct=100.0, ruined=True),
        _result(2, 1500.0, drawdown_pct=5.0),
        _result(3, 1100.0, drawdown_pct=10.0),
    ]
    stats = compute_statistics(results, 1000, 1.0, 95)

    assert stats.num_results == 4
    assert stats.best_equity == 1500.0
    assert stats.worst_equity == -10.0
    assert stats.median_equity == 1100.0
    assert stats.worst_drawdown == 100.0
    assert stats.median_drawdown == 20.0
    assert stats.ruin_probability == 0.25
    assert stats.cagr_median == pytest.approx(0.1)
    assert stats.cagr_05 == 0.0
    assert stats.benchmark_cagr == BENCHMARK_CAGR
    assert stats.cagr_vs_benchmark == pytest.approx(0.1 - BENCHMARK_CAGR)


def test_custom_confidence_percentiles():
    results = [_result(idx, 1000.0 + idx, drawdown_pct=float(idx)) for idx in range(100)]
    stats = compute_statistics(results, 1000, 1.0, 75)
    assert stats.var_custom == 75.0
    assert stats.cagr_custom == pytest.approx(1025.0 / 1000.0 - 1.0)
    assert stats.var_95 == 95.0
    assert stats.var_99 == 99.0


def test_ratios_are_annualized_from_median():
    results = [
        _result(0, 1000.0, sharpe=0.1, sortino=0.2, trades=50),
        _result(1, 1000.0, sharpe=0.3, sortino=0.5, trades=50),
        _result(2, 1000.0, sharpe=0.2, sortino=0.4, trades=50),
    ]
    stats = compute_statistics(results, 1000, 2.0, 95, trades_per_simulation=50)
    factor = math.sqrt(25)
    assert stats.sharpe_ratio == pytest.approx(0.2 * factor)
    assert stats.sortino_ratio == pytest.approx(0.4 * factor)


def test_non_positive_duration_falls_back_to_trade_count():
    results = [_result(0, 1200.0, sharpe=0.5, trades=16)]
    stats = compute_statistics(results, 1000, 0.0, 95)
    assert stats.sharpe_ratio == pytest.approx(0.5 * 4)
    assert stats.cagr_median == 0.0


def test_drawdown_percentiles_are_monotonic():
    trades = [HistoricalTrade(pnl=pnl) for pnl in (250, -175, 90, -320, 410, -60)]
    config = SimulationConfig(initial_equity=5000, num_simulations=400, trades_per_simulation=60, seed=2024)
    stats = compute_statistics(run_monte_carlo(trades, config), 5000, 1.0, 97.5)
    assert stats.median_drawdown <= stats.var_95 <= stats.var_99 <= stats.worst_drawdown
    assert stats.worst_equity <= stats.median_equity <= stats.best_equity


def test_input_is_not_mutated():
    results = [_result(0, 1300.0), _result(1, 800.0), _result(2, 1000.0)]
    snapshot = list(results)
    compute_statistics(results, 1000)
    assert results == snapshot
