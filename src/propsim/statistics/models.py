"""Aggregate statistics records."""

from __future__ import annotations

from dataclasses import dataclass

# Long-run average annual return of a broad equity index, as a fraction.
BENCHMARK_CAGR = 0.105


@dataclass(frozen=True)
class AggregateStatistics:
    num_results: int
    median_equity: float
    best_equity: float
    worst_equity: float
    median_drawdown: float
    worst_drawdown: float
    ruin_probability: float
    cagr_05: float
    cagr_median: float
    cagr_95: float
    var_95: float
    var_99: float
    custom_confidence_level: float
    var_custom: float
    cagr_custom: float
    sharpe_ratio: float
    sortino_ratio: float
    benchmark_cagr: float = BENCHMARK_CAGR
    cagr_vs_benchmark: float = 0.0

    @classmethod
    def empty(cls, confidence_level: float = 95.0) -> "AggregateStatistics":
        return cls(
            num_results=0,
            median_equity=0.0,
            best_equity=0.0,
            worst_equity=0.0,
            median_drawdown=0.0,
            worst_drawdown=0.0,
            ruin_probability=0.0,
            cagr_05=0.0,
            cagr_median=0.0,
            cagr_95=0.0,
            var_95=0.0,
            var_99=0.0,
            custom_confidence_level=confidence_level,
            var_custom=0.0,
            cagr_custom=0.0,
            sharpe_ratio=0.0,
            sortino_ratio=0.0,
        )


@dataclass(frozen=True)
class HistoricalSummary:
    trade_count: int
    total_pnl: float
    win_rate: float
    profit_factor: float
    sqn: float
    sqn_rating: str
    sharpe_ratio: float
    sortino_ratio: float


@dataclass(frozen=True)
class DistributionStats:
    mean: float
    std_dev: float
    skew: float
    kurtosis: float


@dataclass(frozen=True)
class RegressionResult:
    """Single-feature linear fit of trade P&L."""

    feature: str
    coefficient: float  # slope
    correlation: float  # Pearson r
    importance: float  # |r|
    r_squared: float


@dataclass(frozen=True)
class SegmentedAnalysis:
    all_trades: tuple[RegressionResult, ...]
    longs: tuple[RegressionResult, ...]
    shorts: tuple[RegressionResult, ...]
