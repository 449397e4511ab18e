"""Risk statistics over simulated and historical outcomes."""

from propsim.statistics.aggregator import cagr, compute_statistics, percentile
from propsim.statistics.analytics import (
    distribution_stats,
    estimate_simulated_years,
    historical_summary,
    regression_analysis,
    sqn_rating,
    system_quality_number,
)
from propsim.statistics.models import (
    BENCHMARK_CAGR,
    AggregateStatistics,
    DistributionStats,
    HistoricalSummary,
    RegressionResult,
    SegmentedAnalysis,
)

__all__ = [
    "AggregateStatistics",
    "BENCHMARK_CAGR",
    "DistributionStats",
    "HistoricalSummary",
    "RegressionResult",
    "SegmentedAnalysis",
    "cagr",
    "compute_statistics",
    "distribution_stats",
    "estimate_simulated_years",
    "historical_summary",
    "percentile",
    "regression_analysis",
    "sqn_rating",
    "system_quality_number",
]
