"""Trade resampling simulation."""

from propsim.simulator.engine import (
    RUIN_EXIT_EQUITY,
    outcome_pool,
    run_batch,
    run_monte_carlo,
    simulate_run,
)
from propsim.simulator.models import (
    HistoricalTrade,
    RiskModel,
    SimulationConfig,
    SimulationResult,
    TradeSide,
)
from propsim.simulator.prng import Mulberry32, create_prng

__all__ = [
    "HistoricalTrade",
    "Mulberry32",
    "RUIN_EXIT_EQUITY",
    "RiskModel",
    "SimulationConfig",
    "SimulationResult",
    "TradeSide",
    "create_prng",
    "outcome_pool",
    "run_batch",
    "run_monte_carlo",
    "simulate_run",
]
