"""Runtime exports."""

from propsim.runtime.context import RunContext, create_run_context
from propsim.runtime.controller import (
    BATCH_SIZE,
    IncrementalSimulation,
    ResultAccumulator,
    SimulationFinished,
    SimulationStatus,
)
from propsim.runtime.prop_firm_runner import PropFirmRunner

__all__ = [
    "BATCH_SIZE",
    "IncrementalSimulation",
    "PropFirmRunner",
    "ResultAccumulator",
    "RunContext",
    "SimulationFinished",
    "SimulationStatus",
    "create_run_context",
]
