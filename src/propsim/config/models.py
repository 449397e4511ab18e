"""Configuration models for reproducible runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from propsim.prop_firm.models import PropFirmConfig
from propsim.simulator.models import SimulationConfig


@dataclass(frozen=True)
class ControllerConfig:
    batch_size: int = 50
    prop_firm_traders: int = 1000


@dataclass(frozen=True)
class MonitoringConfig:
    audit_log_path: str = "runtime/audit.log"
    ruin_alert_threshold: float = 0.05


@dataclass(frozen=True)
class ReportConfig:
    # None derives the simulated duration from trade timestamps
    duration_years: Optional[float] = None


@dataclass(frozen=True)
class RunConfig:
    name: str
    version: str
    run_id_prefix: str
    simulation: SimulationConfig
    prop_firm: PropFirmConfig = field(default_factory=PropFirmConfig)
    controller: ControllerConfig = field(default_factory=ControllerConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
