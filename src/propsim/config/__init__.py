"""Config loading and freezing."""

from propsim.config.loader import (
    compute_config_hash,
    freeze_config,
    load_config,
    serialize_config,
    verify_config_lock,
)
from propsim.config.models import (
    ControllerConfig,
    MonitoringConfig,
    ReportConfig,
    RunConfig,
)

__all__ = [
    "ControllerConfig",
    "MonitoringConfig",
    "ReportConfig",
    "RunConfig",
    "compute_config_hash",
    "freeze_config",
    "load_config",
    "serialize_config",
    "verify_config_lock",
]
