"""Load and freeze configuration files."""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from propsim.config.models import (
    ControllerConfig,
    MonitoringConfig,
    ReportConfig,
    RunConfig,
)
from propsim.prop_firm.models import PropFirmConfig
from propsim.simulator.models import RiskModel, SimulationConfig


def load_config(path: str | Path) -> RunConfig:
    path = Path(path)
    data = _load_yaml(path)

    name = _require(data, "name")
    version = str(_require(data, "version"))
    run_id_prefix = data.get("run_id_prefix", name)

    simulation = _parse_simulation(_require(data, "simulation"))
    prop_firm = _parse_prop_firm(data.get("prop_firm", {}))
    controller = _parse_controller(data.get("controller", {}))
    monitoring = _parse_monitoring(data.get("monitoring", {}))
    report = _parse_report(data.get("report", {}))

    return RunConfig(
        name=name,
        version=version,
        run_id_prefix=run_id_prefix,
        simulation=simulation,
        prop_firm=prop_firm,
        controller=controller,
        monitoring=monitoring,
        report=report,
    )


def compute_config_hash(path: str | Path) -> str:
    path = Path(path)
    content = path.read_bytes()
    return hashlib.sha256(content).hexdigest()


def freeze_config(path: str | Path, lock_path: Optional[str | Path] = None) -> Path:
    path = Path(path)
    config_hash = compute_config_hash(path)
    if lock_path is None:
        lock_path = path.with_suffix(path.suffix + ".lock.json")
    lock_path = Path(lock_path)

    payload = {
        "config_path": str(path),
        "config_hash": config_hash,
        "frozen_at_utc": datetime.now(timezone.utc).isoformat(),
    }
    lock_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return lock_path


def verify_config_lock(path: str | Path, lock_path: Optional[str | Path] = None) -> bool:
    path = Path(path)
    if lock_path is None:
        lock_path = path.with_suffix(path.suffix + ".lock.json")
    lock_path = Path(lock_path)
    if not lock_path.exists():
        return False
    payload = json.loads(lock_path.read_text(encoding="utf-8"))
    expected = payload.get("config_hash")
    return expected == compute_config_hash(path)


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"Missing required config key: {key}")
    return data[key]


def _positive(value: Any, key: str, cast=float):
    parsed = cast(value)
    if parsed <= 0:
        raise ValueError(f"{key} must be positive, got {value}")
    return parsed


def _parse_simulation(data: dict[str, Any]) -> SimulationConfig:
    try:
        risk_model = RiskModel(data.get("risk_model", "fixed_pnl"))
    except ValueError as exc:
        raise ValueError(f"Invalid risk_model: {data.get('risk_model')}") from exc

    config = SimulationConfig(
        initial_equity=float(_require(data, "initial_equity")),
        num_simulations=_positive(_require(data, "num_simulations"), "num_simulations", int),
        trades_per_simulation=_positive(_require(data, "trades_per_simulation"), "trades_per_simulation", int),
        seed=int(data.get("seed", 12345)),
        convergence_tolerance=float(data.get("convergence_tolerance", 0.1)),
        confidence_level=float(data.get("confidence_level", 95.0)),
        risk_model=risk_model,
    )
    config.validate()
    return config


def _parse_prop_firm(data: dict[str, Any]) -> PropFirmConfig:
    defaults = PropFirmConfig()
    return PropFirmConfig(
        account_size=float(data.get("account_size", defaults.account_size)),
        max_daily_loss=float(data.get("max_daily_loss", defaults.max_daily_loss)),
        max_total_loss=float(data.get("max_total_loss", defaults.max_total_loss)),
        profit_target_eval=float(data.get("profit_target_eval", defaults.profit_target_eval)),
        max_daily_profit_eval=float(data.get("max_daily_profit_eval", defaults.max_daily_profit_eval)),
        express_payout_threshold=float(data.get("express_payout_threshold", defaults.express_payout_threshold)),
        express_payouts_required=int(data.get("express_payouts_required", defaults.express_payouts_required)),
        express_days_for_payout=int(data.get("express_days_for_payout", defaults.express_days_for_payout)),
        trades_per_day=float(data.get("trades_per_day", defaults.trades_per_day)),
    )


def _parse_controller(data: dict[str, Any]) -> ControllerConfig:
    return ControllerConfig(
        batch_size=_positive(data.get("batch_size", 50), "batch_size", int),
        prop_firm_traders=_positive(data.get("prop_firm_traders", 1000), "prop_firm_traders", int),
    )


def _parse_monitoring(data: dict[str, Any]) -> MonitoringConfig:
    return MonitoringConfig(
        audit_log_path=str(data.get("audit_log_path", "runtime/audit.log")),
        ruin_alert_threshold=float(data.get("ruin_alert_threshold", 0.05)),
    )


def _parse_report(data: dict[str, Any]) -> ReportConfig:
    duration = data.get("duration_years")
    return ReportConfig(duration_years=None if duration is None else float(duration))


def serialize_config(config: RunConfig) -> dict[str, Any]:
    payload = asdict(config)
    payload["simulation"]["risk_model"] = config.simulation.risk_model.value
    return payload
