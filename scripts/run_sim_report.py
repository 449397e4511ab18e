from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from propsim.config import load_config
from propsim.monitoring import AuditLog, LogNotifier, Monitor
from propsim.runtime import IncrementalSimulation, PropFirmRunner, create_run_context
from propsim.simulator import HistoricalTrade, TradeSide
from propsim.statistics import estimate_simulated_years, historical_summary, regression_analysis


def _parse_dt(value):
    if not value:
        return None
    if value.endswith("Z"):
        value = value.replace("Z", "+00:00")
    return datetime.fromisoformat(value)


def _load_trades(path: Path) -> list[HistoricalTrade]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    trades = []
    for item in payload:
        pnl_percent = item.get("pnl_percent")
        side = item.get("side")
        trades.append(
            HistoricalTrade(
                pnl=float(item["pnl"]),
                pnl_percent=float(pnl_percent) if pnl_percent is not None else None,
                entry_time=_parse_dt(item.get("entry_time")),
                side=TradeSide(side) if side else None,
            )
        )
    return trades


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", required=True)
    parser.add_argument("--trades", required=True)
    parser.add_argument("--output", required=True)
    args = parser.parse_args()

    config_path = Path(args.config)
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    config = load_config(config_path)
    context = create_run_context(config_path, config.run_id_prefix)
    trades = _load_trades(Path(args.trades))
    if not trades:
        raise SystemExit(f"No trades found in {args.trades}")

    monitor = Monitor(LogNotifier(), ruin_alert_threshold=config.monitoring.ruin_alert_threshold)
    audit = AuditLog(
        Path(config.monitoring.audit_log_path),
        run_id=context.run_id,
        config_hash=context.config_hash,
    )

    simulation = IncrementalSimulation(
        trades,
        config.simulation,
        batch_size=config.controller.batch_size,
        audit_log=audit,
        monitor=monitor,
    )
    prop_firm = PropFirmRunner(
        config.prop_firm,
        num_traders=config.controller.prop_firm_traders,
        audit_log=audit,
        monitor=monitor,
    )
    simulation.subscribe(prop_firm)
    status = simulation.run_to_end()

    duration_years = config.report.duration_years
    if duration_years is None:
        duration_years = estimate_simulated_years(trades, config.simulation.trades_per_simulation)
    stats = simulation.statistics(duration_years)

    report = {
        "generated_at_utc": datetime.now(timezone.utc).isoformat(),
        "run_id": context.run_id,
        "config_path": str(config_path),
        "status": status.value,
        "runs": len(simulation.results),
        "duration_years": duration_years,
        "historical": asdict(historical_summary(trades)),
        "regression": asdict(regression_analysis(trades)),
        "statistics": asdict(stats),
        "prop_firm": asdict(prop_firm.stats) if prop_firm.stats else None,
    }

    output_path.write_text(json.dumps(report, indent=2, default=str), encoding="utf-8")
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()
