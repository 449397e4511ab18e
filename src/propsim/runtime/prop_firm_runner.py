"""Runs the prop-firm funnel once a Monte-Carlo session finishes."""

from __future__ import annotations

from typing import Optional

from propsim.monitoring.audit import AuditLog
from propsim.monitoring.monitor import Monitor
from propsim.prop_firm.career import run_prop_firm_simulation
from propsim.prop_firm.models import AggregatePropFirmStats, PropFirmConfig
from propsim.runtime.controller import SimulationFinished


class PropFirmRunner:
    """Controller listener; builds its own PRNG from the simulation seed."""

    def __init__(
        self,
        config: PropFirmConfig,
        num_traders: int = 1000,
        audit_log: Optional[AuditLog] = None,
        monitor: Optional[Monitor] = None,
    ) -> None:
        self.config = config
        self.num_traders = num_traders
        self.stats: Optional[AggregatePropFirmStats] = None
        self.runs = 0
        self._audit_log = audit_log
        self.monitor = monitor

    def __call__(self, event: SimulationFinished) -> None:
        self.stats = run_prop_firm_simulation(
            event.trades,
            self.config,
            num_traders=self.num_traders,
            seed=event.config.seed,
        )
        self.runs += 1
        if self._audit_log is not None:
            self._audit_log.log(
                "prop_firm_finished",
                {
                    "trigger": event.status.value,
                    "live_reached": self.stats.live_reached,
                    "eval_pass_rate": self.stats.eval_pass_rate,
                },
            )
        if self.monitor is not None:
            self.monitor.prop_firm_funnel(self.stats.live_reached, self.stats.total_traders)
