"""Monitoring and alert routing."""

from __future__ import annotations

from dataclasses import dataclass

from propsim.monitoring.notifier import Notifier


@dataclass
class Monitor:
    notifier: Notifier
    ruin_alert_threshold: float = 0.05

    def simulation_finished(self, status: str, runs: int) -> None:
        self.notifier.notify(status.upper(), f"Monte Carlo stopped after {runs} runs")

    def ruin_probability(self, probability: float) -> None:
        if probability >= self.ruin_alert_threshold:
            self.notifier.notify("RUIN_RISK", f"ruin probability {probability:.2%}")

    def prop_firm_funnel(self, live_reached: int, total_traders: int) -> None:
        self.notifier.notify("PROP_FIRM", f"{live_reached}/{total_traders} traders reached LIVE")
