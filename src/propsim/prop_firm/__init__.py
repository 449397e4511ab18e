"""Prop-firm evaluation funnel simulation."""

from propsim.prop_firm.career import (
    MAX_CAREER_ATTEMPTS,
    MAX_CAREER_DAYS,
    run_prop_firm_simulation,
    simulate_day,
)
from propsim.prop_firm.models import AggregatePropFirmStats, Phase, PropFirmConfig, VirtualTraderCareer

__all__ = [
    "AggregatePropFirmStats",
    "MAX_CAREER_ATTEMPTS",
    "MAX_CAREER_DAYS",
    "Phase",
    "PropFirmConfig",
    "VirtualTraderCareer",
    "run_prop_firm_simulation",
    "simulate_day",
]
