import asyncio

from propsim.prop_firm import PropFirmConfig
from propsim.runtime import IncrementalSimulation, PropFirmRunner
from propsim.simulator import HistoricalTrade, RiskModel, SimulationConfig


trades = [
    HistoricalTrade(pnl=420.0, pnl_percent=0.021),
    HistoricalTrade(pnl=-180.0, pnl_percent=-0.009),
    HistoricalTrade(pnl=260.0, pnl_percent=0.013),
    HistoricalTrade(pnl=-300.0, pnl_percent=-0.015),
    HistoricalTrade(pnl=150.0, pnl_percent=0.0075),
    HistoricalTrade(pnl=-90.0, pnl_percent=-0.0045),
]

config = SimulationConfig(
    initial_equity=20000,
    num_simulations=2000,
    trades_per_simulation=250,
    seed=7,
    convergence_tolerance=0.05,
    confidence_level=90,
    risk_model=RiskModel.PERCENT_EQUITY,
)

simulation = IncrementalSimulation(trades, config)
prop_firm = PropFirmRunner(PropFirmConfig(), num_traders=500)
simulation.subscribe(prop_firm)


async def main() -> None:
    simulation.start()
    task = asyncio.create_task(simulation.run())
    await asyncio.sleep(0)
    simulation.pause()
    await task
    print("Paused after runs:", len(simulation.results))
    simulation.resume()
    status = await simulation.run()
    print("Status:", status.value, "runs:", len(simulation.results))


asyncio.run(main())

stats = simulation.statistics(duration_years=1.0)
print("Median equity:", stats.median_equity)
print("VaR 95 (max drawdown %):", stats.var_95)
print("Ruin probability:", stats.ruin_probability)
print("CAGR median vs benchmark:", stats.cagr_median, stats.cagr_vs_benchmark)
print("Prop firm live reached:", prop_firm.stats.live_reached if prop_firm.stats else None)
