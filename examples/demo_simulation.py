from datetime import datetime, timezone

from repricer.guardrails import Direction, GlobalGuardrails, StrategyConfig, StrategyType, resolve_limit
from repricer.monitoring import LogNotifier, Monitor
from repricer.simulator import RepricingSimulator, assess_runs
from repricer.strategy import get_preset


start_price = 100.0
cost_basis = start_price * 0.65

guardrails = GlobalGuardrails(
    min_profit_margin_pct=15.0,
    max_daily_drop_pct=5.0,
    hard_ceiling_multiple=2.0,
)
strategy = StrategyConfig(
    id="7",
    name="Holiday Undercut",
    type=StrategyType.VELOCITY,
    direction=Direction.DECREASE,
    percent_change=2.5,
    percent_limit=15.0,
    fixed_change=0.5,
    fixed_limit=5.0,
)

print("Floor:", resolve_limit(start_price, cost_basis, strategy, guardrails))

simulator = RepricingSimulator(guardrails, monitor=Monitor(LogNotifier()))
result = simulator.simulate(
    start_price,
    cost_basis,
    horizon_steps=24,
    config=strategy,
    seed=7,
    start_time=datetime(2024, 11, 1, tzinfo=timezone.utc),
)
for point in result.trajectory[:5]:
    print(point.label, point.own_price, point.competitor_price)
print("Win rate:", round(result.kpis.win_rate, 1))
print("Avg margin:", round(result.kpis.avg_margin, 1))
print("Net change %:", round(result.kpis.net_change_pct, 2))
print("Final price:", result.kpis.final_price)

harvest = simulator.simulate(
    start_price,
    cost_basis,
    horizon_steps=30,
    config=get_preset("profit_maximizer"),
    seed=7,
    include_competitor=False,
)
print("Profit Maximizer final price:", harvest.kpis.final_price)

spread = assess_runs(simulator.run_monte_carlo(start_price, cost_basis, 24, strategy, runs=10, base_seed=100))
print("Win rate range:", round(spread.win_rate.minimum, 1), "-", round(spread.win_rate.maximum, 1))
