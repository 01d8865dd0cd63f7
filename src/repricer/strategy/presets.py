"""Built-in strategy catalogue shown on the repricer board."""

from __future__ import annotations

from repricer.guardrails.models import Direction, StrategyConfig, StrategyType

PRESETS: dict[str, StrategyConfig] = {
    "velocity_surge": StrategyConfig(
        id="1",
        name="Velocity Surge",
        type=StrategyType.VELOCITY,
        active=True,
        direction=Direction.DECREASE,
        percent_change=2.5,
        percent_limit=15.0,
        fixed_change=0.5,
        fixed_limit=5.0,
        sales_threshold=10,
        period_days=1,
        description="Aggressively matches Buy Box when sales velocity drops below 10 units/day.",
    ),
    "liquidation_protocol": StrategyConfig(
        id="2",
        name="Liquidation Protocol",
        type=StrategyType.LIQUIDATION,
        active=False,
        direction=Direction.DECREASE,
        percent_change=5.0,
        percent_limit=30.0,
        period_days=1,
        description="Drops price by 5% every 24h until inventory clears. Use with caution.",
    ),
    "profit_maximizer": StrategyConfig(
        id="3",
        name="Profit Maximizer",
        type=StrategyType.PROFIT,
        active=True,
        direction=Direction.INCREASE,
        fixed_change=0.5,
        percent_limit=20.0,
        period_days=1,
        description="Increments price by $0.50 when competitor stock is low.",
    ),
    "night_owl": StrategyConfig(
        id="4",
        name="Night Owl",
        type=StrategyType.PROFIT,
        active=False,
        direction=Direction.INCREASE,
        percent_change=1.0,
        percent_limit=10.0,
        period_days=1,
        description="Increases margins between 2 AM and 6 AM when competition is dormant.",
    ),
}


def get_preset(key: str) -> StrategyConfig:
    try:
        return PRESETS[key]
    except KeyError as exc:
        raise KeyError(f"Unknown strategy preset: {key}") from exc


def active_presets() -> list[StrategyConfig]:
    return [preset for preset in PRESETS.values() if preset.active]
