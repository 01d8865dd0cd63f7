"""Per-type decision rules and their registry."""

from __future__ import annotations

from typing import Optional

from repricer.guardrails.models import Direction, StrategyConfig, StrategyType
from repricer.strategy.base import DecisionRule

# Own price within 1% of the competitor counts as losing leadership.
LEADERSHIP_BAND = 0.99
PROFIT_NUDGE = 1.01
UNDERCUT_STEP = 0.10


def stepped_down(own_price: float, config: StrategyConfig) -> float:
    return own_price * (1.0 - config.percent_change / 100.0) - config.fixed_change


def stepped_up(own_price: float, config: StrategyConfig) -> float:
    return own_price + own_price * (config.percent_change / 100.0) + config.fixed_change


class CompetitiveDecreaseRule(DecisionRule):
    """Steps down while at risk of losing price leadership."""

    def propose(
        self,
        own_price: float,
        competitor_price: Optional[float],
        step_index: int,
        config: StrategyConfig,
    ) -> float:
        if competitor_price is None:
            raise ValueError("Competitive rules need a competitor price")
        if own_price >= competitor_price * LEADERSHIP_BAND:
            return stepped_down(own_price, config)
        return self.when_winning(own_price, competitor_price)

    def when_winning(self, own_price: float, competitor_price: float) -> float:
        return own_price


class LiquidationRule(CompetitiveDecreaseRule):
    pass


class VelocityRule(CompetitiveDecreaseRule):
    def when_winning(self, own_price: float, competitor_price: float) -> float:
        return min(own_price, competitor_price - UNDERCUT_STEP)


class ProfitRule(CompetitiveDecreaseRule):
    def when_winning(self, own_price: float, competitor_price: float) -> float:
        return own_price * PROFIT_NUDGE


class IncreaseRule(DecisionRule):
    """Harvests margin every step regardless of competition."""

    def propose(
        self,
        own_price: float,
        competitor_price: Optional[float],
        step_index: int,
        config: StrategyConfig,
    ) -> float:
        return stepped_up(own_price, config)


_FALLBACK_RULE: DecisionRule = LiquidationRule()
_INCREASE_RULE: DecisionRule = IncreaseRule()
_RULES: dict[str, DecisionRule] = {
    StrategyType.VELOCITY.value: VelocityRule(),
    StrategyType.LIQUIDATION.value: LiquidationRule(),
    StrategyType.PROFIT.value: ProfitRule(),
}


def register_rule(strategy_type: StrategyType | str, rule: DecisionRule) -> None:
    if isinstance(strategy_type, StrategyType):
        key = strategy_type.value
    else:
        key = str(strategy_type).upper()
    _RULES[key] = rule


def rule_for(config: StrategyConfig) -> DecisionRule:
    if config.direction == Direction.INCREASE:
        return _INCREASE_RULE
    return _RULES.get(config.type_key, _FALLBACK_RULE)


def propose_next_price(
    own_price: float,
    competitor_price: Optional[float],
    step_index: int,
    config: StrategyConfig,
) -> float:
    return rule_for(config).propose(own_price, competitor_price, step_index, config)
