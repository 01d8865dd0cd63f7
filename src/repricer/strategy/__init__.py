"""Repricing decision rules."""

from repricer.strategy.base import DecisionRule
from repricer.strategy.presets import PRESETS, active_presets, get_preset
from repricer.strategy.rules import (
    CompetitiveDecreaseRule,
    IncreaseRule,
    LiquidationRule,
    ProfitRule,
    VelocityRule,
    propose_next_price,
    register_rule,
    rule_for,
)

__all__ = [
    "CompetitiveDecreaseRule",
    "DecisionRule",
    "IncreaseRule",
    "LiquidationRule",
    "PRESETS",
    "ProfitRule",
    "VelocityRule",
    "active_presets",
    "get_preset",
    "propose_next_price",
    "register_rule",
    "rule_for",
]
