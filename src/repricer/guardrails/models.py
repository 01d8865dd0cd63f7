"""Data models for strategy limits and account guardrails."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union


class ConfigurationError(ValueError):
    """Invalid numeric input or configuration; raised before any step runs."""


class NumericInstabilityError(ArithmeticError):
    """A clamped price came out negative."""


def require_finite(name: str, value: float) -> None:
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be a finite number, got {value}")


class Direction(str, Enum):
    DECREASE = "DECREASE"
    INCREASE = "INCREASE"


class StrategyType(str, Enum):
    VELOCITY = "VELOCITY"
    LIQUIDATION = "LIQUIDATION"
    PROFIT = "PROFIT"


@dataclass(frozen=True)
class StrategyConfig:
    id: str
    name: str
    type: Union[StrategyType, str] = StrategyType.VELOCITY
    active: bool = True
    direction: Direction = Direction.DECREASE
    percent_change: float = 0.0
    percent_limit: float = 0.0
    fixed_change: float = 0.0
    fixed_limit: float = 0.0
    # Trigger condition; descriptive only, the stepper runs every step.
    sales_threshold: int = 0
    period_days: int = 1
    description: str = ""

    @property
    def type_key(self) -> str:
        if isinstance(self.type, StrategyType):
            return self.type.value
        return str(self.type).upper()

    def validate(self) -> None:
        for key in ("percent_change", "percent_limit", "fixed_change", "fixed_limit"):
            value = getattr(self, key)
            require_finite(key, value)
            if value < 0:
                raise ConfigurationError(f"{key} must be >= 0, got {value}")
        require_finite("sales_threshold", self.sales_threshold)
        require_finite("period_days", self.period_days)
        if self.sales_threshold < 0:
            raise ConfigurationError(f"sales_threshold must be >= 0, got {self.sales_threshold}")
        if self.period_days <= 0:
            raise ConfigurationError(f"period_days must be > 0, got {self.period_days}")
        if not isinstance(self.direction, Direction):
            raise ConfigurationError(f"Invalid direction: {self.direction}")


@dataclass(frozen=True)
class GlobalGuardrails:
    min_profit_margin_pct: float = 15.0
    max_daily_drop_pct: float = 5.0
    hard_ceiling_multiple: float = 2.0
    # Advisory flags, carried for forward compatibility only.
    ignore_new_sellers: bool = False
    match_competitor_floor: bool = False

    def validate(self) -> None:
        for key in ("min_profit_margin_pct", "max_daily_drop_pct", "hard_ceiling_multiple"):
            require_finite(key, getattr(self, key))
        if self.min_profit_margin_pct < 0:
            raise ConfigurationError(
                f"min_profit_margin_pct must be >= 0, got {self.min_profit_margin_pct}"
            )
        if self.hard_ceiling_multiple < 0:
            raise ConfigurationError(
                f"hard_ceiling_multiple must be >= 0, got {self.hard_ceiling_multiple}"
            )
        if self.max_daily_drop_pct < 0:
            raise ConfigurationError(
                f"max_daily_drop_pct must be >= 0, got {self.max_daily_drop_pct}"
            )

    def margin_floor(self, cost_basis: float) -> float:
        return cost_basis * (1.0 + self.min_profit_margin_pct / 100.0)

    def hard_ceiling(self, start_price: float) -> float:
        return start_price * self.hard_ceiling_multiple

    def max_drop(self, own_price: float) -> float:
        return own_price * self.max_daily_drop_pct / 100.0
