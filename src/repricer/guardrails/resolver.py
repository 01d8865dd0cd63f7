"""Merge strategy limits with account guardrails."""

from __future__ import annotations

from dataclasses import dataclass

from repricer.guardrails.models import (
    Direction,
    GlobalGuardrails,
    NumericInstabilityError,
    StrategyConfig,
    require_finite,
)


@dataclass(frozen=True)
class ClampResult:
    price: float
    drop_capped: bool
    at_limit: bool


class GuardrailResolver:
    def __init__(self, guardrails: GlobalGuardrails) -> None:
        guardrails.validate()
        self.guardrails = guardrails

    @staticmethod
    def strategy_span(start_price: float, config: StrategyConfig) -> float:
        return start_price * config.percent_limit / 100.0 + config.fixed_limit

    def strategy_floor(self, start_price: float, config: StrategyConfig) -> float:
        return start_price - self.strategy_span(start_price, config)

    def strategy_ceiling(self, start_price: float, config: StrategyConfig) -> float:
        return start_price + self.strategy_span(start_price, config)

    def resolve_limit(self, start_price: float, cost_basis: float, config: StrategyConfig) -> float:
        require_finite("start_price", start_price)
        require_finite("cost_basis", cost_basis)
        config.validate()
        if config.direction == Direction.INCREASE:
            return min(
                self.strategy_ceiling(start_price, config),
                self.guardrails.hard_ceiling(start_price),
            )
        # The account margin floor always wins over a more aggressive strategy limit.
        return max(
            self.strategy_floor(start_price, config),
            self.guardrails.margin_floor(cost_basis),
        )

    def clamp_step(
        self,
        own_price: float,
        target_price: float,
        limit_price: float,
        config: StrategyConfig,
    ) -> ClampResult:
        drop_capped = False
        if config.direction == Direction.INCREASE:
            price = min(limit_price, target_price)
        else:
            requested_drop = own_price - target_price
            max_drop = self.guardrails.max_drop(own_price)
            actual_drop = min(requested_drop, max_drop)
            drop_capped = requested_drop > max_drop
            price = max(limit_price, own_price - actual_drop)

        if price < 0:
            raise NumericInstabilityError(
                f"Clamped price {price} is negative (own={own_price}, target={target_price}, limit={limit_price})"
            )
        return ClampResult(price=price, drop_capped=drop_capped, at_limit=price == limit_price)


def resolve_limit(
    start_price: float,
    cost_basis: float,
    config: StrategyConfig,
    guardrails: GlobalGuardrails,
) -> float:
    return GuardrailResolver(guardrails).resolve_limit(start_price, cost_basis, config)
