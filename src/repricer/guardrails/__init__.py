"""Guardrail resolution for repricing runs."""

from repricer.guardrails.models import (
    ConfigurationError,
    Direction,
    GlobalGuardrails,
    NumericInstabilityError,
    StrategyConfig,
    StrategyType,
)
from repricer.guardrails.resolver import ClampResult, GuardrailResolver, resolve_limit

__all__ = [
    "ClampResult",
    "ConfigurationError",
    "Direction",
    "GlobalGuardrails",
    "GuardrailResolver",
    "NumericInstabilityError",
    "StrategyConfig",
    "StrategyType",
    "resolve_limit",
]
