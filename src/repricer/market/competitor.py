"""Competitor price models for the repricing simulator."""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

from repricer.guardrails.models import ConfigurationError, require_finite

DEFAULT_BASE_OFFSET = 2.0


def competitor_base_price(start_price: float, offset: float = DEFAULT_BASE_OFFSET) -> float:
    return start_price + offset


class CompetitorModel(ABC):
    """Produces one competitor price per simulation step.

    Implementations are called with strictly increasing step indices, once per
    step, so stateful models (seeded noise, replay cursors) stay reproducible.
    """

    @abstractmethod
    def price_at(self, step_index: int, base_price: float) -> float:
        raise NotImplementedError


@dataclass(frozen=True)
class CompetitorParams:
    trend_amplitude: float = 3.0
    trend_period: float = 6.0
    noise_amplitude: float = 1.0


class SinusoidalCompetitor(CompetitorModel):
    """Toy competitor: sinusoidal trend plus uniform jitter."""

    def __init__(self, seed: int, params: Optional[CompetitorParams] = None) -> None:
        self.params = params or CompetitorParams()
        for key in ("trend_amplitude", "trend_period", "noise_amplitude"):
            require_finite(key, getattr(self.params, key))
        if self.params.trend_period <= 0:
            raise ConfigurationError("trend_period must be > 0")
        if self.params.noise_amplitude < 0:
            raise ConfigurationError("noise_amplitude must be >= 0")
        self._rng = random.Random(seed)

    def price_at(self, step_index: int, base_price: float) -> float:
        params = self.params
        trend = params.trend_amplitude * math.sin(step_index / params.trend_period)
        noise = self._rng.uniform(-params.noise_amplitude, params.noise_amplitude)
        return max(0.0, base_price + trend + noise)


class ReplayCompetitor(CompetitorModel):
    """Replays observed competitor prices; holds the last one past the end."""

    def __init__(self, prices: Sequence[float]) -> None:
        if not prices:
            raise ConfigurationError("ReplayCompetitor needs at least one price")
        for price in prices:
            require_finite("replayed price", price)
        if any(price < 0 for price in prices):
            raise ConfigurationError("Replayed prices must be >= 0")
        self.prices = [float(price) for price in prices]

    def price_at(self, step_index: int, base_price: float) -> float:
        index = min(max(step_index, 0), len(self.prices) - 1)
        return self.prices[index]
