"""Decision rule interface for repricing strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from repricer.guardrails.models import StrategyConfig


class DecisionRule(ABC):
    """Proposes the next own price before guardrails are applied."""

    @abstractmethod
    def propose(
        self,
        own_price: float,
        competitor_price: Optional[float],
        step_index: int,
        config: StrategyConfig,
    ) -> float:
        raise NotImplementedError
