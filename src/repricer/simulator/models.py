"""Simulation data structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from repricer.guardrails.models import Direction


class RunState(str, Enum):
    INITIALIZED = "initialized"
    RUNNING = "running"
    COMPLETE = "complete"


@dataclass(frozen=True)
class SimulationPoint:
    step_index: int
    label: str
    own_price: float
    competitor_price: Optional[float]
    limit_price: float
    time: Optional[datetime] = None


@dataclass(frozen=True)
class KPISummary:
    win_rate: float
    avg_margin: float
    net_change_pct: float
    final_price: float


@dataclass(frozen=True)
class SimulationResult:
    trajectory: tuple[SimulationPoint, ...]
    kpis: KPISummary
    start_price: float
    cost_basis: float
    seed: int
    direction: Direction

    @property
    def limit_price(self) -> float:
        return self.trajectory[0].limit_price
