"""Configuration models for reproducible simulation runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from repricer.guardrails.models import GlobalGuardrails, StrategyConfig
from repricer.market.competitor import (
    DEFAULT_BASE_OFFSET,
    CompetitorModel,
    CompetitorParams,
    ReplayCompetitor,
)


@dataclass(frozen=True)
class CompetitorConfig:
    base_offset: float = DEFAULT_BASE_OFFSET
    trend_amplitude: float = 3.0
    trend_period: float = 6.0
    noise_amplitude: float = 1.0
    replay_prices: list[float] = field(default_factory=list)

    def params(self) -> CompetitorParams:
        return CompetitorParams(
            trend_amplitude=self.trend_amplitude,
            trend_period=self.trend_period,
            noise_amplitude=self.noise_amplitude,
        )

    def replay_model(self) -> Optional[CompetitorModel]:
        if not self.replay_prices:
            return None
        return ReplayCompetitor(self.replay_prices)


@dataclass(frozen=True)
class MonitoringConfig:
    audit_log_path: str = "runtime/audit.log"
    notify: bool = True


@dataclass(frozen=True)
class SimulationSettings:
    start_price: float
    horizon_steps: int
    seed: int
    cost_basis: Optional[float] = None
    cost_ratio: float = 0.65
    runs: int = 1
    include_competitor: bool = True
    start_time: Optional[datetime] = None

    def resolved_cost_basis(self) -> float:
        if self.cost_basis is not None:
            return self.cost_basis
        return self.start_price * self.cost_ratio


@dataclass(frozen=True)
class RunConfig:
    name: str
    version: str
    run_id_prefix: str
    simulation: SimulationSettings
    strategy: StrategyConfig
    guardrails: GlobalGuardrails = GlobalGuardrails()
    competitor: CompetitorConfig = CompetitorConfig()
    monitoring: MonitoringConfig = MonitoringConfig()
