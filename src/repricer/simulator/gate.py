"""Spread of KPIs across repeated runs of one configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from repricer.simulator.models import SimulationResult


@dataclass(frozen=True)
class KPIRange:
    mean: float
    minimum: float
    maximum: float


@dataclass(frozen=True)
class RunSpread:
    runs: int
    win_rate: KPIRange
    avg_margin: KPIRange
    net_change_pct: KPIRange
    final_price: KPIRange
    limit_hits: int


def _range(values: list[float]) -> KPIRange:
    return KPIRange(mean=sum(values) / len(values), minimum=min(values), maximum=max(values))


def assess_runs(results: Iterable[SimulationResult]) -> RunSpread:
    results_list = list(results)
    if not results_list:
        raise ValueError("assess_runs needs at least one result")

    limit_hits = sum(
        1 for result in results_list if result.kpis.final_price == round(result.limit_price, 2)
    )
    return RunSpread(
        runs=len(results_list),
        win_rate=_range([result.kpis.win_rate for result in results_list]),
        avg_margin=_range([result.kpis.avg_margin for result in results_list]),
        net_change_pct=_range([result.kpis.net_change_pct for result in results_list]),
        final_price=_range([result.kpis.final_price for result in results_list]),
        limit_hits=limit_hits,
    )
