"""Plain-JSON views of simulation results."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from repricer.simulator.gate import RunSpread
from repricer.simulator.models import SimulationPoint, SimulationResult


def serialize_point(point: SimulationPoint) -> dict[str, Any]:
    return {
        "step_index": point.step_index,
        "label": point.label,
        "time": point.time.isoformat() if point.time is not None else None,
        "own_price": point.own_price,
        "competitor_price": point.competitor_price,
        "limit_price": point.limit_price,
    }


def serialize_result(result: SimulationResult) -> dict[str, Any]:
    return {
        "start_price": result.start_price,
        "cost_basis": result.cost_basis,
        "seed": result.seed,
        "direction": result.direction.value,
        "kpis": asdict(result.kpis),
        "trajectory": [serialize_point(point) for point in result.trajectory],
    }


def serialize_spread(spread: RunSpread) -> dict[str, Any]:
    return asdict(spread)
