"""Simulation helpers."""

from repricer.simulator.engine import (
    CancellationToken,
    RepricingSimulator,
    SimulationCancelled,
    simulate,
)
from repricer.simulator.gate import KPIRange, RunSpread, assess_runs
from repricer.simulator.kpis import DEFAULT_WIN_RATE_POLICY, WinRatePolicy, summarize
from repricer.simulator.models import KPISummary, RunState, SimulationPoint, SimulationResult
from repricer.simulator.report import serialize_point, serialize_result, serialize_spread

__all__ = [
    "CancellationToken",
    "DEFAULT_WIN_RATE_POLICY",
    "KPIRange",
    "KPISummary",
    "RepricingSimulator",
    "RunSpread",
    "RunState",
    "SimulationCancelled",
    "SimulationPoint",
    "SimulationResult",
    "WinRatePolicy",
    "assess_runs",
    "serialize_point",
    "serialize_result",
    "serialize_spread",
    "simulate",
    "summarize",
]
