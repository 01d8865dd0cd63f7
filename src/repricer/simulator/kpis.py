"""KPI aggregation over a simulated trajectory."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from repricer.simulator.models import KPISummary, SimulationPoint


@dataclass(frozen=True)
class WinRatePolicy:
    """Maps relative price advantage to a per-step win probability (percent).

    The defaults are a buy-box style winner-take-most heuristic, not a fitted
    market model; swap in another table to test other assumptions.
    """

    lead_threshold: float = 0.03
    lead_score: float = 95.0
    ramp_base: float = 60.0
    ramp_slope: float = 1000.0
    tie_floor: float = -0.02
    tie_score: float = 20.0
    lose_score: float = 0.0

    def score(self, price_diff_pct: float) -> float:
        if price_diff_pct > self.lead_threshold:
            return self.lead_score
        if price_diff_pct > 0:
            return self.ramp_base + price_diff_pct * self.ramp_slope
        if price_diff_pct > self.tie_floor:
            return self.tie_score
        return self.lose_score


DEFAULT_WIN_RATE_POLICY = WinRatePolicy()


def step_win_score(
    own_price: float,
    competitor_price: float,
    policy: WinRatePolicy = DEFAULT_WIN_RATE_POLICY,
) -> float:
    if competitor_price <= 0:
        return policy.lose_score
    return policy.score((competitor_price - own_price) / competitor_price)


def margin_pct(price: float, cost_basis: float) -> float:
    return (price - cost_basis) / price * 100.0


def win_rate(
    trajectory: Sequence[SimulationPoint],
    policy: WinRatePolicy = DEFAULT_WIN_RATE_POLICY,
) -> float:
    scores = [
        step_win_score(point.own_price, point.competitor_price, policy)
        for point in trajectory
        if point.competitor_price is not None
    ]
    if not scores:
        return 0.0
    return min(100.0, max(0.0, sum(scores) / len(scores)))


def average_margin(trajectory: Sequence[SimulationPoint], cost_basis: float) -> float:
    # Margin is undefined at a zero price; such steps are left out.
    margins = [margin_pct(point.own_price, cost_basis) for point in trajectory if point.own_price > 0]
    if not margins:
        return 0.0
    return sum(margins) / len(margins)


def summarize(
    trajectory: Sequence[SimulationPoint],
    cost_basis: float,
    start_price: Optional[float] = None,
    policy: WinRatePolicy = DEFAULT_WIN_RATE_POLICY,
) -> KPISummary:
    if not trajectory:
        raise ValueError("Cannot summarize an empty trajectory")
    if start_price is None:
        start_price = trajectory[0].own_price

    final_price = trajectory[-1].own_price
    net_change_pct = 0.0 if start_price == 0 else (final_price - start_price) / start_price * 100.0

    return KPISummary(
        win_rate=win_rate(trajectory, policy),
        avg_margin=average_margin(trajectory, cost_basis),
        net_change_pct=net_change_pct,
        final_price=final_price,
    )
