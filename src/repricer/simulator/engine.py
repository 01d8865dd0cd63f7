"""Repricing simulator: steps one strategy against one competitor."""

from __future__ import annotations

import threading
from dataclasses import asdict
from datetime import datetime, timedelta
from typing import Optional

from repricer.guardrails.models import (
    ConfigurationError,
    Direction,
    GlobalGuardrails,
    NumericInstabilityError,
    StrategyConfig,
    require_finite,
)
from repricer.guardrails.resolver import GuardrailResolver
from repricer.market.competitor import (
    DEFAULT_BASE_OFFSET,
    CompetitorModel,
    CompetitorParams,
    SinusoidalCompetitor,
    competitor_base_price,
)
from repricer.monitoring.audit import AuditLog
from repricer.monitoring.monitor import Monitor
from repricer.simulator.kpis import DEFAULT_WIN_RATE_POLICY, WinRatePolicy, summarize
from repricer.simulator.models import RunState, SimulationPoint, SimulationResult
from repricer.strategy.rules import propose_next_price


class SimulationCancelled(RuntimeError):
    def __init__(self, step_index: int) -> None:
        super().__init__(f"Simulation cancelled at step {step_index}")
        self.step_index = step_index


class CancellationToken:
    """Cooperative cancellation, checked once per step."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


def _round_price(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return round(value, 2)


class RepricingSimulator:
    """Projects own price, competitor price and KPIs over a horizon.

    A run goes INITIALIZED -> RUNNING -> COMPLETE. Inputs are validated before
    the first step, and any failure propagates without a partial result.
    Internal prices keep full precision; only recorded point prices are
    rounded to cents.
    """

    def __init__(
        self,
        guardrails: GlobalGuardrails,
        competitor_params: Optional[CompetitorParams] = None,
        base_offset: float = DEFAULT_BASE_OFFSET,
        win_rate_policy: WinRatePolicy = DEFAULT_WIN_RATE_POLICY,
        step_interval: timedelta = timedelta(days=1),
        audit: Optional[AuditLog] = None,
        monitor: Optional[Monitor] = None,
    ) -> None:
        self.guardrails = guardrails
        self.competitor_params = competitor_params or CompetitorParams()
        self.base_offset = base_offset
        self.win_rate_policy = win_rate_policy
        self.step_interval = step_interval
        self.audit = audit
        self.monitor = monitor

    def simulate(
        self,
        start_price: float,
        cost_basis: float,
        horizon_steps: int,
        config: StrategyConfig,
        seed: int,
        competitor: Optional[CompetitorModel] = None,
        include_competitor: bool = True,
        start_time: Optional[datetime] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> SimulationResult:
        state = RunState.INITIALIZED
        try:
            self._validate(start_price, cost_basis, horizon_steps, config, include_competitor)
            resolver = GuardrailResolver(self.guardrails)
            limit_price = resolver.resolve_limit(start_price, cost_basis, config)
            if competitor is None and include_competitor:
                competitor = SinusoidalCompetitor(seed, self.competitor_params)
            base_price = competitor_base_price(start_price, self.base_offset)

            self._log(
                "run_started",
                {
                    "strategy_id": config.id,
                    "strategy": config.name,
                    "direction": config.direction.value,
                    "start_price": start_price,
                    "cost_basis": cost_basis,
                    "horizon_steps": horizon_steps,
                    "seed": seed,
                    "limit_price": limit_price,
                },
            )

            own_price = start_price
            competitor_price = competitor.price_at(0, base_price) if include_competitor else None
            trajectory = [self._point(0, own_price, competitor_price, limit_price, start_time)]
            limit_alerted = False

            state = RunState.RUNNING
            for step_index in range(1, horizon_steps + 1):
                if cancel_token is not None and cancel_token.cancelled:
                    raise SimulationCancelled(step_index)

                competitor_price = competitor.price_at(step_index, base_price) if include_competitor else None
                target_price = propose_next_price(own_price, competitor_price, step_index, config)
                clamp = resolver.clamp_step(own_price, target_price, limit_price, config)
                own_price = clamp.price

                if clamp.at_limit and not limit_alerted:
                    limit_alerted = True
                    if self.monitor is not None:
                        self.monitor.limit_reached(config.name, step_index, limit_price)

                trajectory.append(self._point(step_index, own_price, competitor_price, limit_price, start_time))
            state = RunState.COMPLETE
        except SimulationCancelled as exc:
            self._log("run_cancelled", {"strategy_id": config.id, "step_index": exc.step_index})
            raise
        except (ConfigurationError, NumericInstabilityError) as exc:
            self._log(
                "run_rejected",
                {"strategy_id": config.id, "state": state.value, "error": type(exc).__name__, "reason": str(exc)},
            )
            if self.monitor is not None:
                self.monitor.run_rejected(config.name, str(exc))
            raise

        kpis = summarize(trajectory, cost_basis, start_price=start_price, policy=self.win_rate_policy)
        self._log(
            "run_completed",
            {"strategy_id": config.id, "state": state.value, "seed": seed, "kpis": asdict(kpis)},
        )
        return SimulationResult(
            trajectory=tuple(trajectory),
            kpis=kpis,
            start_price=start_price,
            cost_basis=cost_basis,
            seed=seed,
            direction=config.direction,
        )

    def run_monte_carlo(
        self,
        start_price: float,
        cost_basis: float,
        horizon_steps: int,
        config: StrategyConfig,
        runs: int,
        base_seed: int = 0,
        include_competitor: bool = True,
        start_time: Optional[datetime] = None,
    ) -> list[SimulationResult]:
        if runs <= 0:
            raise ConfigurationError(f"runs must be > 0, got {runs}")
        return [
            self.simulate(
                start_price,
                cost_basis,
                horizon_steps,
                config,
                seed=base_seed + offset,
                include_competitor=include_competitor,
                start_time=start_time,
            )
            for offset in range(runs)
        ]

    def _validate(
        self,
        start_price: float,
        cost_basis: float,
        horizon_steps: int,
        config: StrategyConfig,
        include_competitor: bool,
    ) -> None:
        if isinstance(horizon_steps, bool) or not isinstance(horizon_steps, int):
            raise ConfigurationError(f"horizon_steps must be an integer, got {horizon_steps!r}")
        if horizon_steps <= 0:
            raise ConfigurationError(f"horizon_steps must be > 0, got {horizon_steps}")
        require_finite("start_price", start_price)
        require_finite("cost_basis", cost_basis)
        if start_price <= 0:
            raise ConfigurationError(f"start_price must be > 0, got {start_price}")
        if cost_basis < 0:
            raise ConfigurationError(f"cost_basis must be >= 0, got {cost_basis}")
        config.validate()
        self.guardrails.validate()
        if not include_competitor and config.direction == Direction.DECREASE:
            raise ConfigurationError("DECREASE strategies react to a competitor and cannot omit it")

    def _point(
        self,
        step_index: int,
        own_price: float,
        competitor_price: Optional[float],
        limit_price: float,
        start_time: Optional[datetime],
    ) -> SimulationPoint:
        time = None
        if start_time is not None:
            time = start_time + self.step_interval * step_index
        return SimulationPoint(
            step_index=step_index,
            label=f"Day {step_index}",
            own_price=_round_price(own_price),
            competitor_price=_round_price(competitor_price),
            limit_price=limit_price,
            time=time,
        )

    def _log(self, event: str, payload: dict) -> None:
        if self.audit is not None:
            self.audit.log(event, payload)


def simulate(
    start_price: float,
    cost_basis: float,
    horizon_steps: int,
    config: StrategyConfig,
    guardrails: GlobalGuardrails,
    seed: int,
    competitor: Optional[CompetitorModel] = None,
    include_competitor: bool = True,
    start_time: Optional[datetime] = None,
    cancel_token: Optional[CancellationToken] = None,
) -> SimulationResult:
    simulator = RepricingSimulator(guardrails)
    return simulator.simulate(
        start_price,
        cost_basis,
        horizon_steps,
        config,
        seed,
        competitor=competitor,
        include_competitor=include_competitor,
        start_time=start_time,
        cancel_token=cancel_token,
    )
