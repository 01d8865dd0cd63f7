"""Load and freeze configuration files."""

from __future__ import annotations

import dataclasses
import hashlib
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from repricer.config.models import (
    CompetitorConfig,
    MonitoringConfig,
    RunConfig,
    SimulationSettings,
)
from repricer.guardrails.models import (
    ConfigurationError,
    Direction,
    GlobalGuardrails,
    StrategyConfig,
    StrategyType,
)
from repricer.guardrails.resolver import resolve_limit
from repricer.strategy.presets import get_preset


def load_config(path: str | Path) -> RunConfig:
    path = Path(path)
    data = _load_yaml(path)
    return parse_config(data)


def parse_config(data: dict[str, Any]) -> RunConfig:
    name = _require(data, "name")
    version = str(_require(data, "version"))
    run_id_prefix = data.get("run_id_prefix", name)

    return RunConfig(
        name=name,
        version=version,
        run_id_prefix=run_id_prefix,
        simulation=_parse_simulation(_require(data, "simulation")),
        strategy=_parse_strategy(_require(data, "strategy")),
        guardrails=_parse_guardrails(data.get("guardrails", {})),
        competitor=_parse_competitor(data.get("competitor", {})),
        monitoring=_parse_monitoring(data.get("monitoring", {})),
    )


def compute_config_hash(path: str | Path) -> str:
    path = Path(path)
    content = path.read_bytes()
    return hashlib.sha256(content).hexdigest()


def freeze_config(path: str | Path, lock_path: Optional[str | Path] = None) -> Path:
    """Write a lock file pinning the config hash and the limit it resolves to.

    The config is parsed and its limit resolved first, so an invalid config
    raises ConfigurationError and no lock is written.
    """
    path = Path(path)
    config = load_config(path)
    settings = config.simulation
    limit_price = resolve_limit(
        settings.start_price, settings.resolved_cost_basis(), config.strategy, config.guardrails
    )
    if lock_path is None:
        lock_path = _default_lock_path(path)
    lock_path = Path(lock_path)

    serialized = serialize_config(config)
    payload = {
        "config_path": str(path),
        "config_hash": compute_config_hash(path),
        "frozen_at_utc": datetime.now(timezone.utc).isoformat(),
        "strategy": {key: serialized["strategy"][key] for key in ("id", "name", "type", "direction")},
        "guardrails": serialized["guardrails"],
        "limit_price": limit_price,
    }
    lock_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return lock_path


def verify_config_lock(path: str | Path, lock_path: Optional[str | Path] = None) -> bool:
    path = Path(path)
    lock_path = Path(lock_path) if lock_path is not None else _default_lock_path(path)
    if not lock_path.exists():
        return False
    lock = json.loads(lock_path.read_text(encoding="utf-8"))
    return lock.get("config_hash") == compute_config_hash(path)


def _default_lock_path(path: Path) -> Path:
    return path.with_suffix(path.suffix + ".lock.json")


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ConfigurationError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ConfigurationError(f"Missing required config key: {key}")
    return data[key]


def _parse_simulation(data: dict[str, Any]) -> SimulationSettings:
    cost_basis = data.get("cost_basis")
    start_time = data.get("start_time")
    if isinstance(start_time, str):
        start_time = datetime.fromisoformat(start_time)

    return SimulationSettings(
        start_price=float(_require(data, "start_price")),
        horizon_steps=int(_require(data, "horizon_steps")),
        seed=int(_require(data, "seed")),
        cost_basis=None if cost_basis is None else float(cost_basis),
        cost_ratio=float(data.get("cost_ratio", 0.65)),
        runs=int(data.get("runs", 1)),
        include_competitor=bool(data.get("include_competitor", True)),
        start_time=start_time,
    )


def _parse_strategy(data: dict[str, Any]) -> StrategyConfig:
    def parse_type(value: Any) -> StrategyType | str:
        try:
            return StrategyType(str(value).upper())
        except ValueError:
            # Unknown types fall back to the hold-when-winning rule.
            return str(value).upper()

    def parse_direction(value: Any) -> Direction:
        try:
            return Direction(str(value).upper())
        except ValueError as exc:
            raise ConfigurationError(f"Invalid direction: {value}") from exc

    if "preset" in data:
        base = get_preset(str(data["preset"]))
    else:
        base = StrategyConfig(id=str(_require(data, "id")), name=str(_require(data, "name")))

    overrides: dict[str, Any] = {}
    for key in ("id", "name", "description"):
        if key in data:
            overrides[key] = str(data[key])
    if "type" in data:
        overrides["type"] = parse_type(data["type"])
    if "active" in data:
        overrides["active"] = bool(data["active"])
    if "direction" in data:
        overrides["direction"] = parse_direction(data["direction"])
    for key in ("percent_change", "percent_limit", "fixed_change", "fixed_limit"):
        if key in data:
            overrides[key] = float(data[key])
    for key in ("sales_threshold", "period_days"):
        if key in data:
            overrides[key] = int(data[key])

    return dataclasses.replace(base, **overrides)


def _parse_guardrails(data: dict[str, Any]) -> GlobalGuardrails:
    return GlobalGuardrails(
        min_profit_margin_pct=float(data.get("min_profit_margin_pct", 15.0)),
        max_daily_drop_pct=float(data.get("max_daily_drop_pct", 5.0)),
        hard_ceiling_multiple=float(data.get("hard_ceiling_multiple", 2.0)),
        ignore_new_sellers=bool(data.get("ignore_new_sellers", False)),
        match_competitor_floor=bool(data.get("match_competitor_floor", False)),
    )


def _parse_competitor(data: dict[str, Any]) -> CompetitorConfig:
    return CompetitorConfig(
        base_offset=float(data.get("base_offset", 2.0)),
        trend_amplitude=float(data.get("trend_amplitude", 3.0)),
        trend_period=float(data.get("trend_period", 6.0)),
        noise_amplitude=float(data.get("noise_amplitude", 1.0)),
        replay_prices=[float(price) for price in data.get("replay_prices", [])],
    )


def _parse_monitoring(data: dict[str, Any]) -> MonitoringConfig:
    return MonitoringConfig(
        audit_log_path=str(data.get("audit_log_path", "runtime/audit.log")),
        notify=bool(data.get("notify", True)),
    )


def serialize_config(config: RunConfig) -> dict[str, Any]:
    payload = dataclasses.asdict(config)
    strategy_type = config.strategy.type
    payload["strategy"]["type"] = strategy_type.value if isinstance(strategy_type, StrategyType) else strategy_type
    payload["strategy"]["direction"] = config.strategy.direction.value
    start_time = config.simulation.start_time
    payload["simulation"]["start_time"] = start_time.isoformat() if start_time is not None else None
    return payload
