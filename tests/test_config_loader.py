import json
from datetime import datetime
from pathlib import Path

import pytest

yaml = pytest.importorskip("yaml")

from repricer.config import freeze_config, load_config, parse_config, serialize_config, verify_config_lock
from repricer.guardrails import ConfigurationError, Direction, StrategyType
from repricer.runtime import create_run_context

CONFIG_PATH = Path(__file__).resolve().parents[1] / "configs" / "repricer_v1.yaml"


def _minimal(**strategy):
    return {
        "name": "unit",
        "version": 1,
        "simulation": {"start_price": 50, "horizon_steps": 10, "seed": 3},
        "strategy": strategy,
    }


def test_load_config_sample():
    config = load_config(CONFIG_PATH)
    assert config.strategy.name == "Velocity Surge"
    assert config.strategy.type == StrategyType.VELOCITY
    assert config.strategy.percent_change == 2.5
    assert config.guardrails.min_profit_margin_pct == 15.0
    assert config.guardrails.ignore_new_sellers is True
    assert config.simulation.resolved_cost_basis() == pytest.approx(65.0)
    assert isinstance(config.simulation.start_time, datetime)
    assert config.competitor.replay_model() is None


def test_freeze_and_verify(tmp_path):
    target = tmp_path / "repricer_v1.yaml"
    target.write_text(CONFIG_PATH.read_text(encoding="utf-8"), encoding="utf-8")

    lock_path = freeze_config(target)
    assert verify_config_lock(target, lock_path)

    lock = json.loads(lock_path.read_text(encoding="utf-8"))
    assert lock["strategy"] == {"id": "1", "name": "Velocity Surge", "type": "VELOCITY", "direction": "DECREASE"}
    assert lock["guardrails"]["min_profit_margin_pct"] == 15.0
    assert lock["limit_price"] == pytest.approx(80.0)

    target.write_text(target.read_text(encoding="utf-8") + "\n# edited\n", encoding="utf-8")
    assert not verify_config_lock(target, lock_path)


def test_run_context_id_uses_hash(tmp_path):
    target = tmp_path / "repricer_v1.yaml"
    target.write_text(CONFIG_PATH.read_text(encoding="utf-8"), encoding="utf-8")
    context = create_run_context(target, load_config(target))
    assert context.run_id.startswith("repricer-1-s42-")
    assert context.run_id.endswith(context.config_hash[:8])
    assert context.seed == 42

    audit = context.open_audit_log(tmp_path / "audit.log")
    audit.log("run_started", {})
    assert audit.read()[0]["config_hash"] == context.config_hash


def test_explicit_strategy_without_preset():
    config = parse_config(
        _minimal(id="8", name="Clearance", type="clearance", direction="increase", fixed_change=0.25)
    )
    assert config.strategy.type == "CLEARANCE"
    assert config.strategy.direction == Direction.INCREASE
    assert config.strategy.fixed_change == 0.25
    assert config.simulation.resolved_cost_basis() == pytest.approx(32.5)


def test_invalid_direction_rejected():
    with pytest.raises(ConfigurationError):
        parse_config(_minimal(id="1", name="Bad", direction="sideways"))


def test_missing_key_rejected():
    data = _minimal(id="1", name="Ok")
    del data["simulation"]
    with pytest.raises(ConfigurationError):
        parse_config(data)


def test_serialized_config_is_json():
    payload = serialize_config(load_config(CONFIG_PATH))
    decoded = json.loads(json.dumps(payload))
    assert decoded["strategy"]["type"] == "VELOCITY"
    assert decoded["strategy"]["direction"] == "DECREASE"
    assert decoded["guardrails"]["match_competitor_floor"] is False


def test_freeze_rejects_invalid_guardrails(tmp_path):
    data = _minimal(id="1", name="Ok")
    data["guardrails"] = {"min_profit_margin_pct": float("nan")}
    target = tmp_path / "bad.yaml"
    target.write_text(yaml.safe_dump(data), encoding="utf-8")

    with pytest.raises(ConfigurationError):
        freeze_config(target)
    assert not (tmp_path / "bad.yaml.lock.json").exists()
