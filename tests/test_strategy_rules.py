import pytest

from repricer.guardrails import Direction, StrategyConfig, StrategyType
from repricer.strategy import (
    DecisionRule,
    VelocityRule,
    active_presets,
    get_preset,
    propose_next_price,
    rule_for,
)
from repricer.strategy import rules


def _config(strategy_type, **overrides) -> StrategyConfig:
    values = dict(
        id="1",
        name="Test",
        type=strategy_type,
        direction=Direction.DECREASE,
        percent_change=2.5,
        fixed_change=0.5,
    )
    values.update(overrides)
    return StrategyConfig(**values)


def test_steps_down_when_losing_leadership():
    config = _config(StrategyType.VELOCITY)
    assert propose_next_price(100.0, 100.0, 1, config) == pytest.approx(97.0)


def test_one_percent_band_counts_as_at_risk():
    config = _config(StrategyType.LIQUIDATION)
    assert propose_next_price(99.5, 100.0, 1, config) == pytest.approx(99.5 * 0.975 - 0.5)


def test_velocity_holds_just_under_competitor_when_winning():
    config = _config(StrategyType.VELOCITY)
    assert propose_next_price(90.0, 100.0, 1, config) == pytest.approx(90.0)
    assert propose_next_price(4.94, 5.0, 1, config) == pytest.approx(4.9)


def test_profit_nudges_up_when_winning():
    config = _config(StrategyType.PROFIT)
    assert propose_next_price(90.0, 100.0, 1, config) == pytest.approx(90.9)


def test_liquidation_and_unknown_types_hold_when_winning():
    assert propose_next_price(90.0, 100.0, 1, _config(StrategyType.LIQUIDATION)) == 90.0
    assert propose_next_price(90.0, 100.0, 1, _config("CLEARANCE")) == 90.0


def test_increase_ignores_competition():
    config = _config(StrategyType.PROFIT, direction=Direction.INCREASE, percent_change=1.0)
    assert propose_next_price(100.0, None, 1, config) == pytest.approx(101.5)
    assert propose_next_price(100.0, 50.0, 1, config) == pytest.approx(101.5)


def test_zero_levers_propose_same_price_when_at_risk():
    config = _config(StrategyType.VELOCITY, percent_change=0.0, fixed_change=0.0)
    assert propose_next_price(100.0, 95.0, 1, config) == 100.0


def test_decrease_rule_needs_competitor_price():
    with pytest.raises(ValueError):
        propose_next_price(100.0, None, 1, _config(StrategyType.VELOCITY))


def test_string_type_resolves_to_registered_rule():
    assert isinstance(rule_for(_config("velocity")), VelocityRule)


def test_register_new_strategy_type(monkeypatch):
    class MatchRule(DecisionRule):
        def propose(self, own_price, competitor_price, step_index, config):
            return competitor_price

    monkeypatch.setitem(rules._RULES, "MATCH", MatchRule())
    assert propose_next_price(100.0, 97.25, 3, _config("MATCH")) == 97.25


def test_register_rule_accepts_enum_and_string(monkeypatch):
    monkeypatch.setattr(rules, "_RULES", dict(rules._RULES))
    custom = VelocityRule()
    rules.register_rule(StrategyType.PROFIT, custom)
    rules.register_rule("night_owl", custom)
    assert rules._RULES["PROFIT"] is custom
    assert rules._RULES["NIGHT_OWL"] is custom


def test_preset_catalogue():
    surge = get_preset("velocity_surge")
    assert surge.type == StrategyType.VELOCITY
    assert surge.sales_threshold == 10
    assert get_preset("profit_maximizer").direction == Direction.INCREASE
    assert {preset.name for preset in active_presets()} == {"Velocity Surge", "Profit Maximizer"}
    with pytest.raises(KeyError):
        get_preset("missing")
