import pytest

from repricer.simulator import SimulationPoint, WinRatePolicy, summarize
from repricer.simulator.kpis import DEFAULT_WIN_RATE_POLICY, step_win_score, win_rate


def _point(step, own, competitor, limit=74.75):
    return SimulationPoint(
        step_index=step,
        label=f"Day {step}",
        own_price=own,
        competitor_price=competitor,
        limit_price=limit,
    )


def test_default_policy_thresholds():
    policy = DEFAULT_WIN_RATE_POLICY
    assert policy.score(0.05) == 95.0
    assert policy.score(0.03) == pytest.approx(90.0)
    assert policy.score(0.01) == pytest.approx(70.0)
    assert policy.score(0.0) == 20.0
    assert policy.score(-0.01) == 20.0
    assert policy.score(-0.02) == 0.0
    assert policy.score(-0.5) == 0.0


def test_step_score_uses_relative_gap():
    assert step_win_score(90.0, 100.0) == 95.0
    assert step_win_score(99.0, 100.0) == pytest.approx(70.0)
    assert step_win_score(101.0, 100.0) == 20.0
    assert step_win_score(10.0, 0.0) == 0.0


def test_summarize_small_trajectory():
    trajectory = [_point(0, 100.0, 100.0), _point(1, 90.0, 100.0)]
    kpis = summarize(trajectory, cost_basis=65.0, start_price=100.0)

    assert kpis.final_price == 90.0
    assert kpis.net_change_pct == pytest.approx(-10.0)
    assert kpis.avg_margin == pytest.approx((35.0 + 25.0 / 90.0 * 100.0) / 2)
    assert kpis.win_rate == pytest.approx((20.0 + 95.0) / 2)


def test_start_price_defaults_to_first_point():
    trajectory = [_point(0, 80.0, 85.0), _point(1, 88.0, 85.0)]
    kpis = summarize(trajectory, cost_basis=50.0)
    assert kpis.net_change_pct == pytest.approx(10.0)


def test_win_rate_clamped_for_any_policy():
    trajectory = [_point(step, 50.0, 100.0) for step in range(5)]
    generous = WinRatePolicy(lead_score=150.0)
    harsh = WinRatePolicy(lose_score=-40.0, tie_score=-40.0)
    assert win_rate(trajectory, generous) == 100.0
    assert win_rate([_point(0, 200.0, 100.0)], harsh) == 0.0


def test_points_without_competitor_are_skipped():
    trajectory = [_point(0, 100.0, None), _point(1, 90.0, 100.0)]
    assert win_rate(trajectory) == 95.0
    assert win_rate([_point(0, 100.0, None)]) == 0.0


def test_empty_trajectory_rejected():
    with pytest.raises(ValueError):
        summarize([], cost_basis=65.0)
