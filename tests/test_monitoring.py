import io

from repricer.monitoring import AuditLog, LogNotifier, MemoryNotifier, Monitor
from repricer.simulator import KPISummary, SimulationPoint, SimulationResult, assess_runs
from repricer.guardrails import Direction


def _result(final_price, win_rate, limit_price=74.75):
    point = SimulationPoint(0, "Day 0", 100.0, 102.0, limit_price)
    last = SimulationPoint(1, "Day 1", final_price, 101.0, limit_price)
    return SimulationResult(
        trajectory=(point, last),
        kpis=KPISummary(win_rate=win_rate, avg_margin=30.0, net_change_pct=final_price - 100.0, final_price=final_price),
        start_price=100.0,
        cost_basis=65.0,
        seed=0,
        direction=Direction.DECREASE,
    )


def test_audit_log_appends_json_lines(tmp_path):
    audit = AuditLog(tmp_path / "nested" / "audit.log", run_id="r1")
    audit.log("run_started", {"seed": 1})
    audit.log("run_completed", {"seed": 1})

    records = audit.read()
    assert [record["event"] for record in records] == ["run_started", "run_completed"]
    assert records[0]["run_id"] == "r1"
    assert records[0]["payload"] == {"seed": 1}


def test_log_notifier_prints(capsys):
    Monitor(LogNotifier()).limit_reached("Velocity Surge", 6, 74.75)
    assert "[REPRICER] LIMIT_REACHED: Velocity Surge pinned to limit 74.75 at step 6" in capsys.readouterr().out


def test_log_notifier_writes_to_stream():
    stream = io.StringIO()
    Monitor(LogNotifier(prefix="[SIM]", stream=stream)).run_rejected("Night Owl", "bad")
    assert stream.getvalue() == "[SIM] RUN_REJECTED: Night Owl: bad\n"


def test_memory_notifier_collects():
    notifier = MemoryNotifier()
    Monitor(notifier).run_rejected("Liquidation Protocol", "horizon_steps must be > 0, got 0")
    assert notifier.events == [("RUN_REJECTED", "Liquidation Protocol: horizon_steps must be > 0, got 0")]


def test_assess_runs_spread():
    spread = assess_runs([_result(74.75, 40.0), _result(80.0, 60.0), _result(90.0, 80.0)])
    assert spread.runs == 3
    assert spread.win_rate.mean == 60.0
    assert spread.final_price.minimum == 74.75
    assert spread.final_price.maximum == 90.0
    assert spread.limit_hits == 1
