from __future__ import annotations

import argparse
import json
from datetime import datetime, timezone
from pathlib import Path

from repricer.config import load_config, serialize_config
from repricer.monitoring import LogNotifier, Monitor
from repricer.runtime import create_run_context
from repricer.simulator import RepricingSimulator, assess_runs, serialize_result, serialize_spread


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", required=True)
    parser.add_argument("--output", required=True)
    parser.add_argument("--runs", type=int, default=None, help="Override simulation.runs for the seed sweep")
    args = parser.parse_args()

    config_path = Path(args.config)
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    config = load_config(config_path)
    context = create_run_context(config_path, config)
    audit = context.open_audit_log(config.monitoring.audit_log_path)
    monitor = Monitor(LogNotifier()) if config.monitoring.notify else None

    settings = config.simulation
    simulator = RepricingSimulator(
        config.guardrails,
        competitor_params=config.competitor.params(),
        base_offset=config.competitor.base_offset,
        audit=audit,
        monitor=monitor,
    )
    cost_basis = settings.resolved_cost_basis()
    result = simulator.simulate(
        settings.start_price,
        cost_basis,
        settings.horizon_steps,
        config.strategy,
        seed=settings.seed,
        competitor=config.competitor.replay_model(),
        include_competitor=settings.include_competitor,
        start_time=settings.start_time,
    )

    runs = args.runs if args.runs is not None else settings.runs
    spread = None
    sweep_note = None
    if runs > 1 and config.competitor.replay_prices:
        # A replayed series is the same for every seed, so a sweep adds nothing.
        sweep_note = f"seed sweep of {runs} runs skipped: competitor replays a fixed price series"
        print(f"Note: {sweep_note}")
    elif runs > 1:
        sweep = simulator.run_monte_carlo(
            settings.start_price,
            cost_basis,
            settings.horizon_steps,
            config.strategy,
            runs=runs,
            base_seed=settings.seed,
            include_competitor=settings.include_competitor,
            start_time=settings.start_time,
        )
        spread = serialize_spread(assess_runs(sweep))

    report = {
        "generated_at_utc": datetime.now(timezone.utc).isoformat(),
        "run_id": context.run_id,
        "config_path": str(config_path),
        "config_hash": context.config_hash,
        "config": serialize_config(config),
        "result": serialize_result(result),
        "seed_sweep": spread,
        "seed_sweep_note": sweep_note,
    }

    output_path.write_text(json.dumps(report, indent=2, default=str), encoding="utf-8")
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()
