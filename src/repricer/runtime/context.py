"""Identity and audit wiring for one configured simulation run."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from repricer.config.loader import compute_config_hash
from repricer.config.models import RunConfig
from repricer.monitoring.audit import AuditLog


@dataclass(frozen=True)
class RunContext:
    run_id: str
    config_path: Path
    config_hash: str
    strategy_id: str
    seed: int
    started_at: datetime

    def open_audit_log(self, path: str | Path) -> AuditLog:
        return AuditLog(path, run_id=self.run_id, config_hash=self.config_hash)


def create_run_context(
    config_path: str | Path,
    config: RunConfig,
    run_id: Optional[str] = None,
) -> RunContext:
    path = Path(config_path)
    config_hash = compute_config_hash(path)
    started_at = datetime.now(timezone.utc)
    seed = config.simulation.seed
    if run_id is None:
        stamp = started_at.strftime("%Y%m%dT%H%M%SZ")
        run_id = f"{config.run_id_prefix}-{config.strategy.id}-s{seed}-{stamp}-{config_hash[:8]}"
    return RunContext(
        run_id=run_id,
        config_path=path,
        config_hash=config_hash,
        strategy_id=config.strategy.id,
        seed=seed,
        started_at=started_at,
    )
