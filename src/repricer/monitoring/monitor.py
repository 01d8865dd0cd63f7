"""Operator alerts raised while simulating."""

from __future__ import annotations

from dataclasses import dataclass

from repricer.monitoring.notifier import Notifier


@dataclass
class Monitor:
    notifier: Notifier

    def limit_reached(self, strategy: str, step_index: int, limit_price: float) -> None:
        self.notifier.notify(
            "LIMIT_REACHED",
            f"{strategy} pinned to limit {limit_price:.2f} at step {step_index}",
        )

    def run_rejected(self, strategy: str, reason: str) -> None:
        self.notifier.notify("RUN_REJECTED", f"{strategy}: {reason}")
