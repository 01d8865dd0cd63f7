"""Notification backends."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TextIO


class Notifier:
    def notify(self, event: str, message: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError


@dataclass
class LogNotifier(Notifier):
    """Writes one prefixed line per alert, to stdout unless a stream is given."""

    prefix: str = "[REPRICER]"
    stream: TextIO | None = None

    def notify(self, event: str, message: str) -> None:
        print(f"{self.prefix} {event}: {message}", file=self.stream or sys.stdout)


@dataclass
class MemoryNotifier(Notifier):
    events: list[tuple[str, str]] = field(default_factory=list)

    def notify(self, event: str, message: str) -> None:
        self.events.append((event, message))
