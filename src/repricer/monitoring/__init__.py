"""Monitoring exports."""

from repricer.monitoring.audit import AuditLog
from repricer.monitoring.monitor import Monitor
from repricer.monitoring.notifier import LogNotifier, MemoryNotifier, Notifier

__all__ = [
    "AuditLog",
    "LogNotifier",
    "MemoryNotifier",
    "Monitor",
    "Notifier",
]
