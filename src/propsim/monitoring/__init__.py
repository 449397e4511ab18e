"""Monitoring exports."""

from propsim.monitoring.audit import AuditLog
from propsim.monitoring.monitor import Monitor
from propsim.monitoring.notifier import LogNotifier, MemoryNotifier, Notifier

__all__ = [
    "AuditLog",
    "LogNotifier",
    "MemoryNotifier",
    "Monitor",
    "Notifier",
]
