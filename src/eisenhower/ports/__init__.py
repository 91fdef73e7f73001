"""Ports - interfaces/protocols for external dependencies."""

from .snapshot_store import SnapshotStore
from .notifier import ReminderNotifier

__all__ = [
    "SnapshotStore",
    "ReminderNotifier",
]
