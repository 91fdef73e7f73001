"""Adapters - I/O implementations of ports."""

from .file_store import FileSnapshotStore
from .console_notifier import ConsoleNotifier
from .telegram_notifier import TelegramNotifier

__all__ = [
    "FileSnapshotStore",
    "ConsoleNotifier",
    "TelegramNotifier",
]
