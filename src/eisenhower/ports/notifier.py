"""Reminder delivery interface."""

from typing import Protocol

from eisenhower.core.models import Task


class ReminderNotifier(Protocol):
    """Interface for dispatching a due reminder to the user."""

    def notify(self, task: Task, board_name: str, quadrant_name: str) -> None:
        """Deliver one reminder. Failures are handled by the implementation."""
        ...
