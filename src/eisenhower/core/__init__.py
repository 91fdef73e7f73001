"""Functional core - pure business logic with no I/O."""

from .models import Board, Task, Quadrant, Recurrence, Preferences, ValidationError, parse_tags
from .boards import BoardStore
from .tasks import TaskStore
from .matrix import Matrix
from .ordering import Direction, active_in_quadrant, move_task, move_within_quadrant
from .recurrence import next_due_date, spawn_next
from .views import ArchiveSort, SearchResult, search, distinct_tags, archived_tasks, due_reminders
from .snapshot import to_snapshot, from_snapshot

__all__ = [
    # Model
    "Board",
    "Task",
    "Quadrant",
    "Recurrence",
    "Preferences",
    "ValidationError",
    "parse_tags",
    # Stores
    "BoardStore",
    "TaskStore",
    "Matrix",
    # Ordering
    "Direction",
    "active_in_quadrant",
    "move_task",
    "move_within_quadrant",
    # Recurrence
    "next_due_date",
    "spawn_next",
    # Views
    "ArchiveSort",
    "SearchResult",
    "search",
    "distinct_tags",
    "archived_tasks",
    "due_reminders",
    # Snapshot
    "to_snapshot",
    "from_snapshot",
]
