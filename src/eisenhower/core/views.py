"""
Derived read-only views: search, tag index, archive and reminders.

Every view is recomputed from the stores on each call - no cached index.
Pure functions - no I/O.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

from .boards import BoardStore
from .models import ARCHIVE_LABEL, Task

DEFAULT_REMINDER_WINDOW = timedelta(seconds=60)


@dataclass
class SearchResult:
    """A matching task with its resolved board and location names."""

    task: Task
    board_name: str
    quadrant_name: str

    @property
    def is_archived(self) -> bool:
        return self.task.completed


class ArchiveSort(str, Enum):
    COMPLETED_AT = "completed"
    QUADRANT = "quadrant"
    TITLE = "title"


def location_name(task: Task) -> str:
    """Quadrant display name, or the archive marker for completed tasks."""
    return ARCHIVE_LABEL if task.completed else task.quadrant.display_name


def search(tasks: list[Task], boards: BoardStore, text: str) -> list[SearchResult]:
    """
    Case-insensitive substring search over titles and tags.

    Scans every board, active and archived tasks alike, and returns
    matches in storage order. Blank queries match nothing; otherwise the
    query is matched as typed, surrounding spaces included.
    """
    if not (text or "").strip():
        return []
    query = text.lower()

    results = []
    for task in tasks:
        in_title = query in task.title.lower()
        in_tags = any(query in tag.lower() for tag in task.tags)
        if in_title or in_tags:
            results.append(
                SearchResult(
                    task=task,
                    board_name=boards.name_for(task.board_id),
                    quadrant_name=location_name(task),
                )
            )
    return results


def distinct_tags(tasks: list[Task], board_id: str, archived: bool = False) -> list[str]:
    """Sorted distinct tags among a board's active (or archived) tasks."""
    return sorted(
        {
            tag
            for t in tasks
            if t.board_id == board_id and t.completed == archived
            for tag in t.tags
        }
    )


def archived_tasks(
    tasks: list[Task],
    board_id: str,
    sort: ArchiveSort | str = ArchiveSort.COMPLETED_AT,
    tag: str | None = None,
) -> list[Task]:
    """
    Completed tasks of a board, filtered by tag then sorted.

    COMPLETED_AT is newest first; QUADRANT and TITLE are ascending. Ties
    keep storage order (sorted() is stable, including with reverse=True).
    """
    archive = [t for t in tasks if t.board_id == board_id and t.completed]
    if tag:
        archive = [t for t in archive if t.has_tag(tag)]

    match ArchiveSort(sort):
        case ArchiveSort.COMPLETED_AT:
            return sorted(
                archive,
                key=lambda t: t.completed_at or datetime.min,
                reverse=True,
            )
        case ArchiveSort.QUADRANT:
            return sorted(archive, key=lambda t: t.quadrant.value)
        case ArchiveSort.TITLE:
            return sorted(archive, key=lambda t: t.title)


def due_reminders(
    tasks: list[Task],
    now: datetime,
    since: datetime | None = None,
    window: timedelta = DEFAULT_REMINDER_WINDOW,
) -> list[Task]:
    """
    Active tasks whose reminder falls in (since, now].

    `since` defaults to `now - window`. Reminders that fell while nothing
    was scanning are not caught up.
    """
    since = since if since is not None else now - window
    return [
        t
        for t in tasks
        if not t.completed and t.reminder_at is not None and since < t.reminder_at <= now
    ]


def overdue_tasks(tasks: list[Task], board_id: str, as_of: date | None = None) -> list[Task]:
    """Active tasks of a board with a due date before today."""
    return [t for t in tasks if t.board_id == board_id and not t.completed and t.is_overdue(as_of)]


def format_task_line(task: Task, as_of: date | None = None) -> str:
    """One-line display for CLI and notification output."""
    parts = [task.title]
    if task.due_date:
        due = f"due {task.due_date.isoformat()}"
        if task.is_overdue(as_of):
            due += " OVERDUE"
        parts.append(f"({due})")
    if task.reminder_at:
        parts.append(f"[remind {task.reminder_at.strftime('%Y-%m-%d %H:%M')}]")
    if task.is_recurring:
        parts.append(f"↻ {task.recurrence.value}")
    if task.tags:
        parts.append(" ".join(f"#{tag}" for tag in task.tags))
    return " ".join(parts)
