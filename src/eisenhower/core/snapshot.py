"""
Conversion between the in-memory Matrix and its persisted snapshot.

Snapshot shape (JSON-compatible):

    {
      "boards": [{"id": "1", "name": "My Matrix"}],
      "activeBoardId": "1",
      "tasks": [{"id", "boardId", "quadrantId", "title", "createdAt",
                 "completed", "completedAt", "order", "dueDate",
                 "reminderAt", "tags", "recurrence"}],
      "preferences": {"mode": "light", "accent": "blue"}
    }

Timestamps are epoch milliseconds, due dates ISO dates, reminders ISO
datetimes. Each section falls back to its own default when malformed.
"""

import logging
from datetime import date, datetime
from typing import Any

from .boards import DEFAULT_BOARD_NAME
from .matrix import Matrix
from .models import (
    AccentColor,
    Board,
    Preferences,
    Quadrant,
    Recurrence,
    Task,
    ThemeMode,
    ValidationError,
    parse_local_datetime,
    parse_tags,
)

logger = logging.getLogger(__name__)


def _to_millis(dt: datetime | None) -> int | None:
    if dt is None:
        return None
    return int(dt.timestamp() * 1000)


def _from_millis(value: Any) -> datetime | None:
    if value is None or isinstance(value, bool):
        return None
    return datetime.fromtimestamp(float(value) / 1000)


def _parse_date(value: Any) -> date | None:
    if not value:
        return None
    return date.fromisoformat(str(value).split("T")[0])


def _parse_datetime(value: Any) -> datetime | None:
    if not value:
        return None
    return parse_local_datetime(str(value))


def task_to_dict(task: Task) -> dict:
    return {
        "id": task.id,
        "boardId": task.board_id,
        "quadrantId": task.quadrant.value,
        "title": task.title,
        "createdAt": _to_millis(task.created_at),
        "completed": task.completed,
        "completedAt": _to_millis(task.completed_at),
        "order": task.order,
        "dueDate": task.due_date.isoformat() if task.due_date else None,
        "reminderAt": task.reminder_at.isoformat(timespec="minutes") if task.reminder_at else None,
        "tags": list(task.tags),
        "recurrence": task.recurrence.value,
    }


def task_from_dict(data: dict, index: int = 0) -> Task:
    """
    Build a Task from a snapshot entry.

    Missing `order` falls back to the entry's list index, missing tags to
    an empty list and missing recurrence to none. Raises KeyError,
    TypeError or ValueError for entries that cannot be salvaged.
    """
    title = str(data["title"]).strip()
    if not title:
        raise ValidationError("title", "title required")

    order = data.get("order")
    if not isinstance(order, int) or isinstance(order, bool) or order < 0:
        order = index

    completed = data.get("completed") is True
    return Task(
        id=str(data["id"]),
        board_id=str(data["boardId"]),
        quadrant=Quadrant.parse(data["quadrantId"]),
        title=title,
        created_at=_from_millis(data.get("createdAt")) or datetime.now(),
        completed=completed,
        completed_at=_from_millis(data.get("completedAt")) if completed else None,
        order=order,
        due_date=_parse_date(data.get("dueDate")),
        reminder_at=_parse_datetime(data.get("reminderAt")),
        tags=parse_tags(data.get("tags") or []),
        recurrence=Recurrence.parse(data.get("recurrence")),
    )


def to_snapshot(matrix: Matrix) -> dict:
    return {
        "boards": [{"id": b.id, "name": b.name} for b in matrix.boards.boards],
        "activeBoardId": matrix.boards.active_board_id,
        "tasks": [task_to_dict(t) for t in matrix.tasks.tasks],
        "preferences": {
            "mode": matrix.preferences.mode.value,
            "accent": matrix.preferences.accent.value,
        },
    }


def _load_boards(raw: Any) -> list[Board]:
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Snapshot boards section is malformed, using default board")
        return []
    boards = []
    for entry in raw:
        try:
            name = str(entry["name"]).strip()
            board_id = str(entry["id"])
        except (KeyError, TypeError):
            logger.warning(f"Skipping malformed board entry: {entry!r}")
            continue
        if name and all(b.id != board_id for b in boards):
            boards.append(Board(id=board_id, name=name))
    return boards


def _load_tasks(raw: Any) -> list[Task]:
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Snapshot tasks section is malformed, starting with no tasks")
        return []
    tasks = []
    seen: set[str] = set()
    for index, entry in enumerate(raw):
        try:
            task = task_from_dict(entry, index)
        except (AttributeError, KeyError, TypeError, ValueError, OverflowError, OSError) as e:
            logger.warning(f"Skipping malformed task entry #{index}: {e}")
            continue
        if task.id in seen:
            logger.warning(f"Skipping duplicate task id {task.id}")
            continue
        seen.add(task.id)
        tasks.append(task)
    return tasks


def _load_preferences(raw: Any) -> Preferences:
    if raw is None:
        return Preferences()
    try:
        return Preferences(
            mode=ThemeMode(raw.get("mode", ThemeMode.LIGHT.value)),
            accent=AccentColor(raw.get("accent", AccentColor.BLUE.value)),
        )
    except (AttributeError, ValueError):
        logger.warning("Snapshot preferences are malformed, using defaults")
        return Preferences()


def from_snapshot(data: Any, default_board_name: str = DEFAULT_BOARD_NAME) -> Matrix:
    """
    Rebuild a Matrix from a loaded snapshot (or None for a fresh start).

    Boards, tasks and preferences are recovered independently; tasks on
    boards that did not survive loading are dropped.
    """
    if not isinstance(data, dict):
        if data is not None:
            logger.warning("Snapshot is not an object, starting fresh")
        data = {}

    active = data.get("activeBoardId")
    return Matrix.create(
        boards=_load_boards(data.get("boards")),
        active_board_id=active if isinstance(active, str) else "",
        tasks=_load_tasks(data.get("tasks")),
        preferences=_load_preferences(data.get("preferences")),
        default_board_name=default_board_name,
    )
