"""Recurrence engine - derive the next instance of a completed recurring task."""

import calendar
import logging
import uuid
from datetime import date, datetime, timedelta

from .models import Recurrence, Task
from .ordering import append_order

logger = logging.getLogger(__name__)


def add_month(day: date) -> date:
    """Same day-of-month one month later, clamped to the month's last day."""
    year = day.year + day.month // 12
    month = day.month % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


def next_due_date(due: date, recurrence: Recurrence) -> date | None:
    """
    Next due date for a recurrence policy.

    Raises ValueError/OverflowError when the result is outside the
    representable date range.
    """
    match recurrence:
        case Recurrence.DAILY:
            return due + timedelta(days=1)
        case Recurrence.WEEKLY:
            return due + timedelta(days=7)
        case Recurrence.MONTHLY:
            return add_month(due)
        case _:
            return None


def spawn_next(
    task: Task,
    tasks: list[Task],
    now: datetime | None = None,
    new_id: str | None = None,
) -> Task | None:
    """
    Build the next instance of a recurring task, or None.

    The clone keeps title, tags, recurrence and quadrant, lands at the end
    of the same quadrant of the same board and is due on the next date.
    The reminder time is copied as is.

    The caller appends the result to `tasks`; nothing is mutated here.
    Date overflow is logged and yields None so the completion that
    triggered it still succeeds.
    """
    if not task.is_recurring or task.due_date is None:
        return None

    try:
        next_due = next_due_date(task.due_date, task.recurrence)
    except (ValueError, OverflowError) as e:
        logger.warning(f"Skipping next occurrence of task {task.id}: {e}")
        return None

    return Task(
        id=new_id or uuid.uuid4().hex,
        board_id=task.board_id,
        quadrant=task.quadrant,
        title=task.title,
        created_at=now or datetime.now(),
        order=append_order(tasks, task.board_id, task.quadrant),
        due_date=next_due,
        reminder_at=task.reminder_at,
        tags=list(task.tags),
        recurrence=task.recurrence,
    )
