"""Task store - the task collection and its lifecycle commands."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable

from .boards import BoardStore
from .models import Quadrant, Recurrence, Task, clean_title, parse_tags
from .ordering import Direction, active_in_quadrant, append_order, move_task, move_within_quadrant
from .recurrence import spawn_next

logger = logging.getLogger(__name__)

# Sentinel for "field not given" in edit_task (None clears a field).
UNSET = object()


@dataclass
class TaskStore:
    """
    Owns every task across all boards.

    Tasks reference boards by id only; `boards` is consulted to validate
    `board_id` on creation. Commands on a missing id are no-ops that
    return None/False.
    """

    boards: BoardStore
    tasks: list[Task] = field(default_factory=list)

    def get(self, task_id: str) -> Task | None:
        return next((t for t in self.tasks if t.id == task_id), None)

    def active(self, board_id: str, quadrant: Quadrant) -> list[Task]:
        """Active tasks of a quadrant in display order."""
        return active_in_quadrant(self.tasks, board_id, quadrant)

    def for_board(self, board_id: str, completed: bool | None = None) -> list[Task]:
        return [
            t
            for t in self.tasks
            if t.board_id == board_id and (completed is None or t.completed == completed)
        ]

    def _new_id(self) -> str:
        task_id = uuid.uuid4().hex
        while self.get(task_id) is not None:
            task_id = uuid.uuid4().hex
        return task_id

    def add_task(
        self,
        board_id: str,
        quadrant: Quadrant | str,
        title: str,
        due_date: date | None = None,
        reminder_at: datetime | None = None,
        tags: str | Iterable[str] | None = None,
        recurrence: Recurrence | str | None = None,
        now: datetime | None = None,
    ) -> Task | None:
        """
        Append a new active task to the end of a quadrant.

        Raises ValidationError (store unchanged) for an empty title or an
        unknown quadrant/recurrence. Returns None if the board is unknown.
        """
        cleaned = clean_title(title)
        quadrant = Quadrant.parse(quadrant)
        recurrence = Recurrence.parse(recurrence)

        if not self.boards.exists(board_id):
            logger.debug(f"add_task: unknown board {board_id}")
            return None

        task = Task(
            id=self._new_id(),
            board_id=board_id,
            quadrant=quadrant,
            title=cleaned,
            created_at=now or datetime.now(),
            order=append_order(self.tasks, board_id, quadrant),
            due_date=due_date,
            reminder_at=reminder_at,
            tags=parse_tags(tags),
            recurrence=recurrence,
        )
        self.tasks.append(task)
        return task

    def edit_task(
        self,
        task_id: str,
        title=UNSET,
        due_date=UNSET,
        reminder_at=UNSET,
        tags=UNSET,
        recurrence=UNSET,
    ) -> Task | None:
        """
        Update only the given fields.

        Never touches id, board, quadrant, order or completion state.
        All values are validated before anything is written.
        """
        task = self.get(task_id)
        if task is None:
            return None

        changes = {}
        if title is not UNSET:
            changes["title"] = clean_title(title)
        if recurrence is not UNSET:
            changes["recurrence"] = Recurrence.parse(recurrence)
        if tags is not UNSET:
            changes["tags"] = parse_tags(tags)
        if due_date is not UNSET:
            changes["due_date"] = due_date
        if reminder_at is not UNSET:
            changes["reminder_at"] = reminder_at

        for name, value in changes.items():
            setattr(task, name, value)
        return task

    def delete_task(self, task_id: str) -> bool:
        """Permanently remove a task, active or archived."""
        before = len(self.tasks)
        self.tasks = [t for t in self.tasks if t.id != task_id]
        return len(self.tasks) != before

    def delete_board_tasks(self, board_id: str) -> int:
        before = len(self.tasks)
        self.tasks = [t for t in self.tasks if t.board_id != board_id]
        return before - len(self.tasks)

    # ============== Completion / Archive ==============

    def complete_task(self, task_id: str, now: datetime | None = None) -> tuple[Task, Task | None] | None:
        """
        Mark a task completed and spawn its next occurrence if recurring.

        Returns (completed_task, spawned_task_or_None), or None when the
        id is unknown. Completing an already completed task is a no-op.
        """
        task = self.get(task_id)
        if task is None:
            return None
        if task.completed:
            return task, None

        now = now or datetime.now()
        task.completed = True
        task.completed_at = now

        spawned = spawn_next(task, self.tasks, now=now, new_id=self._new_id())
        if spawned is not None:
            self.tasks.append(spawned)
            logger.debug(f"Spawned {spawned.id} due {spawned.due_date} from {task.id}")
        return task, spawned

    def restore_task(self, task_id: str) -> Task | None:
        """Bring a completed task back to the end of its original quadrant."""
        task = self.get(task_id)
        if task is None:
            return None
        if not task.completed:
            return task

        task.order = append_order(self.tasks, task.board_id, task.quadrant, exclude=task)
        task.completed = False
        task.completed_at = None
        return task

    # ============== Ordering ==============

    def move_task(self, task_id: str, quadrant: Quadrant | str, index: int | None = None) -> bool:
        task = self.get(task_id)
        if task is None:
            return False
        return move_task(self.tasks, task, Quadrant.parse(quadrant), index)

    def move_within_quadrant(self, task_id: str, direction: Direction | str) -> bool:
        task = self.get(task_id)
        if task is None:
            return False
        return move_within_quadrant(self.tasks, task, direction)
