"""Aggregate store: boards, tasks and preferences for one identity scope."""

import logging
from dataclasses import dataclass, field

from .boards import DEFAULT_BOARD_NAME, BoardStore
from .models import Board, Preferences, Task
from .tasks import TaskStore

logger = logging.getLogger(__name__)


@dataclass
class Matrix:
    """
    The single in-memory state every command operates on.

    Passed explicitly to workflows and views; there is no global state.
    """

    boards: BoardStore
    tasks: TaskStore
    preferences: Preferences = field(default_factory=Preferences)

    @classmethod
    def create(
        cls,
        boards: list[Board] | None = None,
        active_board_id: str = "",
        tasks: list[Task] | None = None,
        preferences: Preferences | None = None,
        default_board_name: str = DEFAULT_BOARD_NAME,
    ) -> "Matrix":
        board_store = BoardStore(
            boards=list(boards or []),
            active_board_id=active_board_id,
            default_board_name=default_board_name,
        )
        task_store = TaskStore(board_store, [t for t in tasks or [] if board_store.exists(t.board_id)])
        return cls(board_store, task_store, preferences or Preferences())

    @property
    def active_board(self) -> Board:
        return self.boards.active

    def delete_board(self, board_id: str) -> bool:
        """Delete a board and every task that belongs to it."""
        if not self.boards.exists(board_id):
            return False
        removed = self.tasks.delete_board_tasks(board_id)
        self.boards.remove_board(board_id)
        logger.info(f"Deleted board {board_id} and {removed} task(s)")
        return True
