"""Board store - the set of boards and the active-board selector."""

import logging
import uuid
from dataclasses import dataclass, field

from .models import Board, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_BOARD_ID = "1"
DEFAULT_BOARD_NAME = "My Matrix"
UNKNOWN_BOARD_NAME = "Unknown Board"


@dataclass
class BoardStore:
    """
    Owns boards and which one is active.

    The board set is never empty: removing the last board synthesizes a
    default one.
    """

    boards: list[Board] = field(default_factory=list)
    active_board_id: str = ""
    default_board_name: str = DEFAULT_BOARD_NAME

    def __post_init__(self) -> None:
        if not self.boards:
            self.boards.append(self._default_board())
        if self.get(self.active_board_id) is None:
            self.active_board_id = self.boards[0].id

    def _default_board(self) -> Board:
        return Board(id=DEFAULT_BOARD_ID, name=self.default_board_name)

    @property
    def active(self) -> Board:
        board = self.get(self.active_board_id)
        assert board is not None
        return board

    def get(self, board_id: str) -> Board | None:
        return next((b for b in self.boards if b.id == board_id), None)

    def exists(self, board_id: str) -> bool:
        return self.get(board_id) is not None

    def name_for(self, board_id: str) -> str:
        board = self.get(board_id)
        return board.name if board else UNKNOWN_BOARD_NAME

    def create_board(self, name: str, activate: bool = False) -> Board:
        """Create a board with a unique id; active board changes only on request."""
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError("name", "board name required")

        board_id = uuid.uuid4().hex
        while self.exists(board_id):
            board_id = uuid.uuid4().hex

        board = Board(id=board_id, name=cleaned)
        self.boards.append(board)
        if activate:
            self.active_board_id = board.id
        logger.debug(f"Created board {board.id} ({board.name})")
        return board

    def set_active_board(self, board_id: str) -> bool:
        if not self.exists(board_id):
            return False
        self.active_board_id = board_id
        return True

    def remove_board(self, board_id: str) -> Board | None:
        """
        Remove a board entry (tasks are the caller's concern).

        If the removed board was active, the first remaining board becomes
        active, or a default board is created when none remain.
        """
        board = self.get(board_id)
        if board is None:
            return None

        self.boards = [b for b in self.boards if b.id != board_id]
        if not self.boards:
            self.boards.append(self._default_board())
            self.active_board_id = self.boards[0].id
            logger.info("Last board deleted, created default board")
        elif self.active_board_id == board_id:
            self.active_board_id = self.boards[0].id
        return board
