"""Pure domain model for boards and tasks - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Iterable


class ValidationError(ValueError):
    """Raised when a command is rejected before any mutation happens."""

    def __init__(self, field_name: str, message: str):
        super().__init__(message)
        self.field = field_name
        self.message = message


class Quadrant(str, Enum):
    """
    Eisenhower quadrant (fixed set, never created dynamically).

    Q1: Urgent + Important (Do now)
    Q2: Not Urgent + Important (Schedule)
    Q3: Urgent + Not Important (Delegate)
    Q4: Not Urgent + Not Important (Eliminate)
    """

    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"

    @property
    def display_name(self) -> str:
        return QUADRANT_NAMES[self]

    @property
    def action(self) -> str:
        return QUADRANT_ACTIONS[self]

    @classmethod
    def parse(cls, value: "str | Quadrant") -> "Quadrant":
        """Accept 'Q1', 'q1' or '1'."""
        if isinstance(value, Quadrant):
            return value
        raw = str(value).strip().upper()
        if raw.isdigit():
            raw = f"Q{raw}"
        try:
            return cls(raw)
        except ValueError:
            raise ValidationError("quadrantId", f"unknown quadrant: {value!r}") from None


QUADRANT_NAMES = {
    Quadrant.Q1: "Urgent & Important",
    Quadrant.Q2: "Not Urgent & Important",
    Quadrant.Q3: "Urgent & Not Important",
    Quadrant.Q4: "Not Urgent & Not Important",
}

QUADRANT_ACTIONS = {
    Quadrant.Q1: "Do now",
    Quadrant.Q2: "Schedule",
    Quadrant.Q3: "Delegate",
    Quadrant.Q4: "Eliminate",
}

ARCHIVE_LABEL = "Archive"


class Recurrence(str, Enum):
    """Policy for spawning the next instance when a task completes."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, value: "str | Recurrence | None") -> "Recurrence":
        if value is None or value == "":
            return cls.NONE
        if isinstance(value, Recurrence):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError("recurrence", f"unknown recurrence: {value!r}") from None


class ThemeMode(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class AccentColor(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"


@dataclass
class Preferences:
    """Display preferences persisted alongside boards and tasks."""

    mode: ThemeMode = ThemeMode.LIGHT
    accent: AccentColor = AccentColor.BLUE


@dataclass
class Board:
    """A named collection of tasks with its own four quadrants."""

    id: str
    name: str


@dataclass
class Task:
    """A task placed in one quadrant of one board."""

    id: str
    board_id: str
    quadrant: Quadrant
    title: str
    created_at: datetime
    completed: bool = False
    completed_at: datetime | None = None
    order: int = 0
    due_date: date | None = None
    reminder_at: datetime | None = None
    tags: list[str] = field(default_factory=list)
    recurrence: Recurrence = Recurrence.NONE

    @property
    def is_active(self) -> bool:
        return not self.completed

    @property
    def is_recurring(self) -> bool:
        return self.recurrence is not Recurrence.NONE

    def is_overdue(self, as_of: date | None = None) -> bool:
        """Due date strictly before today."""
        if not self.due_date:
            return False
        as_of = as_of or date.today()
        return self.due_date < as_of

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


def clean_title(title: str | None) -> str:
    """Trim a title, rejecting empty or whitespace-only input."""
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationError("title", "title required")
    return cleaned


def parse_tags(raw: str | Iterable[str] | None) -> list[str]:
    """
    Parse free-form tags into a de-duplicated list.

    Accepts a comma-separated string ("work, urgent,work") or an iterable
    of strings. Blank entries are dropped; first occurrence wins.
    """
    if raw is None:
        return []
    parts = raw.split(",") if isinstance(raw, str) else raw
    tags: list[str] = []
    for part in parts:
        tag = str(part).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def parse_local_datetime(value: str) -> datetime:
    """
    Parse an ISO datetime into naive local time.

    Values carrying a UTC offset (including a trailing "Z") are converted
    to local time, so every stored datetime compares against datetime.now().
    Raises ValueError for anything else that is not ISO 8601.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt
