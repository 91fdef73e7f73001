"""Shared fixtures for core tests."""

from datetime import datetime

import pytest

from eisenhower.core.matrix import Matrix
from eisenhower.core.models import Board, Quadrant, Task


@pytest.fixture
def now():
    return datetime(2024, 1, 31, 9, 0)


@pytest.fixture
def make_task(now):
    """Factory for tasks on board 'b1' with sensible defaults."""

    def _make(task_id: str, quadrant: Quadrant = Quadrant.Q1, order: int = 0, **kwargs) -> Task:
        kwargs.setdefault("board_id", "b1")
        kwargs.setdefault("title", task_id.upper())
        kwargs.setdefault("created_at", now)
        return Task(id=task_id, quadrant=quadrant, order=order, **kwargs)

    return _make


@pytest.fixture
def matrix():
    """Two boards, 'Work' active."""
    return Matrix.create(
        boards=[Board(id="b1", name="Work"), Board(id="b2", name="Home")],
        active_board_id="b1",
    )
