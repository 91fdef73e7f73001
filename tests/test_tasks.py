"""Tests for the task store and the completion/archive state machine."""

from datetime import date, datetime

import pytest

from eisenhower.core.models import Quadrant, Recurrence, ValidationError


@pytest.fixture
def store(matrix):
    return matrix.tasks


def active_ids(store, quadrant=Quadrant.Q1, board_id="b1"):
    return [t.id for t in store.active(board_id, quadrant)]


class TestAddTask:
    def test_appends_with_count_order(self, store, now):
        first = store.add_task("b1", Quadrant.Q1, "First", now=now)
        second = store.add_task("b1", "Q1", "Second", now=now)

        assert first.order == 0
        assert second.order == 1
        assert second.created_at == now
        assert second.completed is False
        assert active_ids(store) == [first.id, second.id]

    def test_title_trimmed(self, store):
        task = store.add_task("b1", Quadrant.Q2, "  Plan sprint  ")
        assert task.title == "Plan sprint"

    def test_blank_title_rejected_store_unchanged(self, store):
        store.add_task("b1", Quadrant.Q1, "Existing")
        before = list(store.tasks)

        with pytest.raises(ValidationError) as exc:
            store.add_task("b1", Quadrant.Q1, "   ")

        assert exc.value.field == "title"
        assert exc.value.message == "title required"
        assert store.tasks == before

    def test_tags_parsed_from_string(self, store):
        task = store.add_task("b1", Quadrant.Q1, "Tagged", tags=" work, urgent ,work,, ")
        assert task.tags == ["work", "urgent"]

    def test_recurrence_defaults_to_none(self, store):
        task = store.add_task("b1", Quadrant.Q1, "Once")
        assert task.recurrence is Recurrence.NONE

    def test_unknown_quadrant_rejected(self, store):
        with pytest.raises(ValidationError):
            store.add_task("b1", "Q9", "Nowhere")
        assert store.tasks == []

    def test_unknown_board_is_noop(self, store):
        assert store.add_task("missing", Quadrant.Q1, "Orphan") is None
        assert store.tasks == []

    def test_ids_unique(self, store):
        ids = {store.add_task("b1", Quadrant.Q1, f"Task {i}").id for i in range(20)}
        assert len(ids) == 20

    def test_appends_after_gap(self, store):
        a = store.add_task("b1", Quadrant.Q1, "A")
        b = store.add_task("b1", Quadrant.Q1, "B")
        c = store.add_task("b1", Quadrant.Q1, "C")
        store.delete_task(b.id)

        d = store.add_task("b1", Quadrant.Q1, "D")
        assert active_ids(store) == [a.id, c.id, d.id]


class TestEditTask:
    def test_updates_only_given_fields(self, store):
        task = store.add_task("b1", Quadrant.Q1, "Draft", tags="a", due_date=date(2024, 2, 1))
        store.edit_task(task.id, title="Final")

        assert task.title == "Final"
        assert task.tags == ["a"]
        assert task.due_date == date(2024, 2, 1)

    def test_none_clears_optional_field(self, store):
        task = store.add_task("b1", Quadrant.Q1, "Draft", due_date=date(2024, 2, 1))
        store.edit_task(task.id, due_date=None)
        assert task.due_date is None

    def test_never_touches_identity_or_position(self, store):
        store.add_task("b1", Quadrant.Q1, "Other")
        task = store.add_task("b1", Quadrant.Q1, "Mine")
        store.edit_task(task.id, title="Renamed", tags="x,y", recurrence="weekly")

        assert task.board_id == "b1"
        assert task.quadrant == Quadrant.Q1
        assert task.order == 1
        assert task.completed is False
        assert task.tags == ["x", "y"]
        assert task.recurrence is Recurrence.WEEKLY

    def test_blank_title_rejected_nothing_written(self, store):
        task = store.add_task("b1", Quadrant.Q1, "Keep", tags="old")
        with pytest.raises(ValidationError):
            store.edit_task(task.id, title=" ", tags="new")
        assert task.title == "Keep"
        assert task.tags == ["old"]

    def test_missing_id_is_noop(self, store):
        assert store.edit_task("nope", title="X") is None


class TestDeleteTask:
    def test_removes_active_task(self, store):
        task = store.add_task("b1", Quadrant.Q1, "Gone")
        assert store.delete_task(task.id) is True
        assert store.get(task.id) is None

    def test_removes_archived_task(self, store):
        task = store.add_task("b1", Quadrant.Q1, "Gone")
        store.complete_task(task.id)
        assert store.delete_task(task.id) is True
        assert store.tasks == []

    def test_missing_id_is_noop(self, store):
        store.add_task("b1", Quadrant.Q1, "Stay")
        assert store.delete_task("nope") is False
        assert len(store.tasks) == 1


class TestCompleteTask:
    def test_marks_completed(self, store, now):
        task = store.add_task("b1", Quadrant.Q1, "Ship it")
        completed, spawned = store.complete_task(task.id, now=now)

        assert completed is task
        assert task.completed is True
        assert task.completed_at == now
        assert spawned is None
        assert store.get(task.id) is task
        assert active_ids(store) == []

    def test_daily_recurrence_spawns_next(self, store, now):
        task = store.add_task(
            "b1", Quadrant.Q2, "Standup", due_date=date(2024, 1, 31), tags="team", recurrence="daily"
        )
        _, spawned = store.complete_task(task.id, now=now)

        assert spawned is not None
        assert spawned.id != task.id
        assert spawned.due_date == date(2024, 2, 1)
        assert spawned.quadrant == Quadrant.Q2
        assert spawned.board_id == "b1"
        assert spawned.tags == ["team"]
        assert spawned.recurrence is Recurrence.DAILY
        assert spawned.completed is False
        assert spawned.created_at == now
        assert active_ids(store, Quadrant.Q2) == [spawned.id]

    def test_monthly_recurrence_clamps_to_leap_day(self, store):
        task = store.add_task("b1", Quadrant.Q1, "Rent", due_date=date(2024, 1, 31), recurrence="monthly")
        _, spawned = store.complete_task(task.id)
        assert spawned.due_date == date(2024, 2, 29)

    def test_monthly_recurrence_clamps_non_leap(self, store):
        task = store.add_task("b1", Quadrant.Q1, "Rent", due_date=date(2023, 1, 31), recurrence="monthly")
        _, spawned = store.complete_task(task.id)
        assert spawned.due_date == date(2023, 2, 28)

    def test_spawned_task_appended_after_siblings(self, store):
        recurring = store.add_task("b1", Quadrant.Q1, "Water plants", due_date=date(2024, 1, 1), recurrence="weekly")
        other = store.add_task("b1", Quadrant.Q1, "Other")
        _, spawned = store.complete_task(recurring.id)
        assert active_ids(store) == [other.id, spawned.id]

    def test_recurring_without_due_date_does_not_spawn(self, store):
        task = store.add_task("b1", Quadrant.Q1, "Someday", recurrence="daily")
        _, spawned = store.complete_task(task.id)
        assert spawned is None
        assert len(store.tasks) == 1

    def test_date_overflow_still_completes(self, store):
        task = store.add_task("b1", Quadrant.Q1, "End of time", due_date=date.max, recurrence="daily")
        completed, spawned = store.complete_task(task.id)
        assert completed.completed is True
        assert spawned is None

    def test_already_completed_is_noop(self, store, now):
        task = store.add_task("b1", Quadrant.Q1, "Once", due_date=date(2024, 1, 1), recurrence="daily")
        store.complete_task(task.id, now=now)
        _, spawned = store.complete_task(task.id, now=datetime(2024, 3, 1))
        assert spawned is None
        assert task.completed_at == now
        assert len(store.tasks) == 2

    def test_missing_id_is_noop(self, store):
        assert store.complete_task("nope") is None


class TestRestoreTask:
    def test_appended_to_end_of_original_quadrant(self, store):
        a = store.add_task("b1", Quadrant.Q3, "A")
        b = store.add_task("b1", Quadrant.Q3, "B")
        c = store.add_task("b1", Quadrant.Q3, "C")
        store.complete_task(a.id)

        restored = store.restore_task(a.id)

        assert restored.completed is False
        assert restored.completed_at is None
        assert restored.quadrant == Quadrant.Q3
        assert restored.order > c.order
        assert active_ids(store, Quadrant.Q3) == [b.id, c.id, a.id]

    def test_into_empty_quadrant(self, store):
        a = store.add_task("b1", Quadrant.Q4, "A")
        a.order = 5
        store.complete_task(a.id)
        store.restore_task(a.id)
        assert a.order == 0

    def test_active_task_unchanged(self, store):
        a = store.add_task("b1", Quadrant.Q1, "A")
        store.add_task("b1", Quadrant.Q1, "B")
        store.restore_task(a.id)
        assert a.order == 0

    def test_missing_id_is_noop(self, store):
        assert store.restore_task("nope") is None


class TestStoreOrdering:
    def test_move_by_id(self, store):
        a = store.add_task("b1", Quadrant.Q2, "A")
        b = store.add_task("b1", Quadrant.Q1, "B")
        c = store.add_task("b1", Quadrant.Q1, "C")

        assert store.move_task(a.id, "Q1", 1) is True
        assert active_ids(store) == [b.id, a.id, c.id]

    def test_move_missing_id(self, store):
        assert store.move_task("nope", Quadrant.Q1) is False

    def test_move_within_quadrant_by_id(self, store):
        a = store.add_task("b1", Quadrant.Q1, "A")
        b = store.add_task("b1", Quadrant.Q1, "B")
        assert store.move_within_quadrant(b.id, "up") is True
        assert active_ids(store) == [b.id, a.id]

    def test_move_archived_task_is_noop(self, store):
        a = store.add_task("b1", Quadrant.Q1, "A")
        store.complete_task(a.id)
        assert store.move_task(a.id, Quadrant.Q2, 0) is False
        assert a.quadrant == Quadrant.Q1
