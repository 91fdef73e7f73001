"""
Ordering engine - position assignment inside a quadrant's active list.

Only active tasks sharing (board_id, quadrant) are ordered against each
other. The canonical display sequence sorts by `order` ascending and
breaks ties by position in the underlying task list (storage order), so
a render never depends on anything but the stored data.

Pure functions over a task list - no I/O.
"""

from enum import Enum

from .models import Quadrant, Task


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"


def active_in_quadrant(
    tasks: list[Task],
    board_id: str,
    quadrant: Quadrant,
    exclude: Task | None = None,
) -> list[Task]:
    """Active tasks of one quadrant in canonical display order."""
    indexed = [
        (position, t)
        for position, t in enumerate(tasks)
        if t.board_id == board_id
        and t.quadrant == quadrant
        and not t.completed
        and t is not exclude
    ]
    indexed.sort(key=lambda pair: (pair[1].order, pair[0]))
    return [t for _, t in indexed]


def append_order(
    tasks: list[Task],
    board_id: str,
    quadrant: Quadrant,
    exclude: Task | None = None,
) -> int:
    """Order value that places a task after every active sibling."""
    siblings = active_in_quadrant(tasks, board_id, quadrant, exclude)
    if not siblings:
        return 0
    # Equals the sibling count when the partition is dense.
    return max(len(siblings), max(t.order for t in siblings) + 1)


def renumber(sequence: list[Task]) -> None:
    """Assign dense orders 0..n-1 following the given sequence."""
    for position, task in enumerate(sequence):
        task.order = position


def compact(tasks: list[Task], board_id: str, quadrant: Quadrant) -> None:
    """Renumber a quadrant's active tasks densely, keeping their sequence."""
    renumber(active_in_quadrant(tasks, board_id, quadrant))


def has_duplicate_orders(sequence: list[Task]) -> bool:
    return len({t.order for t in sequence}) != len(sequence)


def move_task(
    tasks: list[Task],
    task: Task,
    target: Quadrant,
    target_index: int | None = None,
) -> bool:
    """
    Move an active task into `target` at `target_index`.

    The index addresses the target's active list with the moving task
    left out, so reordering inside one quadrant uses the same rule:
    moving the first of [A, B, C] to index 1 yields [B, A, C].

    - No index, or index past the end: append (max order + 1, or 0).
    - Otherwise the task takes the order held by the task at that index
      and every sibling at or above that value shifts up by one.

    A target that already holds duplicate orders is renumbered first so
    the index is unambiguous. The source quadrant is then compacted to
    0..n-1, which in an in-place reorder includes the task at its new
    slot. No two active tasks of a quadrant share an order afterwards.

    Returns False (no-op) for completed tasks.
    """
    if task.completed:
        return False

    source = task.quadrant
    siblings = active_in_quadrant(tasks, task.board_id, target, exclude=task)
    if has_duplicate_orders(siblings):
        renumber(siblings)

    if target_index is None or target_index >= len(siblings):
        task.order = max((t.order for t in siblings), default=-1) + 1
    else:
        slot = siblings[max(target_index, 0)].order
        for other in siblings:
            if other.order >= slot:
                other.order += 1
        task.order = slot

    task.quadrant = target
    compact(tasks, task.board_id, source)
    return True


def move_within_quadrant(tasks: list[Task], task: Task, direction: Direction | str) -> bool:
    """
    Swap a task's order with its neighbour in display order.

    No-op at the boundary (first cannot move up, last cannot move down)
    and for completed tasks.
    """
    if task.completed:
        return False
    direction = Direction(direction)

    sequence = active_in_quadrant(tasks, task.board_id, task.quadrant)
    if has_duplicate_orders(sequence):
        # Swapping equal values would not change anything.
        renumber(sequence)

    position = next(i for i, t in enumerate(sequence) if t is task)
    neighbour = position - 1 if direction is Direction.UP else position + 1
    if neighbour < 0 or neighbour >= len(sequence):
        return False

    other = sequence[neighbour]
    task.order, other.order = other.order, task.order
    return True
