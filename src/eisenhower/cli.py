"""Eisenhower CLI - priority matrix task boards."""

import json
import logging
import sys
from datetime import date, timedelta

import click

from .config import load_config
from .core.matrix import Matrix
from .core.models import (
    AccentColor,
    Quadrant,
    Recurrence,
    Task,
    ThemeMode,
    ValidationError,
    parse_local_datetime,
)
from .core.snapshot import task_to_dict
from .core.tasks import UNSET
from .core.views import (
    ArchiveSort,
    archived_tasks,
    distinct_tags,
    format_task_line,
    search,
)
from .workflows import get_store, open_matrix, session

QUADRANT_CHOICE = click.Choice([q.value for q in Quadrant], case_sensitive=False)
RECURRENCE_CHOICE = click.Choice([r.value for r in Recurrence], case_sensitive=False)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _parse_date(value: str | None):
    """None leaves the field alone, 'none' clears it."""
    if value is None:
        return UNSET
    if value.lower() == "none":
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"expected YYYY-MM-DD, got {value!r}")


def _parse_datetime(value: str | None):
    if value is None:
        return UNSET
    if value.lower() == "none":
        return None
    try:
        return parse_local_datetime(value)
    except ValueError:
        raise click.BadParameter(f"expected YYYY-MM-DDTHH:MM, got {value!r}")


def _or_none(value):
    return None if value is UNSET else value


def _resolve_task(matrix: Matrix, task_id: str) -> Task:
    """Find a task by full id or unique id prefix."""
    task = matrix.tasks.get(task_id)
    if task is not None:
        return task
    matches = [t for t in matrix.tasks.tasks if t.id.startswith(task_id)]
    if len(matches) != 1:
        _fail(f"task not found: {task_id}" if not matches else f"ambiguous task id: {task_id}")
    return matches[0]


def _resolve_board_id(matrix: Matrix, board_id: str | None) -> str:
    if board_id is None:
        return matrix.boards.active_board_id
    if matrix.boards.exists(board_id):
        return board_id
    matches = [b for b in matrix.boards.boards if b.id.startswith(board_id) or b.name == board_id]
    if len(matches) != 1:
        _fail(f"board not found: {board_id}" if not matches else f"ambiguous board: {board_id}")
    return matches[0].id


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Eisenhower - priority matrix task boards."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.WARNING,
    )


# ============== Boards ==============


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def boards(as_json: bool):
    """List boards."""
    config = load_config()
    matrix = open_matrix(get_store(config), config)
    active_id = matrix.boards.active_board_id

    if as_json:
        _echo_json(
            [{"id": b.id, "name": b.name, "active": b.id == active_id} for b in matrix.boards.boards]
        )
        return

    for board in matrix.boards.boards:
        marker = "*" if board.id == active_id else " "
        click.echo(f"{marker} {board.id[:8]:8}  {board.name}")


@main.command("board-add")
@click.argument("name")
@click.option("--use", "activate", is_flag=True, help="Make the new board active")
def board_add(name: str, activate: bool):
    """Create a board."""
    with session(load_config()) as matrix:
        try:
            board = matrix.boards.create_board(name, activate=activate)
        except ValidationError as e:
            _fail(e.message)
    click.echo(f"Created board {board.name} ({board.id[:8]})")


@main.command("board-rm")
@click.argument("board_id")
@click.confirmation_option(prompt="Delete the board and all of its tasks?")
def board_rm(board_id: str):
    """Delete a board and all of its tasks."""
    with session(load_config()) as matrix:
        resolved = _resolve_board_id(matrix, board_id)
        name = matrix.boards.name_for(resolved)
        matrix.delete_board(resolved)
        active = matrix.active_board.name
    click.echo(f"Deleted board {name}. Active board: {active}")


@main.command()
@click.argument("board_id")
def use(board_id: str):
    """Switch the active board."""
    with session(load_config()) as matrix:
        resolved = _resolve_board_id(matrix, board_id)
        matrix.boards.set_active_board(resolved)
        name = matrix.active_board.name
    click.echo(f"Active board: {name}")


# ============== Tasks ==============


@main.command()
@click.option("--board", "board_id", default=None, help="Board id or name (default: active)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(board_id: str | None, as_json: bool):
    """Show the active tasks of a board, quadrant by quadrant."""
    config = load_config()
    matrix = open_matrix(get_store(config), config)
    board_id = _resolve_board_id(matrix, board_id)

    if as_json:
        _echo_json(
            {q.value: [task_to_dict(t) for t in matrix.tasks.active(board_id, q)] for q in Quadrant}
        )
        return

    click.echo(f"# {matrix.boards.name_for(board_id)}")
    for quadrant in Quadrant:
        click.echo(f"\n## {quadrant.value} {quadrant.display_name} ({quadrant.action})")
        tasks = matrix.tasks.active(board_id, quadrant)
        if not tasks:
            click.echo("  (empty)")
        for index, task in enumerate(tasks):
            click.echo(f"  {index}. {task.id[:8]}  {format_task_line(task)}")


@main.command()
@click.argument("quadrant", type=QUADRANT_CHOICE)
@click.argument("title")
@click.option("--due", default=None, help="Due date (YYYY-MM-DD)")
@click.option("--remind", default=None, help="Reminder (YYYY-MM-DDTHH:MM)")
@click.option("--tags", default="", help="Comma-separated tags")
@click.option("--repeat", type=RECURRENCE_CHOICE, default="none", help="Recurrence")
@click.option("--board", "board_id", default=None, help="Board id or name (default: active)")
def add(quadrant: str, title: str, due, remind, tags: str, repeat: str, board_id: str | None):
    """Add a task to the end of a quadrant."""
    due_date = _or_none(_parse_date(due))
    reminder_at = _or_none(_parse_datetime(remind))
    with session(load_config()) as matrix:
        board_id = _resolve_board_id(matrix, board_id)
        try:
            task = matrix.tasks.add_task(
                board_id,
                quadrant,
                title,
                due_date=due_date,
                reminder_at=reminder_at,
                tags=tags,
                recurrence=repeat,
            )
        except ValidationError as e:
            _fail(e.message)
    click.echo(f"Added {task.id[:8]} to {task.quadrant.value}: {task.title}")


@main.command()
@click.argument("task_id")
@click.option("--title", default=None, help="New title")
@click.option("--due", default=None, help="Due date (YYYY-MM-DD, or 'none')")
@click.option("--remind", default=None, help="Reminder (YYYY-MM-DDTHH:MM, or 'none')")
@click.option("--tags", default=None, help="Comma-separated tags (replaces existing)")
@click.option("--repeat", type=RECURRENCE_CHOICE, default=None, help="Recurrence")
def edit(task_id: str, title, due, remind, tags, repeat):
    """Edit the given fields of a task."""
    due_date = _parse_date(due)
    reminder_at = _parse_datetime(remind)
    with session(load_config()) as matrix:
        task = _resolve_task(matrix, task_id)
        try:
            matrix.tasks.edit_task(
                task.id,
                title=UNSET if title is None else title,
                due_date=due_date,
                reminder_at=reminder_at,
                tags=UNSET if tags is None else tags,
                recurrence=UNSET if repeat is None else repeat,
            )
        except ValidationError as e:
            _fail(e.message)
    click.echo(f"Updated {task.id[:8]}: {format_task_line(task)}")


@main.command()
@click.argument("task_id")
def done(task_id: str):
    """Complete a task (spawns the next one if recurring)."""
    with session(load_config()) as matrix:
        task, spawned = matrix.tasks.complete_task(_resolve_task(matrix, task_id).id)
    click.echo(f"Completed: {task.title}")
    if spawned is not None:
        click.echo(f"Next occurrence {spawned.id[:8]} due {spawned.due_date}")


@main.command()
@click.argument("task_id")
def restore(task_id: str):
    """Move an archived task back to the end of its quadrant."""
    with session(load_config()) as matrix:
        task = matrix.tasks.restore_task(_resolve_task(matrix, task_id).id)
    click.echo(f"Restored to {task.quadrant.value}: {task.title}")


@main.command()
@click.argument("task_id")
def rm(task_id: str):
    """Delete a task permanently."""
    with session(load_config()) as matrix:
        task = _resolve_task(matrix, task_id)
        matrix.tasks.delete_task(task.id)
    click.echo(f"Deleted: {task.title}")


@main.command()
@click.argument("task_id")
@click.argument("quadrant", type=QUADRANT_CHOICE)
@click.option("--index", type=int, default=None, help="Position in the target quadrant (default: end)")
def move(task_id: str, quadrant: str, index: int | None):
    """Move an active task to a quadrant position."""
    with session(load_config()) as matrix:
        task = _resolve_task(matrix, task_id)
        if not matrix.tasks.move_task(task.id, quadrant, index):
            _fail("only active tasks can be moved")
    click.echo(f"Moved {task.id[:8]} to {task.quadrant.value}")


def _step(task_id: str, direction: str) -> None:
    with session(load_config()) as matrix:
        task = _resolve_task(matrix, task_id)
        moved = matrix.tasks.move_within_quadrant(task.id, direction)
    if moved:
        click.echo(f"Moved {task.id[:8]} {direction}")
    else:
        click.echo(f"{task.id[:8]} cannot move {direction}")


@main.command()
@click.argument("task_id")
def up(task_id: str):
    """Swap a task with the one above it."""
    _step(task_id, "up")


@main.command()
@click.argument("task_id")
def down(task_id: str):
    """Swap a task with the one below it."""
    _step(task_id, "down")


# ============== Views ==============


@main.command()
@click.option(
    "--sort",
    "sort_key",
    type=click.Choice([s.value for s in ArchiveSort]),
    default=ArchiveSort.COMPLETED_AT.value,
    help="Sort key",
)
@click.option("--tag", default=None, help="Only tasks with this tag")
@click.option("--board", "board_id", default=None, help="Board id or name (default: active)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def archive(sort_key: str, tag: str | None, board_id: str | None, as_json: bool):
    """List completed tasks."""
    config = load_config()
    matrix = open_matrix(get_store(config), config)
    board_id = _resolve_board_id(matrix, board_id)
    tasks = archived_tasks(matrix.tasks.tasks, board_id, sort=sort_key, tag=tag)

    if as_json:
        _echo_json([task_to_dict(t) for t in tasks])
        return

    if not tasks:
        click.echo("Archive is empty.")
        return

    for task in tasks:
        completed = task.completed_at.strftime("%Y-%m-%d %H:%M") if task.completed_at else "?"
        click.echo(f"{task.id[:8]}  [{task.quadrant.value}] {completed}  {format_task_line(task)}")


@main.command("search")
@click.argument("text")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def search_cmd(text: str, as_json: bool):
    """Search titles and tags across all boards."""
    config = load_config()
    matrix = open_matrix(get_store(config), config)
    results = search(matrix.tasks.tasks, matrix.boards, text)

    if as_json:
        _echo_json(
            [
                {
                    "task": task_to_dict(r.task),
                    "board": r.board_name,
                    "quadrant": r.quadrant_name,
                    "archived": r.is_archived,
                }
                for r in results
            ]
        )
        return

    if not results:
        click.echo("No matches.")
        return

    for r in results:
        click.echo(f"{r.task.id[:8]}  {r.board_name} / {r.quadrant_name}: {r.task.title}")


@main.command()
@click.option("--archived", is_flag=True, help="Tags of completed tasks")
@click.option("--board", "board_id", default=None, help="Board id or name (default: active)")
def tags(archived: bool, board_id: str | None):
    """List distinct tags of a board."""
    config = load_config()
    matrix = open_matrix(get_store(config), config)
    board_id = _resolve_board_id(matrix, board_id)
    for tag in distinct_tags(matrix.tasks.tasks, board_id, archived=archived):
        click.echo(tag)


@main.command()
@click.option("--mode", type=click.Choice([m.value for m in ThemeMode]), default=None)
@click.option("--accent", type=click.Choice([a.value for a in AccentColor]), default=None)
def theme(mode: str | None, accent: str | None):
    """Show or change display preferences."""
    with session(load_config()) as matrix:
        if mode:
            matrix.preferences.mode = ThemeMode(mode)
        if accent:
            matrix.preferences.accent = AccentColor(accent)
        prefs = matrix.preferences
    click.echo(f"Theme: {prefs.mode.value}, accent: {prefs.accent.value}")


# ============== Reminders ==============


@main.command()
@click.option("--telegram", is_flag=True, help="Deliver through the Telegram bot")
def watch(telegram: bool):
    """Run the reminder scanner until interrupted."""
    from .adapters.console_notifier import ConsoleNotifier
    from .reminders import ReminderScanner, setup_scheduler

    config = load_config()
    store = get_store(config)

    if telegram:
        from .adapters.telegram_notifier import TelegramNotifier

        try:
            notifier = TelegramNotifier(config.telegram_bot_token, config.telegram_chat_ids)
        except ValueError as e:
            _fail(f"Configuration error: {e}")
    else:
        notifier = ConsoleNotifier()

    scanner = ReminderScanner(
        lambda: open_matrix(store, config),
        notifier,
        window=timedelta(seconds=config.reminder_window),
    )
    scheduler = setup_scheduler(scanner, config)

    click.echo(f"Watching reminders every {config.reminder_interval}s")
    click.echo("Press Ctrl+C to stop")
    try:
        scheduler.start()
    except KeyboardInterrupt:
        click.echo("\nStopped.")


if __name__ == "__main__":
    main()
