"""Console reminder adapter."""

import click

from eisenhower.core.models import Task


class ConsoleNotifier:
    """
    Print reminders to the terminal.

    Implements ReminderNotifier protocol.
    """

    def __init__(self, err: bool = False):
        self.err = err

    def notify(self, task: Task, board_name: str, quadrant_name: str) -> None:
        click.echo(f"⏰ Task Reminder: {task.title}", err=self.err)
        click.echo(f"   Board: {board_name}", err=self.err)
        click.echo(f"   Quadrant: {quadrant_name}", err=self.err)
