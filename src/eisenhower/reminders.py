"""Periodic reminder scan.

Polls the task state on a fixed interval and notifies every active task
whose reminder fell since the previous scan. Best-effort: reminders that
fall while the scanner is not running are not delivered afterwards.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .config import Config
from .core.matrix import Matrix
from .core.views import due_reminders, location_name
from .ports.notifier import ReminderNotifier

logger = logging.getLogger(__name__)


class ReminderScanner:
    """
    Compare reminders against the clock and hand due ones to a notifier.

    `load_matrix` is called on every scan so edits made by other commands
    since the last scan are seen.
    """

    def __init__(
        self,
        load_matrix: Callable[[], Matrix],
        notifier: ReminderNotifier,
        window: timedelta = timedelta(seconds=60),
    ):
        self.load_matrix = load_matrix
        self.notifier = notifier
        self.window = window
        self.last_scan: datetime | None = None

    def scan(self, now: datetime | None = None) -> list[str]:
        """Run one scan. Returns the ids of the tasks that were notified."""
        now = now or datetime.now()
        since = self.last_scan if self.last_scan is not None else now - self.window
        matrix = self.load_matrix()

        notified = []
        for task in due_reminders(matrix.tasks.tasks, now, since=since):
            try:
                self.notifier.notify(
                    task,
                    matrix.boards.name_for(task.board_id),
                    location_name(task),
                )
                notified.append(task.id)
            except Exception as e:
                logger.error(f"Failed to deliver reminder for task {task.id}: {e}")

        self.last_scan = now
        if notified:
            logger.info(f"Sent {len(notified)} reminder(s)")
        return notified


def setup_scheduler(scanner: ReminderScanner, config: Config) -> BlockingScheduler:
    """Set up the interval job that drives the scanner."""
    if config.timezone:
        scheduler = BlockingScheduler(timezone=config.timezone)
    else:
        scheduler = BlockingScheduler()

    scheduler.add_job(
        scanner.scan,
        IntervalTrigger(seconds=config.reminder_interval),
        id="reminder_scan",
        max_instances=1,
        coalesce=True,
    )
    logger.info(f"Scheduled reminder scan every {config.reminder_interval}s")
    return scheduler
