"""Telegram reminder adapter."""

import asyncio
import logging

from telegram import Bot

from eisenhower.core.models import Task
from eisenhower.telegram_format import format_reminder, send_markdown

logger = logging.getLogger(__name__)


class TelegramNotifier:
    """
    Send reminders through a Telegram bot.

    Implements ReminderNotifier protocol. A failure for one chat is logged
    and does not stop delivery to the others.
    """

    def __init__(self, token: str, chat_ids: list[int], bot: Bot | None = None):
        if not token and bot is None:
            raise ValueError("TELEGRAM_BOT_TOKEN not configured")
        self.chat_ids = chat_ids
        self._bot = bot or Bot(token)

    async def _send(self, text: str) -> None:
        async with self._bot:
            for chat_id in self.chat_ids:
                try:
                    await send_markdown(self._bot, text, chat_id=chat_id)
                except Exception as e:
                    logger.error(f"Failed to send reminder to chat {chat_id}: {e}")

    def notify(self, task: Task, board_name: str, quadrant_name: str) -> None:
        asyncio.run(self._send(format_reminder(task, board_name, quadrant_name)))
