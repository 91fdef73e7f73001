"""Telegram message formatting utilities."""

import telegramify_markdown

from .core.models import Task
from .core.views import format_task_line


def format_reminder(task: Task, board_name: str, quadrant_name: str) -> str:
    """Markdown body of a reminder message."""
    return (
        "*Task Reminder*\n\n"
        f"{format_task_line(task)}\n"
        f"Board: {board_name}\n"
        f"Quadrant: {quadrant_name}"
    )


async def send_markdown(bot, text: str, *, chat_id: int):
    """Send markdown text to a Telegram chat, converting to MarkdownV2."""
    converted = telegramify_markdown.markdownify(text)
    chunks = [converted[i : i + 4000] for i in range(0, len(converted), 4000)]
    for chunk in chunks:
        await bot.send_message(chat_id=chat_id, text=chunk, parse_mode="MarkdownV2")
