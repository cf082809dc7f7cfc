# src/xchange/adapters/notifications/telegram.py
"""
Telegram Notifier - Exchange Outcomes Sent to a Telegram Chat

This module forwards exchange notifications to a Telegram chat through the
Bot API. Sending is fire-and-forget: ``notify`` schedules the message on the
running event loop and returns immediately.

Files that USE this module:
- xchange.app (added to the notifier chain when a bot token and chat are configured)
- tests.test_notifications (unit tests)

Files that this module USES:
- xchange.domain.models (Severity)
"""
from __future__ import annotations

import asyncio  # Event loop access for fire-and-forget sends
import logging
from typing import Optional, Set

from telegram import Bot  # Telegram Bot API client
from telegram.error import RetryAfter, TelegramError, TimedOut  # Telegram API errors

from xchange.domain.models import Severity

log = logging.getLogger(__name__)

_SEVERITY_PREFIX = {
    Severity.SUCCESS: "✅",
    Severity.ERROR: "⚠️",
}


def _retry_delay(error: RetryAfter) -> float:
    delay = error.retry_after
    if hasattr(delay, "total_seconds"):
        return float(delay.total_seconds())
    return float(delay)


class TelegramNotifier:
    """Sends each notification as a message to one Telegram chat."""

    def __init__(self, bot_token: str, chat_id: str, bot: Optional[Bot] = None):
        """
        Args:
            bot_token: Telegram bot token
            chat_id: Target chat/channel ID (e.g. ``@channel`` or ``-100...``)
            bot: Optional pre-built Bot instance
        """
        if not bot_token and bot is None:
            raise ValueError("Telegram bot token not configured")
        self.chat_id = chat_id
        self.bot = bot or Bot(token=bot_token)
        self._pending: Set[asyncio.Task] = set()

    def notify(self, message: str, severity: Severity) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            log.warning("No running event loop, dropping Telegram notification: %s", message)
            return
        task = loop.create_task(self._send(f"{_SEVERITY_PREFIX[severity]} {message}"))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _send(self, text: str) -> None:
        try:
            try:
                await self.bot.send_message(chat_id=self.chat_id, text=text)
            except RetryAfter as e:
                delay = _retry_delay(e)
                log.warning("Telegram rate limit (429): retry after %s seconds", delay)
                # Wait and retry once
                await asyncio.sleep(delay + 1)
                await self.bot.send_message(chat_id=self.chat_id, text=text)
        except TimedOut:
            log.warning("Telegram request timed out, notification dropped")
        except TelegramError as e:
            log.error("Failed to send Telegram notification: %s", e)

    async def drain(self) -> None:
        """Wait for notifications that are still being sent."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
