# src/xchange/application/rate_refresher.py
"""
Rate Refresher - Periodic Live Rate Polling

This module runs the periodic rate fetch as an asyncio background task whose
lifetime is tied to its owner: ``start()`` fetches immediately and then on
every interval, ``stop()`` cancels the task and waits for it to finish, so no
snapshot is published after teardown. A failed fetch is logged and the
previous snapshot stays in place until the next tick.

Files that USE this module:
- xchange.application.exchanger (ExchangerSession starts/stops it on mount/unmount)
- tests.test_rate_refresher (unit tests)

Files that this module USES:
- xchange.adapters.providers.base (RateProvider)
- xchange.domain.models (RateSnapshot)
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from xchange.adapters.providers.base import RateProvider
from xchange.domain.models import RateSnapshot

logger = logging.getLogger(__name__)

LIVE_RATE_FETCH_INTERVAL = 10.0  # seconds


class RateRefresher:
    """Polls a RateProvider and publishes each fresh snapshot."""

    def __init__(
        self,
        provider: RateProvider,
        on_snapshot: Callable[[RateSnapshot], None],
        interval_seconds: float = LIVE_RATE_FETCH_INTERVAL,
    ):
        """
        Args:
            provider: Source of rate snapshots
            on_snapshot: Called with every successfully fetched snapshot
            interval_seconds: Delay between fetches (default: 10 seconds)
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.provider = provider
        self.on_snapshot = on_snapshot
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None
        self.last_snapshot: Optional[RateSnapshot] = None
        self.failures = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh_once(self) -> bool:
        """
        Fetch one snapshot and publish it.

        Returns:
            True if a new snapshot was published, False if the fetch failed
        """
        try:
            snapshot = await self.provider.fetch_latest_snapshot()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.failures += 1
            logger.warning("Rate fetch failed (%d consecutive), keeping previous snapshot: %s",
                           self.failures, e)
            return False

        self.failures = 0
        self.last_snapshot = snapshot
        self.on_snapshot(snapshot)
        return True

    async def _run(self) -> None:
        logger.info("Rate refresher started (interval=%ss)", self.interval_seconds)
        try:
            while True:
                await self.refresh_once()
                await asyncio.sleep(self.interval_seconds)
        finally:
            logger.info("Rate refresher stopped")

    def start(self) -> None:
        """Start polling on the running event loop; no-op if already running."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="rate_refresher")

    async def stop(self) -> None:
        """Cancel polling and wait until the task has finished."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def __aenter__(self) -> "RateRefresher":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
