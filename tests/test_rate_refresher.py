# tests/test_rate_refresher.py
"""
Rate Refresher Tests - Unit Tests for Periodic Rate Polling

This module contains unit tests for the rate refresher: publishing fetched
snapshots, keeping the previous snapshot on failure, and cancelling the
polling task on stop.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- xchange.application.rate_refresher (RateRefresher)
- xchange.adapters.providers.static (StaticRateProvider)
- unittest.mock (AsyncMock providers)
- pytest (testing framework)
"""
import asyncio

import pytest  # Testing framework for writing and running tests

from unittest.mock import AsyncMock, Mock  # Mocking utilities for testing

from xchange.adapters.providers.static import StaticRateProvider
from xchange.application.rate_refresher import LIVE_RATE_FETCH_INTERVAL, RateRefresher
from xchange.domain.errors import ProviderUnavailableError


def failing_provider():
    provider = Mock()
    provider.fetch_latest_snapshot = AsyncMock(side_effect=ProviderUnavailableError("down"))
    return provider


class TestRefreshOnce:
    def test_publishes_snapshot(self, full_rates):
        received = []
        refresher = RateRefresher(StaticRateProvider(full_rates), received.append)

        assert asyncio.run(refresher.refresh_once()) is True
        assert len(received) == 1
        assert refresher.last_snapshot is received[0]
        assert refresher.failures == 0

    def test_failure_keeps_previous_snapshot(self, snapshot):
        on_snapshot = Mock()
        provider = Mock()
        provider.fetch_latest_snapshot = AsyncMock(
            side_effect=[snapshot, ProviderUnavailableError("down"), ProviderUnavailableError("down")]
        )
        refresher = RateRefresher(provider, on_snapshot)

        async def run():
            return [await refresher.refresh_once() for _ in range(3)]

        assert asyncio.run(run()) == [True, False, False]
        on_snapshot.assert_called_once_with(snapshot)
        assert refresher.last_snapshot is snapshot
        assert refresher.failures == 2

    def test_success_resets_failure_count(self, snapshot):
        provider = Mock()
        provider.fetch_latest_snapshot = AsyncMock(
            side_effect=[ProviderUnavailableError("down"), snapshot]
        )
        refresher = RateRefresher(provider, Mock())

        async def run():
            await refresher.refresh_once()
            assert refresher.failures == 1
            await refresher.refresh_once()

        asyncio.run(run())
        assert refresher.failures == 0

    def test_unexpected_error_is_contained(self):
        provider = Mock()
        provider.fetch_latest_snapshot = AsyncMock(side_effect=RuntimeError("boom"))
        refresher = RateRefresher(provider, Mock())
        assert asyncio.run(refresher.refresh_once()) is False


class TestLifecycle:
    def test_default_interval(self):
        refresher = RateRefresher(failing_provider(), Mock())
        assert refresher.interval_seconds == LIVE_RATE_FETCH_INTERVAL == 10.0

    @pytest.mark.parametrize("interval", [0, -1])
    def test_invalid_interval(self, interval):
        with pytest.raises(ValueError):
            RateRefresher(failing_provider(), Mock(), interval_seconds=interval)

    def test_first_fetch_is_immediate(self, full_rates):
        received = []
        refresher = RateRefresher(StaticRateProvider(full_rates), received.append, interval_seconds=60)

        async def run():
            refresher.start()
            for _ in range(100):
                if received:
                    break
                await asyncio.sleep(0.01)
            await refresher.stop()

        asyncio.run(run())
        assert len(received) == 1

    def test_polls_repeatedly(self, full_rates):
        received = []
        refresher = RateRefresher(StaticRateProvider(full_rates), received.append, interval_seconds=0.01)

        async def run():
            async with refresher:
                for _ in range(200):
                    if len(received) >= 3:
                        break
                    await asyncio.sleep(0.01)

        asyncio.run(run())
        assert len(received) >= 3

    def test_no_snapshot_after_stop(self, full_rates):
        received = []
        refresher = RateRefresher(StaticRateProvider(full_rates), received.append, interval_seconds=0.01)

        async def run():
            refresher.start()
            for _ in range(100):
                if received:
                    break
                await asyncio.sleep(0.01)
            await refresher.stop()
            count = len(received)
            await asyncio.sleep(0.05)
            return count

        count = asyncio.run(run())
        assert len(received) == count
        assert not refresher.running

    def test_start_is_idempotent(self, snapshot):
        provider = Mock()
        provider.fetch_latest_snapshot = AsyncMock(return_value=snapshot)
        refresher = RateRefresher(provider, Mock(), interval_seconds=60)

        async def run():
            refresher.start()
            task = refresher._task
            refresher.start()
            assert refresher._task is task
            assert refresher.running
            await refresher.stop()

        asyncio.run(run())
        assert not refresher.running

    def test_stop_without_start(self):
        refresher = RateRefresher(failing_provider(), Mock())
        asyncio.run(refresher.stop())
        assert not refresher.running

    def test_keeps_polling_through_failures(self):
        provider = failing_provider()
        on_snapshot = Mock()
        refresher = RateRefresher(provider, on_snapshot, interval_seconds=0.01)

        async def run():
            async with refresher:
                for _ in range(200):
                    if refresher.failures >= 2:
                        break
                    await asyncio.sleep(0.01)

        asyncio.run(run())
        assert refresher.failures >= 2
        on_snapshot.assert_not_called()
