# src/xchange/adapters/providers/base.py
"""
Base Provider Interface for Exchange Rate Providers

This module defines the abstract base class for all exchange rate providers.
It establishes the contract that all provider implementations must follow.

Files that USE this module:
- xchange.adapters.providers.erapi (ERAPIProvider implements RateProvider)
- xchange.adapters.providers.static (StaticRateProvider implements RateProvider)
- xchange.application.rate_refresher (awaits fetch_latest_snapshot)
- tests.test_providers (unit tests)

Files that this module USES:
- xchange.domain.models (RateSnapshot)
"""
import asyncio
from abc import ABC, abstractmethod

from xchange.domain.models import RateSnapshot


class RateProvider(ABC):
    @abstractmethod
    def latest_rates(self) -> RateSnapshot:
        """Return the current snapshot of pivot-relative rates (blocking)."""
        raise NotImplementedError

    async def fetch_latest_snapshot(self) -> RateSnapshot:
        """
        Async-friendly wrapper around latest_rates.

        Runs the blocking call in the default executor so the event loop
        keeps handling user events while the request is in flight.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.latest_rates)
