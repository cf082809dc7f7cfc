# src/xchange/application/exchanger.py
"""
Exchanger Session - The Exchange Widget Core

This module wires the synchronizer, the balance ledger and the rate refresher
into one session with an explicit lifetime: ``start()`` when the widget is
mounted, ``stop()`` when it is torn down. All state is owned by the session;
nothing here is a module-level singleton.

Files that USE this module:
- xchange.app (console front-end drives a session)
- tests.test_exchanger (end-to-end tests)

Files that this module USES:
- xchange.application.synchronizer (ExchangeSynchronizer, initial_state)
- xchange.application.ledger (BalanceLedger, ExchangeResult)
- xchange.application.rate_refresher (RateRefresher)
- xchange.adapters.providers.base (RateProvider)
- xchange.adapters.notifications.base (Notifier)
- xchange.config (Settings)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from xchange.adapters.notifications.base import Notifier
from xchange.adapters.providers.base import RateProvider
from xchange.application.ledger import BalanceLedger, ExchangeResult
from xchange.application.rate_refresher import LIVE_RATE_FETCH_INTERVAL, RateRefresher
from xchange.application.synchronizer import ExchangeSynchronizer, initial_state
from xchange.config import Settings
from xchange.domain.models import Currency, ExchangeField, RateSnapshot, Side

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExchangeView:
    """
    Everything the display layer needs to render the widget.

    Attributes:
        source: Source field (currency and amount)
        destination: Destination field (currency and amount)
        live_rate: Units of destination per 1 unit of source, None if unavailable
        loading: True until the first snapshot arrives
        degraded: True when the last edit could not be converted
        balances: Current mock balances
    """
    source: ExchangeField
    destination: ExchangeField
    live_rate: Optional[float]
    loading: bool
    degraded: bool
    balances: Mapping[Currency, float]


class ExchangerSession:
    """One mounted exchange widget: linked fields, live rates and balances."""

    def __init__(
        self,
        provider: RateProvider,
        ledger: BalanceLedger,
        synchronizer: Optional[ExchangeSynchronizer] = None,
        refresh_seconds: float = LIVE_RATE_FETCH_INTERVAL,
    ):
        self.synchronizer = synchronizer or ExchangeSynchronizer()
        self.ledger = ledger
        self.refresher = RateRefresher(
            provider=provider,
            on_snapshot=self.synchronizer.on_snapshot_update,
            interval_seconds=refresh_seconds,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        provider: RateProvider,
        notifier: Notifier,
    ) -> "ExchangerSession":
        """
        Build a session with the configured defaults, balances and refresh interval.

        Args:
            settings: Application settings
            provider: Rate source
            notifier: Sink for exchange outcome notifications
        """
        ledger = BalanceLedger(
            balances=settings.initial_balances,
            notifier=notifier,
            enforce_balance=settings.enforce_sufficient_balance,
        )
        synchronizer = ExchangeSynchronizer(
            initial_state(
                source_currency=settings.default_source_currency,
                destination_currency=settings.default_destination_currency,
            )
        )
        return cls(
            provider=provider,
            ledger=ledger,
            synchronizer=synchronizer,
            refresh_seconds=settings.rates_refresh_seconds,
        )

    # --- lifetime ---

    async def start(self) -> None:
        """Mount: start polling live rates (first fetch happens immediately)."""
        self.refresher.start()

    async def stop(self) -> None:
        """Unmount: stop polling; no snapshot is applied after this returns."""
        await self.refresher.stop()

    async def __aenter__(self) -> "ExchangerSession":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    # --- user events ---

    def set_amount(self, side: Side, amount: float) -> ExchangeView:
        self.synchronizer.set_amount(side, amount)
        return self.view()

    def set_currency(self, side: Side, currency: Currency) -> ExchangeView:
        self.synchronizer.set_currency(side, currency)
        return self.view()

    def swap(self) -> ExchangeView:
        self.synchronizer.swap()
        return self.view()

    def exchange(self) -> ExchangeResult:
        """Exchange the source amount into the destination currency at the live rate."""
        state = self.synchronizer.state
        return self.ledger.exchange(state.source, state.destination, state.snapshot)

    def apply_snapshot(self, snapshot: RateSnapshot) -> ExchangeView:
        """Apply a snapshot immediately, outside the polling schedule."""
        self.synchronizer.on_snapshot_update(snapshot)
        return self.view()

    # --- display ---

    def view(self) -> ExchangeView:
        state = self.synchronizer.state
        return ExchangeView(
            source=state.source,
            destination=state.destination,
            live_rate=self.synchronizer.live_rate(),
            loading=state.loading,
            degraded=state.degraded,
            balances=dict(self.ledger.balances),
        )
