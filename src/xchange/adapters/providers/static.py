# src/xchange/adapters/providers/static.py
"""
Static Rate Provider - Fixed Rates Without Network Access

Serves a fixed rate table. Used for offline runs (OFFLINE_RATES) and tests.

Files that USE this module:
- xchange.app (offline mode)
- tests.* (deterministic snapshots)

Files that this module USES:
- xchange.adapters.providers.base (RateProvider interface)
- xchange.domain.models (Currency, RateSnapshot)
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Mapping

from xchange.adapters.providers.base import RateProvider
from xchange.domain.models import Currency, RateSnapshot

log = logging.getLogger(__name__)


class StaticRateProvider(RateProvider):
    def __init__(self, rates: Mapping[str, float], pivot: Currency = Currency.EUR):
        # Raises InvalidRateError on a bad table
        self._template = RateSnapshot.from_mapping(rates, pivot=pivot)

    def latest_rates(self) -> RateSnapshot:
        log.debug("Serving static rates (%d currencies)", len(self._template))
        return RateSnapshot(
            rates=dict(self._template.rates),
            pivot=self._template.pivot,
            fetched_at=datetime.now(timezone.utc),
        )
