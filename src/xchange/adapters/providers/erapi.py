# src/xchange/adapters/providers/erapi.py
"""
ExchangeRate-API Provider for Live Pivot-Relative Rates

This module implements the open ExchangeRate-API client (open.er-api.com) for
fetching the latest rates of every supported currency against the pivot
currency. It is polled on every refresh tick, so it keeps no cache of its own.

Files that USE this module:
- xchange.app (default live rate provider)
- tests.test_providers (unit tests)

Files that this module USES:
- xchange.adapters.providers.base (RateProvider interface)
- xchange.config (settings for API URL, pivot and timeout)
- xchange.domain.models (Currency, RateSnapshot)
"""
import logging
from datetime import datetime, timezone
from typing import Optional

import requests

from xchange.adapters.providers.base import RateProvider
from xchange.config import settings
from xchange.domain.errors import DomainError, ProviderUnavailableError
from xchange.domain.models import Currency, RateSnapshot

log = logging.getLogger(__name__)


class ERAPIProvider(RateProvider):
    def __init__(
        self,
        base_url: Optional[str] = None,
        pivot: Optional[Currency] = None,
        timeout: Optional[int] = None,
    ):
        """
        Initialize ExchangeRate-API provider.

        Args:
            base_url: Optional custom API URL (defaults to settings.rates_api_url)
            pivot: Optional pivot currency (defaults to settings.pivot_currency)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
        """
        self.base_url = (base_url or settings.rates_api_url).rstrip("/")
        self.pivot = Currency.parse(pivot or settings.pivot_currency)
        self.timeout = timeout or settings.http_timeout_seconds

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.pivot.value}"

    def latest_rates(self) -> RateSnapshot:
        """
        Get the latest rates for every supported currency.

        Expected response:
            {"result": "success", "base_code": "EUR",
             "time_last_update_unix": 1700000000, "rates": {"EUR": 1, "GBP": 0.85, ...}}

        Returns:
            RateSnapshot with rates per 1 pivot unit

        Raises:
            ProviderUnavailableError: If the request fails, returns invalid data,
                or any rate is non-positive
        """
        try:
            log.debug("Fetching fresh rates from ExchangeRate-API (pivot=%s)", self.pivot)
            resp = requests.get(self.url, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.exceptions.Timeout:
            log.warning("ExchangeRate-API timeout after %d seconds", self.timeout)
            raise ProviderUnavailableError(f"ExchangeRate-API timeout after {self.timeout}s")
        except requests.exceptions.HTTPError as e:
            log.error("ExchangeRate-API HTTP error: %s", e)
            raise ProviderUnavailableError(f"ExchangeRate-API HTTP error: {e}") from e
        except requests.exceptions.JSONDecodeError as e:
            log.error("ExchangeRate-API returned invalid JSON: %s", e)
            raise ProviderUnavailableError(f"ExchangeRate-API returned invalid JSON: {e}") from e
        except requests.exceptions.RequestException as e:
            log.warning("ExchangeRate-API request failed (network/connection error): %s", e)
            raise ProviderUnavailableError(f"ExchangeRate-API request failed: {e}") from e
        except ValueError as e:
            log.error("ExchangeRate-API returned invalid JSON: %s", e)
            raise ProviderUnavailableError(f"ExchangeRate-API returned invalid JSON: {e}") from e

        if not isinstance(data, dict) or data.get("result") != "success":
            error_type = data.get("error-type") if isinstance(data, dict) else None
            log.error("ExchangeRate-API unsuccessful response: %s", error_type or data)
            raise ProviderUnavailableError(f"ExchangeRate-API error: {error_type or 'unexpected response'}")

        try:
            rates = data["rates"]
            base_code = data.get("base_code", self.pivot.value)
            updated_unix = data.get("time_last_update_unix")
            fetched_at = (
                datetime.fromtimestamp(int(updated_unix), tz=timezone.utc)
                if updated_unix is not None
                else datetime.now(timezone.utc)
            )
            snapshot = RateSnapshot.from_mapping(rates, pivot=base_code, fetched_at=fetched_at)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            log.error("ExchangeRate-API unexpected schema: %s", data)
            raise ProviderUnavailableError(f"ExchangeRate-API schema error: {e}") from e
        except DomainError as e:
            log.error("ExchangeRate-API returned unusable rates: %s", e)
            raise ProviderUnavailableError(f"ExchangeRate-API returned unusable rates: {e}") from e

        missing = [c.value for c in Currency if c not in snapshot]
        if missing:
            log.warning("ExchangeRate-API response lacks rates for: %s", ", ".join(missing))

        log.debug("ExchangeRate-API updated: %d rates, pivot=%s, as of %s",
                 len(snapshot), snapshot.pivot, snapshot.fetched_at)
        return snapshot
