# src/xchange/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Supported currencies and their display symbols
- Rate snapshots (rates relative to a pivot currency)
- Exchange fields and the linked two-field exchange state

Files that USE this module:
- xchange.domain.conversion (rates and amounts)
- xchange.application.* (all services use domain models)
- xchange.adapters.* (adapters create and use domain models)
- tests.* (tests use domain models for test data)

Files that this module USES:
- xchange.domain.errors (validation failures)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import math  # Finite checks for rates and amounts
from collections.abc import Mapping  # Read-only mapping protocol for snapshots
from dataclasses import dataclass, field  # Decorator for creating data classes
from datetime import datetime, timezone  # Date/time utilities for timestamps
from enum import Enum  # Enumerations for currencies, sides and severities
from types import MappingProxyType  # Immutable view over snapshot rates
from typing import Iterator, Optional

from xchange.domain.errors import (
    InvalidAmountError,
    InvalidRateError,
    UnsupportedCurrencyError,
)
from xchange.domain.money import round2  # Shared 2-decimal rounding


class Currency(str, Enum):
    """Supported currency symbols."""
    EUR = "EUR"
    GBP = "GBP"
    USD = "USD"
    CHF = "CHF"
    JPY = "JPY"

    @classmethod
    def parse(cls, code: "str | Currency") -> "Currency":
        """
        Parse a currency code such as ``"eur"`` or ``" GBP "``.

        Raises:
            UnsupportedCurrencyError: If the code is not a supported currency
        """
        if isinstance(code, cls):
            return code
        try:
            return cls(str(code).strip().upper())
        except ValueError:
            raise UnsupportedCurrencyError(f"Unsupported currency: {code!r}") from None

    def __str__(self) -> str:
        return self.value


CURRENCY_SYMBOLS: Mapping[Currency, str] = MappingProxyType({
    Currency.EUR: "€",
    Currency.GBP: "£",
    Currency.USD: "$",
    Currency.CHF: "Fr",
    Currency.JPY: "¥",
})


class Side(str, Enum):
    """Which of the two linked exchange fields an edit applies to."""
    SOURCE = "source"
    DESTINATION = "destination"

    @property
    def other(self) -> "Side":
        return Side.DESTINATION if self is Side.SOURCE else Side.SOURCE


class Severity(str, Enum):
    """Notification severity."""
    SUCCESS = "success"
    ERROR = "error"


def check_rate(currency: Currency, value: float) -> float:
    """
    Validate a single pivot-relative rate.

    Returns:
        The rate as float

    Raises:
        InvalidRateError: If the rate is zero, negative or not finite
    """
    try:
        rate = float(value)
    except (TypeError, ValueError):
        raise InvalidRateError(f"Rate for {currency} is not a number: {value!r}") from None
    if not math.isfinite(rate) or rate <= 0:
        raise InvalidRateError(f"Rate for {currency} must be positive, got {value!r}")
    return rate


@dataclass(frozen=True)
class RateSnapshot(Mapping):
    """
    Immutable set of current rates, one per currency, relative to a pivot.

    A rate means "units of currency per 1 pivot unit", so the pivot itself
    has rate 1. Snapshots are replaced wholesale on refresh and never
    updated in place.

    Attributes:
        rates: Currency -> rate per 1 pivot unit
        pivot: Reference currency the rates are expressed against
        fetched_at: When the snapshot was produced (UTC)
    """
    rates: Mapping[Currency, float]
    pivot: Currency = Currency.EUR
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        validated = {Currency.parse(c): check_rate(Currency.parse(c), v) for c, v in self.rates.items()}
        object.__setattr__(self, "rates", MappingProxyType(validated))

    @classmethod
    def from_mapping(
        cls,
        rates: Mapping[str, float],
        pivot: "str | Currency" = Currency.EUR,
        fetched_at: Optional[datetime] = None,
    ) -> "RateSnapshot":
        """
        Build a snapshot from raw provider data, skipping unsupported codes.

        Args:
            rates: Currency code -> rate per 1 pivot unit (any codes)
            pivot: Pivot currency code
            fetched_at: Optional timestamp (defaults to now, UTC)
        """
        supported = {c.value for c in Currency}
        kept = {code.upper(): value for code, value in rates.items() if code.upper() in supported}
        return cls(
            rates=kept,
            pivot=Currency.parse(pivot),
            fetched_at=fetched_at or datetime.now(timezone.utc),
        )

    def __getitem__(self, currency: Currency) -> float:
        return self.rates[currency]

    def __iter__(self) -> Iterator[Currency]:
        return iter(self.rates)

    def __len__(self) -> int:
        return len(self.rates)


@dataclass(frozen=True)
class ExchangeField:
    """
    One side of the exchange form.

    Attributes:
        currency: Selected currency
        amount: Non-negative amount, stored rounded to 2 decimal places
    """
    currency: Currency
    amount: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "currency", Currency.parse(self.currency))
        try:
            amount = float(self.amount)
        except (TypeError, ValueError):
            raise InvalidAmountError(f"Amount is not a number: {self.amount!r}") from None
        if not math.isfinite(amount) or amount < 0:
            raise InvalidAmountError(f"Amount must be finite and non-negative, got {self.amount!r}")
        object.__setattr__(self, "amount", round2(amount))

    def with_currency(self, currency: Currency) -> "ExchangeField":
        return ExchangeField(currency=currency, amount=self.amount)

    def with_amount(self, amount: float) -> "ExchangeField":
        return ExchangeField(currency=self.currency, amount=amount)


@dataclass(frozen=True)
class ExchangeState:
    """
    Complete state of the two linked exchange fields.

    Attributes:
        source: Field the user exchanges from
        destination: Field the user exchanges into
        snapshot: Latest rate snapshot, None until the first fetch completes
        authoritative: Side whose amount the user entered last
        degraded: True when the last edit could not be converted
    """
    source: ExchangeField
    destination: ExchangeField
    snapshot: Optional[RateSnapshot] = None
    authoritative: Side = Side.SOURCE
    degraded: bool = False

    @property
    def loading(self) -> bool:
        return self.snapshot is None

    def side_field(self, side: Side) -> ExchangeField:
        return self.source if side is Side.SOURCE else self.destination

    @property
    def live_rate(self) -> Optional[float]:
        """
        Units of destination per 1 unit of source, derived from the snapshot.

        Returns:
            The pairwise rate, or None while loading

        Raises:
            MissingRateError, InvalidRateError: If the snapshot cannot price the pair
        """
        if self.snapshot is None:
            return None
        from xchange.domain.conversion import pairwise_rate
        return pairwise_rate(self.source.currency, self.destination.currency, self.snapshot)
