# src/xchange/domain/conversion.py
"""
Conversion Engine - Pairwise Rates and Converted Amounts

Pure functions deriving the cross rate between two currencies from a
pivot-relative rate snapshot, and converting amounts with it. Same inputs
always give the same outputs; nothing here logs or formats.

Files that USE this module:
- xchange.domain.models (ExchangeState.live_rate)
- xchange.application.synchronizer (recomputes the derived field)
- xchange.application.ledger (rate for the credited leg)
- tests.test_conversion (unit tests)

Files that this module USES:
- xchange.domain.models (Currency, check_rate)
- xchange.domain.money (round2)
- xchange.domain.errors (MissingRateError, InvalidAmountError)
"""
from __future__ import annotations

import math
from typing import Mapping

from xchange.domain.errors import InvalidAmountError, MissingRateError
from xchange.domain.models import Currency, check_rate
from xchange.domain.money import round2


def _rate_of(currency: Currency, snapshot: Mapping[Currency, float]) -> float:
    try:
        value = snapshot[currency]
    except KeyError:
        raise MissingRateError(f"No rate for {currency} in snapshot") from None
    return check_rate(currency, value)


def pairwise_rate(
    source_currency: Currency,
    destination_currency: Currency,
    snapshot: Mapping[Currency, float],
) -> float:
    """
    Units of destination currency per 1 unit of source currency.

    Both rates are relative to the same pivot, so dividing them yields
    the cross rate.

    Args:
        source_currency: Currency converted from
        destination_currency: Currency converted into
        snapshot: Currency -> rate per 1 pivot unit

    Returns:
        snapshot[destination] / snapshot[source], exactly 1.0 for equal currencies

    Raises:
        MissingRateError: If either currency is absent from the snapshot
        InvalidRateError: If either rate is zero, negative or not finite
    """
    source_rate = _rate_of(source_currency, snapshot)
    destination_rate = _rate_of(destination_currency, snapshot)
    if source_currency == destination_currency:
        return 1.0
    return destination_rate / source_rate


def convert_amount(
    from_currency: Currency,
    to_currency: Currency,
    snapshot: Mapping[Currency, float],
    amount: float,
) -> float:
    """
    Convert an amount between currencies, rounded half-up to 2 decimal places.

    Args:
        from_currency: Currency of ``amount``
        to_currency: Currency of the result
        snapshot: Currency -> rate per 1 pivot unit
        amount: Non-negative, finite amount

    Returns:
        round2(amount * pairwise_rate(from_currency, to_currency, snapshot))

    Raises:
        MissingRateError, InvalidRateError: If the snapshot cannot price the pair
        InvalidAmountError: If amount is negative or not finite
    """
    rate = pairwise_rate(from_currency, to_currency, snapshot)
    if not math.isfinite(amount) or amount < 0:
        raise InvalidAmountError(f"Amount must be finite and non-negative, got {amount!r}")
    if amount == 0:
        return 0.0
    return round2(amount * rate)
