# src/xchange/application/ledger.py
"""
Balance Ledger - Mock Per-Currency Balances

This module holds the mock balances shown next to each exchange field and
applies the debit/credit of an exchange. Both legs are computed on a copy and
swapped in together, so a failed exchange never leaves a half-applied ledger.

Files that USE this module:
- xchange.application.exchanger (ExchangerSession.exchange)
- tests.test_ledger (unit tests)

Files that this module USES:
- xchange.domain.conversion (pairwise_rate)
- xchange.domain.money (round2)
- xchange.domain.models (Currency, ExchangeField, RateSnapshot, Severity)
- xchange.adapters.notifications.base (Notifier protocol)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from xchange.adapters.notifications.base import Notifier
from xchange.domain.conversion import pairwise_rate
from xchange.domain.errors import DomainError, ExchangeError, InsufficientBalanceError
from xchange.domain.models import Currency, ExchangeField, RateSnapshot, Severity
from xchange.domain.money import round2

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Successfully exchanged currency"
FAILURE_MESSAGE = "Exchange failed. Try again."


def apply_exchange(
    source: ExchangeField,
    destination_currency: Currency,
    rate: float,
    balances: Mapping[Currency, float],
    enforce_balance: bool = True,
) -> Dict[Currency, float]:
    """
    Compute balances after exchanging ``source.amount`` at ``rate``.

    Args:
        source: Currency and amount being sold
        destination_currency: Currency being bought
        rate: Units of destination per 1 unit of source
        balances: Current balances (not modified)
        enforce_balance: Reject debits larger than the source balance

    Returns:
        New balances with the source debited and the destination credited

    Raises:
        ExchangeError: If the amount is zero
        InsufficientBalanceError: If enforce_balance and the source balance is too low
    """
    debit = source.amount
    if debit <= 0:
        raise ExchangeError("Nothing to exchange: amount must be greater than zero")

    available = balances.get(source.currency, 0.0)
    if enforce_balance and available < debit:
        raise InsufficientBalanceError(
            f"Insufficient {source.currency} balance: {available:.2f} < {debit:.2f}"
        )

    credit = round2(debit * rate)
    updated = dict(balances)
    updated[source.currency] = round2(updated.get(source.currency, 0.0) - debit)
    updated[destination_currency] = round2(updated.get(destination_currency, 0.0) + credit)
    return updated


@dataclass(frozen=True)
class ExchangeResult:
    """
    Outcome of an exchange attempt.

    Attributes:
        ok: True when the balances were updated
        balances: Balances after the attempt (unchanged on failure)
        rate: Pairwise rate used, if one could be computed
        credited: Amount credited to the destination on success
        error: Failure reason on failure
    """
    ok: bool
    balances: Mapping[Currency, float]
    rate: Optional[float] = None
    credited: Optional[float] = None
    error: Optional[ExchangeError] = None


class BalanceLedger:
    """Owns the mock balances and applies exchanges atomically."""

    def __init__(
        self,
        balances: Mapping[Currency, float],
        notifier: Notifier,
        enforce_balance: bool = True,
    ):
        """
        Args:
            balances: Initial balances per currency
            notifier: Sink receiving one success/error notification per exchange
            enforce_balance: Reject exchanges exceeding the source balance
        """
        self._balances: Dict[Currency, float] = {
            Currency.parse(c): round2(v) for c, v in balances.items()
        }
        self.notifier = notifier
        self.enforce_balance = enforce_balance

    @property
    def balances(self) -> Mapping[Currency, float]:
        return MappingProxyType(self._balances)

    def balance(self, currency: Currency) -> float:
        return self._balances.get(currency, 0.0)

    def exchange(
        self,
        source: ExchangeField,
        destination: ExchangeField,
        snapshot: Optional[RateSnapshot],
    ) -> ExchangeResult:
        """
        Exchange ``source.amount`` into ``destination.currency`` at the live rate.

        Any domain failure (no snapshot yet, missing or invalid rate,
        insufficient balance) leaves the balances untouched and is reported
        through the notifier instead of raised.

        Returns:
            ExchangeResult describing the outcome
        """
        rate: Optional[float] = None
        try:
            if snapshot is None:
                raise ExchangeError("Live rates are not available yet")
            rate = pairwise_rate(source.currency, destination.currency, snapshot)
            updated = apply_exchange(
                source,
                destination.currency,
                rate,
                self._balances,
                enforce_balance=self.enforce_balance,
            )
        except DomainError as e:
            error = e if isinstance(e, ExchangeError) else ExchangeError(str(e))
            if error is not e:
                error.__cause__ = e
            logger.warning("Exchange %s %.2f -> %s failed: %s",
                           source.currency, source.amount, destination.currency, e)
            self.notifier.notify(f"{FAILURE_MESSAGE} ({e})", Severity.ERROR)
            return ExchangeResult(ok=False, balances=dict(self._balances), rate=rate, error=error)

        self._balances = updated
        credited = round2(source.amount * rate)
        logger.info("Exchanged %.2f %s -> %.2f %s at %.6f",
                    source.amount, source.currency, credited, destination.currency, rate)
        self.notifier.notify(SUCCESS_MESSAGE, Severity.SUCCESS)
        return ExchangeResult(ok=True, balances=dict(self._balances), rate=rate, credited=credited)
