# src/xchange/application/synchronizer.py
"""
Dual-Field Synchronizer - Linked Source/Destination Amounts

This module keeps the two exchange fields consistent with each other and with
the latest rate snapshot. Every edit is a single state transition: the full
previous ExchangeState plus one event in, the full next ExchangeState out.
The field the user typed into last is authoritative; the other field is
always derived from it.

Files that USE this module:
- xchange.application.exchanger (ExchangerSession owns an ExchangeSynchronizer)
- tests.test_synchronizer (unit tests)

Files that this module USES:
- xchange.domain.conversion (convert_amount)
- xchange.domain.models (ExchangeState, ExchangeField, RateSnapshot, Side, Currency)
- xchange.domain.errors (MissingRateError, InvalidRateError)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Union

from xchange.domain.conversion import convert_amount
from xchange.domain.errors import InvalidRateError, MissingRateError
from xchange.domain.models import (
    Currency,
    ExchangeField,
    ExchangeState,
    RateSnapshot,
    Side,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetCurrency:
    """User picked a new currency for one side."""
    side: Side
    currency: Currency


@dataclass(frozen=True)
class SetAmount:
    """User typed a new amount into one side."""
    side: Side
    amount: float


@dataclass(frozen=True)
class Swap:
    """User flipped source and destination."""


@dataclass(frozen=True)
class SnapshotUpdated:
    """A fresh rate snapshot arrived from the provider."""
    snapshot: RateSnapshot


ExchangeEvent = Union[SetCurrency, SetAmount, Swap, SnapshotUpdated]


def _with_side(state: ExchangeState, side: Side, value: ExchangeField) -> ExchangeState:
    if side is Side.SOURCE:
        return replace(state, source=value)
    return replace(state, destination=value)


def _derive(state: ExchangeState) -> ExchangeState:
    """Recompute the non-authoritative field from the authoritative one."""
    edited = state.authoritative
    authoritative = state.side_field(edited)
    derived = state.side_field(edited.other)
    amount = convert_amount(
        authoritative.currency,
        derived.currency,
        state.snapshot,
        authoritative.amount,
    )
    return _with_side(state, edited.other, derived.with_amount(amount))


def _apply_edit(state: ExchangeState, edited: ExchangeState) -> ExchangeState:
    """
    Finish an edit by deriving the paired field.

    A snapshot that cannot price the pair leaves the previous amounts in
    place and flags the state as degraded.
    """
    try:
        return replace(_derive(edited), degraded=False)
    except (MissingRateError, InvalidRateError) as e:
        logger.warning("Cannot convert %s -> %s, keeping previous amounts: %s",
                       edited.source.currency, edited.destination.currency, e)
        return replace(state, degraded=True)


def transition(state: ExchangeState, event: ExchangeEvent) -> ExchangeState:
    """
    Apply one event to the exchange state.

    Args:
        state: Complete previous state
        event: SetCurrency, SetAmount, Swap or SnapshotUpdated

    Returns:
        Complete next state (``state`` itself when the event is a no-op)

    Raises:
        InvalidAmountError: If SetAmount carries a negative or non-finite amount
        TypeError: If the event type is unknown
    """
    if isinstance(event, SnapshotUpdated):
        return replace(state, snapshot=event.snapshot, degraded=False)

    if isinstance(event, Swap):
        # Pure relabeling: amounts are not recomputed.
        return replace(
            state,
            source=state.destination,
            destination=state.source,
            authoritative=state.authoritative.other,
        )

    if isinstance(event, SetAmount):
        if state.snapshot is None:
            logger.debug("Ignoring amount edit while rates are loading")
            return state
        current = state.side_field(event.side)
        edited = replace(
            _with_side(state, event.side, current.with_amount(event.amount)),
            authoritative=event.side,
        )
        return _apply_edit(state, edited)

    if isinstance(event, SetCurrency):
        if state.snapshot is None:
            logger.debug("Ignoring currency change while rates are loading")
            return state
        currency = Currency.parse(event.currency)
        current = state.side_field(event.side)
        edited = _with_side(state, event.side, current.with_currency(currency))
        return _apply_edit(state, edited)

    raise TypeError(f"Unknown exchange event: {event!r}")


def initial_state(
    source_currency: Currency = Currency.EUR,
    destination_currency: Currency = Currency.GBP,
) -> ExchangeState:
    """Default state at mount: zero amounts, no snapshot yet."""
    return ExchangeState(
        source=ExchangeField(currency=source_currency, amount=0),
        destination=ExchangeField(currency=destination_currency, amount=0),
    )


class ExchangeSynchronizer:
    """Owns the exchange state and applies user edits and rate updates to it."""

    def __init__(self, state: Optional[ExchangeState] = None):
        self._state = state if state is not None else initial_state()

    @property
    def state(self) -> ExchangeState:
        return self._state

    @property
    def source(self) -> ExchangeField:
        return self._state.source

    @property
    def destination(self) -> ExchangeField:
        return self._state.destination

    def dispatch(self, event: ExchangeEvent) -> ExchangeState:
        self._state = transition(self._state, event)
        return self._state

    def set_currency(self, side: Side, currency: Currency) -> ExchangeState:
        return self.dispatch(SetCurrency(side=Side(side), currency=currency))

    def set_amount(self, side: Side, amount: float) -> ExchangeState:
        return self.dispatch(SetAmount(side=Side(side), amount=amount))

    def swap(self) -> ExchangeState:
        return self.dispatch(Swap())

    def on_snapshot_update(self, snapshot: RateSnapshot) -> ExchangeState:
        state = self.dispatch(SnapshotUpdated(snapshot=snapshot))
        logger.debug("Snapshot updated (pivot=%s, %d rates, fetched_at=%s)",
                     snapshot.pivot, len(snapshot), snapshot.fetched_at)
        return state

    def live_rate(self) -> Optional[float]:
        """
        Current pairwise rate for display.

        Returns:
            Units of destination per 1 unit of source, or None while loading,
            while degraded, or when the snapshot cannot price the current pair
        """
        if self._state.degraded:
            return None
        try:
            return self._state.live_rate
        except (MissingRateError, InvalidRateError) as e:
            logger.debug("Live rate unavailable: %s", e)
            return None
