# src/xchange/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains the stateful services that orchestrate domain logic:
field synchronization, the balance ledger, rate polling and the session
tying them together.
"""

from xchange.application.synchronizer import (
    ExchangeSynchronizer,
    SetAmount,
    SetCurrency,
    SnapshotUpdated,
    Swap,
    initial_state,
    transition,
)
from xchange.application.ledger import BalanceLedger, ExchangeResult, apply_exchange
from xchange.application.rate_refresher import RateRefresher
from xchange.application.exchanger import ExchangerSession, ExchangeView

__all__ = [
    "ExchangeSynchronizer",
    "SetAmount",
    "SetCurrency",
    "SnapshotUpdated",
    "Swap",
    "initial_state",
    "transition",
    "BalanceLedger",
    "ExchangeResult",
    "apply_exchange",
    "RateRefresher",
    "ExchangerSession",
    "ExchangeView",
]
