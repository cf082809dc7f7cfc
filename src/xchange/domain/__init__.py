# src/xchange/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models, the conversion engine and business rules.
No dependencies on infrastructure or external systems.
"""

from xchange.domain.models import (
    CURRENCY_SYMBOLS,
    Currency,
    ExchangeField,
    ExchangeState,
    RateSnapshot,
    Severity,
    Side,
)
from xchange.domain.conversion import convert_amount, pairwise_rate
from xchange.domain.money import round2
from xchange.domain.errors import (
    DomainError,
    ExchangeError,
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidRateError,
    MissingRateError,
    ProviderUnavailableError,
    UnsupportedCurrencyError,
)

__all__ = [
    "Currency",
    "CURRENCY_SYMBOLS",
    "ExchangeField",
    "ExchangeState",
    "RateSnapshot",
    "Severity",
    "Side",
    "pairwise_rate",
    "convert_amount",
    "round2",
    "DomainError",
    "ExchangeError",
    "InsufficientBalanceError",
    "InvalidAmountError",
    "InvalidRateError",
    "MissingRateError",
    "ProviderUnavailableError",
    "UnsupportedCurrencyError",
]
