# src/xchange/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions that represent
business rule violations and domain errors.
"""


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class MissingRateError(DomainError):
    """Raised when a currency has no entry in the rate snapshot."""
    pass


class InvalidRateError(DomainError):
    """Raised when a rate value is invalid (e.g., negative or zero)."""
    pass


class InvalidAmountError(DomainError):
    """Raised when an amount is negative or not a finite number."""
    pass


class UnsupportedCurrencyError(DomainError):
    """Raised when a currency code is not one of the supported currencies."""
    pass


class ProviderUnavailableError(DomainError):
    """Raised when a rate provider is unavailable."""
    pass


class ExchangeError(DomainError):
    """Raised when an exchange cannot be applied to the balance ledger."""
    pass


class InsufficientBalanceError(ExchangeError):
    """Raised when the source balance does not cover the debit."""
    pass
