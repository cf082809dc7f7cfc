# tests/conftest.py
"""
Shared Test Fixtures

Files that USE this module:
- pytest (fixtures are injected into every test module)

Files that this module USES:
- xchange.domain.models (Currency, RateSnapshot for test data)
"""
import pytest  # Testing framework for writing and running tests

from xchange.domain.models import Currency, RateSnapshot  # Domain models for test data


@pytest.fixture
def snapshot():
    """EUR-pivoted snapshot covering EUR, GBP and USD."""
    return RateSnapshot(rates={Currency.EUR: 1.0, Currency.GBP: 0.85, Currency.USD: 1.1})


@pytest.fixture
def full_rates():
    """Raw rate table for every supported currency (plus one unsupported)."""
    return {"EUR": 1.0, "GBP": 0.85, "USD": 1.1, "CHF": 0.95, "JPY": 160.0, "AUD": 1.6}
