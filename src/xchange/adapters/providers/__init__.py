# src/xchange/adapters/providers/__init__.py
"""
Provider Adapters - External Rate Sources

This package contains adapters for exchange rate sources.
All providers implement the RateProvider interface.
"""

from xchange.adapters.providers.base import RateProvider
from xchange.adapters.providers.erapi import ERAPIProvider
from xchange.adapters.providers.static import StaticRateProvider

__all__ = [
    "RateProvider",
    "ERAPIProvider",
    "StaticRateProvider",
]
