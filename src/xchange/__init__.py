# src/xchange/__init__.py
"""
XChange - Live Currency Exchange Core

The calculation and synchronization core of a currency exchange widget:
live pairwise rates refreshed from a rate provider, two linked amount fields
that stay consistent as currencies, amounts and rates change, and a mock
balance ledger debited/credited on exchange.
"""

__version__ = "1.0.0"
