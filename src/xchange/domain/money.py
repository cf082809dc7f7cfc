# src/xchange/domain/money.py
"""
Money / rounding helpers.

Centralized so conversion, the ledger and display all use identical
rounding semantics: ROUND_HALF_UP to 2 decimal places, computed on the
decimal string form of the value so 1.005 rounds to 1.01.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP


def round2(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
