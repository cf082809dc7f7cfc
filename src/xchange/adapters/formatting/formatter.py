# src/xchange/adapters/formatting/formatter.py
"""
View Formatter - Text Formatting and Presentation

This module turns an ExchangeView into plain text: the two exchange fields
with their balances, the live-rate line between them, and loading/degraded
notices.

Files that USE this module:
- xchange.app (console front-end prints rendered views)
- tests.test_formatter (unit tests)

Files that this module USES:
- xchange.domain.models (Currency, CURRENCY_SYMBOLS, ExchangeField, Side)
- xchange.application.exchanger (ExchangeView)
"""
from __future__ import annotations

from typing import List, Mapping, Optional

from xchange.application.exchanger import ExchangeView
from xchange.domain.models import CURRENCY_SYMBOLS, Currency, ExchangeField, Side

LOADING_TEXT = "Loading live rates…"
DEGRADED_TEXT = "⚠️ Live rate unavailable for this pair, showing last values"


def format_amount(amount: float, currency: Optional[Currency] = None) -> str:
    """
    Format an amount with thousands separators and 2 decimals.

    Args:
        amount: Amount to format
        currency: Optional currency whose symbol is prefixed

    Returns:
        e.g. "€1,234.50" or "1,234.50"
    """
    text = f"{amount:,.2f}"
    if currency is None:
        return text
    return f"{CURRENCY_SYMBOLS[currency]}{text}"


def live_rate_line(
    rate: Optional[float],
    source_currency: Currency,
    destination_currency: Currency,
    decimals: int = 4,
) -> str:
    """
    Format the live pairwise rate, e.g. "1 € = 0.8500 £".

    Shows "N/A" when no rate is available.
    """
    value = "N/A" if rate is None else f"{rate:.{decimals}f}"
    return f"1 {CURRENCY_SYMBOLS[source_currency]} = {value} {CURRENCY_SYMBOLS[destination_currency]}"


def field_line(side: Side, item: ExchangeField, balance: float) -> str:
    label = "From" if side is Side.SOURCE else "To"
    sign = "-" if side is Side.SOURCE else "+"
    amount = f"{sign}{format_amount(item.amount)}" if item.amount else format_amount(0)
    return f"{label:<4} {item.currency.value}  {amount}   (balance: {format_amount(balance, item.currency)})"


def balances_lines(balances: Mapping[Currency, float]) -> List[str]:
    # Declaration order of Currency, not insertion order
    return [
        f"— {currency.value}: {format_amount(balances[currency], currency)}"
        for currency in Currency
        if currency in balances
    ]


def render_view(view: ExchangeView) -> str:
    """
    Render the whole widget as text.

    Args:
        view: Snapshot of the session state

    Returns:
        Multi-line string; only the loading notice while rates are loading
    """
    if view.loading:
        return LOADING_TEXT

    lines = [
        field_line(Side.SOURCE, view.source, view.balances.get(view.source.currency, 0.0)),
        "     " + live_rate_line(view.live_rate, view.source.currency, view.destination.currency),
        field_line(Side.DESTINATION, view.destination, view.balances.get(view.destination.currency, 0.0)),
    ]
    if view.degraded or view.live_rate is None:
        lines.append(DEGRADED_TEXT)
    return "\n".join(lines)
