# src/xchange/adapters/formatting/__init__.py
"""
Formatting Adapters - Plain-Text Rendering

This package renders the exchange view for text front-ends.
"""

from xchange.adapters.formatting.formatter import (
    balances_lines,
    field_line,
    format_amount,
    live_rate_line,
    render_view,
)

__all__ = [
    "balances_lines",
    "field_line",
    "format_amount",
    "live_rate_line",
    "render_view",
]
