# src/xchange/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from xchange.shared.validators import (
    parse_amount,
    validate_bot_token,
    validate_channel_id,
)

__all__ = [
    "validate_bot_token",
    "validate_channel_id",
    "parse_amount",
]
