# src/xchange/shared/validators.py
"""
Input Validation Utilities - Configuration and User Input Validation

This module provides validation functions for Telegram notification settings
and for the amounts typed into the exchange form.

Files that USE this module:
- xchange.config.settings (uses validation functions in Settings field validators)
- xchange.app (parses console commands)

Files that this module USES:
- xchange.domain.errors (InvalidAmountError)
"""
import math
import re

from xchange.domain.errors import InvalidAmountError


def validate_channel_id(channel_id: str) -> bool:
    """
    Validate Telegram channel/chat ID format.

    Args:
        channel_id: Channel ID to validate

    Returns:
        True if valid, False otherwise
    """
    if not channel_id:
        return False

    # Channel IDs can be:
    # - @channelname (public channels)
    # - -1001234567890 (private channels/chats)
    # - 123456789 (user IDs)
    if channel_id.startswith('@'):
        return bool(re.match(r'^@[a-zA-Z0-9_]+$', channel_id))
    elif channel_id.startswith('-'):
        return bool(re.match(r'^-\d+$', channel_id))
    else:
        return bool(re.match(r'^\d+$', channel_id))


def validate_bot_token(token: str) -> bool:
    """
    Validate Telegram bot token format.

    Args:
        token: Bot token to validate

    Returns:
        True if valid, False otherwise
    """
    if not token:
        return False

    # Bot tokens should be in format: 123456789:ABCDEFghijklmnopQRSTUVwxyz
    pattern = r'^\d{8,10}:[A-Za-z0-9_-]{35}$'
    return bool(re.match(pattern, token))


def parse_amount(value: str) -> float:
    """
    Parse an amount typed by the user.

    Accepts thousands separators (``1,234.50``) and surrounding whitespace.

    Args:
        value: Raw input

    Returns:
        Parsed amount as float

    Raises:
        InvalidAmountError: If the input is empty, not a number, negative
            or not finite
    """
    cleaned = (value or "").strip().replace(",", "")
    if not cleaned:
        raise InvalidAmountError("Amount is empty")
    try:
        amount = float(cleaned)
    except ValueError:
        raise InvalidAmountError(f"Amount is not a number: {value!r}") from None
    if not math.isfinite(amount) or amount < 0:
        raise InvalidAmountError(f"Amount must be finite and non-negative, got {value!r}")
    return amount
