# src/xchange/adapters/notifications/__init__.py
"""
Notification Adapters - Exchange Outcome Sinks

This package contains sinks for success/error notifications.
All sinks implement the Notifier protocol.
"""

from xchange.adapters.notifications.base import CompositeNotifier, LoggingNotifier, Notifier
from xchange.adapters.notifications.telegram import TelegramNotifier

__all__ = [
    "Notifier",
    "LoggingNotifier",
    "CompositeNotifier",
    "TelegramNotifier",
]
