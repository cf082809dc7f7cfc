# src/xchange/adapters/notifications/base.py
"""
Base Notifier Interface and Simple Sinks

This module defines the contract that every notification sink follows:
``notify(message, severity)``, fire-and-forget, no return value consumed.

Files that USE this module:
- xchange.application.ledger (BalanceLedger notifies exchange outcomes)
- xchange.adapters.notifications.telegram (TelegramNotifier implements Notifier)
- xchange.app (builds the notifier chain)

Files that this module USES:
- xchange.domain.models (Severity)
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Protocol

from xchange.domain.models import Severity

log = logging.getLogger(__name__)


class Notifier(Protocol):
    """Protocol for notification sinks."""
    def notify(self, message: str, severity: Severity) -> None:
        ...


class LoggingNotifier:
    """Writes notifications to the application log."""

    def __init__(self, logger_name: str = "xchange.notifications"):
        self.logger = logging.getLogger(logger_name)

    def notify(self, message: str, severity: Severity) -> None:
        if severity is Severity.ERROR:
            self.logger.error("%s", message)
        else:
            self.logger.info("%s", message)


class CompositeNotifier:
    """Fans a notification out to several sinks; one failing sink does not block the rest."""

    def __init__(self, notifiers: Iterable[Notifier]):
        self.notifiers: List[Notifier] = list(notifiers)

    def notify(self, message: str, severity: Severity) -> None:
        for notifier in self.notifiers:
            try:
                notifier.notify(message, severity)
            except Exception as e:
                log.warning("Notifier %s failed: %s", type(notifier).__name__, e)
