# src/xchange/app.py
"""
Application Entry Point - Console Exchange Widget

This module serves as the composition root: it loads settings, configures
logging, picks the rate provider and notification sinks, and drives an
ExchangerSession from a line-oriented console. Console input is read on a
daemon thread, so user commands and rate refreshes run one at a time on the same
event loop.

Files that USE this module:
- python -m xchange / the ``xchange`` console script

Files that this module USES:
- xchange.shared.logging_conf (setup_logging for logging configuration)
- xchange.shared.validators (parse_amount for typed amounts)
- xchange.config (settings for configuration management)
- xchange.application.exchanger (ExchangerSession)
- xchange.adapters.providers (ERAPIProvider, StaticRateProvider)
- xchange.adapters.notifications (LoggingNotifier, TelegramNotifier, CompositeNotifier)
- xchange.adapters.formatting (render_view, balances_lines)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import asyncio  # Event loop running the session and console
import logging  # Standard library for logging messages and errors
import threading  # Daemon thread for blocking console reads
from typing import Callable, List, Optional, Tuple

from xchange.adapters.formatting import balances_lines, format_amount, render_view
from xchange.adapters.notifications import CompositeNotifier, LoggingNotifier, Notifier, TelegramNotifier
from xchange.adapters.providers import ERAPIProvider, RateProvider, StaticRateProvider
from xchange.application.exchanger import ExchangerSession
from xchange.config import Settings, settings
from xchange.domain.errors import DomainError
from xchange.domain.models import Currency, Side
from xchange.shared.logging_conf import setup_logging
from xchange.shared.validators import parse_amount

logger = logging.getLogger(__name__)

HELP_TEXT = "\n".join([
    "Commands:",
    "  amount <source|destination> <value>   enter an amount",
    "  currency <source|destination> <code>  pick a currency (" + ", ".join(c.value for c in Currency) + ")",
    "  swap                                  flip source and destination",
    "  exchange                              exchange the source amount",
    "  show                                  show the exchange form",
    "  balances                              show balances",
    "  quit                                  exit",
])

_SIDES = {
    "source": Side.SOURCE,
    "src": Side.SOURCE,
    "from": Side.SOURCE,
    "destination": Side.DESTINATION,
    "dest": Side.DESTINATION,
    "to": Side.DESTINATION,
}


class CommandError(ValueError):
    """Raised for malformed console commands."""


def _parse_side(token: str) -> Side:
    try:
        return _SIDES[token.lower()]
    except KeyError:
        raise CommandError(f"Unknown side {token!r}, use 'source' or 'destination'") from None


def _split(line: str) -> Tuple[str, List[str]]:
    parts = line.strip().split()
    if not parts:
        return "", []
    return parts[0].lower(), parts[1:]


def execute(session: ExchangerSession, line: str) -> Optional[str]:
    """
    Run one console command against the session.

    Args:
        session: Session to operate on
        line: Raw command line

    Returns:
        Text to print, or None when the user asked to quit
    """
    command, args = _split(line)
    try:
        if command in ("quit", "exit", "q"):
            return None
        if command == "":
            return ""
        if command in ("help", "?"):
            return HELP_TEXT
        if command == "show":
            return render_view(session.view())
        if command == "balances":
            return "\n".join(balances_lines(session.view().balances)) or "No balances"
        if command == "swap":
            return render_view(session.swap())
        if command == "amount":
            if len(args) != 2:
                raise CommandError("Usage: amount <source|destination> <value>")
            return render_view(session.set_amount(_parse_side(args[0]), parse_amount(args[1])))
        if command == "currency":
            if len(args) != 2:
                raise CommandError("Usage: currency <source|destination> <code>")
            return render_view(session.set_currency(_parse_side(args[0]), Currency.parse(args[1])))
        if command == "exchange":
            result = session.exchange()
            if not result.ok:
                return f"Exchange failed: {result.error}"
            view = session.view()
            return (
                f"Exchanged {format_amount(view.source.amount, view.source.currency)} → "
                f"{format_amount(result.credited or 0.0, view.destination.currency)}\n"
                + render_view(view)
            )
        raise CommandError(f"Unknown command {command!r}. Type 'help' for the list of commands.")
    except (CommandError, DomainError) as e:
        return f"Error: {e}"


def _read_line_async(loop: asyncio.AbstractEventLoop, read_line: Callable[[], str]) -> "asyncio.Future[str]":
    """
    Run one blocking read on a daemon thread and resolve a future with it.

    The thread is not joined at shutdown, so an interrupted session exits
    without waiting for the pending read to return.
    """
    future: "asyncio.Future[str]" = loop.create_future()

    def resolve(result: Optional[str], error: Optional[Exception]) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    def worker() -> None:
        try:
            line, error = read_line(), None
        except Exception as e:
            line, error = None, e
        try:
            loop.call_soon_threadsafe(resolve, line, error)
        except RuntimeError:
            # Event loop already closed
            logger.debug("Console input dropped after shutdown")

    threading.Thread(target=worker, name="console-input", daemon=True).start()
    return future


async def run_console(
    session: ExchangerSession,
    read_line: Callable[[], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """
    Mount the session and process console commands until quit or EOF.

    Args:
        session: Session to drive (started and stopped here)
        read_line: Blocking line reader (default: input)
        write: Output callback (default: print)
    """
    loop = asyncio.get_running_loop()
    async with session:
        write(HELP_TEXT)
        while True:
            try:
                line = await _read_line_async(loop, read_line)
            except EOFError:
                break
            output = execute(session, line)
            if output is None:
                break
            if output:
                write(output)


def build_provider(settings: Settings) -> RateProvider:
    """Offline table when OFFLINE_RATES is set, ExchangeRate-API otherwise."""
    if settings.offline_rates is not None:
        logger.info("Using offline rates for %s", ", ".join(sorted(settings.offline_rates)))
        return StaticRateProvider(settings.offline_rates, pivot=settings.pivot_currency)
    return ERAPIProvider()


def build_notifier(settings: Settings) -> Notifier:
    """Log every outcome; also send to Telegram when configured."""
    notifiers: List[Notifier] = [LoggingNotifier()]
    if settings.telegram_enabled:
        notifiers.append(TelegramNotifier(settings.telegram_bot_token, settings.telegram_chat_id))
        logger.info("Telegram notifications enabled for chat %s", settings.telegram_chat_id)
    return CompositeNotifier(notifiers)


async def _drain(notifier: Notifier) -> None:
    for sink in getattr(notifier, "notifiers", [notifier]):
        if isinstance(sink, TelegramNotifier):
            await sink.drain()


async def _amain(settings: Settings) -> None:
    notifier = build_notifier(settings)
    session = ExchangerSession.from_settings(settings, build_provider(settings), notifier)
    try:
        await run_console(session)
    finally:
        await _drain(notifier)


def main() -> None:
    """
    Start the console exchange widget.

    This function:
    1. Loads settings and sets up logging
    2. Builds the rate provider, notifiers and session
    3. Runs the console loop until quit/EOF, polling rates in the background
    """
    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )
    logger.info(
        "Starting exchanger: pivot=%s, refresh=%ss, %s → %s",
        settings.pivot_currency.value,
        settings.rates_refresh_seconds,
        settings.default_source_currency.value,
        settings.default_destination_currency.value,
    )

    try:
        asyncio.run(_amain(settings))
    except KeyboardInterrupt:
        logger.info("Stopped by user (KeyboardInterrupt)")


if __name__ == "__main__":
    main()
