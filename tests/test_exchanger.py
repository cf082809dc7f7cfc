# tests/test_exchanger.py
"""
Exchanger Session Tests - End-to-End Tests for the Exchange Widget

This module contains end-to-end tests for the exchanger session (mount,
polling, edits and exchanges) and for the console commands driving it.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- xchange.application.exchanger (ExchangerSession)
- xchange.app (execute, run_console, build_provider, build_notifier)
- xchange.adapters.providers.static (StaticRateProvider)
- xchange.config.settings (Settings)
- unittest.mock (Mock notifier)
- pytest (testing framework)
"""
import asyncio
import threading
import time

import pytest  # Testing framework for writing and running tests

from unittest.mock import Mock  # Mocking utilities for testing

from xchange.adapters.notifications import CompositeNotifier, LoggingNotifier, TelegramNotifier
from xchange.adapters.providers import ERAPIProvider, StaticRateProvider
from xchange.app import HELP_TEXT, build_notifier, build_provider, execute, run_console
from xchange.application.exchanger import ExchangerSession
from xchange.application.ledger import SUCCESS_MESSAGE
from xchange.config.settings import Settings
from xchange.domain.models import Currency, RateSnapshot, Severity, Side

EUR, GBP, USD = Currency.EUR, Currency.GBP, Currency.USD


@pytest.fixture
def notifier():
    return Mock()


@pytest.fixture
def session(full_rates, notifier):
    return ExchangerSession.from_settings(
        Settings(_env_file=None), StaticRateProvider(full_rates), notifier
    )


@pytest.fixture
def loaded(session, full_rates):
    session.apply_snapshot(RateSnapshot.from_mapping(full_rates))
    return session


class TestExchangerSession:
    def test_starts_loading_with_defaults(self, session):
        view = session.view()
        assert view.loading
        assert view.live_rate is None
        assert view.source.currency is EUR
        assert view.destination.currency is GBP
        assert view.balances == {EUR: 1000.0, GBP: 1234.0}
        assert session.refresher.interval_seconds == 10

    def test_edits_while_loading_are_ignored(self, session):
        view = session.set_amount(Side.SOURCE, 100)
        assert view.source.amount == 0

    def test_apply_snapshot_ends_loading(self, loaded):
        view = loaded.view()
        assert not view.loading
        assert view.live_rate == 0.85

    def test_exchange_end_to_end(self, loaded, notifier):
        view = loaded.set_amount(Side.SOURCE, 100)
        assert view.destination.amount == 85.0

        result = loaded.exchange()
        assert result.ok
        assert loaded.view().balances == {EUR: 900.0, GBP: 1319.0}
        notifier.notify.assert_called_once_with(SUCCESS_MESSAGE, Severity.SUCCESS)

    def test_exchange_after_swap(self, loaded):
        loaded.set_amount(Side.SOURCE, 100)
        view = loaded.swap()
        assert view.source.currency is GBP
        assert view.source.amount == 85.0
        result = loaded.exchange()
        assert result.ok
        assert loaded.view().balances == {EUR: 1100.0, GBP: 1149.0}

    def test_exchange_while_loading_fails(self, session, notifier):
        result = session.exchange()
        assert not result.ok
        assert notifier.notify.call_args.args[1] is Severity.ERROR

    def test_mount_polls_and_unmount_stops(self, session):
        async def run():
            async with session:
                assert session.refresher.running
                for _ in range(100):
                    if not session.view().loading:
                        break
                    await asyncio.sleep(0.01)
                return session.view()

        view = asyncio.run(run())
        assert not view.loading
        assert view.live_rate == 0.85
        assert not session.refresher.running

    def test_set_currency(self, loaded):
        loaded.set_amount(Side.SOURCE, 100)
        view = loaded.set_currency(Side.DESTINATION, USD)
        assert view.destination == view.destination.with_amount(110.0)
        assert view.live_rate == 1.1


class TestExecute:
    def test_quit(self, loaded):
        for command in ("quit", "exit", "q"):
            assert execute(loaded, command) is None

    def test_empty_line(self, loaded):
        assert execute(loaded, "   ") == ""

    def test_help(self, loaded):
        assert execute(loaded, "help") == HELP_TEXT

    def test_show_while_loading(self, session):
        assert execute(session, "show") == "Loading live rates…"

    def test_amount(self, loaded):
        output = execute(loaded, "amount source 1,000")
        assert "-1,000.00" in output
        assert "+850.00" in output

    def test_amount_destination(self, loaded):
        output = execute(loaded, "amount to 85")
        assert "-100.00" in output

    def test_currency(self, loaded):
        execute(loaded, "amount source 100")
        output = execute(loaded, "currency destination usd")
        assert "To   USD  +110.00" in output

    def test_swap(self, loaded):
        execute(loaded, "amount source 100")
        output = execute(loaded, "swap")
        assert output.splitlines()[0].startswith("From GBP  -85.00")

    def test_exchange(self, loaded):
        execute(loaded, "amount source 100")
        output = execute(loaded, "exchange")
        assert output.startswith("Exchanged €100.00 → £85.00")
        assert execute(loaded, "balances") == "— EUR: €900.00\n— GBP: £1,319.00"

    def test_exchange_failure(self, loaded):
        output = execute(loaded, "exchange")
        assert output.startswith("Exchange failed:")

    def test_balances(self, loaded):
        assert execute(loaded, "balances") == "— EUR: €1,000.00\n— GBP: £1,234.00"

    @pytest.mark.parametrize("line,fragment", [
        ("amount source -5", "non-negative"),
        ("amount source abc", "not a number"),
        ("amount sideways 5", "Unknown side"),
        ("amount source", "Usage"),
        ("currency source XXX", "Unsupported currency"),
        ("currency source", "Usage"),
        ("fly", "Unknown command"),
    ])
    def test_errors(self, loaded, line, fragment):
        output = execute(loaded, line)
        assert output.startswith("Error:")
        assert fragment in output


class TestRunConsole:
    def test_processes_lines_until_eof(self, loaded):
        lines = iter(["amount source 100", "exchange", "balances"])

        def read_line():
            try:
                return next(lines)
            except StopIteration:
                raise EOFError

        written = []
        asyncio.run(run_console(loaded, read_line=read_line, write=written.append))

        assert written[0] == HELP_TEXT
        assert written[2].startswith("Exchanged €100.00 → £85.00")
        assert written[3] == "— EUR: €900.00\n— GBP: £1,319.00"
        assert not loaded.refresher.running

    def test_quit_stops_console(self, loaded):
        lines = iter(["quit", "amount source 100"])
        written = []
        asyncio.run(run_console(loaded, read_line=lambda: next(lines), write=written.append))
        assert written == [HELP_TEXT]
        assert loaded.view().source.amount == 0

    def test_interrupted_console_does_not_wait_for_input(self, loaded):
        release = threading.Event()

        def read_line():
            release.wait(5)
            raise EOFError

        async def run():
            await asyncio.wait_for(run_console(loaded, read_line=read_line, write=lambda _: None), timeout=0.2)

        started = time.monotonic()
        try:
            with pytest.raises(asyncio.TimeoutError):
                asyncio.run(run())
            assert time.monotonic() - started < 2
            assert not loaded.refresher.running
        finally:
            release.set()


class TestWiring:
    def test_offline_provider(self):
        provider = build_provider(Settings(_env_file=None, offline_rates={"EUR": 1, "GBP": 0.85}))
        assert isinstance(provider, StaticRateProvider)
        assert provider.latest_rates()[GBP] == 0.85

    def test_live_provider(self):
        assert isinstance(build_provider(Settings(_env_file=None)), ERAPIProvider)

    def test_logging_only_notifier(self):
        notifier = build_notifier(Settings(_env_file=None))
        assert isinstance(notifier, CompositeNotifier)
        assert [type(n) for n in notifier.notifiers] == [LoggingNotifier]

    def test_telegram_notifier(self):
        notifier = build_notifier(Settings(
            _env_file=None,
            telegram_bot_token="123456789:" + "A" * 35,
            telegram_chat_id="@rates",
        ))
        assert [type(n) for n in notifier.notifiers] == [LoggingNotifier, TelegramNotifier]
