"""Tests for the refresh worker and the curses-free state layer."""

import os
import subprocess
import sys
import time
from pathlib import Path

import pytest

from stockterm.config import AppConfig, ProviderType
from stockterm.errors import FetchError, FetchErrorCode
from stockterm.events import (
    BarsLoaded,
    BarsRequest,
    QuotesLoaded,
    QuotesRequest,
    RefreshWorker,
)
from stockterm.manager import QuoteManager
from stockterm.models.timeframe import TimeFrame
from stockterm.providers.mock import MockProvider

SRC = Path(__file__).resolve().parent.parent / "src"


@pytest.fixture
def provider() -> MockProvider:
    return MockProvider()


@pytest.fixture
def worker(provider) -> RefreshWorker:
    return RefreshWorker(QuoteManager(AppConfig(providers=[ProviderType.MOCK]), providers=[provider]))


class TestWorkerProcess:
    def test_bars(self, worker):
        msg = worker.process(BarsRequest("sh600519", TimeFrame.DAILY, 30))
        assert isinstance(msg, BarsLoaded)
        assert msg.key == ("sh600519", TimeFrame.DAILY)
        assert len(msg.bars) == 30
        assert msg.error is None

    def test_bars_failure(self, worker, provider):
        provider.set_error("sh600519", FetchError("gone", FetchErrorCode.NOT_FOUND))
        msg = worker.process(BarsRequest("sh600519", TimeFrame.DAILY))
        assert msg.bars == ()
        assert msg.error.code == FetchErrorCode.NOT_FOUND

    def test_quotes_split(self, worker, provider):
        provider.set_error("sz000858", FetchError("gone", FetchErrorCode.NOT_FOUND))
        msg = worker.process(QuotesRequest(("sh600519", "sz000858")))
        assert isinstance(msg, QuotesLoaded)
        assert set(msg.quotes) == {"sh600519"}
        assert set(msg.errors) == {"sz000858"}


class TestWorkerThread:
    def test_round_trip(self, worker):
        worker.start()
        try:
            worker.submit(BarsRequest("sh600519", TimeFrame.DAILY, 10))
            worker.submit(QuotesRequest(("sh600519",)))
            messages = []
            deadline = time.monotonic() + 5.0
            while len(messages) < 2 and time.monotonic() < deadline:
                messages.extend(worker.drain())
                time.sleep(0.01)
        finally:
            worker.stop()
        assert isinstance(messages[0], BarsLoaded)
        assert isinstance(messages[1], QuotesLoaded)

    def test_unexpected_error_becomes_message(self, worker, provider):
        def explode(*args, **kwargs):
            raise RuntimeError("bug")
        provider.get_bars = explode  # type: ignore[method-assign]
        worker.start()
        try:
            worker.submit(BarsRequest("sh600519", TimeFrame.DAILY))
            messages = []
            deadline = time.monotonic() + 5.0
            while not messages and time.monotonic() < deadline:
                messages.extend(worker.drain())
                time.sleep(0.01)
        finally:
            worker.stop()
        assert messages[0].error is not None
        assert "bug" in str(messages[0].error)

    def test_drain_empty(self, worker):
        assert worker.drain() == []


class TestImportsWithoutCurses:
    def test_state_and_events_do_not_need_curses(self):
        code = (
            "import sys; sys.modules['curses'] = None; "
            "import stockterm.events, stockterm.state; "
            "print('ok')"
        )
        env = dict(os.environ, PYTHONPATH=str(SRC))
        result = subprocess.run(
            [sys.executable, "-c", code], env=env, capture_output=True, text=True, timeout=60,
        )
        assert result.returncode == 0, result.stderr
        assert result.stdout.strip() == "ok"
