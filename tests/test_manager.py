"""Tests for QuoteManager: fallback chain and inspection."""

import logging

import pytest

from stockterm.config import AppConfig, ProviderType
from stockterm.errors import FetchError, FetchErrorCode
from stockterm.manager import QuoteManager
from stockterm.models.bar import Bar
from stockterm.models.quote import Quote
from stockterm.providers.mock import MockProvider
from stockterm.providers.sina import SinaProvider


def _make_manager(n_providers: int = 1) -> QuoteManager:
    config = AppConfig(providers=[ProviderType.MOCK] * n_providers, kline_length=50)
    return QuoteManager(config)


class TestManagerBars:
    def test_get_bars(self):
        mgr = _make_manager()
        bars = mgr.get_bars("sh600519")
        assert len(bars) == 50
        assert all(isinstance(b, Bar) for b in bars)

    def test_explicit_count(self):
        assert len(_make_manager().get_bars("sh600519", count=7)) == 7

    def test_builds_sina_with_timeout(self):
        mgr = QuoteManager(AppConfig(providers=[ProviderType.SINA], timeout_seconds=2.5))
        assert isinstance(mgr.providers[0], SinaProvider)
        assert mgr.providers[0].timeout == 2.5
        mgr.close()

    def test_inspection_warnings_logged(self, caplog):
        mgr = _make_manager()
        mgr.providers[0].set_bars("sh600519", [  # type: ignore[attr-defined]
            Bar("2025-01-03", 10.0, 11.0, 9.0, 10.5),
            Bar("2025-01-02", 0.0, 0.0, 0.0, 0.0),
        ])
        with caplog.at_level(logging.WARNING, logger="stockterm.manager"):
            bars = mgr.get_bars("sh600519")
        assert len(bars) == 2
        assert "zeroed_bars" in caplog.text
        assert "label_order" in caplog.text


class TestManagerFallback:
    def test_fallback_on_retryable_error(self):
        """If first provider fails with retryable error, try next."""
        mgr = _make_manager(2)

        def failing_get_bars(*args, **kwargs):
            raise FetchError("fail", FetchErrorCode.TIMEOUT, retryable=True)
        mgr.providers[0].get_bars = failing_get_bars  # type: ignore[method-assign]

        bars = mgr.get_bars("sh600519")
        assert len(bars) > 0

    def test_non_retryable_raises_immediately(self):
        """Non-retryable errors skip fallback and raise."""
        mgr = _make_manager(2)
        mgr.providers[0].set_error(  # type: ignore[attr-defined]
            "sh600519", FetchError("gone", FetchErrorCode.NOT_FOUND)
        )

        with pytest.raises(FetchError) as exc_info:
            mgr.get_bars("sh600519")
        assert exc_info.value.code == FetchErrorCode.NOT_FOUND
        assert mgr.providers[1].calls == []  # type: ignore[attr-defined]

    def test_all_providers_fail_raises_last(self):
        mgr = _make_manager()
        mgr.providers[0].set_error(  # type: ignore[attr-defined]
            "sh600519", FetchError("timeout", FetchErrorCode.TIMEOUT, retryable=True)
        )
        with pytest.raises(FetchError) as exc_info:
            mgr.get_bars("sh600519")
        assert exc_info.value.code == FetchErrorCode.TIMEOUT

    def test_no_providers(self):
        mgr = QuoteManager(AppConfig(), providers=[])
        with pytest.raises(FetchError) as exc_info:
            mgr.get_bars("sh600519")
        assert exc_info.value.code == FetchErrorCode.NO_DATA


class TestManagerQuotes:
    def test_get_quote(self):
        quote = _make_manager().get_quote("sh600519")
        assert isinstance(quote, Quote)
        assert quote.symbol == "sh600519"

    def test_get_quotes_keeps_errors_in_place(self):
        provider = MockProvider()
        provider.set_error("sz000858", FetchError("gone", FetchErrorCode.NOT_FOUND))
        mgr = QuoteManager(AppConfig(), providers=[provider])
        results = mgr.get_quotes(["sh600519", "sz000858", "sh601318"])
        assert isinstance(results[0], Quote)
        assert isinstance(results[1], FetchError)
        assert isinstance(results[2], Quote)

    def test_quote_fallback(self):
        first, second = MockProvider(), MockProvider()
        first.set_error("sh600519", FetchError("slow", FetchErrorCode.TIMEOUT, retryable=True))
        mgr = QuoteManager(AppConfig(), providers=[first, second])
        assert mgr.get_quote("sh600519").symbol == "sh600519"
        assert second.calls == [("quote", "sh600519")]
