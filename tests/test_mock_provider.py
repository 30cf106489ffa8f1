"""Contract tests for the provider interface, run against MockProvider."""

import pytest

from stockterm.config import ProviderType
from stockterm.errors import FetchError, FetchErrorCode
from stockterm.models.bar import Bar
from stockterm.models.quote import Quote
from stockterm.models.timeframe import TimeFrame
from stockterm.providers import create_provider
from stockterm.providers.mock import MockProvider


class TestMockProviderCapabilities:
    def test_supports_bars_and_quotes(self, mock_provider):
        assert mock_provider.capabilities() == {"bars", "quotes"}

    def test_registry(self):
        assert isinstance(create_provider(ProviderType.MOCK), MockProvider)


class TestMockProviderBars:
    def test_auto_generates_bars(self, mock_provider):
        bars = mock_provider.get_bars("sh600519", TimeFrame.DAILY, 30)
        assert len(bars) == 30
        assert all(isinstance(b, Bar) for b in bars)

    def test_generated_bars_are_ordered(self, mock_provider):
        bars = mock_provider.get_bars("sh600519", TimeFrame.DAILY, 30)
        labels = [b.label for b in bars]
        assert labels == sorted(labels)

    def test_generated_bars_consistent(self, mock_provider):
        for b in mock_provider.get_bars("hk00700", TimeFrame.MIN15, 20):
            assert b.low <= min(b.open, b.close) <= max(b.open, b.close) <= b.high

    def test_preset_bars(self, mock_provider, sample_bars):
        mock_provider.set_bars("sh600519", sample_bars)
        assert mock_provider.get_bars("SH600519") == sample_bars

    def test_preset_bars_tail(self, mock_provider, sample_bars):
        mock_provider.set_bars("sh600519", sample_bars)
        assert mock_provider.get_bars("sh600519", count=2) == sample_bars[-2:]

    def test_preset_is_per_timeframe(self, mock_provider, sample_bars):
        mock_provider.set_bars("sh600519", sample_bars, TimeFrame.WEEKLY)
        assert mock_provider.get_bars("sh600519", TimeFrame.WEEKLY) == sample_bars
        assert mock_provider.get_bars("sh600519", TimeFrame.DAILY, 10) != sample_bars

    def test_records_calls(self, mock_provider):
        mock_provider.get_bars("sh600519")
        mock_provider.get_quote("sz000858")
        assert mock_provider.calls == [("bars", "sh600519"), ("quote", "sz000858")]


class TestMockProviderQuotes:
    def test_default_quote(self, mock_provider):
        quote = mock_provider.get_quote("sh600519")
        assert isinstance(quote, Quote)
        assert quote.symbol == "sh600519"
        assert quote.current > 0

    def test_preset_quote(self, mock_provider, sample_quote):
        mock_provider.set_quote("sh600519", sample_quote)
        assert mock_provider.get_quote("sh600519") is sample_quote

    def test_get_quotes_serial(self, mock_provider):
        quotes = mock_provider.get_quotes(["sh600519", "sz000858"])
        assert [q.symbol for q in quotes] == ["sh600519", "sz000858"]


class TestMockProviderErrors:
    def test_set_error(self, mock_provider):
        mock_provider.set_error("sh600519", FetchError("boom", FetchErrorCode.TIMEOUT, retryable=True))
        with pytest.raises(FetchError):
            mock_provider.get_quote("sh600519")
        mock_provider.clear_error("sh600519")
        assert mock_provider.get_quote("sh600519").symbol == "sh600519"

    def test_empty_symbol(self, mock_provider):
        with pytest.raises(FetchError) as exc_info:
            mock_provider.get_bars("")
        assert exc_info.value.code == FetchErrorCode.NOT_FOUND
