"""Tests for data models."""

import pytest

from stockterm.models.bar import Bar, parse_price
from stockterm.models.quote import Quote
from stockterm.models.timeframe import TimeFrame


class TestBar:
    def test_frozen(self, sample_bars):
        with pytest.raises(AttributeError):
            sample_bars[0].close = 1.0  # type: ignore[misc]

    def test_bullish(self):
        assert Bar("d", 10.0, 12.0, 9.0, 11.0).is_bullish
        assert Bar("d", 10.0, 12.0, 9.0, 10.0).is_bullish
        assert not Bar("d", 10.0, 12.0, 9.0, 9.5).is_bullish

    def test_from_text(self):
        bar = Bar.from_text("2025-02-11", "10.5", "11", "abc", "", None)
        assert bar.open == 10.5
        assert bar.high == 11.0
        assert bar.low == 0.0
        assert bar.close == 0.0
        assert bar.volume == 0.0

    @pytest.mark.parametrize("raw", [
        None, "", "n/a", float("nan"), object(),
        "inf", "-inf", float("inf"), "1e999",
    ])
    def test_parse_price_defaults(self, raw):
        assert parse_price(raw) == 0.0


class TestQuote:
    def test_change(self, sample_quote):
        assert sample_quote.change == pytest.approx(15.5)
        assert sample_quote.change_percent == pytest.approx(15.5 / 1475.0 * 100)

    def test_change_percent_without_pre_close(self):
        q = Quote("sh600000", "x", 1.0, 0.0, 2.0, 2.0, 1.0)
        assert q.change_percent == 0.0

    def test_volume_display(self, sample_quote):
        assert sample_quote.volume_display == "2.3万手"
        small = Quote("sh600000", "x", 1.0, 1.0, 1.0, 1.0, 1.0, volume=123_400.0)
        assert small.volume_display == "1234手"

    @pytest.mark.parametrize("turnover,expected", [
        (3_480_000_000.0, "34.80亿"),
        (56_700.0, "5.7万"),
        (999.0, "999元"),
    ])
    def test_turnover_display(self, turnover, expected):
        q = Quote("sh600000", "x", 1.0, 1.0, 1.0, 1.0, 1.0, turnover=turnover)
        assert q.turnover_display == expected


class TestTimeFrame:
    def test_hotkey_order(self):
        assert [TimeFrame.from_hotkey(str(i)) for i in range(1, 8)] == TimeFrame.all()
        assert TimeFrame.from_hotkey("5") is TimeFrame.DAILY

    @pytest.mark.parametrize("key", ["0", "8", "x", "", "12"])
    def test_hotkey_invalid(self, key):
        assert TimeFrame.from_hotkey(key) is None

    def test_scales(self):
        assert [tf.scale for tf in TimeFrame.all()] == [5, 15, 30, 60, 240, 1200, 7200]

    def test_labels(self):
        assert TimeFrame.DAILY.label == "日K"
        assert TimeFrame.MIN5.short_label == "5m"


class TestBarFromTextNonFinite:
    def test_infinite_fields_become_zero(self):
        bar = Bar.from_text("2025-01-02", "10", "inf", "-inf", "10", "Infinity")
        assert (bar.high, bar.low, bar.volume) == (0.0, 0.0, 0.0)
        assert bar.open == 10.0
