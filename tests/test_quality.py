"""Tests for bar inspection."""

from stockterm.models.bar import Bar
from stockterm.quality import inspect_bars


def _check(result, name):
    return next(c for c in result.checks if c.name == name)


class TestInspectBars:
    def test_empty(self):
        result = inspect_bars([])
        assert not result.passed
        assert result.failed_checks[0].name == "not_empty"

    def test_valid(self, sample_bars):
        assert inspect_bars(sample_bars).passed

    def test_nan_detected(self):
        result = inspect_bars([Bar("2025-01-02", 1.0, 2.0, 0.5, float("nan"))])
        assert not _check(result, "no_nulls").passed

    def test_zeroed_bar(self):
        result = inspect_bars([Bar("2025-01-02", 0.0, 0.0, 0.0, 0.0)])
        assert not _check(result, "zeroed_bars").passed

    def test_negative_volume(self):
        result = inspect_bars([Bar("2025-01-02", 1.0, 2.0, 0.5, 1.5, volume=-1.0)])
        assert not _check(result, "volume_sanity").passed

    def test_out_of_order(self):
        result = inspect_bars([
            Bar("2025-01-03", 1.0, 2.0, 0.5, 1.5),
            Bar("2025-01-02", 1.0, 2.0, 0.5, 1.5),
        ])
        assert not _check(result, "label_order").passed

    def test_ohlc_inconsistent(self):
        result = inspect_bars([Bar("2025-01-02", 1.0, 0.5, 2.0, 1.5)])
        assert not _check(result, "ohlc_consistency").passed
