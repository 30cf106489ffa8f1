"""Tests for moving-average overlays."""

import pytest

from stockterm.chart.indicators import compute_ma, compute_overlays

from conftest import make_bars


class TestComputeMA:
    def test_three_period(self):
        bars = make_bars([10, 20, 30, 40, 50])
        assert compute_ma(bars, 3) == [None, None, 20.0, 30.0, 40.0]

    @pytest.mark.parametrize("length,window", [(10, 5), (5, 5), (4, 5), (20, 1), (0, 3)])
    def test_value_count(self, length, window):
        values = compute_ma(make_bars([float(i) for i in range(length)]), window)
        assert len(values) == length
        expected = length - window + 1 if length >= window else 0
        assert sum(v is not None for v in values) == expected

    def test_window_zero_is_all_none(self):
        assert compute_ma(make_bars([1, 2, 3]), 0) == [None, None, None]

    def test_window_one_is_closes(self):
        assert compute_ma(make_bars([4, 5, 6]), 1) == [4.0, 5.0, 6.0]

    def test_running_sum_matches_naive(self):
        closes = [3.5, 7.25, 1.0, 9.0, 2.5, 8.75, 6.0, 4.25]
        values = compute_ma(make_bars(closes), 4)
        for i in range(3, len(closes)):
            assert values[i] == pytest.approx(sum(closes[i - 3:i + 1]) / 4)


class TestOverlays:
    def test_one_per_window(self):
        overlays = compute_overlays(make_bars([float(i) for i in range(30)]), (5, 10, 20))
        assert [o.window for o in overlays] == [5, 10, 20]
        assert all(len(o.values) == 30 for o in overlays)

    def test_visible_slice(self):
        ma = compute_overlays(make_bars([10, 20, 30, 40, 50]), (3,))[0]
        assert ma.visible(2, 4) == (20.0, 30.0)
