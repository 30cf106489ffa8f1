"""Tests for price/index to cell projection."""

import math

import pytest

from stockterm.chart.projector import Projector, index_to_col, price_to_row

HEIGHTS = list(range(1, 60)) + [99, 100, 199]


class TestPriceToRow:
    def test_endpoints(self):
        assert price_to_row(20.0, 10.0, 20.0, 11) == 0
        assert price_to_row(10.0, 10.0, 20.0, 11) == 10

    @pytest.mark.parametrize("height", HEIGHTS)
    def test_endpoints_any_height(self, height):
        assert price_to_row(120.0, 80.0, 120.0, height) == 0
        assert price_to_row(80.0, 80.0, 120.0, height) == height - 1

    @pytest.mark.parametrize("height", HEIGHTS)
    def test_monotonic_and_in_range(self, height):
        prices = [80.0 + i * 0.5 for i in range(81)]
        rows = [price_to_row(p, 80.0, 120.0, height) for p in prices]
        assert all(0 <= r < max(height, 1) for r in rows)
        assert rows == sorted(rows, reverse=True)

    def test_midpoint(self):
        assert price_to_row(15.0, 10.0, 20.0, 11) == 5

    def test_clamped(self):
        assert price_to_row(25.0, 10.0, 20.0, 11) == 0
        assert price_to_row(5.0, 10.0, 20.0, 11) == 10

    def test_degenerate(self):
        assert price_to_row(15.0, 10.0, 10.0, 11) == 0
        assert price_to_row(15.0, 10.0, 20.0, 1) == 0

    @pytest.mark.parametrize("price,lo,hi", [
        (math.inf, -math.inf, math.inf),
        (15.0, -math.inf, math.inf),
        (math.inf, 10.0, 20.0),
        (math.nan, 10.0, 20.0),
        (15.0, 10.0, math.nan),
    ])
    def test_non_finite_maps_to_top(self, price, lo, hi):
        assert price_to_row(price, lo, hi, 11) == 0


class TestColumns:
    def test_index_to_col(self):
        assert index_to_col(0) == 1
        assert index_to_col(4, 3) == 13

    def test_projector_point(self):
        p = Projector(10.0, 20.0, 11, 3)
        assert p.point(2, 20.0) == (7, 0)
        assert p.row(10.0) == 10
