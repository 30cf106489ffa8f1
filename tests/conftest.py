"""Shared fixtures for stockterm tests."""

from __future__ import annotations

import sys
from datetime import date, timedelta
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from stockterm.chart.series import BarSeries
from stockterm.config import AppConfig, ProviderType
from stockterm.models.bar import Bar
from stockterm.models.quote import Quote
from stockterm.models.timeframe import TimeFrame
from stockterm.providers.mock import MockProvider
from stockterm.watchlist import WatchlistStore


def make_bars(closes: list[float], start: date = date(2025, 1, 2)) -> list[Bar]:
    """One bar per day with open=close and a 1.0 wick either side."""
    bars = []
    for i, c in enumerate(closes):
        bars.append(Bar(
            label=(start + timedelta(days=i)).isoformat(),
            open=c,
            high=c + 1.0,
            low=c - 1.0,
            close=c,
            volume=1000.0 + i,
        ))
    return bars


def make_series(n: int, symbol: str = "sh600519", timeframe: TimeFrame = TimeFrame.DAILY) -> BarSeries:
    return BarSeries.of(symbol, timeframe, make_bars([100.0 + i for i in range(n)]))


@pytest.fixture
def mock_provider() -> MockProvider:
    return MockProvider()


@pytest.fixture
def sample_bars() -> list[Bar]:
    """5 contiguous daily bars."""
    bars = []
    for i in range(5):
        bars.append(Bar(
            label=f"2025-02-{10 + i:02d}",
            open=150.0 + i * 0.1,
            high=150.5 + i * 0.1,
            low=149.5 + i * 0.1,
            close=150.2 + i * 0.1,
            volume=10000.0 + i * 500,
        ))
    return bars


@pytest.fixture
def sample_quote() -> Quote:
    return Quote(
        symbol="sh600519",
        name="贵州茅台",
        open=1480.0,
        pre_close=1475.0,
        current=1490.5,
        high=1495.0,
        low=1470.0,
        volume=2_345_600.0,
        turnover=3_480_000_000.0,
        date="2025-02-11",
        time="15:00:00",
    )


@pytest.fixture
def mock_config(tmp_path) -> AppConfig:
    return AppConfig(
        providers=[ProviderType.MOCK],
        watchlist_path=tmp_path / "config.json",
        log_file=None,
    )


@pytest.fixture
def store(tmp_path) -> WatchlistStore:
    return WatchlistStore(tmp_path / "config.json")
