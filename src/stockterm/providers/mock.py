"""Mock provider for tests and offline runs: no network required."""

from __future__ import annotations

import math
from datetime import date, timedelta

from stockterm.errors import FetchError, FetchErrorCode
from stockterm.models.bar import Bar
from stockterm.models.quote import Quote
from stockterm.models.timeframe import TimeFrame
from stockterm.providers.base import BaseQuoteProvider


class MockProvider(BaseQuoteProvider):
    """In-memory provider that returns configurable static data.

    Use ``set_bars`` / ``set_quote`` to pre-load data, ``set_error`` to make
    a symbol fail, or leave defaults for synthetic data.
    """

    name = "mock"

    def __init__(self, **_: object) -> None:
        self._bars: dict[tuple[str, TimeFrame], list[Bar]] = {}
        self._quotes: dict[str, Quote] = {}
        self._errors: dict[str, FetchError] = {}
        self.calls: list[tuple[str, str]] = []

    # --- Pre-load helpers ---

    def set_bars(self, symbol: str, bars: list[Bar], timeframe: TimeFrame = TimeFrame.DAILY) -> None:
        self._bars[(symbol.lower(), timeframe)] = bars

    def set_quote(self, symbol: str, quote: Quote) -> None:
        self._quotes[symbol.lower()] = quote

    def set_error(self, symbol: str, error: FetchError) -> None:
        self._errors[symbol.lower()] = error

    def clear_error(self, symbol: str) -> None:
        self._errors.pop(symbol.lower(), None)

    # --- Provider implementation ---

    def get_bars(
        self,
        symbol: str,
        timeframe: TimeFrame = TimeFrame.DAILY,
        count: int = 120,
    ) -> list[Bar]:
        key = symbol.lower()
        self.calls.append(("bars", key))
        self._raise_if_failing(key)
        if (key, timeframe) in self._bars:
            return self._bars[(key, timeframe)][-count:] if count > 0 else []
        return self._generate_bars(key, timeframe, count)

    def get_quote(self, symbol: str) -> Quote:
        key = symbol.lower()
        self.calls.append(("quote", key))
        self._raise_if_failing(key)
        if key in self._quotes:
            return self._quotes[key]
        return Quote(
            symbol=key,
            name=key.upper(),
            open=100.0,
            pre_close=99.5,
            current=101.25,
            high=102.0,
            low=99.0,
            volume=1_250_000.0,
            turnover=126_000_000.0,
            date="2025-02-11",
            time="15:00:00",
        )

    def capabilities(self) -> set[str]:
        return {"bars", "quotes"}

    def _raise_if_failing(self, key: str) -> None:
        if key in self._errors:
            raise self._errors[key]
        if not key:
            raise FetchError("Empty symbol", code=FetchErrorCode.NOT_FOUND)

    # --- Synthetic data generation ---

    @staticmethod
    def _generate_bars(symbol: str, timeframe: TimeFrame, count: int) -> list[Bar]:
        """Deterministic sine-wave bars, one per weekday for daily data."""
        bars: list[Bar] = []
        base_price = 100.0 + (sum(map(ord, symbol)) % 50)
        day = date(2025, 1, 2)
        for i in range(max(count, 0)):
            while day.weekday() >= 5:
                day += timedelta(days=1)
            o = base_price + 5 * math.sin(i / 6)
            c = base_price + 5 * math.sin((i + 1) / 6)
            h = max(o, c) + 0.8
            l = min(o, c) - 0.6
            if timeframe in (TimeFrame.DAILY, TimeFrame.WEEKLY, TimeFrame.MONTHLY):
                label = day.isoformat()
            else:
                minutes = 9 * 60 + 30 + i * timeframe.scale
                label = f"{day.isoformat()} {minutes // 60 % 24:02d}:{minutes % 60:02d}:00"
            bars.append(Bar(
                label=label,
                open=round(o, 2),
                high=round(h, 2),
                low=round(l, 2),
                close=round(c, 2),
                volume=100_000.0 + i * 500,
            ))
            day += timedelta(days=1)
        return bars
