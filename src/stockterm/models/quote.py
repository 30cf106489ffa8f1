"""Quote (live price snapshot) data model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Quote:
    """Real-time quote for one watchlist symbol.

    Attributes:
        symbol: Provider symbol (``sh600519``, ``hk00700``, ``gb_aapl``).
        name: Display name.
        open: Today's opening price.
        pre_close: Previous session close.
        current: Last traded price.
        high: Today's high.
        low: Today's low.
        volume: Traded volume in shares.
        turnover: Traded value in the quote currency.
        date: Quote date (``YYYY-MM-DD``).
        time: Quote time (``HH:MM:SS``).
    """

    symbol: str
    name: str
    open: float
    pre_close: float
    current: float
    high: float
    low: float
    volume: float = 0.0
    turnover: float = 0.0
    date: str = ""
    time: str = ""

    @property
    def change(self) -> float:
        """Price change against the previous close."""
        return self.current - self.pre_close

    @property
    def change_percent(self) -> float:
        """Percent change against the previous close (0.0 without one)."""
        if self.pre_close == 0:
            return 0.0
        return (self.current - self.pre_close) / self.pre_close * 100

    @property
    def volume_display(self) -> str:
        """Volume in lots of 100 shares, scaled to 万手 when large."""
        lots = self.volume / 100
        if lots >= 10_000:
            return f"{lots / 10_000:.1f}万手"
        return f"{lots:.0f}手"

    @property
    def turnover_display(self) -> str:
        if self.turnover >= 100_000_000:
            return f"{self.turnover / 100_000_000:.2f}亿"
        if self.turnover >= 10_000:
            return f"{self.turnover / 10_000:.1f}万"
        return f"{self.turnover:.0f}元"
