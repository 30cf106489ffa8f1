"""Abstract base class for quote/bar providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockterm.models.bar import Bar
from stockterm.models.quote import Quote
from stockterm.models.timeframe import TimeFrame


class BaseQuoteProvider(ABC):
    """Abstract base for all quote/bar providers.

    Subclasses must implement ``get_bars``. ``get_quote`` defaults to
    ``NotImplementedError``; providers advertise what they support via
    ``capabilities()``.
    """

    name: str = "base"

    # --- Historical bars (required) ---

    @abstractmethod
    def get_bars(
        self,
        symbol: str,
        timeframe: TimeFrame = TimeFrame.DAILY,
        count: int = 120,
    ) -> list[Bar]:
        """Fetch the most recent OHLCV bars.

        Args:
            symbol: Provider symbol (``sh600519``).
            timeframe: Bar interval.
            count: Maximum number of bars, newest last.

        Returns:
            List of Bar objects ordered oldest first.
        """
        ...

    # --- Real-time ---

    def get_quote(self, symbol: str) -> Quote:
        """Get the current quote for a symbol."""
        raise NotImplementedError

    def get_quotes(self, symbols: list[str]) -> list[Quote]:
        """Get quotes for multiple symbols (default: serial calls)."""
        return [self.get_quote(s) for s in symbols]

    # --- Capabilities ---

    def capabilities(self) -> set[str]:
        """Return the set of supported features: ``bars``, ``quotes``."""
        return {"bars"}

    def close(self) -> None:
        """Release network resources."""
