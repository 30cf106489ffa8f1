"""Immutable bar series for one (symbol, timeframe)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, overload

from stockterm.models.bar import Bar
from stockterm.models.timeframe import TimeFrame


@dataclass(frozen=True)
class BarSeries:
    """Ordered, oldest-first bars for exactly one symbol and timeframe.

    A series is never edited in place. A refresh builds a new one and the
    application state swaps it in whole.
    """

    symbol: str
    timeframe: TimeFrame
    bars: tuple[Bar, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, symbol: str, timeframe: TimeFrame, bars: Iterable[Bar]) -> BarSeries:
        return cls(symbol=symbol, timeframe=timeframe, bars=tuple(bars))

    @classmethod
    def empty(cls, symbol: str = "", timeframe: TimeFrame = TimeFrame.DAILY) -> BarSeries:
        return cls(symbol=symbol, timeframe=timeframe, bars=())

    def __len__(self) -> int:
        return len(self.bars)

    def __iter__(self) -> Iterator[Bar]:
        return iter(self.bars)

    def __bool__(self) -> bool:
        return bool(self.bars)

    @overload
    def __getitem__(self, index: int) -> Bar: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Bar, ...]: ...

    def __getitem__(self, index):
        return self.bars[index]

    @property
    def is_empty(self) -> bool:
        return not self.bars

    def closes(self) -> list[float]:
        return [b.close for b in self.bars]

    def slice(self, start: int, end: int) -> tuple[Bar, ...]:
        """Bars in ``[start, end)``; out-of-range bounds yield fewer bars."""
        return self.bars[max(start, 0):max(end, 0)]
