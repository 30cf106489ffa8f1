"""Simple moving averages aligned index-for-index with a bar series."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from stockterm.models.bar import Bar

DEFAULT_MA_WINDOWS: tuple[int, ...] = (5, 10, 20)


@dataclass(frozen=True)
class MovingAverage:
    """One overlay line: the window size and its per-bar values."""

    window: int
    values: tuple[float | None, ...]

    def visible(self, start: int, end: int) -> tuple[float | None, ...]:
        return self.values[start:end]


def compute_ma(series: Sequence[Bar], window: int) -> list[float | None]:
    """Trailing arithmetic mean of closes.

    Element ``i`` is ``None`` while fewer than ``window`` bars are available,
    otherwise the mean of closes over ``[i - window + 1, i]``. A single
    running-sum pass. ``window <= 0`` yields all ``None``.
    """
    n = len(series)
    if window <= 0:
        return [None] * n

    result: list[float | None] = []
    total = 0.0
    for i in range(n):
        total += series[i].close
        if i >= window:
            total -= series[i - window].close
        if i >= window - 1:
            result.append(total / window)
        else:
            result.append(None)
    return result


def compute_overlays(
    series: Sequence[Bar],
    windows: Iterable[int] = DEFAULT_MA_WINDOWS,
) -> list[MovingAverage]:
    return [MovingAverage(w, tuple(compute_ma(series, w))) for w in windows]
