"""Cursor over the visible window."""

from __future__ import annotations

from stockterm.chart.series import BarSeries
from stockterm.chart.window import Window
from stockterm.models.bar import Bar


class Cursor:
    """Inactive, or active at a position relative to the visible window.

    The first move from inactive lands on the newest visible bar without
    moving further. Moves clamp at the window edges. The owner calls
    ``reset`` whenever the window is recomputed (pan, resize, timeframe
    or symbol switch, data refresh).
    """

    def __init__(self) -> None:
        self._pos: int | None = None

    def __repr__(self) -> str:
        return f"Cursor(pos={self._pos!r})"

    @property
    def position(self) -> int | None:
        return self._pos

    @property
    def active(self) -> bool:
        return self._pos is not None

    def _current(self, visible_count: int) -> int | None:
        """Position to move from, or None if this call only (de)activated."""
        if visible_count <= 0:
            self._pos = None
            return None
        if self._pos is None:
            self._pos = visible_count - 1
            return None
        return min(self._pos, visible_count - 1)

    def move_left(self, visible_count: int) -> None:
        pos = self._current(visible_count)
        if pos is not None:
            self._pos = max(pos - 1, 0)

    def move_right(self, visible_count: int) -> None:
        pos = self._current(visible_count)
        if pos is not None:
            self._pos = min(pos + 1, visible_count - 1)

    def reset(self) -> None:
        self._pos = None

    cancel = reset

    def cursor_bar(self, series: BarSeries, window: Window) -> Bar | None:
        """Bar under the cursor, or None when inactive or nothing is visible."""
        if self._pos is None or window.is_empty or self._pos >= len(window):
            return None
        idx = window.to_absolute(self._pos)
        if 0 <= idx < len(series):
            return series[idx]
        return None
