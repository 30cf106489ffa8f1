"""Visible-window selection over a bar series."""

from __future__ import annotations

from dataclasses import dataclass

CANDLE_WIDTH = 3
PAN_STEP = 5


@dataclass(frozen=True)
class Window:
    """Half-open index range ``[start, end)`` into the series."""

    start: int
    end: int
    visible_count: int

    @property
    def is_empty(self) -> bool:
        return self.visible_count == 0

    def __len__(self) -> int:
        return self.end - self.start

    def to_absolute(self, pos: int) -> int:
        return self.start + pos


EMPTY_WINDOW = Window(0, 0, 0)


def visible_count(series_len: int, viewport_width: int, candle_width: int = CANDLE_WIDTH) -> int:
    if series_len <= 0 or candle_width <= 0 or viewport_width < candle_width:
        return 0
    return min(viewport_width // candle_width, series_len)


def select_window(
    series_len: int,
    viewport_width: int,
    pan_offset: int,
    candle_width: int = CANDLE_WIDTH,
) -> Window:
    """Compute the visible range, anchored to the newest bar.

    The right edge sits ``pan_offset`` bars before the newest bar. When there
    are not enough older bars to honour the pan, the window pins to the
    oldest data (``start == 0``) instead of going out of range.
    """
    count = visible_count(series_len, viewport_width, candle_width)
    if count == 0:
        return EMPTY_WINDOW

    pan_offset = max(pan_offset, 0)
    if series_len > count + pan_offset:
        start = series_len - count - pan_offset
    else:
        start = 0
    end = min(start + count, series_len)
    return Window(start, end, count)


def max_pan_offset(series_len: int, count: int) -> int:
    """Largest offset that still changes the window."""
    return max(series_len - count, 0)


def pan_left(pan_offset: int, series_len: int, count: int, step: int = PAN_STEP) -> int:
    """Shift toward history, saturating once the oldest bar is visible."""
    return min(pan_offset + step, max_pan_offset(series_len, count))


def pan_right(pan_offset: int, step: int = PAN_STEP) -> int:
    """Shift toward the newest bar, flooring at 0."""
    return max(pan_offset - step, 0)
