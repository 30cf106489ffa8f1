"""Price/index to terminal-cell coordinate mapping."""

from __future__ import annotations

import math

from stockterm.chart.window import CANDLE_WIDTH

CANDLE_OFFSET = 1


def price_to_row(price: float, min_price: float, max_price: float, viewport_height: int) -> int:
    """Map a price to a row; ``max_price`` is row 0, ``min_price`` the last row.

    The result is clamped to ``[0, viewport_height - 1]``. A zero, negative
    or non-finite price range maps every price to row 0.
    """
    if viewport_height <= 1:
        return 0
    span = max_price - min_price
    if not math.isfinite(span) or span <= 0:
        return 0
    ratio = (max_price - price) / span
    if not math.isfinite(ratio):
        return 0
    row = round(ratio * (viewport_height - 1))
    return max(0, min(int(row), viewport_height - 1))


def index_to_col(
    index_in_window: int,
    candle_width: int = CANDLE_WIDTH,
    intra_offset: int = CANDLE_OFFSET,
) -> int:
    return index_in_window * candle_width + intra_offset


class Projector:
    """Bound form of the mapping for one frame's axis and viewport."""

    def __init__(
        self,
        min_price: float,
        max_price: float,
        viewport_height: int,
        candle_width: int = CANDLE_WIDTH,
    ) -> None:
        self.min_price = min_price
        self.max_price = max_price
        self.viewport_height = viewport_height
        self.candle_width = candle_width

    def row(self, price: float) -> int:
        return price_to_row(price, self.min_price, self.max_price, self.viewport_height)

    def col(self, index_in_window: int, intra_offset: int = CANDLE_OFFSET) -> int:
        return index_to_col(index_in_window, self.candle_width, intra_offset)

    def point(self, index_in_window: int, price: float) -> tuple[int, int]:
        """``(col, row)`` cell for a bar index and price."""
        return self.col(index_in_window), self.row(price)
