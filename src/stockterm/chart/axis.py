"""Price-axis scaling for the visible window."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from stockterm.models.bar import Bar

MARGIN_RATIO = 0.05
MIN_GRID_LINES = 2
MAX_GRID_LINES = 6
MIN_HALF_RANGE = 0.01
FLAT_RANGE_RATIO = 0.01


@dataclass(frozen=True)
class GridLevel:
    """A horizontal grid line: its row and the price it labels."""

    row: int
    price: float


@dataclass(frozen=True)
class AxisScale:
    """Padded price bounds plus grid levels for one render pass."""

    min_price: float
    max_price: float
    grid_levels: tuple[GridLevel, ...] = field(default_factory=tuple)

    @property
    def price_range(self) -> float:
        return self.max_price - self.min_price

    @property
    def is_empty(self) -> bool:
        return self.price_range <= 0

    def contains(self, price: float) -> bool:
        return self.min_price <= price <= self.max_price


EMPTY_AXIS = AxisScale(0.0, 0.0, ())


def price_bounds(
    visible_bars: Sequence[Bar],
    overlays: Iterable[Sequence[float | None]] = (),
) -> tuple[float, float] | None:
    """Raw ``(min low, max high)`` widened by any overlay value in range.

    Non-finite prices are skipped; None when no finite price remains.
    """
    lows = [b.low for b in visible_bars if math.isfinite(b.low)]
    highs = [b.high for b in visible_bars if math.isfinite(b.high)]
    if not lows or not highs:
        return None
    lo = min(lows)
    hi = max(highs)
    for values in overlays:
        for v in values:
            if v is None or not math.isfinite(v):
                continue
            lo = min(lo, v)
            hi = max(hi, v)
    return lo, hi


def grid_rows(viewport_height: int) -> list[int]:
    """Rows that carry a grid line, evenly spaced by row plus the last row."""
    if viewport_height <= 0:
        return []
    num_lines = max(MIN_GRID_LINES, min(viewport_height, MAX_GRID_LINES))
    step = viewport_height // num_lines
    return [
        r for r in range(viewport_height)
        if step == 0 or r % step == 0 or r == viewport_height - 1
    ]


def row_price(row: int, min_price: float, max_price: float, viewport_height: int) -> float:
    """Price at a row: ``max_price`` on row 0, ``min_price`` on the last row."""
    denom = max(viewport_height - 1, 1)
    ratio = 1.0 - row / denom
    return min_price + (max_price - min_price) * ratio


def scale_axis(
    visible_bars: Sequence[Bar],
    overlay_series_list: Iterable[Sequence[float | None]],
    viewport_height: int,
) -> AxisScale:
    """Padded price range and grid levels for the visible bars.

    ``overlay_series_list`` holds overlay values already sliced to the
    visible window. They are included in the range so MA lines are never
    clipped. A flat range is widened to a small band around the price so
    the projector always has a non-zero span.
    """
    bounds = price_bounds(visible_bars, overlay_series_list)
    if bounds is None:
        return EMPTY_AXIS
    raw_min, raw_max = bounds

    margin = (raw_max - raw_min) * MARGIN_RATIO
    min_price = raw_min - margin
    max_price = raw_max + margin
    if max_price - min_price <= 0:
        half = max(abs(raw_max) * FLAT_RANGE_RATIO, MIN_HALF_RANGE)
        min_price = raw_min - half
        max_price = raw_max + half

    levels = tuple(
        GridLevel(r, row_price(r, min_price, max_price, viewport_height))
        for r in grid_rows(viewport_height)
    )
    return AxisScale(min_price, max_price, levels)
