"""Per-render composition of the chart engine.

``build_chart_frame`` runs the whole pipeline for one render pass: select
the window, compute overlays, scale the axis, then project every visible
candle to cell coordinates. Nothing is cached between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from stockterm.chart.axis import EMPTY_AXIS, AxisScale, scale_axis
from stockterm.chart.cursor import Cursor
from stockterm.chart.indicators import DEFAULT_MA_WINDOWS, MovingAverage, compute_overlays
from stockterm.chart.projector import Projector
from stockterm.chart.series import BarSeries
from stockterm.chart.window import CANDLE_WIDTH, EMPTY_WINDOW, Window, select_window
from stockterm.models.bar import Bar

PRICE_AXIS_WIDTH = 10
DATE_AXIS_HEIGHT = 1
MIN_CHART_HEIGHT = 4
DATE_LABEL_COUNT = 5


@dataclass(frozen=True)
class Viewport:
    """Inner chart area in character cells (borders already removed)."""

    width: int
    height: int

    @property
    def canvas_width(self) -> int:
        return max(self.width - PRICE_AXIS_WIDTH, 0)

    @property
    def canvas_height(self) -> int:
        return max(self.height - DATE_AXIS_HEIGHT, 0)

    def is_usable(self, candle_width: int = CANDLE_WIDTH) -> bool:
        return self.canvas_width >= candle_width and self.canvas_height >= MIN_CHART_HEIGHT


@dataclass(frozen=True)
class CandleGeometry:
    """Cell geometry of one visible candle."""

    index: int
    col: int
    wick_top: int
    wick_bottom: int
    body_top: int
    body_bottom: int
    bullish: bool
    is_cursor: bool = False


@dataclass(frozen=True)
class OverlayLine:
    """Visible slice of a moving average projected to rows."""

    window: int
    values: tuple[float | None, ...]
    rows: tuple[int | None, ...]


@dataclass(frozen=True)
class DateLabel:
    col: int
    text: str


@dataclass(frozen=True)
class ChartFrame:
    """Everything the renderer needs for one chart draw."""

    viewport: Viewport
    window: Window = EMPTY_WINDOW
    bars: tuple[Bar, ...] = field(default_factory=tuple)
    axis: AxisScale = EMPTY_AXIS
    candles: tuple[CandleGeometry, ...] = field(default_factory=tuple)
    overlays: tuple[OverlayLine, ...] = field(default_factory=tuple)
    date_labels: tuple[DateLabel, ...] = field(default_factory=tuple)
    cursor_pos: int | None = None
    cursor_bar: Bar | None = None
    candle_width: int = CANDLE_WIDTH

    @property
    def is_empty(self) -> bool:
        return self.window.is_empty or not self.bars

    @property
    def visible_count(self) -> int:
        return self.window.visible_count


def short_label(label: str) -> str:
    """``MM-DD`` for ``YYYY-MM-DD...`` labels, the label itself otherwise."""
    if len(label) >= 10 and label[4] == "-" and label[7] == "-":
        return label[5:10]
    return label


def date_labels(bars: tuple[Bar, ...], candle_width: int) -> tuple[DateLabel, ...]:
    if not bars:
        return ()
    interval = max(len(bars) // DATE_LABEL_COUNT, 1)
    labels = []
    for i, bar in enumerate(bars):
        if i % interval == 0 or i == len(bars) - 1:
            labels.append(DateLabel(i * candle_width, short_label(bar.label)))
    return tuple(labels)


def _candle(projector: Projector, index: int, bar: Bar, is_cursor: bool) -> CandleGeometry:
    body_hi = max(bar.open, bar.close)
    body_lo = min(bar.open, bar.close)
    # high/low are trusted as-is, so widen the wick to cover the body
    wick_hi = max(bar.high, body_hi)
    wick_lo = min(bar.low, body_lo)
    return CandleGeometry(
        index=index,
        col=projector.col(index),
        wick_top=projector.row(wick_hi),
        wick_bottom=projector.row(wick_lo),
        body_top=projector.row(body_hi),
        body_bottom=projector.row(body_lo),
        bullish=bar.is_bullish,
        is_cursor=is_cursor,
    )


def build_chart_frame(
    series: BarSeries,
    viewport: Viewport,
    pan_offset: int = 0,
    cursor: Cursor | None = None,
    ma_windows: Iterable[int] = DEFAULT_MA_WINDOWS,
    candle_width: int = CANDLE_WIDTH,
) -> ChartFrame:
    """Compute the drawable chart for one render pass.

    Returns an empty frame (``is_empty``) for an empty series or a viewport
    too small to hold the price axis plus one candle.
    """
    if series.is_empty or not viewport.is_usable(candle_width):
        return ChartFrame(viewport=viewport, candle_width=candle_width)

    window = select_window(len(series), viewport.canvas_width, pan_offset, candle_width)
    if window.is_empty:
        return ChartFrame(viewport=viewport, candle_width=candle_width)

    visible = series.slice(window.start, window.end)
    averages: list[MovingAverage] = compute_overlays(series.bars, ma_windows)
    visible_overlays = [ma.visible(window.start, window.end) for ma in averages]

    height = viewport.canvas_height
    axis = scale_axis(visible, visible_overlays, height)
    projector = Projector(axis.min_price, axis.max_price, height, candle_width)

    cursor_pos = cursor.position if cursor is not None else None
    if cursor_pos is not None and cursor_pos >= len(visible):
        cursor_pos = None

    candles = tuple(
        _candle(projector, i, bar, cursor_pos == i)
        for i, bar in enumerate(visible)
    )
    overlays = tuple(
        OverlayLine(
            window=ma.window,
            values=values,
            rows=tuple(None if v is None else projector.row(v) for v in values),
        )
        for ma, values in zip(averages, visible_overlays)
    )

    return ChartFrame(
        viewport=viewport,
        window=window,
        bars=visible,
        axis=axis,
        candles=candles,
        overlays=overlays,
        date_labels=date_labels(visible, candle_width),
        cursor_pos=cursor_pos,
        cursor_bar=visible[cursor_pos] if cursor_pos is not None else None,
        candle_width=candle_width,
    )
