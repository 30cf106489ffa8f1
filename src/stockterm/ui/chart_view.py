"""Draw a ``ChartFrame`` into a curses window region."""

from __future__ import annotations

import curses

from stockterm.chart.frame import PRICE_AXIS_WIDTH, ChartFrame, Viewport, build_chart_frame
from stockterm.chart.projector import CANDLE_OFFSET
from stockterm.models.bar import Bar
from stockterm.state import AppState
from stockterm.ui.widgets import (
    PAIR_ACCENT,
    PAIR_CURSOR,
    PAIR_DIM,
    PAIR_DOWN,
    PAIR_MA,
    PAIR_UP,
    color,
    draw_box,
    safe_addstr,
)

BODY = "█"
CURSOR_BODY = "▓"
WICK = "│"
GRID = "┈"
MA_DOT = "·"


def chart_frame_for(state: AppState, viewport: Viewport) -> ChartFrame:
    """Build this pass's frame and let the state observe its window."""
    cfg = state.config

    def build() -> ChartFrame:
        return build_chart_frame(
            state.series,
            viewport,
            state.pan_offset,
            state.cursor,
            cfg.ma_windows,
            cfg.candle_width,
        )

    frame = build()
    if state.observe_window(frame.window):
        frame = build()
    return frame


def draw_chart(win, y: int, x: int, height: int, width: int, state: AppState) -> ChartFrame:
    title = f" K-line - {state.timeframe.label} "
    if state.cursor.active:
        title = f" K-line - {state.timeframe.label} [cursor] "
    draw_box(win, y, x, height, width, title, color(PAIR_ACCENT))

    frame = chart_frame_for(state, Viewport(width - 2, height - 2))
    if state.series.is_empty:
        text = " Loading..." if state.loading else " No K-line data"
        safe_addstr(win, y + 1, x + 1, text, color(PAIR_DIM, curses.A_DIM))
        return frame
    if frame.is_empty:
        return frame

    top = y + 1
    left = x + 1 + PRICE_AXIS_WIDTH
    _draw_grid(win, frame, top, x + 1, left)
    _draw_overlays(win, frame, top, left)
    _draw_candles(win, frame, top, left)
    _draw_dates(win, frame, top + frame.viewport.canvas_height, left)
    _draw_legend(win, frame, y + height - 1, x + 2)
    if frame.cursor_bar is not None:
        _draw_cursor_info(win, frame.cursor_bar, top, left)
    return frame


def _draw_grid(win, frame: ChartFrame, top: int, axis_left: int, left: int) -> None:
    canvas_w = len(frame.bars) * frame.candle_width
    dim = color(PAIR_DIM, curses.A_DIM)
    for level in frame.axis.grid_levels:
        safe_addstr(win, top + level.row, axis_left, f"{level.price:>9.2f}", dim)
        for gx in range(0, canvas_w, 2):
            safe_addstr(win, top + level.row, left + gx, GRID, dim)


def _draw_overlays(win, frame: ChartFrame, top: int, left: int) -> None:
    for n, line in enumerate(frame.overlays):
        attr = color(PAIR_MA[n % len(PAIR_MA)])
        for i, row in enumerate(line.rows):
            if row is None:
                continue
            for dx in range(frame.candle_width):
                if dx != CANDLE_OFFSET:
                    safe_addstr(win, top + row, left + i * frame.candle_width + dx, MA_DOT, attr)


def _draw_candles(win, frame: ChartFrame, top: int, left: int) -> None:
    for c in frame.candles:
        if c.is_cursor:
            attr, body = color(PAIR_CURSOR, curses.A_BOLD), CURSOR_BODY
        else:
            attr, body = color(PAIR_UP if c.bullish else PAIR_DOWN), BODY
        for row in range(c.wick_top, c.wick_bottom + 1):
            ch = body if c.body_top <= row <= c.body_bottom else WICK
            safe_addstr(win, top + row, left + c.col, ch, attr)


def _draw_dates(win, frame: ChartFrame, row: int, left: int) -> None:
    dim = color(PAIR_DIM, curses.A_DIM)
    limit = frame.viewport.canvas_width
    for label in frame.date_labels:
        if label.col < limit:
            safe_addstr(win, row, left + label.col, label.text[: limit - label.col], dim)


def _draw_legend(win, frame: ChartFrame, row: int, col: int) -> None:
    for n, line in enumerate(frame.overlays):
        last = next((v for v in reversed(line.values) if v is not None), None)
        text = f" MA{line.window}:{last:.2f} " if last is not None else f" MA{line.window}:- "
        safe_addstr(win, row, col, text, color(PAIR_MA[n % len(PAIR_MA)]))
        col += len(text)


def _draw_cursor_info(win, bar: Bar, row: int, left: int) -> None:
    pair = PAIR_UP if bar.is_bullish else PAIR_DOWN
    parts = [
        (" ▸ ", color(PAIR_CURSOR)),
        (f"{bar.label} ", curses.A_BOLD),
        (f"O:{bar.open:.2f} ", color(pair)),
        (f"H:{bar.high:.2f} ", color(PAIR_UP)),
        (f"L:{bar.low:.2f} ", color(PAIR_DOWN)),
        (f"C:{bar.close:.2f} ", color(pair)),
        (f"V:{bar.volume:.0f}", color(PAIR_ACCENT)),
    ]
    col = left
    for text, attr in parts:
        safe_addstr(win, row, col, text, attr)
        col += len(text)
