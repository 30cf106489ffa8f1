"""Screen layouts: quote panel, chart, timeframe tabs, watchlist, status."""

from __future__ import annotations

import curses

from stockterm.events import InputMode
from stockterm.models.quote import Quote
from stockterm.models.timeframe import TimeFrame
from stockterm.state import AppState, ViewMode
from stockterm.ui.chart_view import draw_chart
from stockterm.ui.widgets import (
    PAIR_ACCENT,
    PAIR_CURSOR,
    PAIR_DIM,
    change_pair,
    color,
    draw_box,
    fit,
    safe_addstr,
    text_width,
)

HELP_LINES = (
    ("Up/k Down/j", "move watchlist highlight"),
    ("Enter", "show highlighted symbol / toggle fullscreen"),
    ("Left/h Right/l", "move chart cursor"),
    ("PgUp PgDn", "pan chart toward history / newest"),
    ("1-7", "timeframe: " + " ".join(tf.short_label for tf in TimeFrame.all())),
    ("f", "toggle fullscreen chart"),
    ("a / d", "add / delete symbol"),
    ("r", "refresh now"),
    ("Esc", "cancel cursor / leave fullscreen / quit"),
    ("q", "quit"),
)


def draw(stdscr, state: AppState) -> None:
    stdscr.erase()
    height, width = stdscr.getmaxyx()
    if state.view_mode is ViewMode.FULLSCREEN:
        _draw_fullscreen(stdscr, state, height, width)
    else:
        _draw_normal(stdscr, state, height, width)

    if state.input_mode is InputMode.ADD_STOCK:
        _draw_input_popup(stdscr, state, height, width)
    elif state.input_mode is InputMode.HELP:
        _draw_help(stdscr, height, width)
    stdscr.noutrefresh()
    curses.doupdate()


def _draw_normal(win, state: AppState, height: int, width: int) -> None:
    quote_h, tabs_h, list_h, status_h = 5, 2, 8, 2
    chart_h = max(height - quote_h - tabs_h - list_h - status_h, 0)
    y = 0
    _draw_quote_info(win, state, y, quote_h, width)
    y += quote_h
    draw_chart(win, y, 0, chart_h, width, state)
    y += chart_h
    _draw_timeframe_tabs(win, state, y, width)
    y += tabs_h
    _draw_watchlist(win, state, y, list_h, width)
    y += list_h
    _draw_status(win, state, y, width)


def _draw_fullscreen(win, state: AppState, height: int, width: int) -> None:
    quote_h, tabs_h, status_h = 3, 2, 1
    chart_h = max(height - quote_h - tabs_h - status_h, 0)
    _draw_compact_quote(win, state, 0, width)
    draw_chart(win, quote_h, 0, chart_h, width, state)
    _draw_timeframe_tabs(win, state, quote_h + chart_h, width)
    _draw_fullscreen_status(win, state, height - 1, width)


def _quote_line(quote: Quote) -> tuple[str, int]:
    sign = "+" if quote.change >= 0 else ""
    text = (
        f"{quote.current:.2f}  {sign}{quote.change:.2f}  "
        f"({sign}{quote.change_percent:.2f}%)"
    )
    return text, color(change_pair(quote.change), curses.A_BOLD)


def _draw_quote_info(win, state: AppState, y: int, height: int, width: int) -> None:
    draw_box(win, y, 0, height, width, " Quote ", color(PAIR_ACCENT))
    quote = state.current_quote()
    if quote is None:
        safe_addstr(win, y + 1, 2, "Loading...", color(PAIR_DIM))
        return
    safe_addstr(win, y + 1, 2, f"{quote.name} ({quote.symbol})", curses.A_BOLD)
    text, attr = _quote_line(quote)
    safe_addstr(win, y + 1, 4 + text_width(f"{quote.name} ({quote.symbol})"), text, attr)
    safe_addstr(
        win, y + 2, 2,
        f"Open {quote.open:.2f}   High {quote.high:.2f}   Low {quote.low:.2f}   "
        f"Prev {quote.pre_close:.2f}",
    )
    safe_addstr(
        win, y + 3, 2,
        f"Vol {quote.volume_display}   Turnover {quote.turnover_display}   "
        f"{quote.date} {quote.time}",
        color(PAIR_DIM),
    )


def _draw_compact_quote(win, state: AppState, y: int, width: int) -> None:
    draw_box(win, y, 0, 3, width, "", color(PAIR_ACCENT))
    quote = state.current_quote()
    if quote is None:
        safe_addstr(win, y + 1, 2, "Loading...", color(PAIR_DIM))
        return
    head = f"{quote.name} ({quote.symbol})  "
    safe_addstr(win, y + 1, 2, head, curses.A_BOLD)
    text, attr = _quote_line(quote)
    safe_addstr(win, y + 1, 2 + text_width(head), text, attr)


def _draw_timeframe_tabs(win, state: AppState, y: int, width: int) -> None:
    col = 1
    for n, tf in enumerate(TimeFrame.all(), start=1):
        label = f" {n}:{tf.label} "
        attr = color(PAIR_CURSOR, curses.A_BOLD | curses.A_REVERSE) if tf is state.timeframe else 0
        safe_addstr(win, y, col, label, attr)
        col += text_width(label) + 2


def _draw_watchlist(win, state: AppState, y: int, height: int, width: int) -> None:
    draw_box(win, y, 0, height, width, " Watchlist ", color(PAIR_ACCENT))
    rows = height - 2
    if rows <= 0:
        return
    first = max(0, state.highlighted - rows + 1)
    for i, symbol in enumerate(state.watchlist[first:first + rows]):
        idx = first + i
        quote = state.quotes.get(symbol)
        marker = "▶" if idx == state.active_index else " "
        name = quote.name if quote else "-"
        line = f"{marker} {fit(symbol, 10)} {fit(name, 12)}"
        attr = curses.A_REVERSE if idx == state.highlighted else 0
        safe_addstr(win, y + 1 + i, 2, line, attr)
        if quote is not None:
            text, qattr = _quote_line(quote)
            safe_addstr(win, y + 1 + i, 2 + text_width(line) + 2, text, qattr)


def _draw_status(win, state: AppState, y: int, width: int) -> None:
    safe_addstr(win, y, 1, state.status_message, color(PAIR_DIM))
    safe_addstr(
        win, y + 1, 1,
        "q:quit  Enter:select  a:add  d:delete  f:fullscreen  r:refresh  ?:help",
        color(PAIR_CURSOR),
    )


def _draw_fullscreen_status(win, state: AppState, y: int, width: int) -> None:
    hint = " f:exit fullscreen  ←→:cursor  1-7:timeframe  Esc:cancel cursor "
    safe_addstr(win, y, 0, hint, color(PAIR_CURSOR))
    bar = state.cursor_bar()
    if bar is not None:
        safe_addstr(
            win, y, text_width(hint) + 1,
            f"│ {bar.label} O:{bar.open:.2f} H:{bar.high:.2f} L:{bar.low:.2f} "
            f"C:{bar.close:.2f} V:{bar.volume:.0f}",
        )


def _centered(height: int, width: int, box_h: int, box_w: int) -> tuple[int, int, int, int]:
    box_w = min(box_w, width)
    box_h = min(box_h, height)
    return max((height - box_h) // 2, 0), max((width - box_w) // 2, 0), box_h, box_w


def _clear_region(win, y: int, x: int, h: int, w: int) -> None:
    for row in range(y, y + h):
        safe_addstr(win, row, x, " " * w)


def _draw_input_popup(win, state: AppState, height: int, width: int) -> None:
    y, x, h, w = _centered(height, width, 3, max(width * 6 // 10, 30))
    _clear_region(win, y, x, h, w)
    draw_box(win, y, x, h, w, " Add symbol ", color(PAIR_CURSOR))
    safe_addstr(win, y + 1, x + 2, state.input_buffer + "_")


def _draw_help(win, height: int, width: int) -> None:
    y, x, h, w = _centered(height, width, len(HELP_LINES) + 4, 64)
    _clear_region(win, y, x, h, w)
    draw_box(win, y, x, h, w, " Keys (Esc/? to close) ", color(PAIR_ACCENT))
    for i, (keys, desc) in enumerate(HELP_LINES):
        safe_addstr(win, y + 2 + i, x + 2, fit(keys, 16), color(PAIR_CURSOR))
        safe_addstr(win, y + 2 + i, x + 19, desc)
