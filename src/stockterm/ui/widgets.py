"""Low-level curses helpers: colors, clipped text, boxes."""

from __future__ import annotations

import curses
import locale
import unicodedata

PAIR_UP = 1
PAIR_DOWN = 2
PAIR_CURSOR = 3
PAIR_ACCENT = 4
PAIR_DIM = 5
PAIR_MA = (6, 7, 8)


def init_colors() -> None:
    if not curses.has_colors():
        return
    curses.start_color()
    try:
        curses.use_default_colors()
        bg = -1
    except curses.error:
        bg = curses.COLOR_BLACK

    # red up / green down, CN market convention
    curses.init_pair(PAIR_UP, curses.COLOR_RED, bg)
    curses.init_pair(PAIR_DOWN, curses.COLOR_GREEN, bg)
    curses.init_pair(PAIR_CURSOR, curses.COLOR_YELLOW, bg)
    curses.init_pair(PAIR_ACCENT, curses.COLOR_CYAN, bg)
    curses.init_pair(PAIR_DIM, curses.COLOR_WHITE, bg)
    curses.init_pair(PAIR_MA[0], curses.COLOR_WHITE, bg)
    curses.init_pair(PAIR_MA[1], curses.COLOR_YELLOW, bg)
    curses.init_pair(PAIR_MA[2], curses.COLOR_MAGENTA, bg)


def color(pair: int, extra: int = 0) -> int:
    if not curses.has_colors():
        return extra
    return curses.color_pair(pair) | extra


def change_pair(change: float) -> int:
    if change > 0:
        return PAIR_UP
    if change < 0:
        return PAIR_DOWN
    return PAIR_DIM


def line_chars() -> tuple[str, str, str, str, str, str]:
    # ACS glyphs render as letters on some terminals; pick by encoding instead
    encoding = (locale.getpreferredencoding(False) or "").lower()
    if "utf" in encoding:
        return ("│", "─", "┌", "┐", "└", "┘")
    return ("|", "-", "+", "+", "+", "+")


def char_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"F", "W"}:
        return 2
    return 1


def text_width(text: str) -> int:
    return sum(char_width(ch) for ch in text)


def truncate(text: str, width: int) -> str:
    """Clip to ``width`` display cells (CJK characters take two)."""
    if width <= 0:
        return ""
    out: list[str] = []
    used = 0
    for ch in text:
        w = char_width(ch)
        if used + w > width:
            break
        out.append(ch)
        used += w
    return "".join(out)


def fit(text: str, width: int, align: str = "left") -> str:
    clipped = truncate(text, width)
    pad = max(0, width - text_width(clipped))
    if align == "right":
        return " " * pad + clipped
    return clipped + " " * pad


def safe_addstr(win, y: int, x: int, text: str, attr: int = 0) -> None:
    """Write clipped to the window; writes off-screen are dropped."""
    height, width = win.getmaxyx()
    if y < 0 or y >= height or x < 0 or x >= width:
        return
    text = truncate(text, width - x)
    if not text:
        return
    try:
        win.addstr(y, x, text, attr)
    except curses.error:
        # the bottom-right cell raises after a successful write
        pass


def draw_box(win, y: int, x: int, height: int, width: int, title: str = "", attr: int = 0) -> None:
    if width < 2 or height < 2:
        return
    vline, hline, tl, tr, bl, br = line_chars()
    right = x + width - 1
    bottom = y + height - 1
    safe_addstr(win, y, x, tl + hline * (width - 2) + tr, attr)
    safe_addstr(win, bottom, x, bl + hline * (width - 2) + br, attr)
    for row in range(y + 1, bottom):
        safe_addstr(win, row, x, vline, attr)
        safe_addstr(win, row, right, vline, attr)
    if title:
        safe_addstr(win, y, x + 2, truncate(title, width - 4), attr)
