"""Application state owned by the UI loop.

``AppState`` is the single mutable struct of the dashboard. It is only
touched from the UI thread: key commands and worker messages are applied
between frames, and the chart engine reads it once per render pass.
Methods that need network data return requests for the ``RefreshWorker``
instead of fetching.
"""

from __future__ import annotations

from enum import Enum

from stockterm.chart.cursor import Cursor
from stockterm.chart.series import BarSeries
from stockterm.chart.window import EMPTY_WINDOW, Window, pan_left, pan_right
from stockterm.config import AppConfig
from stockterm.events import (
    Action,
    BarsLoaded,
    BarsRequest,
    Command,
    InputMode,
    Message,
    QuotesLoaded,
    QuotesRequest,
    Request,
)
from stockterm.logging import get_logger
from stockterm.models.bar import Bar
from stockterm.models.quote import Quote
from stockterm.models.timeframe import TimeFrame
from stockterm.watchlist import WatchlistError, WatchlistStore, normalize_symbol

log = get_logger(__name__)


class ViewMode(Enum):
    NORMAL = "normal"
    FULLSCREEN = "fullscreen"


class AppState:
    """Watchlist, quotes, active chart and interaction state."""

    def __init__(
        self,
        watchlist: list[str],
        config: AppConfig | None = None,
        store: WatchlistStore | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.store = store
        self.should_quit = False

        self.watchlist: list[str] = list(watchlist)
        self.highlighted = 0
        self.active_index = 0
        self.quotes: dict[str, Quote] = {}

        self.timeframe = TimeFrame.DAILY
        self.series = BarSeries.empty(self.active_symbol or "", self.timeframe)
        self.pan_offset = 0
        self.cursor = Cursor()
        self.window: Window = EMPTY_WINDOW

        self.input_mode = InputMode.NORMAL
        self.view_mode = ViewMode.NORMAL
        self.input_buffer = ""
        self.status_message = "Loading data..."
        self.loading = False

    @classmethod
    def load(cls, config: AppConfig, store: WatchlistStore | None = None) -> AppState:
        store = store or WatchlistStore(config.watchlist_path)
        return cls(store.load(), config=config, store=store)

    # ------------------------------------------------------------ accessors

    @property
    def active_symbol(self) -> str | None:
        if 0 <= self.active_index < len(self.watchlist):
            return self.watchlist[self.active_index]
        return None

    @property
    def visible_count(self) -> int:
        return self.window.visible_count

    def current_quote(self) -> Quote | None:
        symbol = self.active_symbol
        return self.quotes.get(symbol) if symbol else None

    def cursor_bar(self) -> Bar | None:
        return self.cursor.cursor_bar(self.series, self.window)

    # ------------------------------------------------------------- requests

    def refresh_all(self) -> list[Request]:
        return self.refresh_quotes() + self.refresh_bars()

    def refresh_quotes(self) -> list[Request]:
        if not self.watchlist:
            self.quotes.clear()
            return []
        return [QuotesRequest(tuple(self.watchlist))]

    def refresh_bars(self) -> list[Request]:
        symbol = self.active_symbol
        if symbol is None:
            self._replace_series(BarSeries.empty("", self.timeframe))
            return []
        self.loading = True
        return [BarsRequest(symbol, self.timeframe, self.config.kline_length)]

    # ------------------------------------------------------------- messages

    def apply(self, message: Message) -> bool:
        if isinstance(message, BarsLoaded):
            return self.apply_bars(message)
        self.apply_quotes(message)
        return True

    def apply_bars(self, message: BarsLoaded) -> bool:
        """Merge a bar fetch result; returns False if it was stale."""
        if message.key != (self.active_symbol, self.timeframe):
            log.debug("discarding stale bars for %s %s", message.symbol, message.timeframe.value)
            return False

        self.loading = False
        if message.error is not None:
            self.status_message = f"Failed to load bars: {message.error}"
            self._replace_series(BarSeries.empty(message.symbol, message.timeframe))
            return True

        self._replace_series(BarSeries.of(message.symbol, message.timeframe, message.bars))
        return True

    def apply_quotes(self, message: QuotesLoaded) -> None:
        for symbol, quote in message.quotes.items():
            if symbol in self.watchlist:
                self.quotes[symbol] = quote
        for symbol, error in message.errors.items():
            self.status_message = f"Failed to load quote for {symbol}: {error}"

        quote = self.current_quote()
        if quote is not None and self.active_symbol not in message.errors:
            self.status_message = (
                f"{quote.symbol} {quote.name} last update: {quote.date} {quote.time}"
            )

    # ------------------------------------------------------------- commands

    def handle(self, command: Command) -> list[Request]:
        """Apply one input command; returns any fetches it triggers."""
        action = command.action
        if action is Action.QUIT:
            self.should_quit = True
        elif action is Action.ESCAPE:
            self.escape()
        elif action is Action.TOGGLE_FULLSCREEN:
            self.toggle_fullscreen()
        elif action is Action.ENTER:
            return self.on_enter()
        elif action is Action.SELECT_PREV:
            if self.view_mode is ViewMode.NORMAL:
                self.select_prev()
        elif action is Action.SELECT_NEXT:
            if self.view_mode is ViewMode.NORMAL:
                self.select_next()
        elif action is Action.CURSOR_LEFT:
            self.cursor.move_left(self.visible_count)
        elif action is Action.CURSOR_RIGHT:
            self.cursor.move_right(self.visible_count)
        elif action is Action.CURSOR_CANCEL:
            self.cursor.cancel()
        elif action is Action.PAN_LEFT:
            self.scroll_left()
        elif action is Action.PAN_RIGHT:
            self.scroll_right()
        elif action is Action.ADD_STOCK:
            self.start_add_stock()
        elif action is Action.DELETE_STOCK:
            if self.view_mode is ViewMode.NORMAL:
                return self.delete_selected()
        elif action is Action.REFRESH:
            self.status_message = "Refreshing..."
            return self.refresh_all()
        elif action is Action.HELP:
            self.input_mode = InputMode.HELP
        elif action is Action.CLOSE_HELP:
            self.input_mode = InputMode.NORMAL
        elif action is Action.SET_TIMEFRAME and command.timeframe is not None:
            self.input_mode = InputMode.NORMAL
            return self.set_timeframe(command.timeframe)
        elif action is Action.RESIZE:
            self.cursor.reset()
        elif action is Action.INPUT_CHAR:
            self.input_buffer += command.char
        elif action is Action.BACKSPACE:
            self.input_buffer = self.input_buffer[:-1]
        elif action is Action.CONFIRM_INPUT:
            return self.confirm_add_stock()
        elif action is Action.CANCEL_INPUT:
            self.cancel_input()
        return []

    # --- watchlist navigation ---

    def select_prev(self) -> None:
        if not self.watchlist:
            return
        self.highlighted = (self.highlighted - 1) % len(self.watchlist)

    def select_next(self) -> None:
        if not self.watchlist:
            return
        self.highlighted = (self.highlighted + 1) % len(self.watchlist)

    def on_enter(self) -> list[Request]:
        """Activate the highlighted symbol, or toggle fullscreen if it is active."""
        if self.highlighted != self.active_index:
            self.active_index = self.highlighted
            self.status_message = "Loading..."
            self._replace_series(BarSeries.empty(self.active_symbol or "", self.timeframe))
            return self.refresh_bars()
        self.toggle_fullscreen()
        return []

    def toggle_fullscreen(self) -> None:
        if self.view_mode is ViewMode.NORMAL:
            self.view_mode = ViewMode.FULLSCREEN
        else:
            self.view_mode = ViewMode.NORMAL

    def escape(self) -> None:
        """Esc: cancel the cursor, else leave fullscreen, else quit."""
        if self.cursor.active:
            self.cursor.cancel()
        elif self.view_mode is ViewMode.FULLSCREEN:
            self.toggle_fullscreen()
        else:
            self.should_quit = True

    # --- chart navigation ---

    def set_timeframe(self, timeframe: TimeFrame) -> list[Request]:
        if timeframe is self.timeframe:
            return []
        self.timeframe = timeframe
        self._replace_series(BarSeries.empty(self.active_symbol or "", timeframe))
        return self.refresh_bars()

    def scroll_left(self) -> None:
        self.pan_offset = pan_left(
            self.pan_offset, len(self.series), self.visible_count, self.config.pan_step,
        )
        self.cursor.reset()

    def scroll_right(self) -> None:
        self.pan_offset = pan_right(self.pan_offset, self.config.pan_step)
        self.cursor.reset()

    def observe_window(self, window: Window) -> bool:
        """Record the window a frame was drawn with.

        A window that differs from the previous frame's (resize, new data)
        resets the cursor; returns True in that case so the caller can
        redraw without it.
        """
        changed = window != self.window
        self.window = window
        if changed and self.cursor.active:
            self.cursor.reset()
            return True
        return False

    # --- add / delete ---

    def start_add_stock(self) -> None:
        self.input_mode = InputMode.ADD_STOCK
        self.input_buffer = ""
        self.status_message = "Enter symbol (sh600519/hk00700/gb_aapl), Enter to add, Esc to cancel"

    def cancel_input(self) -> None:
        self.input_mode = InputMode.NORMAL
        self.input_buffer = ""
        self.status_message = "Cancelled"

    def confirm_add_stock(self) -> list[Request]:
        self.input_mode = InputMode.NORMAL
        try:
            symbol = normalize_symbol(self.input_buffer)
            if symbol in self.watchlist:
                raise WatchlistError(f"{symbol} is already in the watchlist")
        except WatchlistError as e:
            self.status_message = str(e)
            return []

        self.watchlist.append(symbol)
        self.input_buffer = ""
        self.status_message = f"Added: {symbol}"
        self._save()
        return [QuotesRequest((symbol,))]

    def delete_selected(self) -> list[Request]:
        if len(self.watchlist) <= 1:
            self.status_message = "Keep at least one symbol in the watchlist"
            return []

        idx = min(self.highlighted, len(self.watchlist) - 1)
        removed = self.watchlist.pop(idx)
        self.quotes.pop(removed, None)
        self.status_message = f"Removed: {removed}"

        self.highlighted = min(idx, len(self.watchlist) - 1)
        self.active_index = self.highlighted
        self._save()
        self._replace_series(BarSeries.empty(self.active_symbol or "", self.timeframe))
        return self.refresh_bars()

    # ------------------------------------------------------------ internal

    def _replace_series(self, series: BarSeries) -> None:
        """Swap in a new series; the old window and cursor no longer apply."""
        self.series = series
        self.pan_offset = 0
        self.cursor.reset()

    def _save(self) -> None:
        if self.store is None:
            return
        try:
            self.store.save(self.watchlist)
        except OSError as e:
            log.error("failed to save watchlist: %s", e)
            self.status_message = f"Failed to save watchlist: {e}"
