"""Input actions, fetch messages and the background refresh worker.

The UI thread owns all state. Keys are translated to ``Command`` objects
by ``stockterm.ui.keys`` and applied by ``AppState``; network work is
handed to ``RefreshWorker``, whose results come back as messages on a
queue that the UI thread drains between frames. Nothing here needs curses.
"""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from stockterm.errors import FetchError
from stockterm.logging import get_logger
from stockterm.manager import QuoteManager
from stockterm.models.bar import Bar
from stockterm.models.quote import Quote
from stockterm.models.timeframe import TimeFrame

log = get_logger(__name__)


class InputMode(Enum):
    NORMAL = "normal"
    ADD_STOCK = "add_stock"
    HELP = "help"


class Action(Enum):
    """Discrete, already-debounced user actions."""

    QUIT = "quit"
    ESCAPE = "escape"
    TOGGLE_FULLSCREEN = "toggle_fullscreen"
    ENTER = "enter"
    SELECT_PREV = "select_prev"
    SELECT_NEXT = "select_next"
    CURSOR_LEFT = "cursor_left"
    CURSOR_RIGHT = "cursor_right"
    CURSOR_CANCEL = "cursor_cancel"
    PAN_LEFT = "pan_left"
    PAN_RIGHT = "pan_right"
    ADD_STOCK = "add_stock"
    DELETE_STOCK = "delete_stock"
    REFRESH = "refresh"
    HELP = "help"
    CLOSE_HELP = "close_help"
    SET_TIMEFRAME = "set_timeframe"
    RESIZE = "resize"
    # add-stock prompt
    INPUT_CHAR = "input_char"
    BACKSPACE = "backspace"
    CONFIRM_INPUT = "confirm_input"
    CANCEL_INPUT = "cancel_input"


@dataclass(frozen=True)
class Command:
    action: Action
    timeframe: TimeFrame | None = None
    char: str = ""


# ------------------------------------------------------------------ requests

@dataclass(frozen=True)
class BarsRequest:
    symbol: str
    timeframe: TimeFrame
    count: int | None = None


@dataclass(frozen=True)
class QuotesRequest:
    symbols: tuple[str, ...]


Request = Union[BarsRequest, QuotesRequest]


# ------------------------------------------------------------------ messages

@dataclass(frozen=True)
class BarsLoaded:
    """Result of a bar fetch, tagged with what was asked for."""

    symbol: str
    timeframe: TimeFrame
    bars: tuple[Bar, ...] = ()
    error: FetchError | None = None

    @property
    def key(self) -> tuple[str, TimeFrame]:
        return self.symbol, self.timeframe


@dataclass(frozen=True)
class QuotesLoaded:
    quotes: dict[str, Quote] = field(default_factory=dict)
    errors: dict[str, FetchError] = field(default_factory=dict)


Message = Union[BarsLoaded, QuotesLoaded]


class RefreshWorker:
    """Single background thread performing fetches off the UI thread.

    Requests are processed in submission order. Stale bar responses are not
    cancelled here; ``AppState.apply_bars`` discards them by key.
    """

    def __init__(self, manager: QuoteManager) -> None:
        self.manager = manager
        self._requests: queue.Queue[Request | None] = queue.Queue()
        self.messages: queue.Queue[Message] = queue.Queue()
        self._thread = threading.Thread(target=self._run, name="refresh-worker", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def stop(self, timeout: float = 2.0) -> None:
        self._requests.put(None)
        self._thread.join(timeout)

    def submit(self, request: Request) -> None:
        self._requests.put(request)

    def drain(self) -> list[Message]:
        """All messages posted since the last call, without blocking."""
        out: list[Message] = []
        while True:
            try:
                out.append(self.messages.get_nowait())
            except queue.Empty:
                return out

    def process(self, request: Request) -> Message:
        """Run one request synchronously and build its result message."""
        if isinstance(request, BarsRequest):
            try:
                bars = self.manager.get_bars(request.symbol, request.timeframe, request.count)
            except FetchError as e:
                log.warning("bars for %s failed: %s", request.symbol, e)
                return BarsLoaded(request.symbol, request.timeframe, error=e)
            return BarsLoaded(request.symbol, request.timeframe, tuple(bars))

        quotes: dict[str, Quote] = {}
        errors: dict[str, FetchError] = {}
        for symbol, result in zip(request.symbols, self.manager.get_quotes(list(request.symbols))):
            if isinstance(result, FetchError):
                errors[symbol] = result
            else:
                quotes[symbol] = result
        return QuotesLoaded(quotes, errors)

    def _run(self) -> None:
        while True:
            request = self._requests.get()
            if request is None:
                return
            try:
                message = self.process(request)
            except Exception as exc:  # noqa: BLE001
                log.exception("refresh worker failed on %r", request)
                message = self._failure(request, exc)
            self.messages.put(message)

    @staticmethod
    def _failure(request: Request, exc: Exception) -> Message:
        error = FetchError(f"Unexpected fetch failure: {exc}")
        if isinstance(request, BarsRequest):
            return BarsLoaded(request.symbol, request.timeframe, error=error)
        return QuotesLoaded(errors={s: error for s in request.symbols})
