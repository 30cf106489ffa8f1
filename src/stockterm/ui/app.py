"""Curses main loop."""

from __future__ import annotations

import curses
import os
import time

from stockterm.config import AppConfig
from stockterm.events import RefreshWorker
from stockterm.logging import get_logger
from stockterm.manager import QuoteManager
from stockterm.state import AppState
from stockterm.ui.keys import translate_key
from stockterm.ui.render import draw
from stockterm.ui.widgets import init_colors
from stockterm.watchlist import WatchlistStore

log = get_logger(__name__)

FRAME_TIMEOUT_MS = 200


def run(config: AppConfig, manager: QuoteManager | None = None) -> None:
    """Run the dashboard until the user quits."""
    # Esc is a prefix for escape sequences; keep its delay short.
    os.environ.setdefault("ESCDELAY", "25")
    manager = manager or QuoteManager(config)
    state = AppState.load(config, WatchlistStore(config.watchlist_path))
    worker = RefreshWorker(manager)
    worker.start()
    try:
        curses.wrapper(_main, state, worker)
    except KeyboardInterrupt:
        log.info("interrupted")
    finally:
        worker.stop()
        manager.close()


def _main(stdscr, state: AppState, worker: RefreshWorker) -> None:
    curses.curs_set(0)
    init_colors()
    stdscr.keypad(True)
    stdscr.timeout(FRAME_TIMEOUT_MS)

    for request in state.refresh_all():
        worker.submit(request)
    last_tick = time.monotonic()

    while not state.should_quit:
        for message in worker.drain():
            state.apply(message)

        draw(stdscr, state)

        try:
            key = stdscr.get_wch()
        except curses.error:
            key = None  # timeout, no input
        if key is not None:
            command = translate_key(key, state.input_mode)
            if command is not None:
                for request in state.handle(command):
                    worker.submit(request)

        now = time.monotonic()
        if now - last_tick >= state.config.refresh_seconds:
            last_tick = now
            for request in state.refresh_quotes():
                worker.submit(request)
