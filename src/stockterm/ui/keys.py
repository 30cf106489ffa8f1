"""Curses key bindings: ``get_wch`` results to input commands."""

from __future__ import annotations

import curses
from typing import Union

from stockterm.events import Action, Command, InputMode
from stockterm.models.timeframe import TimeFrame

Key = Union[int, str]

ESC = "\x1b"
_ENTER_KEYS: tuple[Key, ...] = ("\n", "\r", curses.KEY_ENTER)
_BACKSPACE_KEYS: tuple[Key, ...] = ("\x7f", "\b", curses.KEY_BACKSPACE)

NORMAL_BINDINGS: dict[Key, Action] = {
    "q": Action.QUIT,
    "\x03": Action.QUIT,
    ESC: Action.ESCAPE,
    "f": Action.TOGGLE_FULLSCREEN,
    curses.KEY_UP: Action.SELECT_PREV,
    "k": Action.SELECT_PREV,
    curses.KEY_DOWN: Action.SELECT_NEXT,
    "j": Action.SELECT_NEXT,
    curses.KEY_LEFT: Action.CURSOR_LEFT,
    "h": Action.CURSOR_LEFT,
    curses.KEY_RIGHT: Action.CURSOR_RIGHT,
    "l": Action.CURSOR_RIGHT,
    curses.KEY_PPAGE: Action.PAN_LEFT,
    curses.KEY_NPAGE: Action.PAN_RIGHT,
    "a": Action.ADD_STOCK,
    "d": Action.DELETE_STOCK,
    "r": Action.REFRESH,
    "?": Action.HELP,
}


def translate_key(key: Key, mode: InputMode) -> Command | None:
    """Map a curses key (``get_wch`` result) to a command for ``mode``."""
    if key == curses.KEY_RESIZE:
        return Command(Action.RESIZE)

    if mode is InputMode.ADD_STOCK:
        if key in _ENTER_KEYS:
            return Command(Action.CONFIRM_INPUT)
        if key == ESC:
            return Command(Action.CANCEL_INPUT)
        if key in _BACKSPACE_KEYS:
            return Command(Action.BACKSPACE)
        if isinstance(key, str) and key.isprintable():
            return Command(Action.INPUT_CHAR, char=key)
        return None

    if isinstance(key, str):
        tf = TimeFrame.from_hotkey(key)
        if tf is not None:
            return Command(Action.SET_TIMEFRAME, timeframe=tf)

    if mode is InputMode.HELP:
        if key in (ESC, "?", "q"):
            return Command(Action.CLOSE_HELP)
        return None

    if key in _ENTER_KEYS:
        return Command(Action.ENTER)
    action = NORMAL_BINDINGS.get(key)
    return Command(action) if action is not None else None
