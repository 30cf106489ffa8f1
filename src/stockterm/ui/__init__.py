"""Curses front end."""

from stockterm.ui.app import run

__all__ = ["run"]
