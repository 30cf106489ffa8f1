"""stockterm: terminal stock dashboard.

Real-time quotes for A-share, Hong Kong and US symbols from the Sina
finance endpoints, a persistent watchlist, and candlestick charts with
moving-average overlays rendered in a curses terminal.

Quick start::

    from stockterm import create_manager_from_env
    mgr = create_manager_from_env()
    bars = mgr.get_bars("sh600519", TimeFrame.DAILY)
"""

from __future__ import annotations

from stockterm.chart import BarSeries, ChartFrame, Viewport, build_chart_frame
from stockterm.config import AppConfig, ProviderType, load_config_from_env
from stockterm.errors import FetchError, FetchErrorCode
from stockterm.manager import QuoteManager
from stockterm.models.bar import Bar
from stockterm.models.quote import Quote
from stockterm.models.timeframe import TimeFrame
from stockterm.watchlist import WatchlistError, WatchlistStore, normalize_symbol

__version__ = "0.1.0"

__all__ = [
    # Manager
    "QuoteManager",
    "create_manager_from_env",
    # Config
    "AppConfig",
    "ProviderType",
    "load_config_from_env",
    # Errors
    "FetchError",
    "FetchErrorCode",
    "WatchlistError",
    # Models
    "Bar",
    "Quote",
    "TimeFrame",
    # Chart engine
    "BarSeries",
    "ChartFrame",
    "Viewport",
    "build_chart_frame",
    # Watchlist
    "WatchlistStore",
    "normalize_symbol",
]


def create_manager_from_env() -> QuoteManager:
    """Create a QuoteManager configured from ``STOCKTERM_*`` variables."""
    return QuoteManager(load_config_from_env())
