"""Dashboard configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ProviderType(Enum):
    """Supported quote/bar provider backends."""

    SINA = "sina"
    MOCK = "mock"


DEFAULT_CONFIG_PATH = Path.home() / ".config" / "stockterm" / "config.json"
DEFAULT_LOG_FILE = Path.home() / ".cache" / "stockterm" / "stockterm.log"


@dataclass
class AppConfig:
    """Configuration for the dashboard.

    Attributes:
        providers: Provider backends ordered by priority.
        refresh_seconds: Interval between automatic quote refreshes.
        kline_length: Number of bars requested per chart fetch.
        ma_windows: Moving-average overlay window sizes.
        candle_width: Horizontal cells per candle, gap included.
        pan_step: Bars shifted per pan action.
        watchlist_path: JSON file holding the watchlist.
        log_level: Root log level name.
        log_file: Log file path; the TUI never logs to the terminal.
        log_json: Emit JSON log lines instead of plain text.
        timeout_seconds: HTTP timeout for provider requests.
    """

    providers: list[ProviderType] = field(
        default_factory=lambda: [ProviderType.SINA]
    )
    refresh_seconds: float = 5.0
    kline_length: int = 120
    ma_windows: tuple[int, ...] = (5, 10, 20)
    candle_width: int = 3
    pan_step: int = 5
    watchlist_path: Path = DEFAULT_CONFIG_PATH
    log_level: str = "info"
    log_file: Path | None = DEFAULT_LOG_FILE
    log_json: bool = False
    timeout_seconds: float = 5.0


def parse_windows(raw: str) -> tuple[int, ...]:
    windows = tuple(int(part) for part in raw.split(",") if part.strip())
    return tuple(w for w in windows if w > 0)


def load_config_from_env() -> AppConfig:
    """Build an ``AppConfig`` from ``STOCKTERM_*`` environment variables.

    Environment variables:
        STOCKTERM_PROVIDERS: Comma-separated provider list (default: "sina").
        STOCKTERM_REFRESH: Quote refresh interval in seconds (default: 5).
        STOCKTERM_KLINE_LENGTH: Bars per chart fetch (default: 120).
        STOCKTERM_MA: Comma-separated MA windows (default: "5,10,20").
        STOCKTERM_CONFIG: Watchlist file path.
        STOCKTERM_LOG_LEVEL: Log level (default: "info").
        STOCKTERM_LOG_FILE: Log file path.
        STOCKTERM_TIMEOUT: HTTP timeout in seconds (default: 5).
    """
    defaults = AppConfig()
    provider_str = os.getenv("STOCKTERM_PROVIDERS", "sina")
    providers = [
        ProviderType(name.strip().lower())
        for name in provider_str.split(",")
        if name.strip()
    ]

    ma_raw = os.getenv("STOCKTERM_MA")
    log_file = os.getenv("STOCKTERM_LOG_FILE")

    return AppConfig(
        providers=providers or defaults.providers,
        refresh_seconds=float(os.getenv("STOCKTERM_REFRESH", defaults.refresh_seconds)),
        kline_length=int(os.getenv("STOCKTERM_KLINE_LENGTH", defaults.kline_length)),
        ma_windows=parse_windows(ma_raw) if ma_raw else defaults.ma_windows,
        watchlist_path=Path(os.getenv("STOCKTERM_CONFIG", str(defaults.watchlist_path))),
        log_level=os.getenv("STOCKTERM_LOG_LEVEL", defaults.log_level),
        log_file=Path(log_file) if log_file else defaults.log_file,
        timeout_seconds=float(os.getenv("STOCKTERM_TIMEOUT", defaults.timeout_seconds)),
    )
