"""Watchlist symbol rules and JSON persistence.

The watchlist is stored as ``{"watchlist": ["sh600519", ...]}``. A missing
or unreadable file falls back to the default list rather than failing.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from stockterm.config import DEFAULT_CONFIG_PATH
from stockterm.logging import get_logger

log = get_logger(__name__)

DEFAULT_WATCHLIST: tuple[str, ...] = (
    "sh600519",  # Kweichow Moutai
    "sz000858",  # Wuliangye
    "sh601318",  # Ping An
)

SUPPORTED_PREFIXES: tuple[str, ...] = ("sh", "sz", "bj", "hk", "gb_")


class WatchlistError(ValueError):
    """Rejected watchlist edit (bad symbol or duplicate)."""


def normalize_symbol(raw: str) -> str:
    """Canonical provider symbol: lower-case, ``us`` rewritten to ``gb_``.

    Raises:
        WatchlistError: empty input or an unsupported market prefix.
    """
    symbol = raw.strip().lower()
    if not symbol:
        raise WatchlistError("Symbol must not be empty")
    if symbol.startswith("us"):
        symbol = "gb_" + symbol[2:]
    if not symbol.startswith(SUPPORTED_PREFIXES):
        raise WatchlistError(
            "Unsupported prefix; use sh/sz/bj (A-shares), hk (Hong Kong), gb_/us (US)"
        )
    return symbol


class WatchlistStore:
    """Load and save the watchlist file."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path else DEFAULT_CONFIG_PATH

    def load(self) -> list[str]:
        state = self._load_state()
        symbols = state.get("watchlist")
        if not isinstance(symbols, list) or not all(isinstance(s, str) for s in symbols):
            return list(DEFAULT_WATCHLIST)
        return list(symbols)

    def save(self, symbols: list[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps({"watchlist": list(symbols)}, indent=2),
            encoding="utf-8",
        )
        log.info("saved %d symbols to %s", len(symbols), self.path)

    def _load_state(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            log.warning("ignoring unreadable watchlist %s: %s", self.path, exc)
            return {}
        if isinstance(raw, dict):
            return raw
        return {}
