"""Bar (OHLCV) data model."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


def parse_price(raw: Any) -> float:
    """Parse a provider numeric field, defaulting to 0.0 when unparsable."""
    if raw is None:
        return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


@dataclass(frozen=True)
class Bar:
    """Single price bar (OHLCV).

    Attributes:
        label: Date/time label as supplied by the provider
            (``2025-02-11`` for daily bars, ``2025-02-11 14:35:00`` intraday).
        open: Opening price.
        high: High price.
        low: Low price.
        close: Closing price.
        volume: Trading volume.
    """

    label: str
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    @property
    def is_bullish(self) -> bool:
        """True when the bar closed at or above its open."""
        return self.close >= self.open

    @classmethod
    def from_text(
        cls,
        label: str,
        open: Any,
        high: Any,
        low: Any,
        close: Any,
        volume: Any = None,
    ) -> Bar:
        """Build a bar from raw provider strings; bad numbers become 0.0."""
        return cls(
            label=str(label),
            open=parse_price(open),
            high=parse_price(high),
            low=parse_price(low),
            close=parse_price(close),
            volume=parse_price(volume),
        )
