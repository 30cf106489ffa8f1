"""Bar sampling intervals."""

from __future__ import annotations

from enum import Enum


class TimeFrame(Enum):
    """Chart timeframes with their provider ``scale`` (minutes per bar)."""

    MIN5 = "5min"
    MIN15 = "15min"
    MIN30 = "30min"
    MIN60 = "60min"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @property
    def scale(self) -> int:
        return _SCALES[self]

    @property
    def label(self) -> str:
        return _LABELS[self][0]

    @property
    def short_label(self) -> str:
        return _LABELS[self][1]

    @classmethod
    def all(cls) -> list[TimeFrame]:
        """Timeframes in hotkey order (``1`` .. ``7``)."""
        return list(cls)

    @classmethod
    def from_hotkey(cls, key: str) -> TimeFrame | None:
        """Map ``"1"``..``"7"`` to a timeframe; anything else is None."""
        if len(key) != 1 or not key.isdigit():
            return None
        idx = int(key) - 1
        frames = cls.all()
        if 0 <= idx < len(frames):
            return frames[idx]
        return None


_SCALES: dict[TimeFrame, int] = {
    TimeFrame.MIN5: 5,
    TimeFrame.MIN15: 15,
    TimeFrame.MIN30: 30,
    TimeFrame.MIN60: 60,
    TimeFrame.DAILY: 240,
    TimeFrame.WEEKLY: 1200,
    TimeFrame.MONTHLY: 7200,
}

_LABELS: dict[TimeFrame, tuple[str, str]] = {
    TimeFrame.MIN5: ("5分钟", "5m"),
    TimeFrame.MIN15: ("15分钟", "15m"),
    TimeFrame.MIN30: ("30分钟", "30m"),
    TimeFrame.MIN60: ("60分钟", "60m"),
    TimeFrame.DAILY: ("日K", "日K"),
    TimeFrame.WEEKLY: ("周K", "周K"),
    TimeFrame.MONTHLY: ("月K", "月K"),
}
