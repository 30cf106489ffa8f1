"""Dashboard data models."""

from stockterm.models.bar import Bar
from stockterm.models.quote import Quote
from stockterm.models.timeframe import TimeFrame

__all__ = [
    "Bar",
    "Quote",
    "TimeFrame",
]
