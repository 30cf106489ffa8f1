"""QuoteManager: provider chain with retryable fallback."""

from __future__ import annotations

from typing import Any

from stockterm.config import AppConfig, ProviderType
from stockterm.errors import FetchError, FetchErrorCode
from stockterm.logging import get_logger
from stockterm.models.bar import Bar
from stockterm.models.quote import Quote
from stockterm.models.timeframe import TimeFrame
from stockterm.providers import create_provider
from stockterm.providers.base import BaseQuoteProvider
from stockterm.quality import inspect_bars

log = get_logger(__name__)


class QuoteManager:
    """Central fetcher: provider chain -> inspect -> fallback.

    Usage::

        mgr = QuoteManager(AppConfig(providers=[ProviderType.SINA]))
        bars = mgr.get_bars("sh600519", TimeFrame.DAILY)
    """

    def __init__(
        self,
        config: AppConfig,
        providers: list[BaseQuoteProvider] | None = None,
    ) -> None:
        self.config = config
        if providers is not None:
            self.providers = list(providers)
        else:
            self.providers = []
            for pt in config.providers:
                kwargs: dict[str, Any] = {}
                if pt is ProviderType.SINA:
                    kwargs["timeout"] = config.timeout_seconds
                self.providers.append(create_provider(pt, **kwargs))

    # ----------------------------------------------------------------- bars

    def get_bars(
        self,
        symbol: str,
        timeframe: TimeFrame = TimeFrame.DAILY,
        count: int | None = None,
    ) -> list[Bar]:
        """Get bars from the first provider that answers.

        Retryable errors fall through to the next provider; non-retryable
        errors are raised immediately.
        """
        count = self.config.kline_length if count is None else count
        last_error: FetchError | None = None
        for provider in self.providers:
            if "bars" not in provider.capabilities():
                continue
            try:
                bars = provider.get_bars(symbol, timeframe, count)
            except FetchError as e:
                if not e.retryable:
                    raise
                log.warning("%s bars for %s failed, trying next: %s", provider.name, symbol, e)
                last_error = e
                continue

            if bars:
                result = inspect_bars(bars)
                for check in result.failed_checks:
                    log.warning("%s %s: %s", symbol, check.name, check.message)
            return bars

        raise last_error or FetchError(
            "All providers failed",
            code=FetchErrorCode.NO_DATA,
        )

    # --------------------------------------------------------------- quotes

    def get_quote(self, symbol: str) -> Quote:
        """Get a quote from the first capable provider."""
        return self._first_capable("quotes", "get_quote", symbol)

    def get_quotes(self, symbols: list[str]) -> list[Quote | FetchError]:
        """Quotes for several symbols; a failing symbol yields its error."""
        results: list[Quote | FetchError] = []
        for s in symbols:
            try:
                results.append(self.get_quote(s))
            except FetchError as e:
                log.warning("quote for %s failed: %s", s, e)
                results.append(e)
        return results

    def close(self) -> None:
        for provider in self.providers:
            provider.close()

    # ------------------------------------------------------------ internal

    def _first_capable(self, capability: str, method: str, *args: Any, **kwargs: Any) -> Any:
        """Try providers in order for a given capability."""
        last_error: FetchError | None = None
        for provider in self.providers:
            if capability not in provider.capabilities():
                continue
            try:
                return getattr(provider, method)(*args, **kwargs)
            except FetchError as e:
                if not e.retryable:
                    raise
                last_error = e
                continue
            except NotImplementedError:
                continue

        raise last_error or FetchError(
            f"No provider supports '{capability}'",
            code=FetchErrorCode.NO_DATA,
        )
