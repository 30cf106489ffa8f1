"""Sina Finance provider.

Realtime quotes come from ``hq.sinajs.cn`` as GBK-encoded JavaScript
assignments; K-line bars come from the JSON ``getKLineData`` endpoint.
Quote layouts differ per market and are dispatched on the symbol prefix.
"""

from __future__ import annotations

from typing import Any, Callable

import certifi
import pandas as pd
import requests

from stockterm.errors import FetchError, FetchErrorCode
from stockterm.logging import get_logger
from stockterm.models.bar import Bar, parse_price
from stockterm.models.quote import Quote
from stockterm.models.timeframe import TimeFrame
from stockterm.providers.base import BaseQuoteProvider

log = get_logger(__name__)

REALTIME_URL = "http://hq.sinajs.cn/list="
KLINE_URL = (
    "http://money.finance.sina.com.cn/quotes_service/api/json_v2.php/"
    "CN_MarketData.getKLineData"
)
REFERER = "http://finance.sina.com.cn"

_KLINE_COLUMNS = ("open", "high", "low", "close", "volume")


# ------------------------------------------------------------------ parsing

def extract_payload(symbol: str, text: str) -> list[str]:
    """Split the quoted body of ``var hq_str_<sym>="...";`` into fields."""
    start = text.find('"')
    end = text.rfind('"')
    if start < 0 or end <= start:
        raise FetchError(
            f"Malformed quote response for {symbol}: no quoted payload",
            code=FetchErrorCode.PARSE_FAILED,
        )
    data = text[start + 1:end]
    if not data:
        raise FetchError(
            f"Empty quote payload, possibly an invalid symbol: {symbol}",
            code=FetchErrorCode.NOT_FOUND,
        )
    return data.split(",")


def _require(symbol: str, fields: list[str], minimum: int) -> None:
    if len(fields) < minimum:
        raise FetchError(
            f"Quote for {symbol} has {len(fields)} fields, expected at least {minimum}",
            code=FetchErrorCode.PARSE_FAILED,
        )


def _parse_a_share(symbol: str, fields: list[str]) -> Quote:
    _require(symbol, fields, 32)
    return Quote(
        symbol=symbol,
        name=fields[0],
        open=parse_price(fields[1]),
        pre_close=parse_price(fields[2]),
        current=parse_price(fields[3]),
        high=parse_price(fields[4]),
        low=parse_price(fields[5]),
        volume=parse_price(fields[8]),
        turnover=parse_price(fields[9]),
        date=fields[30],
        time=fields[31],
    )


def _parse_hk(symbol: str, fields: list[str]) -> Quote:
    _require(symbol, fields, 19)
    return Quote(
        symbol=symbol,
        name=fields[1] or fields[0],
        open=parse_price(fields[2]),
        pre_close=parse_price(fields[3]),
        high=parse_price(fields[4]),
        low=parse_price(fields[5]),
        current=parse_price(fields[6]),
        turnover=parse_price(fields[11]),
        volume=parse_price(fields[12]),
        date=fields[17].replace("/", "-"),
        time=fields[18],
    )


def _parse_us(symbol: str, fields: list[str]) -> Quote:
    _require(symbol, fields, 27)
    stamp = fields[3].split(" ", 1)
    current = parse_price(fields[1])
    volume = parse_price(fields[10])
    return Quote(
        symbol=symbol,
        name=fields[0],
        open=parse_price(fields[5]),
        pre_close=parse_price(fields[26]),
        current=current,
        high=parse_price(fields[6]),
        low=parse_price(fields[7]),
        volume=volume,
        turnover=volume * current,
        date=stamp[0],
        time=stamp[1] if len(stamp) > 1 else "",
    )


QuoteParser = Callable[[str, list[str]], Quote]

# Longest prefixes first.
MARKET_PARSERS: tuple[tuple[str, QuoteParser], ...] = (
    ("gb_", _parse_us),
    ("hk", _parse_hk),
    ("sh", _parse_a_share),
    ("sz", _parse_a_share),
    ("bj", _parse_a_share),
)


def parse_realtime_quote(symbol: str, text: str) -> Quote:
    """Parse one realtime response using the parser for the symbol's market."""
    key = symbol.lower()
    for prefix, parser in MARKET_PARSERS:
        if key.startswith(prefix):
            return parser(key, extract_payload(key, text))
    raise FetchError(
        f"Unsupported market prefix: {symbol}",
        code=FetchErrorCode.NOT_FOUND,
    )


def parse_kline_records(records: Any) -> list[Bar]:
    """Decode the K-line JSON list; unparsable numbers become 0.0."""
    if not records:
        return []
    if not isinstance(records, list):
        raise FetchError(
            f"Unexpected K-line payload type: {type(records).__name__}",
            code=FetchErrorCode.PARSE_FAILED,
        )
    df = pd.DataFrame.from_records(records)
    if "day" not in df.columns:
        raise FetchError(
            "K-line payload is missing the 'day' column",
            code=FetchErrorCode.PARSE_FAILED,
        )
    for col in _KLINE_COLUMNS:
        if col not in df.columns:
            df[col] = 0.0
        df[col] = (
            pd.to_numeric(df[col], errors="coerce")
            .replace([float("inf"), float("-inf")], 0.0)
            .fillna(0.0)
        )

    return [
        Bar(
            label=str(row.day),
            open=float(row.open),
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
            volume=float(row.volume),
        )
        for row in df.itertuples(index=False)
    ]


# ----------------------------------------------------------------- provider

class SinaProvider(BaseQuoteProvider):
    """Fetch quotes and K-line bars from Sina Finance.

    Capabilities: bars, quotes.
    """

    name = "sina"

    def __init__(self, timeout: float = 5.0, session: requests.Session | None = None) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.verify = certifi.where()
        self.session.headers.update({"Referer": REFERER})

    def capabilities(self) -> set[str]:
        return {"bars", "quotes"}

    def close(self) -> None:
        self.session.close()

    # ------------------------------------------------------------------ bars

    def get_bars(
        self,
        symbol: str,
        timeframe: TimeFrame = TimeFrame.DAILY,
        count: int = 120,
    ) -> list[Bar]:
        params = {
            "symbol": symbol.lower(),
            "scale": timeframe.scale,
            "ma": "no",
            "datalen": count,
        }
        resp = self._get(KLINE_URL, params=params, what=f"K-line {symbol}")
        try:
            records = resp.json()
        except ValueError as exc:
            raise FetchError(
                f"Failed to decode K-line JSON for {symbol}: {exc}",
                code=FetchErrorCode.PARSE_FAILED,
            ) from exc
        bars = parse_kline_records(records)
        log.debug("fetched %d bars for %s (%s)", len(bars), symbol, timeframe.value)
        return bars

    # --------------------------------------------------------------- quotes

    def get_quote(self, symbol: str) -> Quote:
        resp = self._get(REALTIME_URL + symbol.lower(), what=f"quote {symbol}")
        text = resp.content.decode("gbk", errors="replace")
        return parse_realtime_quote(symbol, text)

    # ------------------------------------------------------------- internal

    def _get(self, url: str, *, what: str, params: dict[str, Any] | None = None) -> requests.Response:
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as exc:
            raise FetchError(
                f"Sina {what} timed out",
                code=FetchErrorCode.TIMEOUT,
                retryable=True,
            ) from exc
        except requests.RequestException as exc:
            raise FetchError(
                f"Sina {what} failed: {exc}",
                code=FetchErrorCode.PROVIDER_ERROR,
                retryable=True,
            ) from exc
        self._check_response(resp)
        return resp

    def _check_response(self, resp: requests.Response) -> None:
        if resp.status_code == 429:
            raise FetchError(
                "Sina rate limited",
                code=FetchErrorCode.RATE_LIMITED,
                retryable=True,
            )
        if resp.status_code == 403:
            raise FetchError(
                "Sina refused the request",
                code=FetchErrorCode.AUTH_FAILED,
            )
        if resp.status_code == 404:
            raise FetchError(
                "Sina endpoint not found",
                code=FetchErrorCode.NOT_FOUND,
            )
        try:
            resp.raise_for_status()
        except requests.HTTPError as exc:
            raise FetchError(
                f"Sina HTTP error: {exc}",
                code=FetchErrorCode.PROVIDER_ERROR,
                retryable=True,
            ) from exc
