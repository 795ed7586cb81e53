"""Thin async client for the Yahoo Finance chart endpoint."""
from __future__ import annotations

import asyncio
import json
import logging
import math
from urllib.parse import quote as url_quote

import aiohttp
from yarl import URL

from .config import TickerBarConfig
from .errors import NetworkError, ParseError
from .models import Quote

logger = logging.getLogger(__name__)

_CHART_PATH = "/v8/finance/chart/"
_CHART_QUERY = "interval=1d&range=5d"

# User-facing index aliases -> provider query keys.
_SYMBOL_ALIASES: dict[str, str] = {
    "SPX": "^GSPC",
    "S&P500": "^GSPC",
    "IXIC": "^IXIC",
    "NAS": "^IXIC",
    "NASDAQ": "^IXIC",
    "DJI": "^DJI",
    "DOW": "^DJI",
}


def map_symbol(symbol: str) -> str:
    """Return the percent-encoded provider key for a user-facing symbol."""
    raw = str(symbol or "").strip()
    key = _SYMBOL_ALIASES.get(raw.upper(), raw)
    return url_quote(key, safe="")


def _usable(value: object) -> float | None:
    """Null, non-numeric, non-finite and zero values are all unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(num) or not math.isfinite(num) or num == 0:
        return None
    return num


def resolve_previous_close(
    price: float,
    *,
    previous_close: object = None,
    closes: list[object] | None = None,
    chart_previous_close: object = None,
) -> float:
    """Pick the baseline for change/pct from whatever the provider returned.

    Order: explicit previous close, then the daily closes window (second-to-last
    close when there are two or more, the only close when there is one), then
    chartPreviousClose, then the price itself. The last close in the window is
    assumed to be the live session; outside market hours that assumption does
    not hold and the baseline is best-effort.
    """
    explicit = _usable(previous_close)
    if explicit is not None:
        return explicit

    valid: list[float] = []
    for raw in closes or ():
        if raw is None or isinstance(raw, bool):
            continue
        try:
            num = float(raw)
        except (TypeError, ValueError):
            continue
        if math.isfinite(num):
            valid.append(num)
    if len(valid) >= 2:
        picked = _usable(valid[-2])
        if picked is not None:
            return picked
    elif len(valid) == 1:
        picked = _usable(valid[0])
        if picked is not None:
            return picked

    chart_prev = _usable(chart_previous_close)
    if chart_prev is not None:
        return chart_prev
    return float(price)


def _closes_from_result(result: dict) -> list[object]:
    indicators = result.get("indicators")
    if indicators is None:
        return []
    if not isinstance(indicators, dict):
        raise ParseError("indicators is not an object")
    quotes = indicators.get("quote") or []
    if not isinstance(quotes, list):
        raise ParseError("indicators.quote is not a list")
    if not quotes:
        return []
    first = quotes[0]
    if not isinstance(first, dict):
        raise ParseError("indicators.quote[0] is not an object")
    closes = first.get("close") or []
    if not isinstance(closes, list):
        raise ParseError("indicators.quote[0].close is not a list")
    return closes


def parse_chart_payload(symbol: str, payload: object) -> Quote:
    """Decode a chart response into a Quote carrying the caller's alias symbol."""
    if not isinstance(payload, dict) or not isinstance(payload.get("chart"), dict):
        raise ParseError(f"{symbol}: missing chart object")
    results = payload["chart"].get("result")
    if not isinstance(results, list) or not results:
        raise ParseError(f"{symbol}: chart has no result entries")
    result = results[0]
    if not isinstance(result, dict) or not isinstance(result.get("meta"), dict):
        raise ParseError(f"{symbol}: result[0] has no meta")
    meta = result["meta"]

    raw_price = meta.get("regularMarketPrice")
    if raw_price is None or isinstance(raw_price, bool):
        raise ParseError(f"{symbol}: missing regularMarketPrice")
    try:
        price = float(raw_price)
    except (TypeError, ValueError) as exc:
        raise ParseError(f"{symbol}: bad regularMarketPrice {raw_price!r}") from exc

    previous = resolve_previous_close(
        price,
        previous_close=meta.get("previousClose"),
        closes=_closes_from_result(result),
        chart_previous_close=meta.get("chartPreviousClose"),
    )
    return Quote.from_previous_close(symbol, price, previous)


class YahooChartClient:
    def __init__(
        self,
        config: TickerBarConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._session = session
        self._owns_session = session is None

    def chart_url(self, symbol: str) -> URL:
        raw = f"{self._config.base_url}{_CHART_PATH}{map_symbol(symbol)}?{_CHART_QUERY}"
        return URL(raw, encoded=True)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            kwargs: dict = {"headers": {"User-Agent": self._config.user_agent}}
            if self._config.http_timeout_sec is not None:
                kwargs["timeout"] = aiohttp.ClientTimeout(total=self._config.http_timeout_sec)
            self._session = aiohttp.ClientSession(**kwargs)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def fetch_quote(self, symbol: str) -> Quote:
        try:
            url = self.chart_url(symbol)
        except ValueError as exc:
            raise NetworkError(f"{symbol}: bad URL ({exc})") from exc
        session = await self._get_session()
        try:
            async with session.get(url) as resp:
                if resp.status != 200:
                    raise NetworkError(f"{symbol}: HTTP {resp.status}", status=resp.status)
                body = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise NetworkError(f"{symbol}: {type(exc).__name__}: {exc}") from exc
        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise ParseError(f"{symbol}: response is not JSON") from exc
        quote = parse_chart_payload(symbol, payload)
        logger.debug("Fetched %s price=%.4f change=%.4f", symbol, quote.price, quote.change)
        return quote
