"""Shared UI helpers.

Pure formatting helpers that turn cached quotes into `rich.text.Text`.
Keep it dependency-light and free of network side effects.
"""

from __future__ import annotations

from datetime import datetime
from typing import Mapping, Sequence

from rich.text import Text

from ..models import Quote

_UP_STYLE = "green"
_DOWN_STYLE = "red"
_SEP_STYLE = "dim"
_ARROW_UP = "▲"
_ARROW_DOWN = "▼"
MARQUEE_SEPARATOR = "   |   "
EMPTY_LABEL = "No Tickers"

_TABLE_WIDTHS = {
    "symbol": 8,
    "price": 12,
    "change": 10,
    "pct": 9,
}


# region Formatting Helpers
def _fmt_money(value: float) -> str:
    return f"{value:,.2f}"


def _arrow(quote: Quote) -> str:
    return _ARROW_UP if quote.is_up else _ARROW_DOWN


def _quote_style(quote: Quote) -> str:
    return _UP_STYLE if quote.is_up else _DOWN_STYLE


def _quote_label(symbol: str, quote: Quote) -> str:
    return f"{symbol} {_fmt_money(quote.price)} {_arrow(quote)}{_fmt_money(abs(quote.change))}"
# endregion


def _quote_text(symbol: str, quote: Quote) -> Text:
    return Text(_quote_label(symbol, quote), style=_quote_style(quote))


def _loading_text(symbol: str) -> Text:
    return Text(f"Loading {symbol}...", style="dim")


def _empty_text() -> Text:
    return Text(EMPTY_LABEL, style="dim")


def _marquee_text(symbols: Sequence[str], quotes: Mapping[str, Quote]) -> Text:
    """One pass over the list: colored quote (or bare symbol) + separator each."""
    text = Text()
    for symbol in symbols:
        quote = quotes.get(symbol)
        if quote is None:
            text.append(symbol)
        else:
            text.append_text(_quote_text(symbol, quote))
        text.append(MARQUEE_SEPARATOR, style=_SEP_STYLE)
    return text


def _ticker_row(index: int, symbol: str, quote: Quote | None, *, current: bool) -> list[Text]:
    marker = Text("▸" if current else " ", style="bold" if current else "")
    key = Text(str((index + 1) % 10), style="dim")
    label = Text(symbol.ljust(_TABLE_WIDTHS["symbol"]), style="bold" if current else "")
    if quote is None:
        return [
            marker,
            key,
            label,
            Text("n/a".rjust(_TABLE_WIDTHS["price"]), style="dim"),
            Text("".rjust(_TABLE_WIDTHS["change"])),
            Text("".rjust(_TABLE_WIDTHS["pct"])),
        ]
    style = _quote_style(quote)
    price = Text(_fmt_money(quote.price).rjust(_TABLE_WIDTHS["price"]))
    change = Text(
        f"{_arrow(quote)}{_fmt_money(abs(quote.change))}".rjust(_TABLE_WIDTHS["change"]),
        style=style,
    )
    pct = Text(f"{quote.percent_change:+.2f}%".rjust(_TABLE_WIDTHS["pct"]), style=style)
    return [marker, key, label, price, change, pct]


def _status_line(
    *,
    mode_label: str,
    count: int,
    limit: int,
    refreshed_at: datetime | None,
    errors: Sequence[str] = (),
    refreshing: bool = False,
) -> str:
    ts = refreshed_at.astimezone().strftime("%H:%M:%S") if refreshed_at else "n/a"
    base = f"{mode_label} | tickers: {count}/{limit} | last update: {ts}"
    if refreshing:
        base = f"{base} | refreshing..."
    if errors:
        return f"{base} | failed: {', '.join(errors)}"
    return base
