"""Ordered, deduplicated, size-bounded ticker list backed by the settings port."""
from __future__ import annotations

import logging
import re
from typing import Callable, Iterable

from .errors import LimitExceeded
from .settings import TICKERS_KEY, SettingsPort

logger = logging.getLogger(__name__)

DEFAULT_TICKERS: tuple[str, ...] = ("SPX", "IXIC", "DJI", "AAPL")
MAX_TICKERS = 10

_SPLIT_RE = re.compile(r"[,\r\n]+")

ListListener = Callable[[list[str]], None]


def normalize_symbol(raw: object) -> str:
    return str(raw or "").strip().upper()


def parse_ticker_text(text: str, *, limit: int = MAX_TICKERS) -> list[str]:
    """Split freeform text on newlines/commas into unique uppercase symbols."""
    return _dedupe(_SPLIT_RE.split(str(text or "")), limit=limit)


def _dedupe(values: Iterable[object], *, limit: int) -> list[str]:
    unique: list[str] = []
    for raw in values:
        symbol = normalize_symbol(raw)
        if symbol and symbol not in unique:
            unique.append(symbol)
    return unique[:limit]


class TickerListStore:
    def __init__(self, settings: SettingsPort, *, limit: int = MAX_TICKERS) -> None:
        self._settings = settings
        self._limit = max(int(limit), 1)
        self._symbols: list[str] = []
        self._listeners: list[ListListener] = []

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def symbols(self) -> list[str]:
        return list(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, symbol: object) -> bool:
        return normalize_symbol(symbol) in self._symbols

    def index_of(self, symbol: str) -> int | None:
        try:
            return self._symbols.index(normalize_symbol(symbol))
        except ValueError:
            return None

    def add_listener(self, listener: ListListener) -> None:
        self._listeners.append(listener)

    def load(self) -> list[str]:
        saved = self._settings.get_list(TICKERS_KEY)
        if saved is None:
            self._symbols = list(DEFAULT_TICKERS[: self._limit])
        else:
            self._symbols = _dedupe(saved, limit=self._limit)
        logger.info("Loaded %d tickers: %s", len(self._symbols), ", ".join(self._symbols))
        return self.symbols

    def add(self, symbol: str) -> bool:
        """Append a symbol; False when empty or already present."""
        clean = normalize_symbol(symbol)
        if not clean:
            return False
        if len(self._symbols) >= self._limit:
            raise LimitExceeded(self._limit)
        if clean in self._symbols:
            return False
        self._commit([*self._symbols, clean])
        return True

    def remove(self, symbol: str) -> bool:
        clean = normalize_symbol(symbol)
        if clean not in self._symbols:
            return False
        self._commit([s for s in self._symbols if s != clean])
        return True

    def replace_all(self, text: str) -> list[str]:
        """Replace the list from freeform text; blank input keeps the current list."""
        parsed = parse_ticker_text(text, limit=self._limit)
        if not parsed:
            logger.info("Ignoring ticker replace with no symbols")
            return self.symbols
        self._commit(parsed)
        return self.symbols

    def reset(self) -> list[str]:
        self._commit(list(DEFAULT_TICKERS[: self._limit]))
        return self.symbols

    def _commit(self, symbols: list[str]) -> None:
        self._symbols = symbols
        self._settings.set_list(TICKERS_KEY, list(symbols))
        logger.info("Tickers now: %s", ", ".join(symbols) or "<none>")
        for listener in list(self._listeners):
            listener(self.symbols)
