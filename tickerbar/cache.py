"""In-memory last-known quote per symbol."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .models import Quote


@dataclass
class QuoteCache:
    _quotes: dict[str, Quote] = field(default_factory=dict)
    version: int = 0

    def get(self, symbol: str) -> Quote | None:
        return self._quotes.get(symbol)

    def set(self, symbol: str, quote: Quote) -> Quote:
        self._quotes[symbol] = quote
        self.version += 1
        return quote

    def evict(self, symbol: str) -> bool:
        if self._quotes.pop(symbol, None) is None:
            return False
        self.version += 1
        return True

    def retain(self, symbols: Iterable[str]) -> list[str]:
        """Drop every entry not in `symbols`; returns the evicted keys."""
        keep = set(symbols)
        dropped = [key for key in self._quotes if key not in keep]
        for key in dropped:
            self.evict(key)
        return dropped

    def snapshot(self) -> dict[str, Quote]:
        return dict(self._quotes)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._quotes

    def __len__(self) -> int:
        return len(self._quotes)
