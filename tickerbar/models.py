"""Shared quote and display data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Quote:
    symbol: str
    price: float
    change: float
    percent_change: float

    @classmethod
    def from_previous_close(cls, symbol: str, price: float, previous_close: float) -> Quote:
        change = price - previous_close
        pct = (change / previous_close) * 100.0 if previous_close != 0 else 0.0
        return cls(symbol=symbol, price=price, change=change, percent_change=pct)

    @property
    def is_up(self) -> bool:
        return self.change >= 0


class DisplayMode(str, Enum):
    ROTATE = "rotate"
    MARQUEE = "marquee"
