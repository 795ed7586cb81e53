from __future__ import annotations

import asyncio
from pathlib import Path

from rich.text import Text

from tickerbar.config import TickerBarConfig
from tickerbar.errors import NetworkError
from tickerbar.models import Quote


def run(coro):
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def make_config(**overrides) -> TickerBarConfig:
    values = dict(
        refresh_sec=60.0,
        rotate_sec=5.0,
        marquee_sec=0.15,
        marquee_width=40,
        max_tickers=10,
        base_url="https://query1.finance.yahoo.com",
        user_agent="Mozilla/5.0 test",
        http_timeout_sec=None,
        settings_path=Path("/nonexistent/settings.json"),
        log_level="INFO",
        log_file=Path("/nonexistent/tickerbar.log"),
    )
    values.update(overrides)
    return TickerBarConfig(**values)


class RecordingSink:
    def __init__(self) -> None:
        self.frames: list[Text] = []
        self.monospace: list[bool] = []

    def render(self, text: Text, *, monospace_digits: bool = True) -> None:
        self.frames.append(text)
        self.monospace.append(monospace_digits)

    @property
    def last(self) -> str:
        return self.frames[-1].plain if self.frames else ""


class FakeTimer:
    def __init__(self, interval: float, callback) -> None:
        self.interval = interval
        self.callback = callback
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class TimerFactory:
    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, interval: float, callback) -> FakeTimer:
        timer = FakeTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.stopped]


class FakeSource:
    """QuoteSource stub: fixed prices, optional per-symbol failures and gates."""

    def __init__(self, prices: dict[str, tuple[float, float]] | None = None) -> None:
        self.prices = dict(prices or {})
        self.failures: dict[str, Exception] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[str] = []

    async def fetch_quote(self, symbol: str) -> Quote:
        self.calls.append(symbol)
        gate = self.gates.get(symbol)
        if gate is not None:
            await gate.wait()
        if symbol in self.failures:
            raise self.failures[symbol]
        if symbol not in self.prices:
            raise NetworkError(f"{symbol}: HTTP 404", status=404)
        price, prev = self.prices[symbol]
        return Quote.from_previous_close(symbol, price, prev)
