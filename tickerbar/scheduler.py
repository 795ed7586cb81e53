"""Periodic + on-demand quote refresh cycles feeding the quote cache."""
from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Protocol

from .cache import QuoteCache
from .errors import QuoteSourceError
from .models import Quote
from .store import TickerListStore

logger = logging.getLogger(__name__)


class QuoteSource(Protocol):
    async def fetch_quote(self, symbol: str) -> Quote: ...


@dataclass(frozen=True)
class RefreshReport:
    symbols: tuple[str, ...]
    updated: tuple[str, ...]
    errors: dict[str, str] = field(default_factory=dict)
    finished_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def ok(self) -> bool:
        return not self.errors


class RefreshScheduler:
    """Owns the refresh loop; all cache writes happen on the caller's event loop.

    A trigger that lands while a cycle is running marks the scheduler dirty and
    exactly one follow-up cycle runs once the current one finishes.
    """

    def __init__(
        self,
        source: QuoteSource,
        store: TickerListStore,
        cache: QuoteCache,
        *,
        interval_sec: float,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._source = source
        self._store = store
        self._cache = cache
        self._interval_sec = max(float(interval_sec), 1.0)
        self._on_change = on_change
        self._refresh_lock = asyncio.Lock()
        self._dirty = False
        self._loop_task: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()
        self._last_report: RefreshReport | None = None

    @property
    def last_report(self) -> RefreshReport | None:
        return self._last_report

    @property
    def is_running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def is_refreshing(self) -> bool:
        return self._refresh_lock.locked()

    def start(self) -> None:
        if self.is_running:
            return
        loop = asyncio.get_running_loop()
        self._loop_task = loop.create_task(self._run_periodic())

    async def stop(self) -> None:
        tasks = [t for t in (self._loop_task, *self._tasks) if t is not None and not t.done()]
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._loop_task = None
        self._tasks.clear()
        self._dirty = False

    async def _run_periodic(self) -> None:
        while True:
            await self.refresh()
            await asyncio.sleep(self._interval_sec)

    def request_refresh(self) -> None:
        """On-demand trigger (manual refresh, list edits)."""
        if self._refresh_lock.locked():
            self._dirty = True
            return
        self._spawn(self.refresh())

    def request_fetch_one(self, symbol: str) -> None:
        self._spawn(self.fetch_one(symbol))

    def _spawn(self, coro) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            return
        task = loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def refresh(self) -> RefreshReport | None:
        if self._refresh_lock.locked():
            self._dirty = True
            return None
        async with self._refresh_lock:
            report = await self._refresh_once()
            while self._dirty:
                self._dirty = False
                report = await self._refresh_once()
        return report

    async def _refresh_once(self) -> RefreshReport:
        symbols = tuple(self._store.symbols)
        outcomes = await asyncio.gather(*(self._fetch_into_cache(s) for s in symbols))
        updated = tuple(s for s, err in zip(symbols, outcomes) if err is None)
        errors = {s: err for s, err in zip(symbols, outcomes) if err is not None}
        report = RefreshReport(symbols=symbols, updated=updated, errors=errors)
        self._last_report = report
        if errors:
            logger.warning(
                "Refresh finished with %d/%d failures: %s",
                len(errors),
                len(symbols),
                ", ".join(sorted(errors)),
            )
        else:
            logger.info("Refreshed %d tickers", len(symbols))
        self._notify()
        return report

    async def _fetch_into_cache(self, symbol: str) -> str | None:
        try:
            quote = await self._source.fetch_quote(symbol)
        except QuoteSourceError as exc:
            logger.warning("Error fetching %s: %s", symbol, exc)
            return str(exc)
        except Exception as exc:
            logger.exception("Unexpected error fetching %s", symbol)
            return f"{type(exc).__name__}: {exc}"
        if symbol not in self._store:
            logger.debug("Dropping quote for %s (removed during fetch)", symbol)
            return None
        self._cache.set(symbol, quote)
        return None

    async def fetch_one(self, symbol: str) -> Quote | None:
        """Out-of-band fetch for a just-added symbol; independent of the batch cycle."""
        error = await self._fetch_into_cache(symbol)
        if error is not None:
            logger.warning("Error processing new ticker %s", symbol)
            return None
        self._notify()
        return self._cache.get(symbol)

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
