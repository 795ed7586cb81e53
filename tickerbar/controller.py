"""Single-owner wiring of store, cache, scheduler and display engine.

Every user action funnels through here so list mutations, cache eviction and
display resets happen in one place on the UI event loop.
"""
from __future__ import annotations

import logging

from .cache import QuoteCache
from .config import TickerBarConfig
from .display import DisplayEngine, RenderSink, SetInterval
from .models import DisplayMode
from .scheduler import QuoteSource, RefreshScheduler
from .settings import MARQUEE_KEY, SettingsPort
from .store import TickerListStore, normalize_symbol

logger = logging.getLogger(__name__)


class TickerBarController:
    def __init__(
        self,
        config: TickerBarConfig,
        settings: SettingsPort,
        source: QuoteSource,
        sink: RenderSink,
        *,
        set_interval: SetInterval | None = None,
    ) -> None:
        self._config = config
        self._settings = settings
        self.store = TickerListStore(settings, limit=config.max_tickers)
        self.cache = QuoteCache()
        mode = DisplayMode.MARQUEE if settings.get_bool(MARQUEE_KEY) else DisplayMode.ROTATE
        self.engine = DisplayEngine(
            self.store,
            self.cache,
            sink,
            mode=mode,
            rotate_sec=config.rotate_sec,
            marquee_sec=config.marquee_sec,
            marquee_width=config.marquee_width,
            set_interval=set_interval,
        )
        self.scheduler = RefreshScheduler(
            source,
            self.store,
            self.cache,
            interval_sec=config.refresh_sec,
            on_change=self.engine.on_cache_changed,
        )
        self.store.add_listener(self._on_list_changed)

    def start(self) -> None:
        """Load tickers, start display timers and the periodic refresh loop."""
        self.store.load()
        self.engine.start()
        self.scheduler.start()

    async def stop(self) -> None:
        self.engine.stop()
        await self.scheduler.stop()

    def _on_list_changed(self, symbols: list[str]) -> None:
        evicted = self.cache.retain(symbols)
        if evicted:
            logger.debug("Evicted cached quotes: %s", ", ".join(evicted))
        self.engine.on_list_changed()

    # region Actions
    def toggle_marquee(self) -> DisplayMode:
        mode = self.engine.toggle_mode()
        self._settings.set_bool(MARQUEE_KEY, mode is DisplayMode.MARQUEE)
        return mode

    def add_ticker(self, raw: str) -> str | None:
        """Add one symbol and jump to it; raises LimitExceeded when full."""
        symbol = normalize_symbol(raw)
        if not self.store.add(symbol):
            return None
        index = self.store.index_of(symbol)
        if index is not None:
            self.engine.select(index)
        self.scheduler.request_fetch_one(symbol)
        self.scheduler.request_refresh()
        return symbol

    def remove_current_ticker(self) -> str | None:
        symbol = self.engine.current_symbol()
        if symbol is None:
            return None
        self.store.remove(symbol)
        return symbol

    def manage_tickers(self, text: str) -> list[str]:
        before = self.store.symbols
        after = self.store.replace_all(text)
        if after != before:
            self.scheduler.request_refresh()
        return after

    def bulk_text(self) -> str:
        return "\n".join(self.store.symbols)

    def reset_tickers(self) -> list[str]:
        symbols = self.store.reset()
        self.scheduler.request_refresh()
        return symbols

    def refresh_now(self) -> None:
        self.scheduler.request_refresh()

    def select_ticker(self, index: int) -> bool:
        return self.engine.select(index)
    # endregion
