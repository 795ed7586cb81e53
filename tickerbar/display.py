"""Rotate / marquee display state machine driving a render sink."""
from __future__ import annotations

import logging
from typing import Callable, Protocol

from rich.text import Text

from .cache import QuoteCache
from .models import DisplayMode
from .store import TickerListStore
from .ui.common import _empty_text, _loading_text, _marquee_text, _quote_text

logger = logging.getLogger(__name__)


class RenderSink(Protocol):
    def render(self, text: Text, *, monospace_digits: bool = True) -> None: ...


class TimerHandle(Protocol):
    def stop(self) -> None: ...


SetInterval = Callable[[float, Callable[[], None]], TimerHandle]


class DisplayEngine:
    """Owns rotate index, marquee cursor and the pre-rendered marquee text.

    The marquee text is rebuilt only on cache/list changes. Each scroll tick
    slices a window out of the text doubled with itself, so wraparound is plain
    modular arithmetic on the cursor.
    """

    def __init__(
        self,
        store: TickerListStore,
        cache: QuoteCache,
        sink: RenderSink,
        *,
        mode: DisplayMode = DisplayMode.ROTATE,
        rotate_sec: float = 5.0,
        marquee_sec: float = 0.15,
        marquee_width: int = 40,
        set_interval: SetInterval | None = None,
    ) -> None:
        self._store = store
        self._cache = cache
        self._sink = sink
        self._mode = DisplayMode(mode)
        self._rotate_sec = float(rotate_sec)
        self._marquee_sec = float(marquee_sec)
        self._marquee_width = max(int(marquee_width), 1)
        self._set_interval = set_interval
        self._timer: TimerHandle | None = None
        self.rotate_index = 0
        self.marquee_offset = 0
        self.marquee_text = Text()
        self._marquee_doubled = Text()

    @property
    def mode(self) -> DisplayMode:
        return self._mode

    # region Lifecycle
    def start(self) -> None:
        self._rebuild_marquee()
        self._restart_timer()
        self.recompute()

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def _restart_timer(self) -> None:
        self.stop()
        if self._set_interval is None:
            return
        if self._mode is DisplayMode.MARQUEE:
            self._timer = self._set_interval(self._marquee_sec, self.tick_marquee)
        else:
            self._timer = self._set_interval(self._rotate_sec, self.tick_rotate)

    def set_mode(self, mode: DisplayMode) -> None:
        self._mode = DisplayMode(mode)
        if self._mode is DisplayMode.MARQUEE:
            self._rebuild_marquee()
            self.marquee_offset = 0
        self._restart_timer()
        self.recompute()
        logger.info("Display mode: %s", self._mode.value)

    def toggle_mode(self) -> DisplayMode:
        next_mode = (
            DisplayMode.ROTATE if self._mode is DisplayMode.MARQUEE else DisplayMode.MARQUEE
        )
        self.set_mode(next_mode)
        return next_mode
    # endregion

    # region Notifications
    def on_cache_changed(self) -> None:
        self._rebuild_marquee()
        self.recompute()

    def on_list_changed(self) -> None:
        self.rotate_index = 0
        self._rebuild_marquee()
        self.recompute()
    # endregion

    def current_symbol(self) -> str | None:
        symbols = self._store.symbols
        if not symbols:
            return None
        return symbols[self.rotate_index % len(symbols)]

    def select(self, index: int) -> bool:
        """Jump to a ticker; only honored in rotate mode."""
        if self._mode is not DisplayMode.ROTATE:
            return False
        if index < 0 or index >= len(self._store):
            return False
        self.rotate_index = index
        self._render_rotate()
        return True

    def recompute(self) -> None:
        if self._mode is DisplayMode.MARQUEE:
            self._render_marquee_window()
        else:
            self._render_rotate()

    # region Rotate
    def tick_rotate(self) -> None:
        count = len(self._store)
        if count:
            self.rotate_index = (self.rotate_index + 1) % count
        self._render_rotate()

    def _render_rotate(self) -> None:
        symbols = self._store.symbols
        if not symbols:
            self._emit(_empty_text())
            return
        self.rotate_index %= len(symbols)
        symbol = symbols[self.rotate_index]
        quote = self._cache.get(symbol)
        if quote is None:
            self._emit(_loading_text(symbol))
            return
        self._emit(_quote_text(symbol, quote))
    # endregion

    # region Marquee
    def _rebuild_marquee(self) -> None:
        self.marquee_text = _marquee_text(self._store.symbols, self._cache.snapshot())
        doubled = self.marquee_text.copy()
        doubled.append_text(self.marquee_text)
        self._marquee_doubled = doubled
        if self.marquee_offset >= len(self.marquee_text):
            self.marquee_offset = 0

    def marquee_window(self) -> Text:
        length = len(self.marquee_text)
        if length == 0:
            return _empty_text()
        start = self.marquee_offset % length
        end = start + min(self._marquee_width, length)
        return self._marquee_doubled[start:end]

    def _render_marquee_window(self) -> None:
        self._emit(self.marquee_window())

    def tick_marquee(self) -> None:
        length = len(self.marquee_text)
        if length == 0:
            self.marquee_offset = 0
            self._emit(_empty_text())
            return
        self.marquee_offset = (self.marquee_offset + 1) % length
        self._render_marquee_window()
    # endregion

    def _emit(self, text: Text) -> None:
        self._sink.render(text, monospace_digits=True)
