"""Status-bar ticker TUI: one-line quote bar + ticker list."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import DataTable, Footer, Header, Static

from ..client import YahooChartClient
from ..config import TickerBarConfig, load_config
from ..controller import TickerBarController
from ..errors import LimitExceeded
from ..models import DisplayMode
from ..settings import JsonSettings, SettingsPort
from .common import _status_line, _ticker_row
from .screens import AddTickerScreen, ManageTickersScreen

logger = logging.getLogger(__name__)


class StaticSink:
    """Render sink over a Static; buffers output until the widget is mounted."""

    def __init__(self) -> None:
        self._widget: Static | None = None
        self._pending: Text | None = None

    def attach(self, widget: Static) -> None:
        self._widget = widget
        if self._pending is not None:
            widget.update(self._pending)
            self._pending = None

    def render(self, text: Text, *, monospace_digits: bool = True) -> None:
        # terminal cells are already fixed-width, so the digit hint needs no handling
        if self._widget is None:
            self._pending = text
            return
        self._widget.update(text)


# region Ticker UI
class TickerBarApp(App):
    TITLE = "tickerbar"

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("m", "toggle_marquee", "Marquee"),
        ("a", "add_ticker", "Add"),
        ("d", "remove_ticker", "Remove"),
        ("b", "manage_tickers", "Manage"),
        ("x", "reset_tickers", "Reset"),
        ("r", "refresh", "Refresh"),
        ("j", "cursor_down", "Down"),
        ("k", "cursor_up", "Up"),
        *(
            Binding(str((idx + 1) % 10), f"select_ticker({idx})", "Select", show=False)
            for idx in range(10)
        ),
    ]

    CSS = """
    Screen {
        layout: vertical;
    }

    #bar {
        height: 1;
        padding: 0 1;
        background: #1a1d23;
    }

    #tickers {
        height: 1fr;
    }

    #tickers:focus {
        border: solid #26567a;
    }

    #tickers > .datatable--cursor {
        background: #181b20;
    }

    #status {
        height: 1;
        padding: 0 1;
    }
    """

    _TABLE_REFRESH_SEC = 0.5

    def __init__(
        self,
        config: TickerBarConfig | None = None,
        settings: SettingsPort | None = None,
    ) -> None:
        super().__init__()
        self._config = config or load_config()
        self._settings = settings or JsonSettings(self._config.settings_path)
        self._client = YahooChartClient(self._config)
        self._sink = StaticSink()
        self._controller = TickerBarController(
            self._config,
            self._settings,
            self._client,
            self._sink,
            set_interval=self.set_interval,
        )
        self._table_timer = None
        self._table_signature: tuple | None = None

    @property
    def controller(self) -> TickerBarController:
        return self._controller

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Static("Loading...", id="bar")
        yield DataTable(id="tickers", zebra_stripes=True)
        yield Static("Starting...", id="status")
        yield Footer()

    async def on_mount(self) -> None:
        self._bar = self.query_one("#bar", Static)
        self._table = self.query_one("#tickers", DataTable)
        self._status = self.query_one("#status", Static)
        self._table.cursor_type = "row"
        self._table.add_columns("", "#", "Symbol", "Price", "Change", "Pct")
        self._table.focus()
        self._sink.attach(self._bar)
        self._controller.start()
        self._render_table()
        self._table_timer = self.set_interval(self._TABLE_REFRESH_SEC, self._render_table)

    async def on_unmount(self) -> None:
        if self._table_timer is not None:
            self._table_timer.stop()
        await self._controller.stop()
        await self._client.close()

    # region Actions
    def action_toggle_marquee(self) -> None:
        mode = self._controller.toggle_marquee()
        self.notify(f"Marquee {'on' if mode is DisplayMode.MARQUEE else 'off'}")
        self._render_table()

    def action_add_ticker(self) -> None:
        store = self._controller.store
        if len(store) >= store.limit:
            self._notify_limit(store.limit)
            return

        def _on_done(result: str | None) -> None:
            if not result:
                return
            try:
                symbol = self._controller.add_ticker(result)
            except LimitExceeded as exc:
                self._notify_limit(exc.limit)
                return
            if symbol:
                self.notify(f"Added {symbol}")
            self._render_table()

        self.push_screen(AddTickerScreen(), _on_done)

    def action_remove_ticker(self) -> None:
        symbol = self._controller.remove_current_ticker()
        if symbol:
            self.notify(f"Removed {symbol}")
        self._render_table()

    def action_manage_tickers(self) -> None:
        def _on_done(result: str | None) -> None:
            if result is None:
                return
            self._controller.manage_tickers(result)
            self._render_table()

        self.push_screen(ManageTickersScreen(self._controller.bulk_text()), _on_done)

    def action_reset_tickers(self) -> None:
        self._controller.reset_tickers()
        self.notify("Tickers reset")
        self._render_table()

    def action_refresh(self) -> None:
        self._controller.refresh_now()
        self._render_table()

    def action_select_ticker(self, index: int) -> None:
        if self._controller.select_ticker(index):
            self._render_table()

    def action_cursor_down(self) -> None:
        self._table.action_cursor_down()

    def action_cursor_up(self) -> None:
        self._table.action_cursor_up()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self.action_select_ticker(event.cursor_row)
    # endregion

    def _notify_limit(self, limit: int) -> None:
        self.notify(
            f"You can only have up to {limit} tickers.",
            title="Limit Reached",
            severity="warning",
        )

    def _render_table(self) -> None:
        controller = self._controller
        symbols = controller.store.symbols
        engine = controller.engine
        current = engine.rotate_index % len(symbols) if symbols else -1
        signature = (
            tuple(symbols),
            controller.cache.version,
            current,
            engine.mode,
            controller.scheduler.is_refreshing,
            controller.scheduler.last_report,
        )
        if signature != self._table_signature:
            self._table_signature = signature
            cursor_row = self._table.cursor_coordinate.row
            self._table.clear()
            for idx, symbol in enumerate(symbols):
                self._table.add_row(
                    *_ticker_row(
                        idx,
                        symbol,
                        controller.cache.get(symbol),
                        current=engine.mode is DisplayMode.ROTATE and idx == current,
                    ),
                    key=symbol,
                )
            if symbols:
                self._table.cursor_coordinate = (min(max(cursor_row, 0), len(symbols) - 1), 0)
        self._status.update(self._status_text())

    def _status_text(self) -> str:
        controller = self._controller
        report = controller.scheduler.last_report
        mode_label = "MARQUEE" if controller.engine.mode is DisplayMode.MARQUEE else "ROTATE"
        return _status_line(
            mode_label=mode_label,
            count=len(controller.store),
            limit=controller.store.limit,
            refreshed_at=report.finished_at if report else None,
            errors=sorted(report.errors) if report else (),
            refreshing=controller.scheduler.is_refreshing,
        )
# endregion
