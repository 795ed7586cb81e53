"""Modal prompts for adding one ticker and bulk-editing the list."""

from __future__ import annotations

from typing import Optional

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static, TextArea


class AddTickerScreen(ModalScreen[Optional[str]]):
    BINDINGS = [
        ("escape", "cancel", "Cancel"),
    ]

    CSS = """
    AddTickerScreen {
        align: center middle;
    }

    #add-dialog {
        width: 44;
        height: auto;
        padding: 1 2;
        border: solid #2c82c9;
        background: #121820;
    }

    #add-buttons {
        height: auto;
        margin-top: 1;
    }
    """

    def compose(self) -> ComposeResult:
        with Vertical(id="add-dialog"):
            yield Static("Add Stock Ticker", id="add-title")
            yield Static("Enter the symbol (e.g., TSLA):", id="add-help")
            yield Input(placeholder="TSLA", id="add-input")
            with Horizontal(id="add-buttons"):
                yield Button("Add", variant="primary", id="add-ok")
                yield Button("Cancel", id="add-cancel")

    def on_mount(self) -> None:
        self.query_one("#add-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "add-ok":
            self.dismiss(self.query_one("#add-input", Input).value)
            return
        self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class ManageTickersScreen(ModalScreen[Optional[str]]):
    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        ("ctrl+s", "save", "Save"),
    ]

    CSS = """
    ManageTickersScreen {
        align: center middle;
    }

    #manage-dialog {
        width: 60;
        height: 24;
        padding: 1 2;
        border: solid #2c82c9;
        background: #121820;
    }

    #manage-text {
        height: 1fr;
    }

    #manage-buttons {
        height: auto;
        margin-top: 1;
    }
    """

    def __init__(self, initial_text: str) -> None:
        super().__init__()
        self._initial_text = initial_text

    def compose(self) -> ComposeResult:
        with Vertical(id="manage-dialog"):
            yield Static("Manage Tickers", id="manage-title")
            yield Static(
                "One per line or comma separated. Existing tickers will be replaced.",
                id="manage-help",
            )
            yield TextArea(self._initial_text, id="manage-text")
            with Horizontal(id="manage-buttons"):
                yield Button("Save", variant="primary", id="manage-save")
                yield Button("Cancel", id="manage-cancel")

    def on_mount(self) -> None:
        self.query_one("#manage-text", TextArea).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "manage-save":
            self.action_save()
            return
        self.dismiss(None)

    def action_save(self) -> None:
        self.dismiss(self.query_one("#manage-text", TextArea).text)

    def action_cancel(self) -> None:
        self.dismiss(None)
