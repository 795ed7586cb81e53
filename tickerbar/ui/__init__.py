"""UI package (status-bar TUI + formatting helpers)."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .app import TickerBarApp as TickerBarApp

__all__ = ["TickerBarApp"]


def __getattr__(name: str):
    if name == "TickerBarApp":
        from .app import TickerBarApp

        return TickerBarApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
