"""Entrypoint for the status-bar ticker TUI."""
from __future__ import annotations

from .config import load_config
from .logs import configure_logging
from .settings import JsonSettings
from .ui import TickerBarApp


def main() -> None:
    config = load_config()
    log = configure_logging(config)
    log.info("Starting tickerbar (settings: %s)", config.settings_path)
    TickerBarApp(config=config, settings=JsonSettings(config.settings_path)).run()


if __name__ == "__main__":
    main()
