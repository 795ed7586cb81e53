"""File logging for the TUI (stdout belongs to Textual)."""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from .config import TickerBarConfig

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"


def configure_logging(config: TickerBarConfig) -> logging.Logger:
    log = logging.getLogger("tickerbar")
    log.setLevel(getattr(logging, config.log_level, logging.INFO))
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()
    config.log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        config.log_file, maxBytes=1_000_000, backupCount=1, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    log.addHandler(handler)
    log.propagate = False
    return log
