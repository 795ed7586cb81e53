"""Runtime configuration loaded from environment variables."""
from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

DEFAULT_REFRESH_SEC = 60.0
DEFAULT_ROTATE_SEC = 5.0
DEFAULT_MARQUEE_SEC = 0.15
DEFAULT_MARQUEE_WIDTH = 40
DEFAULT_MAX_TICKERS = 10
DEFAULT_BASE_URL = "https://query1.finance.yahoo.com"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/100.0.4896.127 Safari/537.36"
)
DEFAULT_CONFIG_DIR = Path.home() / ".config" / "tickerbar"


@dataclass(frozen=True)
class TickerBarConfig:
    refresh_sec: float
    rotate_sec: float
    marquee_sec: float
    marquee_width: int
    max_tickers: int
    base_url: str
    user_agent: str
    http_timeout_sec: float | None
    settings_path: Path
    log_level: str
    log_file: Path


def _optional_float(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    value = float(raw)
    return value if value > 0 else None


def load_config() -> TickerBarConfig:
    """Load config from environment with defaults matching the desktop widget."""
    return TickerBarConfig(
        refresh_sec=float(os.getenv("TICKERBAR_REFRESH_SEC", DEFAULT_REFRESH_SEC)),
        rotate_sec=float(os.getenv("TICKERBAR_ROTATE_SEC", DEFAULT_ROTATE_SEC)),
        marquee_sec=float(os.getenv("TICKERBAR_MARQUEE_SEC", DEFAULT_MARQUEE_SEC)),
        marquee_width=int(os.getenv("TICKERBAR_MARQUEE_WIDTH", DEFAULT_MARQUEE_WIDTH)),
        max_tickers=int(os.getenv("TICKERBAR_MAX_TICKERS", DEFAULT_MAX_TICKERS)),
        base_url=os.getenv("TICKERBAR_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        user_agent=os.getenv("TICKERBAR_USER_AGENT", DEFAULT_USER_AGENT),
        http_timeout_sec=_optional_float(os.getenv("TICKERBAR_HTTP_TIMEOUT_SEC")),
        settings_path=Path(
            os.getenv("TICKERBAR_SETTINGS_PATH", str(DEFAULT_CONFIG_DIR / "settings.json"))
        ).expanduser(),
        log_level=os.getenv("TICKERBAR_LOG_LEVEL", "INFO").upper(),
        log_file=Path(
            os.getenv("TICKERBAR_LOG_FILE", str(DEFAULT_CONFIG_DIR / "tickerbar.log"))
        ).expanduser(),
    )
