"""Exception hierarchy for tickerbar.

All tickerbar exceptions inherit from TickerBarError so callers at the UI
boundary can catch the whole family in one place.
"""

from __future__ import annotations


class TickerBarError(Exception):
    """Base exception for all tickerbar errors."""

    pass


class QuoteSourceError(TickerBarError):
    """Base for failures fetching or decoding an upstream quote."""

    pass


class NetworkError(QuoteSourceError):
    """Raised on bad URLs, transport failures and non-200 responses."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ParseError(QuoteSourceError):
    """Raised when the upstream payload does not have the expected shape."""

    pass


class LimitExceeded(TickerBarError):
    """Raised when adding a symbol to a ticker list that is already full."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"You can only have up to {limit} tickers.")
        self.limit = limit
