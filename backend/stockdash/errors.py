"""Error taxonomy for StockDash.

Every error carries the HTTP status it maps to. The FastAPI app renders all
of them as ``{"error": message}``.
"""

from __future__ import annotations


class StockDashError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(StockDashError):
    """Missing, empty or unknown session token."""

    status_code = 401
    default_message = "Unauthorized"


class BadRequest(StockDashError):
    status_code = 400
    default_message = "Bad request"


class UnsupportedSymbol(BadRequest):
    """Ticker outside the supported enumeration."""

    default_message = "Unsupported stock"

    def __init__(self, ticker: str) -> None:
        self.ticker = ticker
        super().__init__(f"Unsupported stock: {ticker}")


class NotFound(StockDashError):
    status_code = 404
    default_message = "Not Found"


class TickerNotFound(NotFound):
    def __init__(self, ticker: str) -> None:
        self.ticker = ticker
        super().__init__(f"Stock not found: {ticker}")
