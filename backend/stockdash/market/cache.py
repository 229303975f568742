"""In-memory store of the current price per ticker."""

from __future__ import annotations

import time

from .models import PriceUpdate


class PriceCache:
    """Latest price for each ticker, with the previous price kept for deltas.

    Writer: PriceFeed (on every tick).
    Readers: price lookup, stock listing, stream open and the broadcast pass.

    All access happens on the event loop thread, so no lock is taken.
    """

    def __init__(self) -> None:
        self._prices: dict[str, PriceUpdate] = {}

    def update(self, ticker: str, price: float, timestamp: float | None = None) -> PriceUpdate:
        """Record a new price for a ticker. Returns the created PriceUpdate.

        If this is the first update for the ticker, previous_price == price (direction='flat').
        """
        ts = timestamp or time.time()
        prev = self._prices.get(ticker)
        previous_price = prev.price if prev else price

        update = PriceUpdate(
            ticker=ticker,
            price=round(price, 2),
            previous_price=round(previous_price, 2),
            timestamp=ts,
        )
        self._prices[ticker] = update
        return update

    def get(self, ticker: str) -> PriceUpdate | None:
        """Get the latest price for a single ticker, or None if unknown."""
        return self._prices.get(ticker)

    def get_all(self) -> dict[str, PriceUpdate]:
        """Snapshot of all current prices. Returns a shallow copy."""
        return dict(self._prices)

    def get_price(self, ticker: str) -> float | None:
        update = self.get(ticker)
        return update.price if update else None

    def __len__(self) -> int:
        return len(self._prices)

    def __contains__(self, ticker: str) -> bool:
        return ticker in self._prices
