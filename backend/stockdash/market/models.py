"""A ticker's published price and the move that produced it."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

_DIRECTIONS = {1: "up", 0: "flat", -1: "down"}


@dataclass(frozen=True, slots=True)
class PriceUpdate:
    """What the cache holds per ticker: the current price and the one it replaced.

    At startup both prices are the seed, so the move reads as flat.
    """

    ticker: str
    price: float
    previous_price: float
    timestamp: float = field(default_factory=time.time)

    @property
    def change(self) -> float:
        # Prices move in whole cents
        return round(self.price - self.previous_price, 2)

    @property
    def change_percent(self) -> float:
        if not self.previous_price:
            return 0.0
        return round(self.change / self.previous_price * 100, 4)

    @property
    def direction(self) -> str:
        sign = (self.price > self.previous_price) - (self.price < self.previous_price)
        return _DIRECTIONS[sign]

    def to_event(self) -> dict:
        """SSE payload; subscribers only ever see ticker and price."""
        return {"ticker": self.ticker, "price": self.price}

    def to_quote(self, name: str | None = None) -> dict:
        """Row for the stock listing: the event payload plus the last move."""
        quote = self.to_event()
        quote["name"] = name or self.ticker
        quote["previous_price"] = self.previous_price
        quote["change"] = self.change
        quote["change_percent"] = self.change_percent
        quote["direction"] = self.direction
        quote["timestamp"] = self.timestamp
        return quote
