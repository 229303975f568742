"""Simulated market data for StockDash.

Public API:
    PriceUpdate          - Immutable price snapshot dataclass
    PriceCache           - In-memory store of the latest price per ticker
    RandomWalkSimulator  - Bounded random walk over the supported tickers
    PriceFeed            - Tick loop writing simulator output to the cache
    SUPPORTED_TICKERS    - The closed set of tradable tickers
"""

from .cache import PriceCache
from .models import PriceUpdate
from .seed_prices import SUPPORTED_TICKERS
from .simulator import PriceFeed, RandomWalkSimulator

__all__ = [
    "PriceUpdate",
    "PriceCache",
    "PriceFeed",
    "RandomWalkSimulator",
    "SUPPORTED_TICKERS",
]
