"""Random-walk price simulator and the tick loop that drives it."""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Callable

import numpy as np

from .cache import PriceCache
from .models import PriceUpdate
from .seed_prices import SEED_PRICES

logger = logging.getLogger(__name__)

TickCallback = Callable[[dict[str, PriceUpdate]], object]

# Slack for binary float noise when converting dollars to cents
_CENT_EPSILON = 1e-6


class RandomWalkSimulator:
    """Bounded uniform random walk for a fixed set of tickers.

    Prices are tracked in whole cents. Each step:
        delta  ~ Uniform(-max_delta, +max_delta), rounded to cents and
                 clipped to the largest whole-cent bound <= max_delta
        S(t+1) = max(floor, S(t) + delta), floor rounded up to a cent

    So a published price is never below floor and never moves by more than
    max_delta in one step, even when either is not a whole number of cents.
    """

    def __init__(
        self,
        tickers: list[str],
        max_delta: float = 5.0,
        floor: float = 1.0,
        seed_prices: dict[str, float] | None = None,
        seed: int | None = None,
    ) -> None:
        if floor <= 0:
            raise ValueError("floor must be positive")
        if max_delta < 0:
            raise ValueError("max_delta must not be negative")
        self._max_delta = max_delta
        self._max_cents = math.floor(max_delta * 100 + _CENT_EPSILON)
        self._floor_cents = math.ceil(floor * 100 - _CENT_EPSILON)
        self._rng = np.random.default_rng(seed)

        seeds = SEED_PRICES if seed_prices is None else seed_prices
        self._tickers: list[str] = []
        self._cents: dict[str, int] = {}
        for ticker in tickers:
            if ticker in self._cents:
                continue
            if ticker not in seeds:
                raise KeyError(f"No seed price for {ticker}")
            self._tickers.append(ticker)
            self._cents[ticker] = max(self._floor_cents, round(seeds[ticker] * 100))

    def step(self) -> dict[str, float]:
        """Advance all tickers by one tick. Returns {ticker: new_price}."""
        n = len(self._tickers)
        if n == 0:
            return {}

        deltas = self._rng.uniform(-self._max_delta, self._max_delta, n)

        result: dict[str, float] = {}
        for i, ticker in enumerate(self._tickers):
            delta = round(float(deltas[i]) * 100)
            delta = max(-self._max_cents, min(self._max_cents, delta))
            self._cents[ticker] = max(self._floor_cents, self._cents[ticker] + delta)
            result[ticker] = self._cents[ticker] / 100

        return result

    def get_price(self, ticker: str) -> float | None:
        """Current price for a ticker, or None if not tracked."""
        cents = self._cents.get(ticker)
        return None if cents is None else cents / 100

    def get_tickers(self) -> list[str]:
        return list(self._tickers)


class PriceFeed:
    """Drives a RandomWalkSimulator on a fixed period.

    Every tick writes the new prices to the PriceCache and then hands the full
    update set to ``on_tick`` before the next tick can start.
    """

    def __init__(
        self,
        price_cache: PriceCache,
        simulator: RandomWalkSimulator,
        tick_interval: float = 5.0,
        on_tick: TickCallback | None = None,
    ) -> None:
        self._cache = price_cache
        self._sim = simulator
        self._interval = tick_interval
        self._on_tick = on_tick
        self._task: asyncio.Task | None = None

        # Seed the cache so lookups have data before the first tick
        for ticker in simulator.get_tickers():
            price = simulator.get_price(ticker)
            if price is not None:
                self._cache.update(ticker=ticker, price=price)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run_loop(), name="price-feed")
        logger.info(
            "Price feed started: %d tickers, %.1fs interval",
            len(self._sim.get_tickers()),
            self._interval,
        )

    async def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        logger.info("Price feed stopped")

    def tick(self) -> dict[str, PriceUpdate]:
        """Run one tick: step, write to cache, notify. Returns the updates."""
        prices = self._sim.step()
        updates = {
            ticker: self._cache.update(ticker=ticker, price=price)
            for ticker, price in prices.items()
        }
        if self._on_tick is not None:
            self._on_tick(updates)
        return updates

    async def _run_loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self.tick()
            except Exception:
                logger.exception("Price feed tick failed")
