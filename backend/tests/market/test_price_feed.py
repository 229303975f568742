"""Integration tests for PriceFeed."""

import asyncio

import pytest

from stockdash.market.cache import PriceCache
from stockdash.market.simulator import PriceFeed, RandomWalkSimulator


def _make_feed(cache, interval=0.05, on_tick=None, tickers=("GOOG", "TSLA")):
    sim = RandomWalkSimulator(tickers=list(tickers), seed=9)
    return PriceFeed(price_cache=cache, simulator=sim, tick_interval=interval, on_tick=on_tick)


class TestPriceFeedTick:
    """Synchronous tick behavior."""

    def test_construction_seeds_cache(self):
        """The cache has seed prices before any tick runs."""
        cache = PriceCache()
        _make_feed(cache)
        assert cache.get_price("GOOG") == 150.0
        assert cache.get_price("TSLA") == 250.0

    def test_tick_updates_cache(self):
        cache = PriceCache()
        feed = _make_feed(cache)
        updates = feed.tick()
        assert set(updates) == {"GOOG", "TSLA"}
        for ticker, update in updates.items():
            assert cache.get(ticker) is update

    def test_tick_records_previous_price(self):
        cache = PriceCache()
        feed = _make_feed(cache)
        before = cache.get_price("GOOG")
        updates = feed.tick()
        assert updates["GOOG"].previous_price == before

    def test_tick_calls_callback_with_updates(self):
        """The callback receives the full update set before tick() returns."""
        seen = []
        cache = PriceCache()
        feed = _make_feed(cache, on_tick=seen.append)
        updates = feed.tick()
        assert seen == [updates]


@pytest.mark.asyncio
class TestPriceFeedLoop:
    """Tests for the background tick loop."""

    async def test_prices_update_over_time(self):
        ticks = []
        cache = PriceCache()
        feed = _make_feed(cache, interval=0.02, on_tick=ticks.append)
        await feed.start()
        await asyncio.sleep(0.2)
        await feed.stop()
        assert len(ticks) >= 2

    async def test_start_does_not_tick_immediately(self):
        """The first tick fires one interval after start."""
        ticks = []
        cache = PriceCache()
        feed = _make_feed(cache, interval=10.0, on_tick=ticks.append)
        await feed.start()
        await asyncio.sleep(0.05)
        assert ticks == []
        await feed.stop()

    async def test_stop_is_clean(self):
        """Test that stop() is clean and idempotent."""
        cache = PriceCache()
        feed = _make_feed(cache)
        await feed.start()
        assert feed.running
        await feed.stop()
        assert not feed.running
        await feed.stop()

    async def test_start_twice_keeps_one_task(self):
        cache = PriceCache()
        feed = _make_feed(cache)
        await feed.start()
        task = feed._task
        await feed.start()
        assert feed._task is task
        await feed.stop()

    async def test_exception_resilience(self):
        """A failing callback is logged and the loop keeps running."""
        calls = []

        def explode(updates):
            calls.append(updates)
            raise RuntimeError("boom")

        cache = PriceCache()
        feed = _make_feed(cache, interval=0.02, on_tick=explode)
        await feed.start()
        await asyncio.sleep(0.15)

        assert len(calls) >= 2
        assert feed.running

        await feed.stop()
