"""Owner of all StockDash runtime state."""

from __future__ import annotations

import logging

from .config import Settings
from .errors import TickerNotFound
from .market.cache import PriceCache
from .market.models import PriceUpdate
from .market.seed_prices import SUPPORTED_TICKERS, normalize_ticker
from .market.simulator import PriceFeed, RandomWalkSimulator
from .sessions.store import SessionStore, mask_token
from .streaming.broadcaster import Broadcaster
from .streaming.channel import EventStream
from .streaming.registry import SubscriberRegistry

logger = logging.getLogger(__name__)


class DashboardService:
    """Sessions, prices, open streams and the broadcast loop for one app instance.

    Routers and the price feed receive this object by reference, so several
    independent instances can coexist (e.g. in tests).

    Lifecycle:
        service = DashboardService(settings)
        await service.start()   # begins ticking
        ...
        await service.stop()    # stops ticking, closes every stream
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.sessions = SessionStore(SUPPORTED_TICKERS)
        self.prices = PriceCache()
        self.subscribers = SubscriberRegistry()
        self.broadcaster = Broadcaster(self.sessions, self.subscribers)
        self.simulator = RandomWalkSimulator(
            tickers=list(SUPPORTED_TICKERS),
            max_delta=self.settings.max_delta,
            floor=self.settings.price_floor,
            seed=self.settings.seed,
        )
        self.feed = PriceFeed(
            price_cache=self.prices,
            simulator=self.simulator,
            tick_interval=self.settings.tick_interval,
            on_tick=self.broadcaster.broadcast,
        )

    async def start(self) -> None:
        await self.feed.start()

    async def stop(self) -> None:
        await self.feed.stop()
        self.subscribers.close_all()

    def tick(self) -> dict[str, PriceUpdate]:
        """Advance prices once and broadcast, outside the timer."""
        return self.feed.tick()

    def get_price(self, ticker: str) -> PriceUpdate:
        update = self.prices.get(normalize_ticker(ticker))
        if update is None:
            raise TickerNotFound(ticker)
        return update

    def open_stream(self, token: str | None) -> EventStream:
        """Register a new stream for ``token`` and queue current subscribed prices.

        Raises Unauthorized before anything is registered if the token is unknown.
        """
        subscriptions = self.sessions.list_subscriptions(token)
        # The initial flush must always fit
        stream = EventStream(maxsize=max(self.settings.stream_queue_size, len(subscriptions)))
        for ticker in subscriptions:
            update = self.prices.get(ticker)
            if update is not None:
                stream.send(update.to_event())
        self.subscribers.register(token, stream)
        logger.info(
            "Stream opened for session %s (%d subscriptions)",
            mask_token(token),
            len(subscriptions),
        )
        return stream

    def close_stream(self, token: str, stream: EventStream) -> None:
        self.subscribers.unregister(token, stream)
        stream.close()
        logger.info("Stream closed for session %s", mask_token(token))
