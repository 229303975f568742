"""Fan-out of price ticks to subscribed streams."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from ..errors import Unauthorized
from ..market.models import PriceUpdate
from ..sessions.store import SessionStore, mask_token
from .channel import SlowConsumer, StreamClosed
from .registry import SubscriberRegistry

logger = logging.getLogger(__name__)


class Broadcaster:
    """Writes each tick's updates to every stream whose session subscribed to them.

    A failure on one stream never stops delivery to the others.
    """

    def __init__(self, sessions: SessionStore, registry: SubscriberRegistry) -> None:
        self._sessions = sessions
        self._registry = registry

    def broadcast(self, updates: Mapping[str, PriceUpdate]) -> int:
        """Deliver ``updates`` to matching streams. Returns the number of messages sent."""
        delivered = 0
        streams = self._registry.items()

        for token, stream in streams:
            try:
                subscriptions = self._sessions.list_subscriptions(token)
            except Unauthorized:
                # Orphaned registration: its session no longer resolves
                self._registry.unregister(token, stream)
                stream.close()
                logger.debug("Evicted orphaned stream %s", mask_token(token))
                continue

            for ticker in subscriptions:
                update = updates.get(ticker)
                if update is None:
                    continue
                try:
                    stream.send(update.to_event())
                except SlowConsumer:
                    logger.warning(
                        "Stream %s is full, dropping remaining updates this tick",
                        mask_token(token),
                    )
                    break
                except StreamClosed:
                    self._registry.unregister(token, stream)
                    logger.debug("Dropped closed stream %s", mask_token(token))
                    break
                except Exception:
                    logger.exception("Failed to write to stream %s", mask_token(token))
                    break
                delivered += 1

        if streams:
            logger.debug("Broadcast %d messages to %d streams", delivered, len(streams))
        return delivered
