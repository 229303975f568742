"""Registry of open streams, keyed by session token."""

from __future__ import annotations

import logging

from ..sessions.store import mask_token
from .channel import EventStream

logger = logging.getLogger(__name__)


class SubscriberRegistry:
    """At most one live EventStream per session token.

    Independent of the SessionStore lifecycle: a session may exist without a
    stream. Iteration order is unspecified.
    """

    def __init__(self) -> None:
        self._streams: dict[str, EventStream] = {}

    def register(self, token: str, stream: EventStream) -> EventStream | None:
        """Register ``stream`` for ``token``, replacing and closing any previous one.

        Returns the replaced stream, if any.
        """
        previous = self._streams.get(token)
        self._streams[token] = stream
        if previous is not None and previous is not stream:
            previous.close()
            logger.info("Replaced stream for session %s", mask_token(token))
            return previous
        return None

    def unregister(self, token: str, stream: EventStream | None = None) -> bool:
        """Remove the stream for ``token``.

        When ``stream`` is given, only that exact handle is removed, so a
        replaced connection's cleanup never evicts its successor.
        """
        current = self._streams.get(token)
        if current is None:
            return False
        if stream is not None and current is not stream:
            return False
        del self._streams[token]
        return True

    def get(self, token: str) -> EventStream | None:
        return self._streams.get(token)

    def items(self) -> list[tuple[str, EventStream]]:
        """Snapshot of (token, stream) pairs, safe to iterate while mutating."""
        return list(self._streams.items())

    def close_all(self) -> None:
        for stream in self._streams.values():
            stream.close()
        self._streams.clear()

    def __len__(self) -> int:
        return len(self._streams)

    def __contains__(self, token: str) -> bool:
        return token in self._streams
