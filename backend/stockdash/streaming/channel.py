"""Per-connection outbound event stream."""

from __future__ import annotations

import asyncio
import json


class StreamClosed(Exception):
    """Write attempted on a stream that has been closed."""


class SlowConsumer(Exception):
    """The stream's buffer is full; the consumer is not keeping up."""


def format_sse(data: dict) -> str:
    """Encode one SSE ``data:`` message with compact JSON."""
    return f"data: {json.dumps(data, separators=(',', ':'))}\n\n"


class EventStream:
    """Bounded queue of SSE-encoded messages for one client connection.

    The broadcast side writes with send(), which never blocks: a full buffer
    raises SlowConsumer instead. The connection side awaits next_message().
    close() wakes the reader, which then receives None.
    """

    def __init__(self, maxsize: int = 100) -> None:
        self._queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=maxsize)
        self._closed = False
        self.sent = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, data: dict) -> None:
        if self._closed:
            raise StreamClosed()
        try:
            self._queue.put_nowait(format_sse(data))
        except asyncio.QueueFull as e:
            raise SlowConsumer() from e
        self.sent += 1

    def close(self) -> None:
        """Close the stream. Pending messages are discarded. Idempotent."""
        if self._closed:
            return
        self._closed = True
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(None)

    def pending(self) -> int:
        return self._queue.qsize()

    async def next_message(self, timeout: float | None = None) -> str | None:
        """Next encoded message, or None once the stream is closed.

        Raises asyncio.TimeoutError if nothing arrives within ``timeout``.
        """
        if self._closed and self._queue.empty():
            return None
        return await asyncio.wait_for(self._queue.get(), timeout)
