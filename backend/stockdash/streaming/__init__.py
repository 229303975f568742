"""Push delivery of price updates to connected sessions.

Public API:
    EventStream          - Bounded per-connection message queue
    SubscriberRegistry   - Session token -> open EventStream
    Broadcaster          - Fans each tick out to subscribed streams
    create_stream_router - FastAPI router factory for the SSE endpoint
"""

from .broadcaster import Broadcaster
from .channel import EventStream, SlowConsumer, StreamClosed, format_sse
from .registry import SubscriberRegistry
from .stream import create_stream_router

__all__ = [
    "Broadcaster",
    "EventStream",
    "SlowConsumer",
    "StreamClosed",
    "SubscriberRegistry",
    "create_stream_router",
    "format_sse",
]
