"""SSE streaming endpoint for subscribed price updates."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request
from fastapi.responses import StreamingResponse

from ..sessions.store import mask_token
from .channel import EventStream

if TYPE_CHECKING:
    from ..service import DashboardService

logger = logging.getLogger(__name__)


def create_stream_router(service: DashboardService) -> APIRouter:
    """Create the SSE router bound to a DashboardService."""
    router = APIRouter(tags=["streaming"])

    @router.get("/events")
    async def stream_events(request: Request, session: str = Query("")) -> StreamingResponse:
        """SSE endpoint for a session's subscribed tickers.

        The first messages are the current prices of every subscribed ticker,
        then one message per subscribed ticker on each tick:

            data: {"ticker":"GOOG","price":151.23}

        An unknown session is rejected with 401 before the stream opens.
        """
        stream = service.open_stream(session)
        return StreamingResponse(
            _generate_events(
                service,
                session,
                stream,
                request,
                heartbeat_interval=service.settings.heartbeat_interval,
            ),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",  # Disable nginx buffering if proxied
                "Access-Control-Allow-Origin": "*",
            },
        )

    return router


async def _generate_events(
    service: DashboardService,
    token: str,
    stream: EventStream,
    request: Request,
    heartbeat_interval: float = 15.0,
) -> AsyncGenerator[str, None]:
    """Yield SSE chunks from ``stream`` until it closes or the client disconnects.

    Emits a keep-alive comment whenever the stream is idle for
    ``heartbeat_interval`` seconds.
    """
    client_ip = request.client.host if request.client else "unknown"
    logger.info("SSE client connected: %s (session %s)", client_ip, mask_token(token))

    try:
        # Tell the client to retry after 1 second if the connection drops
        yield "retry: 1000\n\n"

        while True:
            if await request.is_disconnected():
                logger.info("SSE client disconnected: %s", client_ip)
                break

            try:
                message = await stream.next_message(timeout=heartbeat_interval)
            except asyncio.TimeoutError:
                yield ": keep-alive\n\n"
                continue

            if message is None:
                logger.info("SSE stream closed by server: %s", client_ip)
                break
            yield message
    except asyncio.CancelledError:
        logger.info("SSE stream cancelled for: %s", client_ip)
        raise
    finally:
        service.close_stream(token, stream)
