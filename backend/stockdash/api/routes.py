"""JSON API: login, subscriptions and price lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Query

from ..market.seed_prices import STOCK_NAMES, SUPPORTED_TICKERS
from .schemas import LoginRequest, SubscribeRequest

if TYPE_CHECKING:
    from ..service import DashboardService


def create_api_router(service: DashboardService) -> APIRouter:
    """Create the API router bound to a DashboardService."""
    router = APIRouter(tags=["api"])

    @router.post("/login")
    async def login(body: LoginRequest) -> dict:
        """Start a session for an email. Every call returns a fresh token."""
        return {"session": service.sessions.create_session(body.email)}

    @router.get("/subscriptions")
    async def list_subscriptions(session: str = Query("")) -> list[str]:
        return service.sessions.list_subscriptions(session)

    @router.post("/subscribe")
    async def subscribe(body: SubscribeRequest) -> dict:
        service.sessions.add_subscription(body.session, body.ticker)
        return {"subscribed": True}

    @router.post("/unsubscribe")
    async def unsubscribe(body: SubscribeRequest) -> dict:
        service.sessions.remove_subscription(body.session, body.ticker)
        return {"subscribed": False}

    @router.get("/price")
    async def get_price(ticker: str = Query(..., min_length=1)) -> dict:
        return {"price": service.get_price(ticker).price}

    @router.get("/stocks")
    async def list_stocks() -> list[dict]:
        """Every supported stock with its current price and last move."""
        prices = service.prices.get_all()
        return [
            prices[ticker].to_quote(STOCK_NAMES.get(ticker))
            for ticker in SUPPORTED_TICKERS
            if ticker in prices
        ]

    @router.get("/health")
    async def health() -> dict:
        return {
            "status": "ok",
            "tickers": len(service.prices),
            "sessions": service.sessions.session_count,
            "identities": service.sessions.identity_count,
            "streams": len(service.subscribers),
        }

    return router
