"""Pytest configuration and fixtures."""

import json

import pytest
from fastapi.testclient import TestClient

from stockdash.config import Settings
from stockdash.main import create_app
from stockdash.service import DashboardService


@pytest.fixture
def event_loop_policy():
    """Use the default event loop policy for all async tests."""
    import asyncio

    return asyncio.DefaultEventLoopPolicy()


@pytest.fixture
def settings() -> Settings:
    """Deterministic settings with a tick interval long enough to never fire in tests."""
    return Settings(seed=1234, tick_interval=60.0, static_dir=None)


@pytest.fixture
def service(settings: Settings) -> DashboardService:
    return DashboardService(settings)


@pytest.fixture
def client(service: DashboardService) -> TestClient:
    """Test client without lifespan, so prices only move on service.tick()."""
    return TestClient(create_app(service=service))


class FakeRequest:
    """Stand-in for a Starlette Request in SSE generator tests."""

    client = None

    def __init__(self) -> None:
        self.disconnected = False

    async def is_disconnected(self) -> bool:
        return self.disconnected


@pytest.fixture
def fake_request() -> FakeRequest:
    return FakeRequest()


def parse_sse(chunk: str) -> dict:
    """Decode a single ``data:`` SSE chunk."""
    assert chunk.startswith("data: ")
    assert chunk.endswith("\n\n")
    return json.loads(chunk[len("data: "):])


@pytest.fixture
def parse_event():
    """Decoder for ``data:`` SSE chunks."""
    return parse_sse
