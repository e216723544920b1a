"""Test fixtures and configuration."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from visitmap.config import Settings
from visitmap.main import create_app
from visitmap.services.visit_log import VisitLog


@pytest.fixture
def settings() -> Settings:
    """Development settings with a small bounded visit log."""
    return Settings(environment="development", visit_log_max_records=100)


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """A fresh application, and therefore a fresh visit log, per test."""
    return create_app(settings)


@pytest.fixture
def visit_log(app: FastAPI) -> VisitLog:
    """The visit log owned by the test application."""
    return app.state.visit_log


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client bound to the test application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
