"""Integration test fixtures for the HTTP API."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from tl_payroll_engine.api.app import create_app
from tl_payroll_engine.api.dependencies import get_payroll_policy
from tl_payroll_engine.calculators.rate_tables import CURRENT_POLICY


@pytest.fixture
def app() -> FastAPI:
    """App pinned to the current rate tables regardless of environment."""
    app = create_app()
    app.dependency_overrides[get_payroll_policy] = lambda: CURRENT_POLICY
    return app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
