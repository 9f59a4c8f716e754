"""Fixtures for API tests."""

import pytest
from httpx import ASGITransport, AsyncClient

from stockledger.api.main import app


@pytest.fixture
async def client():
    """Client against the app; tests register their own dependency overrides."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
