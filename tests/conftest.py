"""
Shared fixtures.

Every test gets its own SQLite file under tmp_path and an in-process
client; nothing touches the network.
"""

from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient

from carbon_trace.core.config import Settings
from carbon_trace.database import init_db
from carbon_trace.main import create_app
from carbon_trace.services.ai import BaseAIService


@pytest.fixture
def make_settings(tmp_path):
    """Settings isolated from the developer's .env and database."""

    def _make(**overrides) -> Settings:
        values = {
            "database_url": f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
            "google_api_key": None,
            "public_directory": str(tmp_path / "public"),
            "build_directory": str(tmp_path / "build"),
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
async def client_factory(make_settings):
    """Build an app with the given settings/AI service and return a client for it."""
    created = []

    async def _make(ai_service: Optional[BaseAIService] = None, **overrides) -> AsyncClient:
        app = create_app(make_settings(**overrides), ai_service=ai_service)
        await init_db(app.state.engine)

        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        created.append((client, app))
        return client

    yield _make

    for client, app in created:
        await client.aclose()
        await app.state.engine.dispose()


@pytest.fixture
async def app(make_settings):
    """App in fallback mode (no AI credential) with its tables created."""
    application = create_app(make_settings())
    await init_db(application.state.engine)

    yield application

    await application.state.engine.dispose()


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def alice_order() -> dict:
    return {
        "customerName": "Alice",
        "items": [
            {"itemName": "Mug", "unitPrice": 4.5, "quantity": 2, "carbonSaved": 0.3},
        ],
        "totalPrice": 9.0,
        "totalCarbonSaved": 0.6,
    }
