"""API test fixtures — FastAPI app over an in-memory SQLite database.

Invariants:
    - app.state.endpoints wired against the test db_manager (lifespan not run)
    - database.db_manager patched for the readiness probe, restored afterwards
"""

import pytest
from httpx import ASGITransport, AsyncClient

import users_api.infrastructure.database as db_module
from users_api.config import get_settings
from users_api.main import app, build_endpoints


@pytest.fixture
async def client(db_manager):
    app.state.endpoints = build_endpoints(db_manager, get_settings())
    original_manager = db_module.db_manager
    db_module.db_manager = db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    db_module.db_manager = original_manager
