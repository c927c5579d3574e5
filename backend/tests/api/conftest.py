"""Route test fixtures — FastAPI test client over the test database.

Invariants:
    - get_db dependency overridden to use a fresh session per request
    - db_manager patched so the readiness probe hits the test engine
    - sign_up/auth_headers go through the real HTTP routes
"""

import pytest
from httpx import ASGITransport, AsyncClient

from huddle.infrastructure.database import get_db, DatabaseSessionManager
import huddle.infrastructure.database as db_module
from huddle.main import app

PASSWORD = "secret-pw"


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def sign_up(client):
    """Register a user through the API; returns the response JSON."""
    async def _sign_up(username: str) -> dict:
        res = await client.post("/api/v1/auth/signup", json={
            "username": username,
            "email": f"{username}@example.com",
            "password": PASSWORD,
        })
        assert res.status_code == 201, res.text
        return res.json()
    return _sign_up


@pytest.fixture
def auth_headers(client, sign_up):
    """Register and sign in; returns Authorization headers."""
    async def _auth_headers(username: str) -> dict:
        await sign_up(username)
        res = await client.post("/api/v1/auth/signin", json={
            "username": username, "password": PASSWORD,
        })
        assert res.status_code == 200, res.text
        return {"Authorization": f"Bearer {res.json()['access_token']}"}
    return _auth_headers
