"""API test fixtures — FastAPI test client over the in-memory database, plus bearer tokens.

Invariants:
    - get_db dependency overridden to use the test session factory
    - Overrides cleared after every test
    - Tokens minted with the same secret the app verifies with
"""

import pytest
from httpx import ASGITransport, AsyncClient

from villa_api.config import get_settings
from villa_api.infrastructure.database import get_db
from villa_api.infrastructure.security import create_access_token
from villa_api.main import app


def bearer(username: str, roles: list[str]) -> dict:
    token = create_access_token(username, roles, get_settings())
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return bearer("alice", ["admin"])


@pytest.fixture
def customer_headers():
    return bearer("bob", ["customer"])


@pytest.fixture
def strict_conflicts():
    """Switch duplicate-key responses to transport 409 for one test."""
    app.dependency_overrides[get_settings] = lambda: get_settings().model_copy(
        update={"strict_conflict_status": True},
    )
    yield
    app.dependency_overrides.pop(get_settings, None)
