"""API test fixtures — FastAPI test clients over a real or a scripted service.

Invariants:
    - client: full stack (routes -> UserService -> SqlUserRepository -> SQLite)
    - fake_client: routes only; get_user_service overridden by FakeUserService
    - App exceptions are turned into responses, never re-raised into the test

Design Decisions:
    - A fresh app per test from create_app(): dependency overrides never leak
"""

import pytest
from httpx import ASGITransport, AsyncClient

from user_service.api.routes.users import get_user_service
from user_service.config import Settings
from user_service.infrastructure.database import get_db
from user_service.main import create_app
from tests.api.fake_user_service import FakeUserService


@pytest.fixture
def test_app():
    return create_app(Settings(_env_file=None, version="test"))


@pytest.fixture
async def client(test_app, test_session_factory):
    """Full-stack test client with the DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    test_app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=test_app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
    test_app.dependency_overrides.clear()


@pytest.fixture
def fake_service():
    return FakeUserService()


@pytest.fixture
async def fake_client(test_app, fake_service):
    """Route-level test client backed by FakeUserService."""
    test_app.dependency_overrides[get_user_service] = lambda: fake_service
    async with AsyncClient(
        transport=ASGITransport(app=test_app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
    test_app.dependency_overrides.clear()
