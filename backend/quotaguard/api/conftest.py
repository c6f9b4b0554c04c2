"""API test fixtures.

Provides an async HTTP client wired to the FastAPI app with the DI container
overridden to use fakes. Available to all colocated API tests under api/.

Pattern:
    1. Override get_container -> returns test_container (all fakes)
    2. Override get_db        -> yields a session placeholder the fakes ignore
    3. Register a bearer token on the fake identity provider
    4. Test hits the endpoint, asserts on HTTP response + fake state
"""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from quotaguard.api.deps import get_container, get_db

TEST_ACCOUNT_ID = "acct-api-1"
TEST_TOKEN = "test-token-00000000"


@pytest.fixture
def auth_headers(fake_identity):
    """Authorization header accepted by the fake identity provider."""
    fake_identity.register(TEST_TOKEN, TEST_ACCOUNT_ID, email="api@example.com")
    return {"Authorization": f"Bearer {TEST_TOKEN}"}


@pytest_asyncio.fixture
async def client(test_container):
    """Async HTTP client with faked DI container and database session."""
    from quotaguard.main import app

    async def _fake_db():
        yield AsyncMock()

    app.dependency_overrides[get_container] = lambda: test_container
    app.dependency_overrides[get_db] = _fake_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
