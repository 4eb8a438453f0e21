"""Shared test fixtures."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.wl_common.database import get_db_session


async def _mock_session() -> AsyncGenerator[AsyncMock, None]:
    yield AsyncMock()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client over the app with the DB session replaced by a mock.

    The lifespan does not run under ASGITransport, so no engine is created.
    """
    app.dependency_overrides[get_db_session] = _mock_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
