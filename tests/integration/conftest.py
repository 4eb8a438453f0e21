"""Integration-test fixtures.

Pre-condition: a PostgreSQL reachable at DATABASE_URL, migrated with
`alembic upgrade head`. When it is not reachable every integration test is
skipped.

All integration tests share a single event loop so that the engine pool
created here stays valid across the entire test session.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from config.settings import settings
from src.main import app
from src.wl_common.database import create_engine, create_session_factory


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    eng = create_engine(settings)
    try:
        async with eng.connect() as conn:
            await conn.execute(text("SELECT 1 FROM ledger_entries LIMIT 1"))
    except (OSError, SQLAlchemyError) as exc:
        await eng.dispose()
        pytest.skip(f"PostgreSQL with migrated schema not available: {exc}")
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client(  # type: ignore[override]
    engine: AsyncEngine, session_factory: async_sessionmaker[AsyncSession]
) -> AsyncGenerator[AsyncClient, None]:
    """Session-scoped async HTTP client wired to the live database.

    ASGITransport does not run the lifespan, so the handle it would build is
    installed on app.state directly.
    """
    app.dependency_overrides.clear()
    app.state.engine = engine
    app.state.session_factory = session_factory
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
