"""
Menu API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the whole suite.
How:   Each test that touches storage gets its own SQLite file under
       tmp_path, built with the same engine settings as production
       (build_engine), so BEGIN IMMEDIATE and the counter row behave
       exactly as they do at runtime.

Fixtures:
    engine            Async engine on a fresh SQLite file, schema created
    session_factory   async_sessionmaker bound to `engine`
    db_session        One AsyncSession (caller commits if it wants to)
    mock_db_session   AsyncMock session for storage-failure paths
    test_client       httpx AsyncClient over ASGITransport, with
                      get_db_session overridden to use `session_factory`
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Must be set before menu_api.config is imported anywhere.
_TEST_DB_DIR = tempfile.mkdtemp(prefix="menu_api_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/health.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ADMIN_EMAIL"] = "admin@restaurant.com"
os.environ["ADMIN_PASSWORD"] = "admin123"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from menu_api.database import Base, build_engine, build_session_factory, get_db_session
from menu_api.models import dish as _dish_models  # noqa: F401  registers tables on Base.metadata


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path}/menu.db")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
        with pytest.raises(StorageError):
            await dish_service.list_dishes(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    session.add_all = MagicMock()
    return session


@pytest.fixture
def sample_dish():
    return {
        "name": "Spicy Basil Chicken",
        "price": "14.99",
        "description": "Fresh basil leaves stir-fried with chicken, chili, and garlic.",
    }


def _session_override(session_factory):
    async def override():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return override


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/dishes")
            assert response.status_code == 200
    """
    from menu_api.main import app

    app.dependency_overrides[get_db_session] = _session_override(session_factory)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
