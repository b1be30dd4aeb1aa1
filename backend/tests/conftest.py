"""
BagPack Backend: Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── test_client: HTTPX AsyncClient over the real app and a fresh SQLite schema
    └── create_bag: Helper that POSTs a bag and returns its JSON
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time, so the environment is prepared before
# anything from bagpack is imported.
_test_dir = tempfile.mkdtemp(prefix="bagpack_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_test_dir, 'test.db')}"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402

import bagpack.models  # noqa: E402,F401
from bagpack.database import Base, engine  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_volume(mock_db_session):
            mock_db_session.execute.return_value = result_with(cuboid)
            await cuboid_service.get_volume(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def test_client():
    """
    Provides an async HTTP test client for endpoint testing.

    Creates the schema before the test and drops it afterwards, so every
    test starts from empty tables with ids counting from 1.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    from bagpack.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def create_bag(test_client):
    """POST /bags with the given dimensions and return the created bag."""

    async def _create(width=2, height=2, depth=2, title=None):
        response = await test_client.post(
            "/bags",
            json={"title": title, "width": width, "height": height, "depth": depth},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
