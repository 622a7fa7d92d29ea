"""Pytest configuration and fixtures for clubops.

HTTP tests run clubops.main:app over ASGI with the service graph swapped for
in-memory repositories (tests/fakes.py). DB-backed tests use db_session and
skip when DATABASE_URL is not configured.
"""

import os

# Settings validate SECRET_KEY on first load, which happens when clubops.main is imported.
os.environ.setdefault("SECRET_KEY", "clubops-test-secret-key")

from collections.abc import AsyncIterator, Callable  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from clubops.api.v1.dependencies import get_read_services, get_write_services  # noqa: E402
from clubops.core.limiter import limiter  # noqa: E402
from clubops.infrastructure.persistence import database  # noqa: E402
from clubops.infrastructure.security.jwt import create_access_token  # noqa: E402
from clubops.main import app  # noqa: E402
from tests.fakes import FakeStore, seeded_store  # noqa: E402


@pytest.fixture
def store() -> FakeStore:
    """In-memory club with one holder of every role (see tests.fakes.seeded_store)."""
    return seeded_store()


@pytest.fixture
async def client(store: FakeStore) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI), backed by store."""
    services = store.services()
    app.dependency_overrides[get_read_services] = lambda: services
    app.dependency_overrides[get_write_services] = lambda: services
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def raw_client() -> AsyncIterator[AsyncClient]:
    """Client without service overrides: requests reach the real session dependencies."""
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Return a function building Authorization headers for an actor id."""

    def _headers(actor_id: str) -> dict[str, str]:
        token = create_access_token({"sub": actor_id})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    """Database session for repository tests. Rolls back after test.

    Requires DATABASE_URL with migrations applied (alembic upgrade head).
    Use @pytest.mark.requires_db; run without DB via: pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip("Postgres not configured: set DATABASE_URL, then run: alembic upgrade head")
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
