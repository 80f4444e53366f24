"""Shared test configuration and fixtures.

Each test gets a fresh in-memory SQLite database (via aiosqlite) and a
session wrapped in a transaction that rolls back afterwards, so no database
server is needed.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

import roomblock.models  # noqa: F401  registers every table on Base.metadata
from roomblock.auth.jwt import create_access_token
from roomblock.config import settings
from roomblock.database import Base, get_db
from roomblock.main import app
from roomblock.services import property_registry

ADMIN = settings.registry_admin
OWNER = "ST2PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
OTHER_OWNER = "ST3PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"

# Tech Conference 2023, June 1 to June 3
START_DATE = 1685577600
END_DATE = 1685750400


# ---------------------------------------------------------------------------
# Per-test database and session
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session wrapped in a transaction that always rolls back."""
    async with test_engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)

        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to use the test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: identities and a verified owner
# ---------------------------------------------------------------------------


def headers_for(identity: str) -> dict[str, str]:
    """Authorization headers carrying ``identity`` as the token subject."""
    return {"Authorization": f"Bearer {create_access_token(identity)}"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return headers_for(ADMIN)


@pytest.fixture
def owner_headers() -> dict[str, str]:
    return headers_for(OWNER)


@pytest.fixture
def other_headers() -> dict[str, str]:
    return headers_for(OTHER_OWNER)


@pytest_asyncio.fixture
async def verified_owner(db_session: AsyncSession) -> str:
    """Register and verify OWNER's property directly through the registry."""
    (await property_registry.register(db_session, OWNER, "Grand Hotel", "New York")).unwrap()
    (await property_registry.verify(db_session, ADMIN, OWNER, now=12345)).unwrap()
    return OWNER


@pytest_asyncio.fixture
async def verified_other_owner(db_session: AsyncSession) -> str:
    (await property_registry.register(db_session, OTHER_OWNER, "Harbour Inn", "Boston")).unwrap()
    (await property_registry.verify(db_session, ADMIN, OTHER_OWNER, now=12345)).unwrap()
    return OTHER_OWNER
