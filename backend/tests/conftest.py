"""
EduPro Backend: Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (in-memory DB, fake HTTP
       providers, API client) so no test needs a network or PostgreSQL.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── db_engine / db_session: SQLite in-memory database with all tables
    ├── mock_db_session: AsyncMock session for failure-path tests
    ├── provider_calls / mock_http: fake Supabase and search endpoints
    └── make_test_client: builds an HTTPX AsyncClient bound to a fresh app
                          with injected verifier, search service and DB
"""

import os

# Override settings for testing BEFORE any edupro imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SUPABASE_URL"] = "https://test-project.supabase.co"
os.environ["SUPABASE_ANON_KEY"] = "test-anon-key"
os.environ["BYPASS_AUTH"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, Callable, List, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from edupro.database import Base, get_db_session
from edupro.dependencies import get_identity_verifier, get_search_service
from edupro.models.career_report import CareerReport  # noqa: F401
from edupro.models.note import Note  # noqa: F401
from edupro.services.auth_base import IdentityVerifier
from edupro.services.search_service import SearchService


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite engine with every table created.

    StaticPool keeps one connection, so all sessions share the same database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = RuntimeError("connection lost")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Fake HTTP Providers
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def provider_calls() -> List[httpx.Request]:
    """Requests seen by a fake provider, for asserting what was (not) sent."""
    return []


@pytest_asyncio.fixture
async def mock_http(provider_calls):
    """
    Factory for an AsyncClient whose transport answers with `handler(request)`.

    `handler` may be sync or async (async handlers can sleep to simulate a
    slow provider). Every request is appended to `provider_calls`.

    Usage:
        client = mock_http(lambda request: httpx.Response(200, json={...}))
    """
    clients: List[httpx.AsyncClient] = []

    def _make(handler: Callable) -> httpx.AsyncClient:
        async def recording_handler(request: httpx.Request) -> httpx.Response:
            provider_calls.append(request)
            response = handler(request)
            if not isinstance(response, httpx.Response):
                response = await response
            return response

        client = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()


# ══════════════════════════════════════════════════════════════════════════
# API Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def make_test_client(db_engine):
    """
    Factory for an HTTPX AsyncClient talking to a fresh app instance.

    The lifespan does not run under ASGITransport, so collaborators are
    injected through dependency_overrides instead of app.state.

    Usage:
        client, state = make_test_client(verifier, search_service)
        response = await client.get("/api/notes")
        assert state["db_opened"] is False
    """
    from edupro.main import create_app

    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    clients: List[AsyncClient] = []

    def _make(verifier: IdentityVerifier, search_service: Optional[SearchService] = None):
        app = create_app()
        state = {"db_opened": False}

        async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
            state["db_opened"] = True
            async with factory() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise

        app.dependency_overrides[get_db_session] = override_db_session
        app.dependency_overrides[get_identity_verifier] = lambda: verifier
        if search_service is not None:
            app.dependency_overrides[get_search_service] = lambda: search_service

        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client, state

    yield _make

    for client in clients:
        await client.aclose()
