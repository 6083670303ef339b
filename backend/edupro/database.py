"""
EduPro Backend: Record Store Connection
=========================================

What:  Async engine and per-request session for the notes and career_reports
       tables.
How:   PostgreSQL through asyncpg in deployments; the test suite points
       DATABASE_URL at in-memory SQLite (aiosqlite) instead.

Record store contract:
    Notes and career reports are owner-tagged rows. Every write is a single
    INSERT committed at the end of the request; there is no multi-step
    transaction, so a cancelled request never leaves a half-written record.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from edupro.config import settings


def _engine_options() -> Dict[str, Any]:
    """Pool options only apply to server databases; SQLite picks its own pool."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: response models are built from ORM objects after commit
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Shared metadata for the ORM models, Alembic autogenerate and test create_all."""


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    One session per request: commit when the handler returns, roll back if it
    raises. Route handlers list this after require_identity so a rejected
    caller never opens a connection.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Close pooled connections on shutdown."""
    await engine.dispose()
