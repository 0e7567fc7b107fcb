"""
Database Infrastructure
=======================

Manages database connections, session lifecycle, and engine configuration.

Uses SQLAlchemy 2.0 async. SQLite (aiosqlite) is the default store;
PostgreSQL (asyncpg) works through the same ``database_url`` setting.
"""

from contextlib import asynccontextmanager, contextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from helpdesk.config import settings
from helpdesk.core import RepositoryException, StoreUnavailableException
from helpdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    SQLAlchemy 2.0 style using DeclarativeBase.
    All models inherit from this class.
    """
    pass


# Global engine and session maker
_engine: AsyncEngine | None = None
_session_maker: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """
    Get the database engine.

    Raises:
        RuntimeError: If engine has not been initialized
    """
    if _engine is None:
        raise RuntimeError("Database engine not initialized. Call init_database() first.")
    return _engine


def init_database(database_url: Optional[str] = None) -> AsyncEngine:
    """
    Initialize the database engine and session maker.

    Should be called during application startup.

    Args:
        database_url: Overrides ``settings.database_url`` (used by tests)

    Returns:
        AsyncEngine: The initialized engine
    """
    global _engine, _session_maker

    url = database_url or settings.database_url

    engine_kwargs = {"echo": settings.debug, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        # asyncpg wants ssl= rather than libpq's sslmode=
        url = url.replace("sslmode=", "ssl=")
        engine_kwargs["pool_size"] = settings.db_pool_size
        engine_kwargs["max_overflow"] = settings.db_max_overflow

    _engine = create_async_engine(url, **engine_kwargs)

    _session_maker = async_sessionmaker(
        bind=_engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Prevent lazy loading after commit
        autoflush=False,
    )

    return _engine


async def close_database() -> None:
    """
    Close the database engine and dispose of connections.

    Should be called during application shutdown.
    """
    global _engine, _session_maker

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_maker = None


@asynccontextmanager
async def get_session_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Session that commits on success and rolls back on any error.

    For background jobs and startup seeding:

        async with get_session_context() as session:
            tickets = await SQLAlchemyTicketRepository(session).list_open()
    """
    if _session_maker is None:
        raise StoreUnavailableException("database", "not initialized")

    async with _session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency form of ``get_session_context``."""
    async with get_session_context() as session:
        yield session


async def create_tables() -> None:
    """
    Create all database tables.

    Model modules must be imported before this runs so their tables are
    registered on ``Base.metadata``.
    """
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; treat them as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@contextmanager
def store_errors(store: str) -> Iterator[None]:
    """
    Translate SQLAlchemy failures into repository exceptions.

    Constraint violations become ``RepositoryException``; driver and
    connection failures become ``StoreUnavailableException``.
    """
    try:
        yield
    except IntegrityError as e:
        raise RepositoryException(f"{store} constraint violated", {"error": str(e.orig)}) from e
    except (SQLAlchemyError, OSError) as e:
        logger.error(
            "Store operation failed",
            extra={"store": store, "error_type": type(e).__name__, "error": str(e)}
        )
        raise StoreUnavailableException(store, type(e).__name__) from e
