"""
Product Catalog Backend — Database Session Management
=======================================================

What:  Async SQLAlchemy engine, session factory and FastAPI dependencies.
How:   A `Database` object owns one engine and one session factory. The app
       factory builds it (or receives one from a test) and stores it on
       `app.state.database`; routes reach it through `get_db_session`.
Who:   Used by route handlers via FastAPI's dependency injection system,
       by the health check, and by the application lifespan.
When:  One `Database` per application; one session per request.

Connection Pooling:
    PostgreSQL:  pool_size + max_overflow from settings, pre-ping, hourly recycle
    SQLite:      SQLAlchemy's default pool for aiosqlite (no sizing arguments)
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, AsyncIterator, Dict

from fastapi import Depends, Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from catalog.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models share this metadata; Alembic and `Database.create_tables`
    read it to build the schema.
    """
    pass


class Database:
    """
    Explicitly constructed handle on the product store.

    Owns the engine (connection pool) and the session factory. Nothing in
    the package reaches for a module-level engine; whoever builds the app
    decides which store it talks to.

    Usage:
        database = Database("sqlite+aiosqlite:///./catalog.db")
        await database.create_tables()
        async with database.session() as session:
            ...
        await database.dispose()
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 10,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        engine_kwargs: Dict[str, Any] = {
            "pool_pre_ping": pool_pre_ping,
            "echo": echo,
        }
        # aiosqlite pools reject sizing arguments
        if make_url(url).get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)

        # expire_on_commit=False: response models read attributes after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a Database from application settings."""
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide a transactional session.

        Commits when the block exits normally, rolls back and re-raises when
        it raises, and always closes the session (returning the connection to
        the pool).
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def ping(self) -> None:
        """
        Execute SELECT 1 against the store.

        Raises whatever the driver raises when the store is unreachable;
        callers decide whether that is fatal.
        """
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_tables(self) -> None:
        """Create every table registered on Base.metadata (idempotent)."""
        # Registers the product table on Base.metadata
        import catalog.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Gracefully close all connections in the pool."""
        await self.engine.dispose()


# ── FastAPI Dependencies ──────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """Return the Database the application was built with."""
    return request.app.state.database


async def get_db_session(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The exit code here may run after the response has been sent, so writes
    are committed by ProductRepository itself and the commit on exit finds
    nothing pending. If the handler raises, the session rolls back and the
    exception continues to the error handlers.

    Example usage in a route:
        @router.get("/products")
        async def list_products(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with database.session() as session:
        yield session
