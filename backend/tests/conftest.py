"""
Product Catalog Backend — Test Configuration (conftest.py)
============================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test that touches the store gets its own SQLite file under
       tmp_path, wrapped in a fresh Database, so tests never share rows.

Fixture Hierarchy (all function-scoped):
    ├── database:            Database on a temporary SQLite file, tables created
    ├── db_session:          Transactional AsyncSession from that database
    ├── mock_db_session:     AsyncMock standing in for AsyncSession
    ├── app:                 FastAPI app built with create_app(database=...)
    ├── test_client:         HTTPX AsyncClient talking to `app` in-process
    ├── valid_product / invalid_product: request payloads
    ├── unknown_product_id:  an id the store never assigned
    └── created_product_id:  id of a product created through the API
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

# Must be set before catalog.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.database import Database
from catalog.main import create_app

# 24-hex id of the kind a document store would assign; never a valid UUID here
NEVER_ASSIGNED_ID = "6436b60c28268a437baf0b7e"


# ══════════════════════════════════════════════════════════════════════════
# Store Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    """A Database on an empty SQLite file with the products table created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'catalog_test.db'}")
    await db.create_tables()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """A session that commits when the test body finishes without error."""
    async with database.session() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.commit.side_effect = OperationalError(...)
        await ProductRepository(mock_db_session).create(payload)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def app(database: Database) -> FastAPI:
    return create_app(database=database)


@pytest_asyncio.fixture
async def test_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient routed straight into the ASGI app (no server).

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/products")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Payload Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def valid_product():
    return {
        "name": "iPhone SE",
        "description": "Good phone",
        "price": 9001,
    }


@pytest.fixture
def invalid_product():
    """Missing the required `name`."""
    return {
        "description": "Good phone",
        "price": 10000,
    }


@pytest.fixture
def unknown_product_id() -> str:
    return NEVER_ASSIGNED_ID


@pytest_asyncio.fixture
async def created_product_id(test_client: AsyncClient, valid_product) -> str:
    response = await test_client.post("/products", json=valid_product)
    assert response.status_code == 201
    return response.json()["id"]
