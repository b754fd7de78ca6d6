"""
PC Builder Catalog API — Test Configuration (conftest.py)
==========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   No real database: services get an AsyncMock session, and the HTTP
       client overrides the `get_db_session` dependency with the same mock.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock async session
    ├── make_product / make_category: ORM instances with sensible defaults
    └── test_client: HTTPX AsyncClient bound to the FastAPI app
"""

import os
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Credentials must be present before pcbuilder.config builds its settings
os.environ.setdefault("DB_USER", "catalog_test")
os.environ.setdefault("DB_PASS", "not-a-real-password")
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from pcbuilder.models.category import Category
from pcbuilder.models.product import Product


def scalars_result(items):
    """Mock of a Result whose .scalars().all() returns `items`."""
    result = MagicMock()
    result.scalars.return_value.all.return_value = list(items)
    return result


def scalar_result(item):
    """Mock of a Result whose .scalar_one_or_none() returns `item`."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = item
    return result


def mappings_result(rows):
    """Mock of a Result whose .mappings().all() returns `rows`."""
    result = MagicMock()
    result.mappings.return_value.all.return_value = list(rows)
    return result


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value = scalar_result(product)
        result = await product_service.get_product(mock_db_session, str(product.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture
def make_product():
    """Factory for Product ORM instances (never attached to a session)."""

    def _make(**overrides):
        fields = {
            "id": uuid4(),
            "product_name": "Ryzen 5 5600X",
            "category": "Processor",
            "price": 199.0,
            "status": "In Stock",
            "image": "https://cdn.example.com/ryzen-5600x.png",
            "description": "6 cores, 12 threads",
            "key_features": {"cores": 6, "threads": 12},
            "reviews": [],
            "individual_rating": None,
        }
        fields.update(overrides)
        return Product(**fields)

    return _make


@pytest.fixture
def make_category():
    def _make(title, slug, **overrides):
        return Category(id=overrides.pop("id", uuid4()), title=title, slug=slug, **overrides)

    return _make


@pytest.fixture
def categories(make_category):
    return [
        make_category("Processor", "processor"),
        make_category("Monitor", "monitor"),
        make_category("RAM", "ram"),
    ]


@pytest_asyncio.fixture
async def test_client(mock_db_session):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    The lifespan does not run under ASGITransport, so no database is created;
    `app.state.db` is a mock whose ping() succeeds unless a test changes it.
    """
    from pcbuilder.database import get_db_session
    from pcbuilder.main import app

    async def override_session():
        yield mock_db_session

    app.dependency_overrides[get_db_session] = override_session
    app.state.db = MagicMock()
    app.state.db.ping = AsyncMock(return_value=None)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
