"""Test config and shared fixtures."""
import os

# Must be set before framework.config is imported
os.environ["APP_ENV"] = "testing"
os.environ["DB_URL"] = "sqlite+aiosqlite:///:memory:"

import pytest
from typing import AsyncGenerator, List
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from main import app
from apps.catalog.models import Product
from apps.catalog.repository import ProductRepository
from framework.repository.unit_of_work import UnitOfWork


# In-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Create async test database session on a fresh in-memory database."""
    import apps.models  # noqa: F401

    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async_session_maker = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture
def product_repo(async_session: AsyncSession) -> ProductRepository:
    return ProductRepository(async_session)


@pytest.fixture
def uow(async_session: AsyncSession) -> UnitOfWork:
    return UnitOfWork(session=async_session)


@pytest.fixture
async def sample_products(async_session: AsyncSession) -> List[Product]:
    """Three committed products priced 5, 10 and 20."""
    products = [
        Product(name="Bolt", price=5, sku="B-1", description="M6 bolt"),
        Product(name="Widget", price=10, sku="W-1", description="Blue widget"),
        Product(name="Gadget", price=20, sku="G-1", description="Pocket gadget"),
    ]
    async_session.add_all(products)
    await async_session.commit()
    return products


@pytest.fixture
async def client(async_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client bound to the test session."""
    from apps.catalog.api.router import get_db

    async def _get_db():
        yield async_session

    app.dependency_overrides[get_db] = _get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
