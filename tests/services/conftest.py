"""Service test fixtures — async SQLite DB, customer store/service and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - The app under test is built by create_app with a session manager wrapping the
      test engine, so routes, store and service share one database
    - fake_store gives service tests a protocol-conforming store with race knobs

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for CRUD semantics
      (PostgreSQL-specific features not exercised here)
    - StaticPool: every session sees the same in-memory database
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from customers_api.config import Settings
from customers_api.core.domain_types import NewCustomer
from customers_api.db.base import Base
from customers_api.infrastructure.customer_store import SqlAlchemyCustomerStore
from customers_api.infrastructure.database import DatabaseSessionManager
from customers_api.main import create_app
from customers_api.services.customer_service import CustomerService
import customers_api.models  # noqa: F401

from tests.services.fake_store import InMemoryCustomerStore


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def db_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
def store(db_manager):
    return SqlAlchemyCustomerStore(db_manager)


@pytest.fixture
def service(store):
    """CustomerService over the real SQLAlchemy store."""
    return CustomerService(store)


@pytest.fixture
def fake_store():
    return InMemoryCustomerStore()


@pytest.fixture
def fake_service(fake_store):
    """CustomerService over the in-memory fake store."""
    return CustomerService(fake_store)


@pytest.fixture
async def client(db_manager):
    """FastAPI test client wired to the test database."""
    app = create_app(Settings(log_format="text"), db_manager=db_manager)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def new_customer():
    return NewCustomer(
        first_name="John",
        last_name="Doe",
        email="john.doe@example.com",
        phone_number="+1-555-010-1001",
        address="123 Main St",
        city="New York",
        state="NY",
        country="USA",
    )


@pytest.fixture
async def seed_customer(service, new_customer):
    """Insert one customer through the service."""
    return await service.create_customer(new_customer)
