"""
Test fixtures for the Banking API test suite.

  - db_engine / db_session: Fresh in-memory SQLite database for each test
  - test_sessions: The app's session factory, pointed at that database
  - client: Async HTTP test client (unauthenticated) wired to that database
  - customer / second_customer: Registered MEMBER customers, each a dict with
    "customer_id" and ready-to-use "headers"
  - admin: A registered customer promoted to ADMIN
  - accounts / ledger / service: AccountService over in-memory repositories,
    for tests that exercise the core without HTTP or SQL

Customers are created through the real signup endpoint so the auth flow is
exercised too. Each fixture returns its own headers instead of mutating the
shared client, so two customers can be used side by side in one test.
"""

import os

# Settings() requires a secret; set it before any banking module is imported
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")

import uuid

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import update
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from banking import database
from banking.database import Base
from banking.main import app
from banking.models.customer import Customer, CustomerRole
from banking.services.account_service import AccountService

from fakes import InMemoryAccountRepository, InMemoryLedgerRepository
from helpers import signup


# In-memory SQLite; StaticPool keeps one connection so every session sees the same data
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def db_engine():
    """Create a fresh async engine with all tables for each test."""
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Provide an async session bound to the test engine."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def test_sessions(db_engine, monkeypatch):
    """
    Point the production session factory at the test engine, so the real
    get_db (commit on success, rollback on failure) serves every request.
    """
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    monkeypatch.setattr(database, "AsyncSessionLocal", async_session)
    return async_session


@pytest_asyncio.fixture
async def client(test_sessions):
    """Async HTTP test client backed by the test database."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def customer(client):
    return await signup(client, "testuser@example.com")


@pytest_asyncio.fixture
async def second_customer(client):
    return await signup(client, "seconduser@example.com", name="Second Customer")


@pytest_asyncio.fixture
async def admin(client, db_engine):
    """
    A customer promoted to ADMIN directly in the database, the way an
    operator would provision one.
    """
    admin = await signup(client, "admin@example.com", name="Admin")

    async_session = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False,
    )
    async with async_session() as session:
        await session.execute(
            update(Customer)
            .where(Customer.id == uuid.UUID(admin["customer_id"]))
            .values(role=CustomerRole.ADMIN)
        )
        await session.commit()

    return admin


@pytest.fixture
def accounts():
    return InMemoryAccountRepository()


@pytest.fixture
def ledger():
    return InMemoryLedgerRepository()


@pytest.fixture
def service(accounts, ledger):
    return AccountService(accounts=accounts, ledger=ledger, max_retries=3)
