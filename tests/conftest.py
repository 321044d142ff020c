"""Shared test fixtures and configuration."""
import pytest
import os
from datetime import datetime
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("APP_NAME", "Test Marketplace")

from marketplace.main import app
from marketplace.db.database import get_db
from marketplace.db.models import Base
from marketplace.services.identity import token_provider
from marketplace.services.identity.base import Identity, Role
from marketplace.services.identity.token_provider import TokenIdentityProvider
from marketplace.services.persistence.memory_store import InMemoryDocumentStore
from marketplace.services.persistence.sql_store import SqlAlchemyDocumentStore


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

RESTAURANT_ID = "fresh-fusion"
MERCHANT_ID = "fresh-fusion-owner"
OTHER_MERCHANT_ID = "other-owner"
CUSTOMER_ID = "customer-1"


@pytest.fixture
async def test_db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_db(test_db_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def sql_store(test_db):
    """Document store over the test database."""
    return SqlAlchemyDocumentStore(test_db)


@pytest.fixture
def memory_store():
    """Empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def customer():
    """Verified customer identity with full profile claims."""
    return Identity(
        id=CUSTOMER_ID,
        display_name="Test Customer",
        email="customer@test.com",
        phone="+1 555-0100",
        role=Role.CUSTOMER,
    )


@pytest.fixture
def merchant():
    """Merchant owning the Fresh Fusion restaurant."""
    return Identity(id=MERCHANT_ID, display_name="Fresh Fusion", role=Role.MERCHANT)


@pytest.fixture
def other_merchant():
    """Merchant owning a different restaurant."""
    return Identity(id=OTHER_MERCHANT_ID, display_name="Other Owner", role=Role.MERCHANT)


async def seed_marketplace(store):
    """Insert users and two restaurants."""
    now = datetime.utcnow()
    await store.insert("users", {
        "id": CUSTOMER_ID, "email": "customer@test.com", "display_name": "Test Customer",
        "phone": "+1 555-0100", "role": "customer", "created_at": now, "updated_at": now,
    })
    await store.insert("users", {
        "id": MERCHANT_ID, "email": "owner@freshfusion.com", "display_name": "Fresh Fusion",
        "role": "merchant", "created_at": now, "updated_at": now,
    })
    await store.insert("users", {
        "id": OTHER_MERCHANT_ID, "email": "owner@other.com", "display_name": "Other Owner",
        "role": "merchant", "created_at": now, "updated_at": now,
    })
    await store.insert("restaurants", {
        "id": RESTAURANT_ID, "owner_id": MERCHANT_ID, "name": "Fresh Fusion",
        "created_at": now, "updated_at": now,
    })
    await store.insert("restaurants", {
        "id": "other-place", "owner_id": OTHER_MERCHANT_ID, "name": "Other Place",
        "created_at": now, "updated_at": now,
    })


@pytest.fixture
async def seeded_memory_store(memory_store):
    """In-memory store with users and restaurants."""
    await seed_marketplace(memory_store)
    return memory_store


@pytest.fixture
async def seeded_sql_store(sql_store):
    """Database-backed store with users and restaurants."""
    await seed_marketplace(sql_store)
    return sql_store


def cart_items():
    """Two Fresh Fusion items as a cart sends them."""
    return [
        {"id": "a1", "name": "Salmon Nigiri", "price": 8.99, "quantity": 1,
         "restaurantId": RESTAURANT_ID, "restaurantName": "Fresh Fusion"},
        {"id": "a2", "name": "California Roll", "price": 7.99, "quantity": 2,
         "restaurantId": RESTAURANT_ID, "restaurantName": "Fresh Fusion"},
    ]


def make_order_doc(order_id="order-1", status="pending", is_reviewed=False, created_at=None):
    """Order document as the store holds it."""
    created_at = created_at or datetime.utcnow()
    return {
        "id": order_id,
        "user_id": CUSTOMER_ID,
        "customer_name": "Test Customer",
        "customer_phone": "+1 555-0100",
        "restaurant_id": RESTAURANT_ID,
        "restaurant_name": "Fresh Fusion",
        "items": cart_items(),
        "total": 24.97,
        "status": status,
        "is_reviewed": is_reviewed,
        "created_at": created_at,
        "updated_at": created_at,
    }


@pytest.fixture
def clean_auth_sessions():
    """Clean up issued tokens before and after tests."""
    token_provider._sessions.clear()
    yield
    token_provider._sessions.clear()


@pytest.fixture
async def client(test_db, seeded_sql_store, clean_auth_sessions):
    """HTTP client against the app with the test database."""
    async def _override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = _override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http

    app.dependency_overrides.clear()


@pytest.fixture
async def auth_headers(seeded_sql_store, clean_auth_sessions):
    """Bearer headers per seeded user id."""
    provider = TokenIdentityProvider(seeded_sql_store)

    async def _headers(user_id):
        token = await provider.issue_token(user_id)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def order_items():
    """Cart snapshot for a two-item Fresh Fusion order."""
    return cart_items()


@pytest.fixture
def order_doc():
    """Factory for stored order documents."""
    return make_order_doc
