"""Unit tests for the document stores."""
import pytest
from datetime import datetime
from unittest.mock import AsyncMock

from sqlalchemy.exc import OperationalError

from marketplace.core.errors import NotFoundError, PersistenceError
from marketplace.services.persistence.sql_store import SqlAlchemyDocumentStore


@pytest.fixture(params=["memory", "sql"])
def store(request, memory_store, sql_store):
    """Run each test against both store implementations."""
    return memory_store if request.param == "memory" else sql_store


def restaurant(restaurant_id=None, owner_id="owner-1", name="Fresh Fusion"):
    doc = {
        "owner_id": owner_id,
        "name": name,
        "created_at": datetime.utcnow(),
        "updated_at": datetime.utcnow(),
    }
    if restaurant_id:
        doc["id"] = restaurant_id
    return doc


class TestDocumentStore:
    """Test the store contract shared by both implementations."""

    async def test_insert_assigns_id(self, store):
        """Test the store assigns an id when none is given."""
        doc_id = await store.insert("restaurants", restaurant())

        assert isinstance(doc_id, str) and doc_id
        stored = await store.get("restaurants", doc_id)
        assert stored["id"] == doc_id
        assert stored["name"] == "Fresh Fusion"

    async def test_insert_keeps_given_id(self, store):
        """Test a supplied id is used."""
        doc_id = await store.insert("restaurants", restaurant("fresh-fusion"))

        assert doc_id == "fresh-fusion"

    async def test_get_missing(self, store):
        """Test get returns None for unknown ids."""
        assert await store.get("restaurants", "missing") is None

    async def test_query_and_count(self, store):
        """Test field equality queries and counts."""
        await store.insert("restaurants", restaurant("r1", owner_id="owner-1"))
        await store.insert("restaurants", restaurant("r2", owner_id="owner-1"))
        await store.insert("restaurants", restaurant("r3", owner_id="owner-2"))

        owned = await store.query("restaurants", "owner_id", "owner-1")

        assert {doc["id"] for doc in owned} == {"r1", "r2"}
        assert await store.count("restaurants", "owner_id", "owner-1") == 2
        assert await store.count("restaurants", "owner_id", "nobody") == 0

    async def test_update(self, store):
        """Test partial updates leave other fields alone."""
        await store.insert("restaurants", restaurant("r1"))

        await store.update("restaurants", "r1", {"name": "Renamed"})

        stored = await store.get("restaurants", "r1")
        assert stored["name"] == "Renamed"
        assert stored["owner_id"] == "owner-1"

    async def test_update_missing(self, store):
        """Test updating an unknown document raises NotFoundError."""
        with pytest.raises(NotFoundError):
            await store.update("restaurants", "missing", {"name": "x"})

    async def test_delete(self, store):
        """Test delete removes and tolerates missing documents."""
        await store.insert("restaurants", restaurant("r1"))

        await store.delete("restaurants", "r1")
        await store.delete("restaurants", "r1")

        assert await store.get("restaurants", "r1") is None

    async def test_unknown_collection(self, store):
        """Test unknown collections raise PersistenceError."""
        with pytest.raises(PersistenceError):
            await store.get("payments", "p1")

    async def test_returned_documents_are_detached(self, memory_store):
        """Test mutating a fetched document does not change the store."""
        await memory_store.insert("restaurants", restaurant("r1"))

        fetched = await memory_store.get("restaurants", "r1")
        fetched["name"] = "Changed"

        assert (await memory_store.get("restaurants", "r1"))["name"] == "Fresh Fusion"


class TestSqlStoreErrors:
    """Test database failures surface as PersistenceError."""

    async def test_unknown_field(self, sql_store):
        """Test querying an unknown column."""
        with pytest.raises(PersistenceError):
            await sql_store.query("restaurants", "colour", "red")

    async def test_insert_failure_rolls_back(self):
        """Test commit errors are wrapped and rolled back."""
        session = AsyncMock()
        session.add = lambda row: None
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("locked"))
        store = SqlAlchemyDocumentStore(session)

        with pytest.raises(PersistenceError):
            await store.insert("restaurants", restaurant("r1"))

        session.rollback.assert_awaited_once()

    async def test_duplicate_id(self, sql_store):
        """Test a primary key clash is a PersistenceError."""
        await sql_store.insert("restaurants", restaurant("r1"))

        with pytest.raises(PersistenceError):
            await sql_store.insert("restaurants", restaurant("r1"))
