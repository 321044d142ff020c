"""In-memory document store."""
import copy
import uuid
from typing import Any, Dict, List, Optional

from marketplace.core.errors import NotFoundError, PersistenceError
from marketplace.db.models import COLLECTIONS
from marketplace.services.persistence.base import Document, DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """Document store kept in process memory.

    Documents are copied on the way in and out, so callers never share
    mutable state with the store.
    """

    def __init__(self):
        self._collections: Dict[str, Dict[str, Document]] = {
            name: {} for name in COLLECTIONS
        }

    def _collection(self, collection: str) -> Dict[str, Document]:
        if collection not in self._collections:
            raise PersistenceError(f"Unknown collection '{collection}'")
        return self._collections[collection]

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Get a document by id."""
        doc = self._collection(collection).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def query(self, collection: str, field: str, value: Any) -> List[Document]:
        """Get documents by field equality."""
        return [
            copy.deepcopy(doc)
            for doc in self._collection(collection).values()
            if doc.get(field) == value
        ]

    async def insert(self, collection: str, doc: Document) -> str:
        """Insert a document."""
        docs = self._collection(collection)
        stored = copy.deepcopy(doc)
        stored["id"] = stored.get("id") or uuid.uuid4().hex
        docs[stored["id"]] = stored
        return stored["id"]

    async def update(self, collection: str, doc_id: str, changes: Document) -> None:
        """Apply a partial update."""
        docs = self._collection(collection)
        if doc_id not in docs:
            raise NotFoundError(f"No document {collection}/{doc_id}", entity_id=doc_id)
        docs[doc_id].update(copy.deepcopy(changes))

    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document."""
        self._collection(collection).pop(doc_id, None)

    async def count(self, collection: str, field: str, value: Any) -> int:
        """Count documents by field equality."""
        return sum(
            1 for doc in self._collection(collection).values() if doc.get(field) == value
        )
