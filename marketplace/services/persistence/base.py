"""Document store interface."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

Document = Dict[str, Any]


class DocumentStore(ABC):
    """Abstract base class for document stores.

    Documents are plain dicts keyed by snake_case field names and always
    carry their string ``id``. Every operation may raise ``PersistenceError``.
    """

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Get a document by id, or None if it does not exist."""
        pass

    @abstractmethod
    async def query(self, collection: str, field: str, value: Any) -> List[Document]:
        """Get all documents whose field equals value."""
        pass

    @abstractmethod
    async def insert(self, collection: str, doc: Document) -> str:
        """Insert a document and return its id.

        An ``id`` present in the document is used as-is, otherwise the store
        assigns one.
        """
        pass

    @abstractmethod
    async def update(self, collection: str, doc_id: str, changes: Document) -> None:
        """Apply a partial update. Raises NotFoundError for a missing document."""
        pass

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document. Deleting a missing document is a no-op."""
        pass

    @abstractmethod
    async def count(self, collection: str, field: str, value: Any) -> int:
        """Count documents whose field equals value."""
        pass
