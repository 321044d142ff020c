"""SQLAlchemy-backed document store."""
import logging
import uuid
from typing import Any, List, Optional

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.errors import NotFoundError, PersistenceError
from marketplace.db.models import COLLECTIONS
from marketplace.services.persistence.base import Document, DocumentStore

logger = logging.getLogger(__name__)


def _model_for(collection: str):
    model = COLLECTIONS.get(collection)
    if model is None:
        raise PersistenceError(f"Unknown collection '{collection}'")
    return model


def _column_for(model, field: str):
    column = model.__table__.columns.get(field)
    if column is None:
        raise PersistenceError(f"Unknown field '{field}' on {model.__tablename__}")
    return getattr(model, field)


def _to_document(row) -> Document:
    return {column.key: getattr(row, column.key) for column in row.__table__.columns}


class SqlAlchemyDocumentStore(DocumentStore):
    """Document store mapping each collection onto a table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Get a document by id."""
        model = _model_for(collection)
        try:
            row = await self.db.get(model, doc_id)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to read {collection}/{doc_id}: {e}") from e
        return _to_document(row) if row else None

    async def query(self, collection: str, field: str, value: Any) -> List[Document]:
        """Get documents by field equality."""
        model = _model_for(collection)
        column = _column_for(model, field)
        try:
            result = await self.db.execute(select(model).where(column == value))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to query {collection}: {e}") from e
        return [_to_document(row) for row in result.scalars().all()]

    async def insert(self, collection: str, doc: Document) -> str:
        """Insert a document."""
        model = _model_for(collection)
        values = dict(doc)
        values["id"] = values.get("id") or uuid.uuid4().hex
        try:
            row = model(**values)
        except TypeError as e:
            raise PersistenceError(f"Invalid document for {collection}: {e}") from e

        try:
            self.db.add(row)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"[STORE] Insert into {collection} failed: {e}", exc_info=True)
            raise PersistenceError(f"Failed to write {collection}: {e}") from e
        return values["id"]

    async def update(self, collection: str, doc_id: str, changes: Document) -> None:
        """Apply a partial update."""
        model = _model_for(collection)
        for field in changes:
            _column_for(model, field)

        try:
            row = await self.db.get(model, doc_id)
            if row is None:
                raise NotFoundError(f"No document {collection}/{doc_id}", entity_id=doc_id)
            for field, value in changes.items():
                setattr(row, field, value)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"[STORE] Update of {collection}/{doc_id} failed: {e}", exc_info=True)
            raise PersistenceError(f"Failed to update {collection}/{doc_id}: {e}") from e

    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document."""
        model = _model_for(collection)
        try:
            row = await self.db.get(model, doc_id)
            if row is not None:
                await self.db.delete(row)
                await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to delete {collection}/{doc_id}: {e}") from e

    async def count(self, collection: str, field: str, value: Any) -> int:
        """Count documents by field equality."""
        model = _model_for(collection)
        column = _column_for(model, field)
        try:
            result = await self.db.execute(
                select(func.count()).select_from(model).where(column == value)
            )
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to count {collection}: {e}") from e
        return result.scalar_one()
