"""FastAPI dependencies."""
from typing import Optional
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.errors import AuthenticationError, AuthorizationError
from marketplace.db.database import get_db
from marketplace.services.catalog.service import CatalogService
from marketplace.services.identity.accounts import AccountService
from marketplace.services.identity.base import Identity, IdentityProvider
from marketplace.services.identity.token_provider import TokenIdentityProvider
from marketplace.services.ordering.service import OrderService
from marketplace.services.persistence.base import DocumentStore
from marketplace.services.persistence.sql_store import SqlAlchemyDocumentStore
from marketplace.services.reviews.service import ReviewService


def get_store(db: AsyncSession = Depends(get_db)) -> DocumentStore:
    """Get document store bound to the request's database session."""
    return SqlAlchemyDocumentStore(db)


def get_identity_provider(store: DocumentStore = Depends(get_store)) -> IdentityProvider:
    """Get identity provider instance."""
    return TokenIdentityProvider(store)


def get_bearer_token(request: Request) -> Optional[str]:
    """Extract the bearer token from the Authorization header."""
    header = request.headers.get("authorization", "")
    if not header.startswith("Bearer "):
        return None
    return header[len("Bearer "):].strip() or None


async def get_current_identity(
    token: Optional[str] = Depends(get_bearer_token),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> Identity:
    """Dependency to require authentication."""
    if not token:
        raise AuthenticationError("No token provided")
    return await provider.verify_token(token)


async def require_merchant(identity: Identity = Depends(get_current_identity)) -> Identity:
    """Dependency to require a merchant or admin principal."""
    if not identity.is_merchant:
        raise AuthorizationError("Merchant access required")
    return identity


def get_order_service(store: DocumentStore = Depends(get_store)) -> OrderService:
    """Get order service instance."""
    return OrderService(store)


def get_review_service(store: DocumentStore = Depends(get_store)) -> ReviewService:
    """Get review service instance."""
    return ReviewService(store)


def get_account_service(store: DocumentStore = Depends(get_store)) -> AccountService:
    """Get account service instance."""
    return AccountService(store)


def get_catalog_service(store: DocumentStore = Depends(get_store)) -> CatalogService:
    """Get catalog service instance."""
    return CatalogService(store)
