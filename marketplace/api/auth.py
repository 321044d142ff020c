"""Authentication endpoints."""
import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends

from marketplace.api.responses import ApiResponse
from marketplace.core.dependencies import (
    get_account_service,
    get_bearer_token,
    get_current_identity,
    get_identity_provider,
    get_store,
)
from marketplace.core.errors import NotFoundError
from marketplace.services.identity.accounts import AccountService, RegisterRequest
from marketplace.services.identity.base import Identity, IdentityProvider, Role
from marketplace.core.schemas import CamelModel
from marketplace.services.persistence.base import Document, DocumentStore

router = APIRouter(prefix="/api/auth")
logger = logging.getLogger(__name__)


class LoginRequest(CamelModel):
    """Login request model."""

    email: Optional[str] = None
    password: Optional[str] = None


class UserProfile(CamelModel):
    """Public user profile."""

    id: str
    email: str
    display_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    role: Role


class SessionInfo(CamelModel):
    """Issued token and its owner."""

    token: str
    expires_at: Optional[datetime] = None
    user: UserProfile


async def _session_for(provider: IdentityProvider, user: Document) -> SessionInfo:
    token = await provider.issue_token(user["id"])
    expires_at = provider.expires_at(token)
    return SessionInfo(token=token, expires_at=expires_at, user=UserProfile.model_validate(user))


@router.post("/register", response_model=ApiResponse[SessionInfo], status_code=201)
async def register(
    payload: RegisterRequest,
    accounts: AccountService = Depends(get_account_service),
    provider: IdentityProvider = Depends(get_identity_provider),
):
    """Create a user profile and sign it in."""
    user = await accounts.register(payload)
    session = await _session_for(provider, user)
    return ApiResponse(success=True, message="User profile created successfully", data=session)


@router.post("/login", response_model=ApiResponse[SessionInfo])
async def login(
    payload: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
    provider: IdentityProvider = Depends(get_identity_provider),
):
    """Exchange credentials for a bearer token."""
    user = await accounts.authenticate(payload.email, payload.password)
    session = await _session_for(provider, user)
    logger.info(f"[AUTH] Login for user {user['id']}")
    return ApiResponse(success=True, message="Login successful", data=session)


@router.post("/logout", response_model=ApiResponse)
async def logout(
    identity: Identity = Depends(get_current_identity),
    token: Optional[str] = Depends(get_bearer_token),
    provider: IdentityProvider = Depends(get_identity_provider),
):
    """Revoke the caller's token."""
    await provider.revoke_token(token)
    logger.info(f"[AUTH] Logout for user {identity.id}")
    return ApiResponse(success=True, message="User logged out successfully")


@router.get("/profile", response_model=ApiResponse[UserProfile])
async def get_profile(
    identity: Identity = Depends(get_current_identity),
    store: DocumentStore = Depends(get_store),
):
    """Get the caller's profile."""
    user = await store.get("users", identity.id)
    if user is None:
        raise NotFoundError("User not found", entity_id=identity.id)
    return ApiResponse(success=True, data=UserProfile.model_validate(user))
