"""Opaque bearer token identity provider."""
import logging
import secrets
from datetime import datetime, timedelta
from typing import Dict, Optional

from marketplace.core.config import settings
from marketplace.core.errors import AuthenticationError, PersistenceError
from marketplace.services.identity.base import Identity, IdentityProvider, Role
from marketplace.services.persistence.base import DocumentStore

logger = logging.getLogger(__name__)

# Module-level token storage (persists across requests)
# In production, use Redis or similar
_sessions: Dict[str, dict] = {}


def create_session_token() -> str:
    """Generate a secure session token."""
    return secrets.token_urlsafe(32)


class TokenIdentityProvider(IdentityProvider):
    """Issues random tokens and resolves them against the users collection."""

    def __init__(
        self,
        store: DocumentStore,
        sessions: Optional[Dict[str, dict]] = None,
        ttl_hours: Optional[int] = None,
    ):
        self.store = store
        self.sessions = _sessions if sessions is None else sessions
        self.ttl = timedelta(hours=ttl_hours if ttl_hours is not None else settings.token_ttl_hours)

    def _sweep_expired(self, now: datetime) -> None:
        expired = [token for token, session in self.sessions.items() if now > session["expires_at"]]
        for token in expired:
            del self.sessions[token]
        if expired:
            logger.debug(f"[AUTH] Dropped {len(expired)} expired tokens")

    async def issue_token(self, user_id: str) -> str:
        """Issue a token valid for the configured lifetime, dropping expired ones."""
        now = datetime.utcnow()
        self._sweep_expired(now)
        token = create_session_token()
        self.sessions[token] = {
            "user_id": user_id,
            "created_at": now,
            "expires_at": now + self.ttl,
        }
        logger.info(f"[AUTH] Issued token for user {user_id}")
        return token

    async def verify_token(self, token: Optional[str]) -> Identity:
        """Resolve a token to an identity with role and profile claims."""
        if not token:
            raise AuthenticationError("No token provided")

        session = self.sessions.get(token)
        if not session:
            raise AuthenticationError("Invalid or expired token")

        if datetime.utcnow() > session["expires_at"]:
            del self.sessions[token]
            raise AuthenticationError("Invalid or expired token")

        user_id = session["user_id"]
        try:
            user = await self.store.get("users", user_id)
        except PersistenceError as e:
            # Profile lookup failure still leaves a verified principal
            logger.error(f"[AUTH] Failed to load profile for {user_id}: {e}", exc_info=True)
            user = None

        if user is None:
            return Identity(id=user_id, role=Role.CUSTOMER)

        return Identity(
            id=user_id,
            display_name=user.get("display_name") or None,
            email=user.get("email"),
            phone=user.get("phone") or None,
            role=user.get("role") or Role.CUSTOMER,
        )

    async def revoke_token(self, token: str) -> None:
        """Drop a token."""
        self.sessions.pop(token, None)

    def expires_at(self, token: str) -> Optional[datetime]:
        """Return the expiry of a live token."""
        session = self.sessions.get(token)
        return session["expires_at"] if session else None
