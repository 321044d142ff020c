"""Identity provider interface."""
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel


class Role(str, Enum):
    """Principal roles."""

    CUSTOMER = "customer"
    MERCHANT = "merchant"
    ADMIN = "admin"

    def __str__(self) -> str:
        """Return the string value of the role."""
        return self.value


class Identity(BaseModel):
    """Verified principal behind a bearer token."""

    id: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Role = Role.CUSTOMER

    @property
    def is_merchant(self) -> bool:
        """Whether the principal may use merchant endpoints."""
        return self.role in (Role.MERCHANT, Role.ADMIN)


class IdentityProvider(ABC):
    """Abstract base class for identity providers."""

    @abstractmethod
    async def issue_token(self, user_id: str) -> str:
        """Issue an opaque bearer token for a user."""
        pass

    @abstractmethod
    async def verify_token(self, token: Optional[str]) -> Identity:
        """Resolve a token to an identity. Raises AuthenticationError."""
        pass

    @abstractmethod
    async def revoke_token(self, token: str) -> None:
        """Invalidate a token."""
        pass

    def expires_at(self, token: str) -> Optional[datetime]:
        """Return the expiry of a live token, when the provider tracks one."""
        return None
