"""User account registration and password checks."""
import hashlib
import hmac
import logging
import secrets
from datetime import datetime
from typing import Optional

from marketplace.core.errors import AuthenticationError, ValidationError
from marketplace.core.schemas import CamelModel
from marketplace.services.identity.base import Role
from marketplace.services.persistence.base import Document, DocumentStore

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000

# Admins are provisioned out of band, never through the public endpoint
SELF_SERVICE_ROLES = frozenset({Role.CUSTOMER, Role.MERCHANT})


class RegisterRequest(CamelModel):
    """Registration payload."""

    email: Optional[str] = None
    password: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    phone: Optional[str] = None
    role: Role = Role.CUSTOMER


def hash_password(password: str, salt: Optional[str] = None) -> str:
    """Hash a password as ``salt$hexdigest``."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), salt.encode(), PBKDF2_ITERATIONS
    ).hex()
    return f"{salt}${digest}"


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """Check a password against a stored hash."""
    if not password_hash or "$" not in password_hash:
        return False
    salt, _ = password_hash.split("$", 1)
    return hmac.compare_digest(hash_password(password, salt), password_hash)


class AccountService:
    """Creates user profiles and authenticates them by email and password."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def register(self, request: RegisterRequest) -> Document:
        """Create a user profile and return it."""
        if not request.email or not request.password:
            raise ValidationError("Email and password are required")
        if request.role not in SELF_SERVICE_ROLES:
            raise ValidationError(f"Cannot register with role '{request.role}'")

        email = request.email.strip().lower()
        if await self.store.count("users", "email", email):
            raise ValidationError("User already exists")

        now = datetime.utcnow()
        user = {
            "email": email,
            "first_name": request.first_name,
            "last_name": request.last_name,
            "display_name": f"{request.first_name} {request.last_name}".strip(),
            "phone": request.phone,
            "role": request.role.value,
            "password_hash": hash_password(request.password),
            "created_at": now,
            "updated_at": now,
        }
        user["id"] = await self.store.insert("users", user)
        logger.info(f"[AUTH] Registered {user['role']} {user['id']}")
        return user

    async def authenticate(self, email: Optional[str], password: Optional[str]) -> Document:
        """Return the user matching the credentials."""
        if not email or not password:
            raise ValidationError("Email and password are required")

        users = await self.store.query("users", "email", email.strip().lower())
        if not users or not verify_password(password, users[0].get("password_hash")):
            raise AuthenticationError("Invalid email or password")
        return users[0]
