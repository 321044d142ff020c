"""Error taxonomy shared by services and the HTTP layer."""


class MarketplaceError(Exception):
    """Base exception for all marketplace errors."""

    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(MarketplaceError):
    """Raised when input is missing or malformed."""

    status_code = 400


class InvalidTransitionError(ValidationError):
    """Raised when a status change is not a legal successor of the current status."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot change order status from '{current}' to '{target}'")


class AuthenticationError(MarketplaceError):
    """Raised when a bearer token is missing, invalid or expired."""

    status_code = 401


class AuthorizationError(MarketplaceError):
    """Raised when an authenticated caller is not permitted to act."""

    status_code = 403


class NotFoundError(MarketplaceError):
    """Raised when a referenced entity does not exist."""

    status_code = 404

    def __init__(self, message: str, entity_id: str | None = None):
        self.entity_id = entity_id
        super().__init__(message)


class PersistenceError(MarketplaceError):
    """Raised when a store operation fails."""

    status_code = 500
