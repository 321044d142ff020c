"""Review models."""
from datetime import datetime
from typing import Any, Optional

from marketplace.core.schemas import CamelModel


class SubmitReviewRequest(CamelModel):
    """Review payload. Fields are optional so the service reports what is missing."""

    order_id: Optional[str] = None
    restaurant_id: Optional[str] = None
    rating: Optional[Any] = None
    comment: str = ""


class ReplyRequest(CamelModel):
    """Merchant reply payload."""

    reply: Optional[str] = None


class Review(CamelModel):
    """Persisted review."""

    id: str
    order_id: str
    restaurant_id: str
    user_id: str
    user_name: str
    rating: int
    comment: Optional[str] = None
    created_at: datetime
    reply: Optional[str] = None
    replied_at: Optional[datetime] = None
