"""Order models."""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import Field

from marketplace.core.schemas import CamelModel


class OrderStatus(str, Enum):
    """Order lifecycle statuses."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    # Accepted values with no transitions leading to them
    DELIVERING = "delivering"
    COMPLETED = "completed"

    def __str__(self) -> str:
        """Return the string value of the status."""
        return self.value


class OrderAction(str, Enum):
    """Merchant actions that move an order forward."""

    CONFIRM = "confirm"
    CANCEL = "cancel"
    START_PREPARING = "start_preparing"
    MARK_READY = "mark_ready"
    DELIVER = "deliver"

    def __str__(self) -> str:
        """Return the string value of the action."""
        return self.value


class CreateOrderRequest(CamelModel):
    """Checkout payload. Fields are optional so the service reports what is missing."""

    items: Optional[List[Dict[str, Any]]] = None
    total: Optional[float] = None
    restaurant_id: Optional[str] = None


class StatusUpdateRequest(CamelModel):
    """Merchant status change payload: a target status or an action on the current one."""

    status: Optional[str] = None
    action: Optional[str] = None


class Order(CamelModel):
    """Persisted order."""

    id: str
    user_id: str
    customer_name: str
    customer_phone: str
    restaurant_id: str
    restaurant_name: Optional[str] = None
    items: List[Dict[str, Any]]
    total: Optional[float] = None
    status: OrderStatus
    is_reviewed: bool = False
    created_at: datetime
    updated_at: datetime
    # Filled on merchant listings only
    allowed_actions: List[OrderAction] = Field(default_factory=list)


class StatusChange(CamelModel):
    """Result of a status update."""

    id: str
    status: OrderStatus
