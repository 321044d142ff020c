"""Restaurant, menu and merchant statistics models."""
from datetime import datetime
from typing import Dict, Optional
from pydantic import Field

from marketplace.core.schemas import CamelModel


class Restaurant(CamelModel):
    """Restaurant as listed to customers and its owner."""

    id: str
    owner_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    cuisine_type: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    image: Optional[str] = None
    rating: float = 0.0
    review_count: int = 0
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RestaurantUpdateRequest(CamelModel):
    """Owner edits to restaurant details. Absent fields are left alone."""

    name: Optional[str] = None
    description: Optional[str] = None
    cuisine_type: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    image: Optional[str] = None


class MenuItem(CamelModel):
    """Menu item; the cart takes its id, name and price."""

    id: str
    restaurant_id: str
    name: str
    category: Optional[str] = None
    price: float
    description: Optional[str] = None
    image: Optional[str] = None
    available: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MenuItemRequest(CamelModel):
    """Menu item payload for create and partial update."""

    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    image: Optional[str] = None
    available: Optional[bool] = None


class MerchantStats(CamelModel):
    """Dashboard figures for a merchant's restaurant."""

    total_orders: int
    pending_orders: int
    completed_orders: int
    total_revenue: float
    menu_items: int
    orders_by_status: Dict[str, int]
    average_rating: float
    review_count: int
