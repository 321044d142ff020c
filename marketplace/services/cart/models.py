"""Cart models."""
from decimal import Decimal
from typing import Optional
from pydantic import Field

from marketplace.core.schemas import CamelModel


class CartItem(CamelModel):
    """Menu item selected into a cart."""

    id: str
    name: str
    price: Decimal = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    restaurant_id: str
    restaurant_name: str = ""
    image: Optional[str] = None

    @property
    def subtotal(self) -> Decimal:
        """Price times quantity."""
        return self.price * self.quantity
