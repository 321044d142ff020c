"""Session-owned shopping cart."""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from marketplace.services.cart.models import CartItem

logger = logging.getLogger(__name__)


class Cart:
    """Pending menu selection for one shopping session.

    A cart is created when a session starts and discarded when it ends; it
    never touches the network or the store. Items from several restaurants
    can coexist; checkout sends everything under the restaurant of the
    first item.
    """

    def __init__(self, owner_id: Optional[str] = None):
        self.owner_id = owner_id
        self.items: List[CartItem] = []

    def _find(self, item_id: str) -> Optional[CartItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def add_item(self, item: Union[CartItem, Dict[str, Any]]) -> CartItem:
        """Add one unit of an item."""
        if isinstance(item, dict):
            item = CartItem.model_validate({**item, "quantity": 1})

        existing = self._find(item.id)
        if existing:
            existing.quantity += 1
            return existing

        added = item.model_copy(update={"quantity": 1})
        self.items.append(added)
        return added

    def remove_item(self, item_id: str) -> None:
        """Remove an item; absent ids are ignored."""
        self.items = [item for item in self.items if item.id != item_id]

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """Set an item's quantity exactly, removing it when quantity <= 0."""
        if quantity <= 0:
            self.remove_item(item_id)
            return

        item = self._find(item_id)
        if item:
            item.quantity = quantity

    def clear_cart(self) -> None:
        """Empty the cart."""
        self.items = []

    def get_cart_total(self) -> Decimal:
        """Sum of price times quantity."""
        return sum((item.subtotal for item in self.items), Decimal("0"))

    def get_cart_items_count(self) -> int:
        """Sum of quantities."""
        return sum(item.quantity for item in self.items)

    @property
    def restaurant_ids(self) -> List[str]:
        """Distinct restaurants in insertion order."""
        seen: List[str] = []
        for item in self.items:
            if item.restaurant_id not in seen:
                seen.append(item.restaurant_id)
        return seen

    def to_order_request(self) -> Dict[str, Any]:
        """Build the checkout payload for POST /api/orders."""
        if len(self.restaurant_ids) > 1:
            logger.warning(
                f"[CART] Checkout with items from {len(self.restaurant_ids)} restaurants, "
                f"sending under {self.restaurant_ids[0]}"
            )
        return {
            "items": [
                {**item.model_dump(by_alias=True), "price": float(item.price)}
                for item in self.items
            ],
            "total": float(self.get_cart_total()),
            "restaurantId": self.items[0].restaurant_id if self.items else None,
        }
