"""Order creation and merchant order management."""
import copy
import logging
from datetime import datetime
from typing import List, Optional

from marketplace.core.config import settings
from marketplace.core.errors import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from marketplace.services.identity.base import Identity, Role
from marketplace.services.ordering.models import (
    CreateOrderRequest,
    Order,
    OrderStatus,
    StatusChange,
)
from marketplace.services.ordering.state_machine import (
    allowed_actions,
    check_transition,
    next_status,
    parse_action,
    parse_status,
)
from marketplace.services.persistence.base import Document, DocumentStore

logger = logging.getLogger(__name__)

ANONYMOUS_CUSTOMER = "Anonymous"
UNKNOWN_PHONE = "N/A"


def _newest_first(orders: List[Document]) -> List[Document]:
    return sorted(orders, key=lambda order: order["created_at"], reverse=True)


def _stored_status(order: Document) -> Optional[OrderStatus]:
    """Status of a stored order, or None when it holds a value outside the enum."""
    try:
        return OrderStatus(order["status"])
    except ValueError:
        return None


async def get_owned_restaurant(store: DocumentStore, identity: Identity) -> Document:
    """Return the restaurant owned by a merchant."""
    restaurants = await store.query("restaurants", "owner_id", identity.id)
    if not restaurants:
        raise NotFoundError("Restaurant not found")
    return restaurants[0]


class OrderService:
    """Converts carts into orders and drives their status."""

    def __init__(self, store: DocumentStore, strict_transitions: Optional[bool] = None):
        self.store = store
        self.strict_transitions = (
            settings.strict_status_transitions
            if strict_transitions is None
            else strict_transitions
        )

    async def create_order(self, identity: Identity, request: CreateOrderRequest) -> Order:
        """
        Persist a pending order from a cart snapshot.

        The items and total are stored exactly as supplied; neither the total
        nor the single-restaurant rule is re-checked here.
        """
        if not request.items:
            raise ValidationError("No items in order")
        if not request.restaurant_id:
            raise ValidationError("Restaurant ID is required")

        items = copy.deepcopy(request.items)
        now = datetime.utcnow()
        order = {
            "user_id": identity.id,
            "customer_name": identity.display_name or identity.email or ANONYMOUS_CUSTOMER,
            "customer_phone": identity.phone or UNKNOWN_PHONE,
            "restaurant_id": request.restaurant_id,
            "restaurant_name": items[0].get("restaurantName") or items[0].get("restaurant"),
            "items": items,
            "total": request.total,
            "status": OrderStatus.PENDING.value,
            "is_reviewed": False,
            "created_at": now,
            "updated_at": now,
        }

        order["id"] = await self.store.insert("orders", order)
        logger.info(
            f"[ORDERS] Created order {order['id']} - user: {identity.id}, "
            f"restaurant: {request.restaurant_id}, items: {len(items)}, total: {request.total}"
        )
        return Order.model_validate(order)

    async def list_orders_for_user(self, identity: Identity) -> List[Order]:
        """Orders placed by the caller, newest first."""
        orders = await self.store.query("orders", "user_id", identity.id)
        return [Order.model_validate(order) for order in _newest_first(orders)]

    async def get_order(self, identity: Identity, order_id: str) -> Order:
        """Fetch one order visible to the caller."""
        order = await self.store.get("orders", order_id)
        if order is None:
            raise NotFoundError("Order not found", entity_id=order_id)

        if order["user_id"] != identity.id and identity.role != Role.ADMIN:
            restaurant = await self.store.get("restaurants", order["restaurant_id"])
            if not restaurant or restaurant.get("owner_id") != identity.id:
                raise AuthorizationError("Not authorized to view this order")
        return Order.model_validate(order)

    async def list_orders_for_merchant(
        self, identity: Identity, status: Optional[str] = None
    ) -> List[Order]:
        """Orders of the merchant's restaurant, optionally filtered by status."""
        restaurant = await get_owned_restaurant(self.store, identity)
        orders = await self.store.query("orders", "restaurant_id", restaurant["id"])
        if status:
            wanted = parse_status(status)
            orders = [order for order in orders if order["status"] == wanted.value]

        for order in orders:
            await self._fill_customer_details(order)
            current = _stored_status(order)
            order["allowed_actions"] = allowed_actions(current) if current else []
        return [Order.model_validate(order) for order in _newest_first(orders)]

    async def _fill_customer_details(self, order: Document) -> None:
        """Backfill customer name and phone from the user profile when missing."""
        if not (order.get("customer_name") and order.get("customer_phone")) and order.get("user_id"):
            user = await self.store.get("users", order["user_id"])
            if user:
                if not order.get("customer_name"):
                    order["customer_name"] = user.get("display_name") or user.get("email")
                if not order.get("customer_phone"):
                    order["customer_phone"] = user.get("phone")
        order["customer_name"] = order.get("customer_name") or ANONYMOUS_CUSTOMER
        order["customer_phone"] = order.get("customer_phone") or UNKNOWN_PHONE

    async def update_order_status(
        self,
        identity: Identity,
        order_id: str,
        new_status: Optional[str] = None,
        action: Optional[str] = None,
    ) -> StatusChange:
        """
        Change an order's status on behalf of the owning merchant.

        The caller sends either a target status, which may overwrite any
        status unless strict transitions are on, or an action, which always
        follows the transition table. Ownership is checked before either
        token, so a caller who does not own the restaurant is refused
        whatever they send.
        """
        order = await self.store.get("orders", order_id)
        if order is None:
            raise NotFoundError("Order not found", entity_id=order_id)

        restaurant = await self.store.get("restaurants", order["restaurant_id"])
        if not restaurant or restaurant.get("owner_id") != identity.id:
            logger.warning(
                f"[ORDER STATUS] User {identity.id} refused on order {order_id} "
                f"of restaurant {order['restaurant_id']}"
            )
            raise AuthorizationError("Not authorized to update this order")

        if new_status and action:
            raise ValidationError("Send either a status or an action, not both")

        current = _stored_status(order)
        if action:
            verb = parse_action(action)
            if current is None:
                raise ValidationError(f"Action '{verb}' is not allowed for a {order['status']} order")
            target = next_status(current, verb)
        else:
            target = parse_status(new_status)
            if current is not None:
                check_transition(current, target, self.strict_transitions)
            elif self.strict_transitions:
                raise InvalidTransitionError(order["status"], target.value)
            else:
                logger.warning(
                    f"[ORDER STATUS] Order {order_id} had unknown status "
                    f"'{order['status']}', overwriting with {target}"
                )

        await self.store.update(
            "orders",
            order_id,
            {"status": target.value, "updated_at": datetime.utcnow()},
        )
        logger.info(f"[ORDER STATUS] Order {order_id}: {order['status']} -> {target}")
        return StatusChange(id=order_id, status=target)
