"""Restaurant browsing and merchant menu management."""
import logging
from datetime import datetime
from typing import List

from marketplace.core.errors import AuthorizationError, NotFoundError, ValidationError
from marketplace.services.catalog.models import (
    MenuItem,
    MenuItemRequest,
    Restaurant,
    RestaurantUpdateRequest,
)
from marketplace.services.identity.base import Identity
from marketplace.services.ordering.service import get_owned_restaurant
from marketplace.services.persistence.base import Document, DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Other"


def _menu_order(item: Document):
    return (item.get("category") or "", item["name"])


class CatalogService:
    """Reads restaurants and menus, and lets an owner edit theirs."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def list_restaurants(self) -> List[Restaurant]:
        """Active restaurants by name."""
        restaurants = await self.store.query("restaurants", "is_active", True)
        restaurants.sort(key=lambda restaurant: restaurant["name"])
        return [Restaurant.model_validate(restaurant) for restaurant in restaurants]

    async def get_restaurant(self, restaurant_id: str) -> Restaurant:
        """One restaurant by id."""
        restaurant = await self.store.get("restaurants", restaurant_id)
        if restaurant is None:
            raise NotFoundError("Restaurant not found", entity_id=restaurant_id)
        return Restaurant.model_validate(restaurant)

    async def get_menu(self, restaurant_id: str) -> List[MenuItem]:
        """Available menu items of a restaurant, grouped by category."""
        await self.get_restaurant(restaurant_id)
        items = await self.store.query("menuItems", "restaurant_id", restaurant_id)
        items = [item for item in items if item.get("available", True)]
        return [MenuItem.model_validate(item) for item in sorted(items, key=_menu_order)]

    async def get_merchant_restaurant(self, identity: Identity) -> Restaurant:
        """The caller's own restaurant."""
        return Restaurant.model_validate(await get_owned_restaurant(self.store, identity))

    async def update_merchant_restaurant(
        self, identity: Identity, request: RestaurantUpdateRequest
    ) -> Restaurant:
        """Apply the owner's edits to their restaurant."""
        if request.name is not None and not request.name.strip():
            raise ValidationError("Restaurant name cannot be empty")

        restaurant = await get_owned_restaurant(self.store, identity)
        changes = request.model_dump(exclude_none=True)
        changes["updated_at"] = datetime.utcnow()
        await self.store.update("restaurants", restaurant["id"], changes)
        restaurant.update(changes)
        logger.info(f"[CATALOG] Restaurant {restaurant['id']} updated: {sorted(changes)}")
        return Restaurant.model_validate(restaurant)

    async def list_merchant_menu(self, identity: Identity) -> List[MenuItem]:
        """Every menu item of the caller's restaurant, unavailable ones included."""
        restaurant = await get_owned_restaurant(self.store, identity)
        items = await self.store.query("menuItems", "restaurant_id", restaurant["id"])
        return [MenuItem.model_validate(item) for item in sorted(items, key=_menu_order)]

    async def add_menu_item(self, identity: Identity, request: MenuItemRequest) -> MenuItem:
        """Add an item to the caller's menu."""
        if not request.name or request.price is None:
            raise ValidationError("Name and price are required")

        restaurant = await get_owned_restaurant(self.store, identity)
        now = datetime.utcnow()
        item = {
            "restaurant_id": restaurant["id"],
            "name": request.name,
            "category": request.category or DEFAULT_CATEGORY,
            "price": request.price,
            "description": request.description or "",
            "image": request.image or "",
            "available": True if request.available is None else request.available,
            "created_at": now,
            "updated_at": now,
        }
        item["id"] = await self.store.insert("menuItems", item)
        logger.info(f"[CATALOG] Menu item {item['id']} added to {restaurant['id']}")
        return MenuItem.model_validate(item)

    async def _owned_menu_item(self, identity: Identity, item_id: str, verb: str) -> Document:
        item = await self.store.get("menuItems", item_id)
        if item is None:
            raise NotFoundError("Menu item not found", entity_id=item_id)

        restaurant = await self.store.get("restaurants", item["restaurant_id"])
        if not restaurant or restaurant.get("owner_id") != identity.id:
            raise AuthorizationError(f"Not authorized to {verb} this menu item")
        return item

    async def update_menu_item(
        self, identity: Identity, item_id: str, request: MenuItemRequest
    ) -> MenuItem:
        """Apply a partial update to one of the caller's menu items."""
        item = await self._owned_menu_item(identity, item_id, "update")
        if request.name is not None and not request.name.strip():
            raise ValidationError("Menu item name cannot be empty")

        changes = request.model_dump(exclude_none=True)
        changes["updated_at"] = datetime.utcnow()
        await self.store.update("menuItems", item_id, changes)
        item.update(changes)
        return MenuItem.model_validate(item)

    async def delete_menu_item(self, identity: Identity, item_id: str) -> None:
        """Remove one of the caller's menu items. Past orders keep their snapshot."""
        await self._owned_menu_item(identity, item_id, "delete")
        await self.store.delete("menuItems", item_id)
        logger.info(f"[CATALOG] Menu item {item_id} deleted by {identity.id}")
