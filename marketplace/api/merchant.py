"""Merchant restaurant, menu, order and review management endpoints."""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends

from marketplace.api.responses import ApiResponse
from marketplace.core.dependencies import (
    get_catalog_service,
    get_order_service,
    get_review_service,
    get_store,
    require_merchant,
)
from marketplace.services.catalog.models import (
    MenuItem,
    MenuItemRequest,
    MerchantStats,
    Restaurant,
    RestaurantUpdateRequest,
)
from marketplace.services.catalog.service import CatalogService
from marketplace.services.catalog.stats import merchant_statistics
from marketplace.services.identity.base import Identity
from marketplace.services.ordering.models import Order, StatusChange, StatusUpdateRequest
from marketplace.services.ordering.service import OrderService
from marketplace.services.persistence.base import DocumentStore
from marketplace.services.reviews.models import ReplyRequest, Review
from marketplace.services.reviews.service import ReviewService


router = APIRouter(prefix="/api/merchant")
logger = logging.getLogger(__name__)


@router.get("/restaurant", response_model=ApiResponse[Restaurant])
async def get_restaurant_info(
    identity: Identity = Depends(require_merchant),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Get the merchant's restaurant."""
    return ApiResponse(success=True, data=await catalog.get_merchant_restaurant(identity))


@router.put("/restaurant", response_model=ApiResponse[Restaurant])
async def update_restaurant_info(
    payload: RestaurantUpdateRequest,
    identity: Identity = Depends(require_merchant),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Edit the merchant's restaurant details."""
    restaurant = await catalog.update_merchant_restaurant(identity, payload)
    return ApiResponse(success=True, message="Restaurant info updated successfully", data=restaurant)


@router.get("/menu", response_model=ApiResponse[List[MenuItem]])
async def list_menu_items(
    identity: Identity = Depends(require_merchant),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Get every menu item of the merchant's restaurant."""
    return ApiResponse(success=True, data=await catalog.list_merchant_menu(identity))


@router.post("/menu", response_model=ApiResponse[MenuItem], status_code=201)
async def add_menu_item(
    payload: MenuItemRequest,
    identity: Identity = Depends(require_merchant),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Add a menu item."""
    item = await catalog.add_menu_item(identity, payload)
    return ApiResponse(success=True, message="Menu item added successfully", data=item)


@router.put("/menu/{item_id}", response_model=ApiResponse[MenuItem])
async def update_menu_item(
    item_id: str,
    payload: MenuItemRequest,
    identity: Identity = Depends(require_merchant),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Edit a menu item."""
    item = await catalog.update_menu_item(identity, item_id, payload)
    return ApiResponse(success=True, message="Menu item updated successfully", data=item)


@router.delete("/menu/{item_id}", response_model=ApiResponse)
async def delete_menu_item(
    item_id: str,
    identity: Identity = Depends(require_merchant),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Remove a menu item."""
    await catalog.delete_menu_item(identity, item_id)
    return ApiResponse(success=True, message="Menu item deleted successfully")


@router.get("/stats", response_model=ApiResponse[MerchantStats])
async def get_statistics(
    identity: Identity = Depends(require_merchant),
    store: DocumentStore = Depends(get_store),
):
    """Get dashboard figures for the merchant's restaurant."""
    return ApiResponse(success=True, data=await merchant_statistics(store, identity))


@router.get("/orders", response_model=ApiResponse[List[Order]])
async def list_merchant_orders(
    status: Optional[str] = None,
    identity: Identity = Depends(require_merchant),
    order_service: OrderService = Depends(get_order_service),
):
    """Get orders placed at the merchant's restaurant."""
    orders = await order_service.list_orders_for_merchant(identity, status=status)
    logger.info(
        f"[MERCHANT ORDERS] {len(orders)} orders for merchant {identity.id}"
        f"{f' with status {status}' if status else ''}"
    )
    return ApiResponse(success=True, data=orders)


@router.put("/orders/{order_id}/status", response_model=ApiResponse[StatusChange])
async def update_order_status(
    order_id: str,
    payload: StatusUpdateRequest,
    identity: Identity = Depends(require_merchant),
    order_service: OrderService = Depends(get_order_service),
):
    """Move an order to a new status."""
    change = await order_service.update_order_status(
        identity, order_id, payload.status, action=payload.action
    )
    return ApiResponse(success=True, message="Order status updated successfully", data=change)


@router.get("/reviews", response_model=ApiResponse[List[Review]])
async def list_merchant_reviews(
    identity: Identity = Depends(require_merchant),
    review_service: ReviewService = Depends(get_review_service),
):
    """Get reviews of the merchant's restaurant."""
    reviews = await review_service.list_reviews_for_merchant(identity)
    return ApiResponse(success=True, data=reviews)


@router.put("/reviews/{review_id}/reply", response_model=ApiResponse[Review])
async def reply_to_review(
    review_id: str,
    payload: ReplyRequest,
    identity: Identity = Depends(require_merchant),
    review_service: ReviewService = Depends(get_review_service),
):
    """Reply to a review."""
    review = await review_service.reply_to_review(identity, review_id, payload.reply)
    return ApiResponse(success=True, message="Reply saved", data=review)
