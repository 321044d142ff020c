"""Customer order endpoints."""
import logging
from typing import List
from fastapi import APIRouter, Depends, Request

from marketplace.api.responses import ApiResponse
from marketplace.core.dependencies import get_current_identity, get_order_service
from marketplace.services.identity.base import Identity
from marketplace.services.ordering.models import CreateOrderRequest, Order
from marketplace.services.ordering.service import OrderService


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/api/orders", response_model=ApiResponse[Order], status_code=201)
async def create_order(
    request: Request,
    payload: CreateOrderRequest,
    identity: Identity = Depends(get_current_identity),
    order_service: OrderService = Depends(get_order_service),
):
    """Place an order from the caller's cart."""
    logger.info(
        f"[ORDERS] Create request - user: {identity.id}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )
    order = await order_service.create_order(identity, payload)
    return ApiResponse(success=True, message="Order created successfully", data=order)


@router.get("/api/orders", response_model=ApiResponse[List[Order]])
async def list_orders(
    identity: Identity = Depends(get_current_identity),
    order_service: OrderService = Depends(get_order_service),
):
    """Get the caller's orders, newest first."""
    orders = await order_service.list_orders_for_user(identity)
    logger.info(f"[ORDERS] Found {len(orders)} orders for user {identity.id}")
    return ApiResponse(success=True, message="Get user orders", data=orders)


@router.get("/api/orders/{order_id}", response_model=ApiResponse[Order])
async def get_order(
    order_id: str,
    identity: Identity = Depends(get_current_identity),
    order_service: OrderService = Depends(get_order_service),
):
    """Get one order."""
    order = await order_service.get_order(identity, order_id)
    return ApiResponse(success=True, data=order)
