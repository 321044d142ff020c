"""Public restaurant and menu endpoints."""
import logging
from typing import List
from fastapi import APIRouter, Depends

from marketplace.api.responses import ApiResponse
from marketplace.core.dependencies import get_catalog_service
from marketplace.services.catalog.models import MenuItem, Restaurant
from marketplace.services.catalog.service import CatalogService


router = APIRouter(prefix="/api/restaurants")
logger = logging.getLogger(__name__)


@router.get("", response_model=ApiResponse[List[Restaurant]])
async def list_restaurants(catalog: CatalogService = Depends(get_catalog_service)):
    """Get active restaurants."""
    restaurants = await catalog.list_restaurants()
    logger.info(f"[RESTAURANTS] Listed {len(restaurants)} restaurants")
    return ApiResponse(success=True, data=restaurants)


@router.get("/{restaurant_id}", response_model=ApiResponse[Restaurant])
async def get_restaurant(
    restaurant_id: str,
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Get one restaurant."""
    return ApiResponse(success=True, data=await catalog.get_restaurant(restaurant_id))


@router.get("/{restaurant_id}/menu", response_model=ApiResponse[List[MenuItem]])
async def get_restaurant_menu(
    restaurant_id: str,
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Get the available menu of a restaurant."""
    return ApiResponse(success=True, data=await catalog.get_menu(restaurant_id))
