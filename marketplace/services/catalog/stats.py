"""Merchant dashboard statistics."""
from collections import Counter

from marketplace.services.catalog.models import MerchantStats
from marketplace.services.identity.base import Identity
from marketplace.services.ordering.models import OrderStatus
from marketplace.services.ordering.service import get_owned_restaurant
from marketplace.services.persistence.base import DocumentStore

FINISHED_STATUSES = frozenset({OrderStatus.DELIVERED.value, OrderStatus.COMPLETED.value})


async def merchant_statistics(store: DocumentStore, identity: Identity) -> MerchantStats:
    """Order, revenue, menu and rating figures for the caller's restaurant.

    With no reviews stored yet, the rating and review count shown on the
    restaurant itself are reported instead.
    """
    restaurant = await get_owned_restaurant(store, identity)
    restaurant_id = restaurant["id"]

    orders = await store.query("orders", "restaurant_id", restaurant_id)
    by_status = Counter(order["status"] for order in orders)
    revenue = sum(order.get("total") or 0 for order in orders)

    ratings = [
        review["rating"]
        for review in await store.query("reviews", "restaurant_id", restaurant_id)
        if review.get("rating")
    ]
    if ratings:
        average_rating = round(sum(ratings) / len(ratings), 1)
        review_count = len(ratings)
    else:
        average_rating = restaurant.get("rating") or 0.0
        review_count = restaurant.get("review_count") or 0

    return MerchantStats(
        total_orders=len(orders),
        pending_orders=by_status[OrderStatus.PENDING.value],
        completed_orders=sum(by_status[status] for status in FINISHED_STATUSES),
        total_revenue=round(revenue, 2),
        menu_items=await store.count("menuItems", "restaurant_id", restaurant_id),
        orders_by_status=dict(by_status),
        average_rating=average_rating,
        review_count=review_count,
    )
