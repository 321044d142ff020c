"""Review attachment and merchant review management."""
import logging
from datetime import datetime
from typing import Any, List, Optional

from marketplace.core.errors import AuthorizationError, NotFoundError, ValidationError
from marketplace.services.identity.base import Identity
from marketplace.services.ordering.service import get_owned_restaurant
from marketplace.services.persistence.base import DocumentStore
from marketplace.services.reviews.models import Review, SubmitReviewRequest

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def _parse_rating(value: Any) -> int:
    """Accept integral ratings in range; bools and fractions are rejected."""
    if isinstance(value, bool):
        raise ValidationError("Rating must be an integer between 1 and 5")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError("Rating must be an integer between 1 and 5")
    return value


class ReviewService:
    """Attaches reviews to orders."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def submit_review(self, identity: Identity, request: SubmitReviewRequest) -> Review:
        """
        Persist a review and flag its order as reviewed.

        The review and the order flag are two separate writes. If the second
        one fails the review stays and the order still reads as unreviewed.
        A second review for an already reviewed order is accepted.
        """
        if not request.order_id or not request.restaurant_id or not request.rating:
            raise ValidationError("Missing required fields")
        rating = _parse_rating(request.rating)

        review = {
            "order_id": request.order_id,
            "restaurant_id": request.restaurant_id,
            "user_id": identity.id,
            "user_name": identity.display_name or "Anonymous",
            "rating": rating,
            "comment": request.comment,
            "created_at": datetime.utcnow(),
            "reply": None,
        }
        review["id"] = await self.store.insert("reviews", review)

        await self.store.update("orders", request.order_id, {"is_reviewed": True})
        logger.info(
            f"[REVIEWS] Review {review['id']} on order {request.order_id} - rating: {rating}"
        )
        return Review.model_validate(review)

    async def list_reviews_for_merchant(self, identity: Identity) -> List[Review]:
        """Reviews of the merchant's restaurant, newest first."""
        restaurant = await get_owned_restaurant(self.store, identity)
        reviews = await self.store.query("reviews", "restaurant_id", restaurant["id"])
        reviews.sort(key=lambda review: review["created_at"], reverse=True)
        return [Review.model_validate(review) for review in reviews]

    async def reply_to_review(
        self, identity: Identity, review_id: str, reply: Optional[str]
    ) -> Review:
        """Set the merchant's reply on a review of their restaurant."""
        if not reply or not reply.strip():
            raise ValidationError("Reply is required")

        review = await self.store.get("reviews", review_id)
        if review is None:
            raise NotFoundError("Review not found", entity_id=review_id)

        restaurant = await self.store.get("restaurants", review["restaurant_id"])
        if not restaurant or restaurant.get("owner_id") != identity.id:
            raise AuthorizationError("Not authorized to reply to this review")

        changes = {"reply": reply.strip(), "replied_at": datetime.utcnow()}
        await self.store.update("reviews", review_id, changes)
        review.update(changes)
        logger.info(f"[REVIEWS] Merchant {identity.id} replied to review {review_id}")
        return Review.model_validate(review)
