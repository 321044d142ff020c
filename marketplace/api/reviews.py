"""Review endpoints."""
from fastapi import APIRouter, Depends

from marketplace.api.responses import ApiResponse
from marketplace.core.dependencies import get_current_identity, get_review_service
from marketplace.services.identity.base import Identity
from marketplace.services.reviews.models import Review, SubmitReviewRequest
from marketplace.services.reviews.service import ReviewService


router = APIRouter()


@router.post("/api/reviews", response_model=ApiResponse[Review])
async def submit_review(
    payload: SubmitReviewRequest,
    identity: Identity = Depends(get_current_identity),
    review_service: ReviewService = Depends(get_review_service),
):
    """Review a completed order."""
    review = await review_service.submit_review(identity, payload)
    return ApiResponse(success=True, message="Review created successfully", data=review)
