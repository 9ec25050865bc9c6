"""
Review API routes.
"""
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from watchstore.routers.deps import CurrentCaller, get_review_service
from watchstore.schemas.review import ReviewCreate, ReviewResponse, ReviewUpdate
from watchstore.services.reviews import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])

Service = Annotated[ReviewService, Depends(get_review_service)]


@router.get("/watch/{watch_id}", response_model=list[ReviewResponse])
async def list_watch_reviews(
    watch_id: UUID,
    service: Service,
) -> list[ReviewResponse]:
    """Public list of a watch's reviews, newest first."""
    reviews = await service.list_watch_reviews(watch_id)
    return [ReviewResponse.model_validate(review) for review in reviews]


@router.post(
    "/watch/{watch_id}",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_review(
    watch_id: UUID,
    review_data: ReviewCreate,
    caller: CurrentCaller,
    service: Service,
) -> ReviewResponse:
    """Review a watch. One review per user and watch."""
    review = await service.create_review(
        caller,
        watch_id,
        review_data.rating,
        review_data.comment,
    )
    return ReviewResponse.model_validate(review)


@router.put("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: UUID,
    review_data: ReviewUpdate,
    caller: CurrentCaller,
    service: Service,
) -> ReviewResponse:
    """Edit your own review."""
    review = await service.update_review(
        caller,
        review_id,
        rating=review_data.rating,
        comment=review_data.comment,
    )
    return ReviewResponse.model_validate(review)


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(
    review_id: UUID,
    caller: CurrentCaller,
    service: Service,
) -> None:
    """Delete a review. Author or admin."""
    await service.delete_review(caller, review_id)
