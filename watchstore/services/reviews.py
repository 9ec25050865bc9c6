"""
Review write path. Every create, rating change and delete recomputes the
owning watch's rating before returning.
"""
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from watchstore.core.errors import ConflictError, NotFoundError
from watchstore.core.logging import get_logger
from watchstore.models.review import Review
from watchstore.models.user import utcnow
from watchstore.repositories.product import WatchRepository
from watchstore.repositories.review import ReviewRepository
from watchstore.services.access import Caller, ensure_owner, ensure_owner_or_admin
from watchstore.services.ratings import RatingAggregator

logger = get_logger(__name__)


class ReviewService:
    """Create, update, delete and list reviews of watches."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.reviews = ReviewRepository(session)
        self.watches = WatchRepository(session)
        self.ratings = RatingAggregator(session)

    async def _get_existing(self, review_id: UUID) -> Review:
        review = await self.reviews.get_by_id(review_id)
        if review is None:
            raise NotFoundError("Review not found")
        return review

    async def list_watch_reviews(self, watch_id: UUID) -> list[Review]:
        return await self.reviews.list_for_watch(watch_id)

    async def create_review(
        self,
        caller: Caller,
        watch_id: UUID,
        rating: int,
        comment: Optional[str] = None,
    ) -> Review:
        """
        Add the caller's review of a watch.

        Raises:
            NotFoundError: If the watch does not exist.
            ConflictError: If the caller already reviewed this watch.
        """
        if await self.watches.get_by_id(watch_id) is None:
            raise NotFoundError("Watch not found")

        if await self.reviews.get_for_pair(watch_id, caller.id) is not None:
            raise ConflictError("You have already reviewed this watch")

        now = utcnow()
        review = await self.reviews.create({
            "watch_id": watch_id,
            "user_id": caller.id,
            "rating": rating,
            "comment": comment,
            "created_at": now,
            "updated_at": now,
        })
        await self.ratings.recompute(watch_id)

        logger.info("Created review", review_id=str(review.id), watch_id=str(watch_id))
        return await self.reviews.get_with_author(review.id)

    async def update_review(
        self,
        caller: Caller,
        review_id: UUID,
        rating: Optional[int] = None,
        comment: Optional[str] = None,
    ) -> Review:
        """Only the author may edit. Fields left as None keep their value."""
        review = await self._get_existing(review_id)
        ensure_owner(caller, review.user_id)

        rating_changed = rating is not None and rating != review.rating
        if rating is not None:
            review.rating = rating
        if comment is not None:
            review.comment = comment
        review.updated_at = utcnow()
        await self.reviews.save(review)

        if rating_changed:
            await self.ratings.recompute(review.watch_id)

        logger.info("Updated review", review_id=str(review_id), rating_changed=rating_changed)
        return await self.reviews.get_with_author(review_id)

    async def delete_review(self, caller: Caller, review_id: UUID) -> None:
        """Author or admin may delete; the watch rating is recomputed after."""
        review = await self._get_existing(review_id)
        ensure_owner_or_admin(caller, review.user_id)

        watch_id = review.watch_id
        await self.reviews.delete(review)
        await self.ratings.recompute(watch_id)

        logger.info("Deleted review", review_id=str(review_id), watch_id=str(watch_id))
