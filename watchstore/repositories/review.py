"""
Review repository for data access operations.
"""
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.orm import selectinload

from watchstore.models.review import Review
from watchstore.repositories.base import BaseRepository, store_errors


class ReviewRepository(BaseRepository[Review]):
    """Repository for Review model operations."""

    model = Review

    async def get_with_author(self, review_id: UUID) -> Optional[Review]:
        stmt = (
            select(Review)
            .options(selectinload(Review.author))
            .where(Review.id == review_id)
            .execution_options(populate_existing=True)
        )
        with store_errors("get review"):
            result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_pair(self, watch_id: UUID, user_id: UUID) -> Optional[Review]:
        """The review a user left on a watch, if any."""
        stmt = select(Review).where(
            Review.watch_id == watch_id,
            Review.user_id == user_id,
        )
        with store_errors("get review for pair"):
            result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_watch(self, watch_id: UUID) -> list[Review]:
        """Reviews of a watch with authors loaded, newest first."""
        stmt = (
            select(Review)
            .options(selectinload(Review.author))
            .where(Review.watch_id == watch_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
        )
        with store_errors("list reviews"):
            result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_rating_stats(self, watch_id: UUID) -> tuple[Optional[float], int]:
        """
        Average rating and review count for a watch.
        Returns (None, 0) when the watch has no reviews.
        """
        stmt = select(
            func.avg(Review.rating),
            func.count(Review.id),
        ).where(Review.watch_id == watch_id)
        with store_errors("rating stats"):
            result = await self.session.execute(stmt)
        average, count = result.one()
        return (float(average) if average is not None else None), count or 0

    async def get_reviewed_watch_ids(self, user_id: UUID) -> list[UUID]:
        """Distinct watches a user has reviewed."""
        stmt = select(Review.watch_id).where(Review.user_id == user_id).distinct()
        with store_errors("reviewed watches"):
            result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_for_user(self, user_id: UUID) -> int:
        """Delete every review written by a user. Returns the number removed."""
        stmt = delete(Review).where(Review.user_id == user_id)
        with store_errors("delete user reviews"):
            result = await self.session.execute(stmt)
        return result.rowcount or 0
