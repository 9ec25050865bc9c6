"""
Rating aggregator - keeps a watch's average rating and review count in step
with the reviews that currently reference it.

Every call rescans the full review set of the watch, so repeated calls are
idempotent and never accumulate drift.
"""
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from watchstore.core.logging import get_logger
from watchstore.repositories.product import WatchRepository
from watchstore.repositories.review import ReviewRepository

logger = get_logger(__name__)


class RatingAggregator:
    """Sole writer of `Watch.average_rating` and `Watch.review_count`."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.reviews = ReviewRepository(session)
        self.watches = WatchRepository(session)

    async def recompute(self, watch_id: UUID) -> tuple[float, int]:
        """
        Recalculate the rating fields of one watch.

        Returns the (average_rating, review_count) pair that was written.
        A watch without reviews gets (0, 0).
        """
        average, count = await self.reviews.get_rating_stats(watch_id)
        average_rating = average if count else 0.0

        await self.watches.set_rating(watch_id, average_rating, count)

        logger.info(
            "Recomputed watch rating",
            watch_id=str(watch_id),
            average_rating=average_rating,
            review_count=count,
        )
        return average_rating, count

    async def recompute_many(self, watch_ids: Iterable[UUID]) -> int:
        """Recompute each distinct watch once. Returns how many were touched."""
        distinct_ids = list(dict.fromkeys(watch_ids))
        for watch_id in distinct_ids:
            await self.recompute(watch_id)
        return len(distinct_ids)
