"""
Watch repository. Only column-scoped updates touch existing rows so that
catalog edits and rating recomputation never overwrite each other.
"""
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import case, select, update

from watchstore.models.product import Watch
from watchstore.repositories.base import BaseRepository, store_errors


class WatchRepository(BaseRepository[Watch]):
    """Repository for Watch model operations."""

    model = Watch

    async def get_many(self, ids: Iterable[UUID]) -> dict[UUID, Watch]:
        """Load several watches at once, keyed by id. Missing ids are absent."""
        wanted = set(ids)
        if not wanted:
            return {}
        stmt = select(Watch).where(Watch.id.in_(wanted))
        with store_errors("get watches"):
            result = await self.session.execute(stmt)
        return {watch.id: watch for watch in result.scalars().all()}

    async def decrement_stock(self, watch_id: UUID, quantity: int) -> None:
        """Blind decrement, clamped at zero. No reservation is made."""
        remaining = Watch.stock - quantity
        stmt = (
            update(Watch)
            .where(Watch.id == watch_id)
            .values(stock=case((remaining < 0, 0), else_=remaining))
        )
        with store_errors("decrement stock"):
            await self.session.execute(stmt)

    async def set_rating(self, watch_id: UUID, average_rating: float, review_count: int) -> None:
        """Write the two derived rating fields and nothing else."""
        stmt = (
            update(Watch)
            .where(Watch.id == watch_id)
            .values(average_rating=average_rating, review_count=review_count)
        )
        with store_errors("set rating"):
            await self.session.execute(stmt)
