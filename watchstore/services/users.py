"""
User administration: listing accounts and deleting a user together with
the reviews they wrote.
"""
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from watchstore.core.errors import NotFoundError
from watchstore.core.logging import get_logger
from watchstore.models.user import User
from watchstore.repositories.review import ReviewRepository
from watchstore.repositories.user import UserRepository
from watchstore.services.ratings import RatingAggregator

logger = get_logger(__name__)


@dataclass(frozen=True)
class UserDeletion:
    """Outcome of a cascading user delete."""

    user_id: UUID
    reviews_deleted: int
    watches_recomputed: int


class UserService:
    """Admin-facing user operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.users = UserRepository(session)
        self.reviews = ReviewRepository(session)
        self.ratings = RatingAggregator(session)

    async def list_users(self) -> list[User]:
        return await self.users.list_all()

    async def delete_user(self, user_id: UUID) -> UserDeletion:
        """
        Delete a user, all of their reviews, and refresh affected ratings.

        Each watch the user reviewed is recomputed exactly once, after all
        of the user's reviews are gone. Orders are kept.
        """
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        affected_watch_ids = await self.reviews.get_reviewed_watch_ids(user_id)
        reviews_deleted = await self.reviews.delete_for_user(user_id)
        watches_recomputed = await self.ratings.recompute_many(affected_watch_ids)

        await self.users.delete(user)

        logger.info(
            "Deleted user",
            user_id=str(user_id),
            reviews_deleted=reviews_deleted,
            watches_recomputed=watches_recomputed,
        )
        return UserDeletion(
            user_id=user_id,
            reviews_deleted=reviews_deleted,
            watches_recomputed=watches_recomputed,
        )
