"""
User repository for data access operations.
"""
from sqlalchemy import select

from watchstore.models.user import User
from watchstore.repositories.base import BaseRepository, store_errors


class UserRepository(BaseRepository[User]):
    """Repository for User model operations."""

    model = User

    async def list_all(self) -> list[User]:
        """Every account, oldest first."""
        stmt = select(User).order_by(User.created_at)
        with store_errors("list users"):
            result = await self.session.execute(stmt)
        return list(result.scalars().all())
