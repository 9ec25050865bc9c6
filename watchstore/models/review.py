"""
Review model - one rating per (watch, author) pair.
"""
from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from watchstore.core.database import Base
from watchstore.models.user import utcnow

if TYPE_CHECKING:
    from watchstore.models.user import User


class Review(Base):
    """A user's rating and comment on a watch."""

    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("watch_id", "user_id", name="watch_user_unique_idx"),
    )

    id: Mapped[UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4,
    )
    watch_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("watches.id", ondelete="CASCADE"),
        index=True,
    )
    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )

    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(Text)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
    )

    # Relationships
    author: Mapped["User"] = relationship("User")

    def __repr__(self) -> str:
        return f"<Review {self.rating}/5 on {self.watch_id}>"
