"""
Watch model - the product sold by the store.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Float, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from watchstore.core.database import Base
from watchstore.models.user import utcnow


class Watch(Base):
    """Catalog entry. Rating fields are written only by the rating aggregator."""

    __tablename__ = "watches"

    id: Mapped[UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4,
    )

    # Catalog details
    brand: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    model: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(100))
    description: Mapped[Optional[str]] = mapped_column(Text)

    # Pricing & inventory
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, default=0)

    # Derived from reviews
    average_rating: Mapped[float] = mapped_column(Float, default=0)
    review_count: Mapped[int] = mapped_column(Integer, default=0)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<Watch {self.brand} {self.model[:30]}>"
