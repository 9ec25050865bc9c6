"""
Order model - a purchase with an embedded, snapshotted list of line items.
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, Numeric, String, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from watchstore.core.database import Base
from watchstore.models.user import utcnow

if TYPE_CHECKING:
    from watchstore.models.user import User

# JSONB on PostgreSQL, plain JSON elsewhere
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class OrderStatus(str, Enum):
    """Order lifecycle labels. Any status may follow any other."""

    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED.value, OrderStatus.CANCELLED.value})


class Order(Base):
    """Order aggregate. Totals are always rewritten together."""

    __tablename__ = "orders"

    id: Mapped[UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4,
    )
    user_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        index=True,
    )

    # Line items (stored as JSON, snapshotted at creation)
    line_items: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONDocument,
        default=list,
    )

    # Financial
    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    tax: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    shipping_cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    # Delivery & payment
    shipping_address: Mapped[dict[str, Any]] = mapped_column(JSONDocument, default=dict)
    payment_method: Mapped[str] = mapped_column(String(50), default="Cash")
    is_paid: Mapped[bool] = mapped_column(Boolean, default=False)
    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    # Status
    status: Mapped[str] = mapped_column(
        String(20),
        default=OrderStatus.PENDING.value,
        index=True,
    )

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

    # Optimistic concurrency token, checked on every UPDATE
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    owner: Mapped[Optional["User"]] = relationship("User")

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Order {self.id} {self.status}>"
