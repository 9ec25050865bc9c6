"""
Order repository - persistence boundary for the Order aggregate.
"""
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from watchstore.models.order import Order
from watchstore.repositories.base import BaseRepository, store_errors


def _money(value: Any) -> Decimal:
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(Decimal("0.01"))


class OrderRepository(BaseRepository[Order]):
    """Repository for Order model operations."""

    model = Order

    async def list_for_owner(self, owner_id: UUID) -> list[Order]:
        """Orders placed by one user, newest first."""
        stmt = (
            select(Order)
            .where(Order.user_id == owner_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        with store_errors("list own orders"):
            result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_with_owners(self) -> list[Order]:
        """Every order with its owner eagerly loaded, newest first."""
        stmt = (
            select(Order)
            .options(selectinload(Order.owner))
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        with store_errors("list all orders"):
            result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_statistics(self) -> dict:
        """Count, sum and average of order totals plus a count per status."""
        overall_stmt = select(
            func.count(Order.id),
            func.sum(Order.total_price),
            func.avg(Order.total_price),
        )
        status_stmt = (
            select(Order.status, func.count(Order.id))
            .group_by(Order.status)
            .order_by(Order.status)
        )
        with store_errors("order statistics"):
            overall_result = await self.session.execute(overall_stmt)
            status_result = await self.session.execute(status_stmt)

        total_orders, total_revenue, average_order_value = overall_result.one()

        return {
            "overall": {
                "total_orders": total_orders or 0,
                "total_revenue": _money(total_revenue),
                "average_order_value": _money(average_order_value),
            },
            "by_status": {status: count for status, count in status_result.all()},
        }
