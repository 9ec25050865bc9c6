"""
Order workflow - creation, line item removal, status and payment updates,
reads and statistics over the Order aggregate.

Every price-affecting change goes through `calculate_totals` on the full
remaining item list. Writes happen through the ORM, so each UPDATE is
guarded by the order's version column: a concurrent writer makes the
second flush fail with ConflictError instead of silently losing an update.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from watchstore.core.errors import NotFoundError, ValidationError
from watchstore.core.logging import get_logger
from watchstore.models.order import TERMINAL_STATUSES, Order, OrderStatus
from watchstore.models.product import Watch
from watchstore.models.user import utcnow
from watchstore.repositories.order import OrderRepository
from watchstore.repositories.product import WatchRepository
from watchstore.services.access import Caller, ensure_admin, ensure_owner_or_admin
from watchstore.services.pricing import LineAmount, OrderTotals, calculate_totals, to_money

logger = get_logger(__name__)

DEFAULT_PAYMENT_METHOD = "Cash"


@dataclass(frozen=True)
class RequestedItem:
    """One requested line: which watch and how many."""

    watch_id: UUID
    quantity: int


@dataclass(frozen=True)
class CreateOrderCommand:
    """Canonical input of `OrderService.create_order`."""

    owner_id: UUID
    items: list[RequestedItem]
    shipping_address: dict[str, Any] = field(default_factory=dict)
    payment_method: Optional[str] = None


def snapshot_line_item(watch: Watch, quantity: int) -> dict[str, Any]:
    """Copy the watch's current brand, model and price into a line item."""
    return {
        "id": str(uuid4()),
        "watch": str(watch.id),
        "brand": watch.brand,
        "model": watch.model,
        "price": str(to_money(watch.price)),
        "quantity": quantity,
    }


def line_amounts(line_items: list[dict[str, Any]]) -> list[LineAmount]:
    return [
        LineAmount(price=to_money(item["price"]), quantity=item["quantity"])
        for item in line_items
    ]


def parse_status(value: str) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Invalid status '{value}', expected one of: {allowed}") from None


class OrderService:
    """Orchestrates pricing, access checks and persistence for orders."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.orders = OrderRepository(session)
        self.watches = WatchRepository(session)

    async def _get_existing(self, order_id: UUID) -> Order:
        order = await self.orders.get_by_id(order_id)
        if order is None:
            raise NotFoundError("Order not found")
        return order

    @staticmethod
    def _apply_totals(order: Order, totals: OrderTotals) -> None:
        order.subtotal = totals.subtotal
        order.tax = totals.tax
        order.shipping_cost = totals.shipping_cost
        order.total_price = totals.total_price

    async def create_order(self, command: CreateOrderCommand) -> Order:
        """
        Snapshot the requested watches, price them and persist a Pending order.

        Raises:
            ValidationError: If no items were requested.
            InvalidItemError: If a quantity is not positive.
            NotFoundError: If any watch id does not resolve.
        """
        if not command.items:
            raise ValidationError("No order items")

        watches = await self.watches.get_many(item.watch_id for item in command.items)
        for item in command.items:
            if item.watch_id not in watches:
                raise NotFoundError(f"Watch {item.watch_id} not found")

        line_items = [
            snapshot_line_item(watches[item.watch_id], item.quantity)
            for item in command.items
        ]
        totals = calculate_totals(line_amounts(line_items))

        now = utcnow()
        order = await self.orders.create({
            "user_id": command.owner_id,
            "line_items": line_items,
            "subtotal": totals.subtotal,
            "tax": totals.tax,
            "shipping_cost": totals.shipping_cost,
            "total_price": totals.total_price,
            "shipping_address": command.shipping_address,
            "payment_method": command.payment_method or DEFAULT_PAYMENT_METHOD,
            "status": OrderStatus.PENDING.value,
            "is_paid": False,
            "paid_at": None,
            "created_at": now,
            "updated_at": now,
        })

        for item in command.items:
            await self.watches.decrement_stock(item.watch_id, item.quantity)

        logger.info(
            "Created order",
            order_id=str(order.id),
            owner_id=str(command.owner_id),
            items=len(line_items),
            total_price=str(totals.total_price),
        )
        return order

    async def remove_line_item(
        self,
        caller: Caller,
        order_id: UUID,
        line_item_id: UUID,
    ) -> Order:
        """Drop one line item and reprice the order from what remains."""
        order = await self._get_existing(order_id)
        ensure_owner_or_admin(caller, order.user_id)

        remaining = [item for item in order.line_items if item["id"] != str(line_item_id)]
        if len(remaining) == len(order.line_items):
            raise NotFoundError("Order item not found")
        if not remaining:
            raise ValidationError("Cannot remove all items from an order")

        totals = calculate_totals(line_amounts(remaining))

        order.line_items = remaining
        self._apply_totals(order, totals)
        order.updated_at = utcnow()
        order = await self.orders.save(order)

        logger.info(
            "Removed order item",
            order_id=str(order_id),
            line_item_id=str(line_item_id),
            total_price=str(totals.total_price),
        )
        return order

    async def set_order_status(
        self,
        order_id: UUID,
        status: str,
        caller: Optional[Caller] = None,
    ) -> Order:
        """Move an order to any recognised status. Totals and items are untouched."""
        if caller is not None:
            ensure_admin(caller)
        new_status = parse_status(status)

        order = await self._get_existing(order_id)
        if order.status in TERMINAL_STATUSES:
            logger.warning(
                "Changing status of a closed order",
                order_id=str(order_id),
                current_status=order.status,
            )

        order.status = new_status.value
        order.updated_at = utcnow()
        order = await self.orders.save(order)

        logger.info("Updated order status", order_id=str(order_id), status=new_status.value)
        return order

    async def set_order_payment(
        self,
        order_id: UUID,
        is_paid: bool,
        paid_at: Optional[datetime] = None,
        caller: Optional[Caller] = None,
    ) -> Order:
        """Mark an order paid (stamping `paid_at`) or unpaid (clearing it)."""
        if caller is not None:
            ensure_admin(caller)

        order = await self._get_existing(order_id)
        if order.status in TERMINAL_STATUSES:
            logger.warning(
                "Changing payment of a closed order",
                order_id=str(order_id),
                current_status=order.status,
            )

        order.is_paid = is_paid
        order.paid_at = (paid_at or utcnow()) if is_paid else None
        order.updated_at = utcnow()
        order = await self.orders.save(order)

        logger.info("Updated order payment", order_id=str(order_id), is_paid=is_paid)
        return order

    async def get_order(self, caller: Caller, order_id: UUID) -> Order:
        order = await self._get_existing(order_id)
        ensure_owner_or_admin(caller, order.user_id)
        return order

    async def list_own_orders(self, owner_id: UUID) -> list[Order]:
        return await self.orders.list_for_owner(owner_id)

    async def list_all_orders(self, caller: Optional[Caller] = None) -> list[Order]:
        """All orders with their owners loaded, newest first."""
        if caller is not None:
            ensure_admin(caller)
        return await self.orders.list_with_owners()

    async def delete_order(self, caller: Caller, order_id: UUID) -> None:
        order = await self._get_existing(order_id)
        ensure_owner_or_admin(caller, order.user_id)
        await self.orders.delete(order)
        logger.info("Deleted order", order_id=str(order_id))

    async def order_statistics(self, caller: Optional[Caller] = None) -> dict:
        if caller is not None:
            ensure_admin(caller)
        return await self.orders.get_statistics()
