"""
Order API routes.
"""
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from watchstore.routers.deps import AdminCaller, CurrentCaller, get_order_service
from watchstore.schemas.order import (
    OrderCreate,
    OrderPaymentUpdate,
    OrderResponse,
    OrderStatisticsResponse,
    OrderStatusUpdate,
    OrderWithOwnerResponse,
)
from watchstore.services.orders import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])

Service = Annotated[OrderService, Depends(get_order_service)]


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order_data: OrderCreate,
    caller: CurrentCaller,
    service: Service,
) -> OrderResponse:
    """Place an order for the calling user."""
    order = await service.create_order(order_data.to_command(caller.id))
    return OrderResponse.model_validate(order)


@router.get("", response_model=list[OrderWithOwnerResponse])
async def list_all_orders(
    caller: AdminCaller,
    service: Service,
) -> list[OrderWithOwnerResponse]:
    """Every order with its owner, newest first. Admin only."""
    orders = await service.list_all_orders(caller)
    return [OrderWithOwnerResponse.model_validate(order) for order in orders]


@router.get("/my-orders", response_model=list[OrderResponse])
async def list_my_orders(
    caller: CurrentCaller,
    service: Service,
) -> list[OrderResponse]:
    """Orders placed by the caller, newest first."""
    orders = await service.list_own_orders(caller.id)
    return [OrderResponse.model_validate(order) for order in orders]


@router.get("/statistics", response_model=OrderStatisticsResponse)
async def order_statistics(
    caller: AdminCaller,
    service: Service,
) -> OrderStatisticsResponse:
    """Order count, revenue and average value, plus counts per status."""
    stats = await service.order_statistics(caller)
    return OrderStatisticsResponse.model_validate(stats)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: UUID,
    caller: CurrentCaller,
    service: Service,
) -> OrderResponse:
    """Get one order. Owner or admin only."""
    order = await service.get_order(caller, order_id)
    return OrderResponse.model_validate(order)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(
    order_id: UUID,
    caller: CurrentCaller,
    service: Service,
) -> None:
    """Delete an order permanently. Owner or admin only."""
    await service.delete_order(caller, order_id)


@router.delete("/{order_id}/items/{item_id}", response_model=OrderResponse)
async def remove_order_item(
    order_id: UUID,
    item_id: UUID,
    caller: CurrentCaller,
    service: Service,
) -> OrderResponse:
    """
    Remove one line item and reprice the order.

    The last remaining item cannot be removed; delete the order instead.
    """
    order = await service.remove_line_item(caller, order_id, item_id)
    return OrderResponse.model_validate(order)


@router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: UUID,
    status_update: OrderStatusUpdate,
    caller: AdminCaller,
    service: Service,
) -> OrderResponse:
    """Set the order status. Admin only."""
    order = await service.set_order_status(order_id, status_update.status, caller=caller)
    return OrderResponse.model_validate(order)


@router.put("/{order_id}/payment", response_model=OrderResponse)
async def update_order_payment(
    order_id: UUID,
    payment_update: OrderPaymentUpdate,
    caller: AdminCaller,
    service: Service,
) -> OrderResponse:
    """Mark the order paid or unpaid. Admin only."""
    order = await service.set_order_payment(
        order_id,
        payment_update.is_paid,
        payment_update.paid_at,
        caller=caller,
    )
    return OrderResponse.model_validate(order)
