"""
Order Pydantic schemas for request/response validation.

`OrderCreate` accepts the spellings older clients send (`orderItems` or
`items`; `watch`, `product`, `productId` or `product_id`) and `to_command`
maps the request onto the single canonical `CreateOrderCommand`.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from watchstore.services.orders import CreateOrderCommand, RequestedItem


class ShippingAddress(BaseModel):
    """Delivery address embedded in an order."""

    street: str
    city: str
    state: str
    zip_code: str = Field(
        validation_alias=AliasChoices("zipCode", "zip_code", "zip"),
        serialization_alias="zipCode",
    )
    country: str = "Kazakhstan"

    model_config = ConfigDict(populate_by_name=True)


class OrderItemIn(BaseModel):
    """One requested line of a new order."""

    watch_id: UUID = Field(
        validation_alias=AliasChoices("watch", "watchId", "product", "productId", "product_id"),
    )
    quantity: int = Field(1, ge=1, le=10_000)


class OrderCreate(BaseModel):
    """Schema for placing an order."""

    items: list[OrderItemIn] = Field(
        validation_alias=AliasChoices("orderItems", "items"),
    )
    shipping_address: ShippingAddress = Field(alias="shippingAddress")
    payment_method: Optional[str] = Field(None, alias="paymentMethod", max_length=50)

    model_config = ConfigDict(populate_by_name=True)

    def to_command(self, owner_id: UUID) -> CreateOrderCommand:
        return CreateOrderCommand(
            owner_id=owner_id,
            items=[
                RequestedItem(watch_id=item.watch_id, quantity=item.quantity)
                for item in self.items
            ],
            shipping_address=self.shipping_address.model_dump(by_alias=True),
            payment_method=self.payment_method,
        )


class OrderStatusUpdate(BaseModel):
    """Schema for changing an order's status."""

    status: str


class OrderPaymentUpdate(BaseModel):
    """Schema for marking an order paid or unpaid."""

    is_paid: bool = Field(alias="isPaid")
    paid_at: Optional[datetime] = Field(None, alias="paidAt")

    model_config = ConfigDict(populate_by_name=True)


class LineItemResponse(BaseModel):
    """Snapshotted line item as stored on the order."""

    id: UUID
    watch: UUID
    brand: str
    model: str
    price: Decimal
    quantity: int


class OrderResponse(BaseModel):
    """Schema for order API responses. Money fields serialize as decimal strings."""

    id: UUID
    user_id: Optional[UUID] = Field(None, alias="userId")
    line_items: list[LineItemResponse] = Field(alias="orderItems")
    subtotal: Decimal
    tax: Decimal
    shipping_cost: Decimal = Field(alias="shippingCost")
    total_price: Decimal = Field(alias="totalPrice")
    shipping_address: ShippingAddress = Field(alias="shippingAddress")
    payment_method: str = Field(alias="paymentMethod")
    status: str
    is_paid: bool = Field(alias="isPaid")
    paid_at: Optional[datetime] = Field(None, alias="paidAt")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class OwnerSummary(BaseModel):
    """Public projection of an order's owner. Never carries credentials."""

    id: UUID
    name: str
    email: str
    phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class OrderWithOwnerResponse(OrderResponse):
    """Admin listing row: the order plus who placed it."""

    owner: Optional[OwnerSummary] = Field(None, alias="user")


class OverallOrderStats(BaseModel):
    total_orders: int = Field(alias="totalOrders")
    total_revenue: Decimal = Field(alias="totalRevenue")
    average_order_value: Decimal = Field(alias="averageOrderValue")

    model_config = ConfigDict(populate_by_name=True)


class OrderStatisticsResponse(BaseModel):
    """Aggregate order figures for the admin dashboard."""

    overall: OverallOrderStats
    by_status: dict[str, int] = Field(alias="byStatus")

    model_config = ConfigDict(populate_by_name=True)
