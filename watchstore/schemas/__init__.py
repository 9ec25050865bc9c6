"""
Pydantic schemas package.
"""
from watchstore.schemas.order import (
    LineItemResponse,
    OrderCreate,
    OrderItemIn,
    OrderPaymentUpdate,
    OrderResponse,
    OrderStatisticsResponse,
    OrderStatusUpdate,
    OrderWithOwnerResponse,
    OverallOrderStats,
    OwnerSummary,
    ShippingAddress,
)
from watchstore.schemas.review import (
    ReviewAuthor,
    ReviewCreate,
    ReviewResponse,
    ReviewUpdate,
)
from watchstore.schemas.user import UserDeleteResponse, UserResponse

__all__ = [
    # Order
    "ShippingAddress",
    "OrderItemIn",
    "OrderCreate",
    "OrderStatusUpdate",
    "OrderPaymentUpdate",
    "LineItemResponse",
    "OrderResponse",
    "OwnerSummary",
    "OrderWithOwnerResponse",
    "OverallOrderStats",
    "OrderStatisticsResponse",
    # Review
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewAuthor",
    "ReviewResponse",
    # User
    "UserResponse",
    "UserDeleteResponse",
]
