"""
SQLAlchemy models package.
All models are imported here so they register on Base.metadata.
"""
from watchstore.models.order import TERMINAL_STATUSES, Order, OrderStatus
from watchstore.models.product import Watch
from watchstore.models.review import Review
from watchstore.models.user import User, UserRole

__all__ = [
    "User",
    "UserRole",
    "Watch",
    "Order",
    "OrderStatus",
    "TERMINAL_STATUSES",
    "Review",
]
