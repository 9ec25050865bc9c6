"""
Services package for business logic layer.
"""
from watchstore.services.access import Caller
from watchstore.services.orders import CreateOrderCommand, OrderService, RequestedItem
from watchstore.services.pricing import OrderTotals, calculate_totals
from watchstore.services.ratings import RatingAggregator
from watchstore.services.reviews import ReviewService
from watchstore.services.users import UserDeletion, UserService

__all__ = [
    "Caller",
    "CreateOrderCommand",
    "RequestedItem",
    "OrderService",
    "OrderTotals",
    "calculate_totals",
    "RatingAggregator",
    "ReviewService",
    "UserService",
    "UserDeletion",
]
