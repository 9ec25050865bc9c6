"""
Repository package for data access layer.
"""
from watchstore.repositories.base import BaseRepository, store_errors
from watchstore.repositories.order import OrderRepository
from watchstore.repositories.product import WatchRepository
from watchstore.repositories.review import ReviewRepository
from watchstore.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "store_errors",
    "OrderRepository",
    "WatchRepository",
    "ReviewRepository",
    "UserRepository",
]
