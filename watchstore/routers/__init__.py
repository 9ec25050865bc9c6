"""
API routers package.
"""
from watchstore.routers.health import router as health_router
from watchstore.routers.orders import router as orders_router
from watchstore.routers.reviews import router as reviews_router
from watchstore.routers.users import router as users_router

__all__ = [
    "health_router",
    "orders_router",
    "reviews_router",
    "users_router",
]
