"""
Middleware package.
"""
from watchstore.middleware.error_handler import ErrorHandlerMiddleware, domain_error_handler
from watchstore.middleware.request_context import RequestContextMiddleware

__all__ = [
    "ErrorHandlerMiddleware",
    "RequestContextMiddleware",
    "domain_error_handler",
]
