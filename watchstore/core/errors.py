"""
Typed errors raised by the service layer.

Each error carries the HTTP status the boundary layer answers with; the
services themselves never build responses.
"""
from fastapi import status


class DomainError(Exception):
    """Base class for every error the services surface to callers."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """Referenced order, watch, review or user does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(DomainError):
    """Caller is authenticated but is neither owner nor admin."""

    status_code = status.HTTP_403_FORBIDDEN


class UnauthenticatedError(DomainError):
    """No caller identity, or the identity could not be verified."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ValidationError(DomainError):
    """Malformed input: empty item list, last item removal, bad status."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidItemError(ValidationError):
    """A line item with a non-positive quantity or a negative price."""


class ConflictError(DomainError):
    """Duplicate review, or an order changed underneath the caller."""

    status_code = status.HTTP_409_CONFLICT


class StoreError(DomainError):
    """The database failed; the caller decides whether to retry."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
