"""
Ownership guard shared by the order and review mutation paths.
"""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from watchstore.core.errors import ForbiddenError
from watchstore.models.user import UserRole


@dataclass(frozen=True)
class Caller:
    """Authenticated identity of the party making a request."""

    id: UUID
    role: str = UserRole.USER.value


def is_admin(caller: Caller) -> bool:
    return caller.role == UserRole.ADMIN.value


def is_owner(caller: Caller, owner_id: Optional[UUID]) -> bool:
    return owner_id is not None and caller.id == owner_id


def ensure_owner_or_admin(caller: Caller, owner_id: Optional[UUID]) -> None:
    """Raise ForbiddenError unless the caller owns the resource or is an admin."""
    if not (is_owner(caller, owner_id) or is_admin(caller)):
        raise ForbiddenError("Not authorized to access this resource")


def ensure_owner(caller: Caller, owner_id: Optional[UUID]) -> None:
    """Strict variant without the admin override."""
    if not is_owner(caller, owner_id):
        raise ForbiddenError("Only the author may modify this resource")


def ensure_admin(caller: Caller) -> None:
    if not is_admin(caller):
        raise ForbiddenError(f"User role {caller.role} is not authorized to access this route")
