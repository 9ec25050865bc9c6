"""
Shared router dependencies: caller identity and service construction.
"""
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from watchstore.core.database import DbSession
from watchstore.core.errors import UnauthenticatedError
from watchstore.core.security import decode_access_token
from watchstore.repositories.user import UserRepository
from watchstore.services.access import Caller, ensure_admin
from watchstore.services.orders import OrderService
from watchstore.services.reviews import ReviewService
from watchstore.services.users import UserService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_caller(
    session: DbSession,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Caller:
    """
    Resolve the caller from a Bearer token.

    The role is read from the stored user, not the token, so a demoted
    admin loses access immediately.
    """
    if credentials is None:
        raise UnauthenticatedError("Not authorized to access this route")

    payload = decode_access_token(credentials.credentials)
    if payload is None or "sub" not in payload:
        raise UnauthenticatedError("Not authorized to access this route")

    try:
        user_id = UUID(str(payload["sub"]))
    except ValueError:
        raise UnauthenticatedError("Not authorized to access this route") from None

    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        raise UnauthenticatedError("User not found")

    return Caller(id=user.id, role=user.role)


CurrentCaller = Annotated[Caller, Depends(get_current_caller)]


async def require_admin(caller: CurrentCaller) -> Caller:
    """Dependency restricting a route to administrators."""
    ensure_admin(caller)
    return caller


AdminCaller = Annotated[Caller, Depends(require_admin)]


async def get_order_service(session: DbSession) -> OrderService:
    return OrderService(session)


async def get_review_service(session: DbSession) -> ReviewService:
    return ReviewService(session)


async def get_user_service(session: DbSession) -> UserService:
    return UserService(session)
