"""
User administration API routes.
"""
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends

from watchstore.routers.deps import AdminCaller, get_user_service
from watchstore.schemas.user import UserDeleteResponse, UserResponse
from watchstore.services.users import UserService

router = APIRouter(prefix="/users", tags=["users"])

Service = Annotated[UserService, Depends(get_user_service)]


@router.get("", response_model=list[UserResponse])
async def list_users(
    caller: AdminCaller,
    service: Service,
) -> list[UserResponse]:
    """All accounts. Admin only."""
    users = await service.list_users()
    return [UserResponse.model_validate(user) for user in users]


@router.delete("/{user_id}", response_model=UserDeleteResponse)
async def delete_user(
    user_id: UUID,
    caller: AdminCaller,
    service: Service,
) -> UserDeleteResponse:
    """
    Delete a user and every review they wrote.

    Ratings of the watches they reviewed are recomputed before returning.
    """
    result = await service.delete_user(user_id)
    return UserDeleteResponse(
        message="User and associated reviews deleted successfully",
        reviews_deleted=result.reviews_deleted,
        watches_recomputed=result.watches_recomputed,
    )
