"""
User Pydantic schemas for admin responses.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """Account as exposed to admins. The password hash is never included."""

    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    role: str
    created_at: datetime = Field(alias="createdAt")

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class UserDeleteResponse(BaseModel):
    """Result of deleting a user and their reviews."""

    message: str
    reviews_deleted: int = Field(alias="reviewsDeleted")
    watches_recomputed: int = Field(alias="watchesRecomputed")

    model_config = ConfigDict(populate_by_name=True)
