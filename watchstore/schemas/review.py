"""
Review Pydantic schemas for request/response validation.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ReviewCreate(BaseModel):
    """Schema for reviewing a watch."""

    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)


class ReviewUpdate(BaseModel):
    """Schema for editing a review. Omitted fields are left unchanged."""

    rating: Optional[int] = Field(None, ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)


class ReviewAuthor(BaseModel):
    id: UUID
    name: str

    model_config = ConfigDict(from_attributes=True)


class ReviewResponse(BaseModel):
    """Schema for review API responses, with the author's name joined in."""

    id: UUID
    watch_id: UUID = Field(alias="watch")
    author: ReviewAuthor = Field(alias="user")
    rating: int
    comment: Optional[str] = None
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )
