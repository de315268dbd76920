"""User schemas."""

from datetime import datetime

from pydantic import Field

from app.schemas.base import ApiModel


class UserCreate(ApiModel):
    id: str | None = None
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    role: str


class UserRead(ApiModel):
    id: str
    name: str
    email: str
    role: str
    is_active: bool
    created_at: datetime


class UserListResponse(ApiModel):
    users: list[UserRead]
    count: int
