"""Request/response schemas for user endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreateRequest(BaseModel):
    """Registration payload. Role 'admin' requires an admin caller."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    name: str = Field(..., min_length=1, max_length=255)
    role: Literal["user", "admin"] = "user"


class UserCreatedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., serialization_alias="userId")


class UserListItem(BaseModel):
    """User entry for GET /users (no password, no role)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str


class UsersPage(BaseModel):
    """One page of users plus the total row count."""

    offset: int
    limit: int
    total: int
    items: list[UserListItem]
