"""Pydantic request/response schemas."""

from starterpack.schemas.auth import (
    CurrentUser,
    GoogleIdentity,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ValidateResponse,
)
from starterpack.schemas.health import HealthResponse
from starterpack.schemas.users import (
    UserCreatedResponse,
    UserCreateRequest,
    UserListItem,
    UsersPage,
)

__all__ = [
    "CurrentUser",
    "GoogleIdentity",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "UserCreatedResponse",
    "UserCreateRequest",
    "UserListItem",
    "UsersPage",
    "ValidateResponse",
]
