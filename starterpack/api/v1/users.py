"""User registration and paginated listing."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from starterpack.api.deps import get_app_settings, get_current_user, get_optional_user
from starterpack.core.config import Settings
from starterpack.core.database import get_db
from starterpack.core.errors import ForbiddenError
from starterpack.models import ROLE_ADMIN
from starterpack.schemas.auth import CurrentUser
from starterpack.schemas.users import (
    UserCreatedResponse,
    UserCreateRequest,
    UserListItem,
    UsersPage,
)
from starterpack.services.users import create_user, list_users_page

router = APIRouter()

# Largest OFFSET a signed 64-bit SQL integer can hold.
MAX_PAGE_OFFSET = 2**63 - 1


def _coerce_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def resolve_page(
    limit: str | None,
    offset: str | None,
    settings: Settings,
) -> tuple[int, int]:
    """Parse raw limit/offset query values, falling back to defaults when missing or invalid."""
    page_limit = _coerce_int(limit, settings.USERS_PAGE_DEFAULT_LIMIT)
    if page_limit < 1:
        page_limit = settings.USERS_PAGE_DEFAULT_LIMIT
    page_limit = min(page_limit, settings.USERS_PAGE_MAX_LIMIT)
    page_offset = min(max(_coerce_int(offset, 0), 0), MAX_PAGE_OFFSET)
    return page_limit, page_offset


@router.get("", response_model=UsersPage)
def list_users(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    limit: str | None = None,
    offset: str | None = None,
) -> UsersPage:
    """List users (id, name, email) page by page. Requires a valid token."""
    page_limit, page_offset = resolve_page(limit, offset, settings)
    users, total = list_users_page(db, page_limit, page_offset)
    return UsersPage(
        offset=page_offset,
        limit=page_limit,
        total=total,
        items=[UserListItem.model_validate(u) for u in users],
    )


@router.post("/user", status_code=201, response_model=UserCreatedResponse)
def register_user(
    body: UserCreateRequest,
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[CurrentUser | None, Depends(get_optional_user)],
) -> UserCreatedResponse:
    """
    Register a new user with email and password.

    Anyone may register with role 'user'. Role 'admin' is only granted when the
    caller is authenticated as an admin.
    """
    if body.role == ROLE_ADMIN and (caller is None or caller.role != ROLE_ADMIN):
        raise ForbiddenError("Only an admin can assign the admin role")
    user = create_user(
        db,
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
    )
    return UserCreatedResponse(user_id=user.id)
