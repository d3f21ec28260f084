"""Login, logout, token validation and Google sign-in endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from starterpack.api.deps import get_app_settings, get_current_user
from starterpack.core.config import Settings
from starterpack.core.database import get_db
from starterpack.core.errors import MissingCodeError
from starterpack.core.security import TOKEN_COOKIE_NAME, create_access_token
from starterpack.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ValidateResponse,
)
from starterpack.services.google_oauth import build_authorization_url, fetch_google_identity
from starterpack.services.users import (
    authenticate_user,
    get_or_create_google_user,
    user_claims,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def set_token_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=TOKEN_COOKIE_NAME,
        value=token,
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )


def clear_token_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=TOKEN_COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> LoginResponse:
    """
    Authenticate with email and password.

    The JWT is returned in the body and set as an HttpOnly cookie; send it back
    either as `Authorization: Bearer <token>` or via the cookie.
    """
    user = authenticate_user(db, body.email, body.password)
    token = create_access_token(user_claims(user), settings)
    set_token_cookie(response, token, settings)
    logger.info("Login succeeded", extra={"user_id": user.id, "login_method": "password"})
    return LoginResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        created_at=user.created_at,
        token=token,
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    """Clear the token cookie. Stateless: tokens held elsewhere stay valid until expiry."""
    clear_token_cookie(response, settings)
    return MessageResponse(message="Logout successful")


@router.get("/validate", response_model=ValidateResponse)
def validate(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ValidateResponse:
    """Return the identity carried by a valid token."""
    return ValidateResponse(
        id=current_user.id,
        name=current_user.name,
        email=current_user.email,
    )


@router.get("/google", status_code=302, response_class=RedirectResponse)
def google_login(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> RedirectResponse:
    """Redirect the browser to Google's OAuth2 consent screen."""
    return RedirectResponse(url=build_authorization_url(settings), status_code=302)


@router.get("/google/callback", status_code=302, response_class=RedirectResponse)
async def google_callback(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    code: str | None = None,
) -> RedirectResponse:
    """
    Finish Google sign-in: exchange the code, verify the id token, find or create
    the user by email, then redirect to the frontend with the JWT in an HttpOnly
    cookie. The token is never put in the redirect URL.
    """
    if not code:
        raise MissingCodeError()

    identity = await fetch_google_identity(code, settings)
    user = await run_in_threadpool(get_or_create_google_user, db, identity)
    token = create_access_token(user_claims(user), settings)

    redirect = RedirectResponse(url=settings.FRONTEND_OAUTH_REDIRECT_URL, status_code=302)
    set_token_cookie(redirect, token, settings)
    logger.info("Login succeeded", extra={"user_id": user.id, "login_method": "google"})
    return redirect
