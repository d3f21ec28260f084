"""Shared request dependencies: settings and the token-based access guard."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError

from starterpack.core.config import Settings
from starterpack.core.errors import AuthenticationRequiredError, InvalidTokenError
from starterpack.core.security import TOKEN_COOKIE_NAME, decode_access_token
from starterpack.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Dependency: the Settings instance the application was built with."""
    return request.app.state.settings


def _extract_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
) -> str | None:
    """Bearer header first, then the token cookie."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(TOKEN_COOKIE_NAME) or None


def _user_from_token(token: str, settings: Settings) -> CurrentUser:
    payload = decode_access_token(token, settings)
    try:
        return CurrentUser.model_validate(payload)
    except ValidationError as e:
        raise InvalidTokenError() from e


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> CurrentUser:
    """
    Dependency: require a valid token and return its identity.

    Raises 401 if no token is present or it fails verification. The identity is
    also stored on request.state.user.
    """
    token = _extract_token(request, credentials)
    if token is None:
        raise AuthenticationRequiredError()
    user = _user_from_token(token, settings)
    request.state.user = user
    return user


def get_optional_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> CurrentUser | None:
    """Dependency: identity of the caller if a valid token is present, else None."""
    token = _extract_token(request, credentials)
    if token is None:
        return None
    try:
        user = _user_from_token(token, settings)
    except InvalidTokenError:
        logger.debug("Ignoring invalid token on optionally authenticated route")
        return None
    request.state.user = user
    return user
