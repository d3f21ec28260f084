"""Google OAuth2 sign-in: authorization URL, code exchange and id token verification."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, urlencode

import httpx
from google.auth import exceptions as google_auth_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from starterpack.core.errors import (
    GoogleNotConfiguredError,
    IdentityProviderError,
    InvalidAssertionError,
)
from starterpack.schemas.auth import GoogleIdentity

if TYPE_CHECKING:
    from starterpack.core.config import Settings

logger = logging.getLogger(__name__)

GOOGLE_SCOPES = ("openid", "email", "profile")


def _is_google_configured(settings: Settings) -> bool:
    if not settings.GOOGLE_CLIENT_ID or not settings.GOOGLE_CLIENT_ID.strip():
        return False
    if settings.GOOGLE_CLIENT_SECRET is None:
        return False
    secret = settings.GOOGLE_CLIENT_SECRET.get_secret_value()
    if not secret or not secret.strip():
        return False
    return True


def _require_configured(settings: Settings) -> None:
    if not _is_google_configured(settings):
        raise GoogleNotConfiguredError(
            "Google sign-in is not configured; set GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET."
        )


def _get_client_secret(settings: Settings) -> str:
    if settings.GOOGLE_CLIENT_SECRET is None:
        raise GoogleNotConfiguredError("GOOGLE_CLIENT_SECRET is not set.")
    return settings.GOOGLE_CLIENT_SECRET.get_secret_value()


def build_authorization_url(settings: Settings) -> str:
    """URL of Google's consent screen for the authorization code flow."""
    _require_configured(settings)
    params = {
        "response_type": "code",
        "client_id": settings.GOOGLE_CLIENT_ID,
        "redirect_uri": settings.GOOGLE_REDIRECT_URI,
        "scope": " ".join(GOOGLE_SCOPES),
    }
    return f"{settings.GOOGLE_AUTH_URL}?{urlencode(params, quote_via=quote)}"


async def exchange_code(code: str, settings: Settings) -> str:
    """
    Exchange an authorization code at Google's token endpoint; return the id token.

    Raises IdentityProviderError when Google is unreachable or rejects the code,
    InvalidAssertionError when the response carries no id token.
    """
    _require_configured(settings)
    data = {
        "code": code,
        "client_id": settings.GOOGLE_CLIENT_ID,
        "client_secret": _get_client_secret(settings),
        "redirect_uri": settings.GOOGLE_REDIRECT_URI,
        "grant_type": "authorization_code",
    }
    try:
        async with httpx.AsyncClient(timeout=settings.GOOGLE_REQUEST_TIMEOUT_SEC) as client:
            resp = await client.post(settings.GOOGLE_TOKEN_URL, data=data)
    except httpx.HTTPError as e:
        logger.warning(
            "Google token endpoint unreachable",
            extra={"error_type": type(e).__name__},
        )
        raise IdentityProviderError() from e

    if resp.status_code >= 400:
        logger.warning(
            "Google token exchange rejected",
            extra={"status_code": resp.status_code},
        )
        raise IdentityProviderError()
    try:
        body: dict[str, Any] = resp.json()
    except ValueError as e:
        raise IdentityProviderError() from e

    token = body.get("id_token") if isinstance(body, dict) else None
    if not token:
        raise InvalidAssertionError("Google response missing id_token")
    return token


def verify_identity_token(token: str, settings: Settings) -> GoogleIdentity:
    """
    Verify a Google id token (signature, issuer, expiry, audience = our client id).

    Blocking: fetches Google's public certificates.
    """
    _require_configured(settings)
    try:
        payload = id_token.verify_oauth2_token(
            token,
            google_requests.Request(),
            audience=settings.GOOGLE_CLIENT_ID,
        )
    except google_auth_exceptions.TransportError as e:
        raise IdentityProviderError() from e
    except (ValueError, google_auth_exceptions.GoogleAuthError) as e:
        logger.warning("Google id token rejected", extra={"reason": str(e)[:200]})
        raise InvalidAssertionError() from e

    email = payload.get("email")
    subject = payload.get("sub")
    if not email or not subject:
        raise InvalidAssertionError("Google identity is missing email or subject")
    if payload.get("email_verified") is False:
        raise InvalidAssertionError("Google email address is not verified")
    return GoogleIdentity(subject=str(subject), email=email, name=payload.get("name"))


async def fetch_google_identity(code: str, settings: Settings) -> GoogleIdentity:
    """Run the callback half of the flow: code exchange then id token verification."""
    token = await exchange_code(code, settings)
    return await asyncio.to_thread(verify_identity_token, token, settings)
