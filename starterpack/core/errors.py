"""Domain errors. Each carries the HTTP status and message the API answers with."""


class StarterPackError(Exception):
    """Base for errors rendered as a JSON {"message": ...} response."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def headers(self) -> dict[str, str] | None:
        if self.status_code == 401:
            return {"WWW-Authenticate": "Bearer"}
        return None


class InvalidCredentialsError(StarterPackError):
    """Unknown email or wrong password; the two are never distinguished."""

    status_code = 401
    default_message = "Invalid email or password"


class AuthenticationRequiredError(StarterPackError):
    """No bearer token in the Authorization header or the token cookie."""

    status_code = 401
    default_message = "No token provided, authorization denied"


class InvalidTokenError(StarterPackError):
    """Token is malformed, expired, wrongly signed, or lacks identity claims."""

    status_code = 401
    default_message = "Invalid token"


class ForbiddenError(StarterPackError):
    status_code = 403
    default_message = "Forbidden"


class MissingCodeError(StarterPackError):
    """OAuth callback reached without an authorization code."""

    status_code = 400
    default_message = "Missing authorization code"


class InvalidAssertionError(StarterPackError):
    """Google id token failed signature, issuer, audience or claim checks."""

    status_code = 500
    default_message = "Google identity verification failed"


class IdentityProviderError(StarterPackError):
    """Google could not be reached or refused the code exchange."""

    status_code = 500
    default_message = "Google login failed"


class GoogleNotConfiguredError(StarterPackError):
    status_code = 503
    default_message = "Google sign-in is not configured"


class DuplicateEmailError(StarterPackError):
    status_code = 400
    default_message = "Email already exists"


class InternalError(StarterPackError):
    status_code = 500
    default_message = "Internal server error"
