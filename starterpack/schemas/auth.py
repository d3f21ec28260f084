"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class LoginResponse(BaseModel):
    """Safe user projection plus the access token (also set as the token cookie)."""

    id: str
    name: str
    email: str
    role: str
    created_at: datetime | None = None
    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class CurrentUser(BaseModel):
    """Identity decoded from a verified token, attached to the request."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    email: str
    role: str = "user"


class ValidateResponse(BaseModel):
    id: str
    name: str
    email: str


class MessageResponse(BaseModel):
    message: str


class GoogleIdentity(BaseModel):
    """Identity extracted from a verified Google id token."""

    subject: str = Field(..., description="Google account id (sub claim)")
    email: str
    name: str | None = None
