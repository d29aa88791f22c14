"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SignUpRequest(BaseModel):
    """Email and password sign-up request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)
    name: str | None = Field(None, max_length=255)


class SignInRequest(BaseModel):
    """Email and password sign-in request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str | None


class SessionResponse(BaseModel):
    """Session attached to a validated token."""

    id: str
    user_id: str
    expires_at: datetime


class SessionEnvelope(BaseModel):
    """Identity resolved for the current request."""

    user: UserResponse
    session: SessionResponse


class AuthResponse(SessionEnvelope):
    """Sign-up/sign-in response with the issued token."""

    token: str
