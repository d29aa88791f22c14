"""Identity provider endpoints under /api/auth."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import get_identity_provider, get_request_context
from src.config import Settings, get_settings
from src.exceptions import UnauthorizedError
from src.models.user import User
from src.schemas.auth import (
    AuthResponse,
    SessionEnvelope,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    UserResponse,
)
from src.services.identity import AuthSession, IdentityProvider, RequestContext

router = APIRouter(prefix="/api/auth", tags=["auth"])


def set_session_cookie(response: Response, session: AuthSession, settings: Settings) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.token,
        expires=session.expires_at,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
    )


def build_auth_response(user: User, session: AuthSession) -> AuthResponse:
    return AuthResponse(
        token=session.token,
        user=UserResponse.model_validate(user),
        session=SessionResponse(
            id=session.id, user_id=session.user_id, expires_at=session.expires_at
        ),
    )


@router.post("/sign-up/email", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    user_data: SignUpRequest,
    response: Response,
    identity: Annotated[IdentityProvider, Depends(get_identity_provider)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Register a new user and sign them in."""
    user, session = identity.sign_up(user_data.email, user_data.password, user_data.name)
    set_session_cookie(response, session, settings)
    return build_auth_response(user, session)


@router.post("/sign-in/email", response_model=AuthResponse)
def sign_in(
    credentials: SignInRequest,
    response: Response,
    identity: Annotated[IdentityProvider, Depends(get_identity_provider)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Sign in with email and password."""
    result = identity.sign_in(credentials.email, credentials.password)
    if result is None:
        raise UnauthorizedError("Incorrect email or password")

    user, session = result
    set_session_cookie(response, session, settings)
    return build_auth_response(user, session)


@router.get("/get-session", response_model=SessionEnvelope | None)
def get_session(
    context: Annotated[RequestContext, Depends(get_request_context)],
):
    """Get the user and session behind the current token, or null."""
    if context.user is None or context.session is None:
        return None
    return SessionEnvelope(
        user=UserResponse(id=context.user.id, email=context.user.email, name=context.user.name),
        session=SessionResponse(
            id=context.session.id,
            user_id=context.session.user_id,
            expires_at=context.session.expires_at,
        ),
    )


@router.post("/sign-out")
def sign_out(
    response: Response,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Sign out. Tokens are stateless, so this clears the cookie and the client drops its copy."""
    response.delete_cookie(settings.session_cookie_name)
    return {"success": True}
