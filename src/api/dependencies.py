"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.database import get_db
from src.exceptions import UnauthorizedError, ValidationError
from src.services.identity import ANONYMOUS, AuthUser, IdentityProvider, RequestContext


def get_identity_provider(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> IdentityProvider:
    """Get identity provider with dependencies."""
    return IdentityProvider(db, settings)


def get_request_context(
    request: Request,
    identity: Annotated[IdentityProvider, Depends(get_identity_provider)],
) -> RequestContext:
    """Resolve the caller's identity. Anonymous requests are not rejected here."""
    return identity.validate_session(request.headers, request.cookies) or ANONYMOUS


def require_auth(
    context: Annotated[RequestContext, Depends(get_request_context)],
) -> AuthUser:
    """Reject the request with 401 unless an identity is attached."""
    if not context.is_authenticated:
        raise UnauthorizedError()
    return context.user


def get_todo_owner_id(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
    identity: Annotated[IdentityProvider, Depends(get_identity_provider)],
) -> str | None:
    """Owner id for todo queries.

    In single-tenant mode there is no identity gate and todos are unowned.
    """
    if not settings.auth_enabled:
        return None
    context = get_request_context(request, identity)
    return require_auth(context).id


def request_body(schema: type[BaseModel]):
    """Dependency that parses and validates the JSON body against ``schema``.

    FastAPI reads declared body parameters before any dependency runs. Parsing
    the body in a dependency instead lets handlers list it after the identity
    dependency, so an anonymous caller gets 401 whatever the body holds.
    """

    async def parse(request: Request) -> BaseModel:
        try:
            payload = await request.json()
        except ValueError:
            raise ValidationError("Invalid JSON body") from None
        try:
            return schema.model_validate(payload)
        except SchemaValidationError as e:
            raise RequestValidationError(e.errors()) from None

    return parse
