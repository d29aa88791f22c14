"""Exception hierarchy and the handlers that turn it into JSON error bodies."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class FlashdeckError(Exception):
    """Base exception for all business-rule failures."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class UnauthorizedError(FlashdeckError):
    """No valid identity is attached to the request."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status_code=status.HTTP_401_UNAUTHORIZED)


class ValidationError(FlashdeckError):
    """Request body failed validation. Nothing has been written."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)


class NotFoundError(FlashdeckError):
    """Resource is missing or not owned by the caller.

    The two cases share one message so callers cannot probe for other
    users' rows.
    """

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND)


class TodoNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("Todo not found")


class DeckNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("Deck not found")


class CardNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("Card not found")


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def describe_validation_error(exc: RequestValidationError) -> str:
    """Build a field-specific message from the first pydantic error."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [part for part in first.get("loc", ()) if part != "body"]
    error_type = first.get("type", "")

    if error_type == "json_invalid":
        return "Invalid JSON body"
    if not loc:
        if error_type == "missing":
            return "Request body is required"
        return "Request body must be a JSON object"

    field = str(loc[-1])
    label = field.replace("_", " ").capitalize()
    if error_type == "string_too_short":
        min_length = first.get("ctx", {}).get("min_length", 1)
        if min_length > 1:
            return f"{label} must be at least {min_length} characters"
        return f"{label} is required"
    if error_type == "missing":
        return f"{label} is required"
    if error_type == "extra_forbidden":
        return f"Unknown field: {field}"
    return f"Invalid {field}: {first.get('msg', 'invalid value')}"


async def flashdeck_error_handler(request: Request, exc: FlashdeckError) -> JSONResponse:
    headers = None
    if isinstance(exc, UnauthorizedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return error_response(exc.status_code, exc.message, headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = describe_validation_error(exc)
    logger.debug(f"Rejected {request.method} {request.url.path}: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = "Not found"
    return error_response(exc.status_code, message, getattr(exc, "headers", None))


async def catch_unhandled_errors(request: Request, call_next) -> Response:
    """Map any exception that escapes the routes to a bare 500 body.

    Runs as middleware rather than an ``Exception`` handler so the response
    still passes back through CORSMiddleware.
    """
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that map failures to ``{"error": ...}`` bodies.

    Call before adding CORSMiddleware so CORS wraps the 500 middleware.
    """
    app.add_exception_handler(FlashdeckError, flashdeck_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.middleware("http")(catch_unhandled_errors)
