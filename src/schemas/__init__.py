"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import (
    AuthResponse,
    SessionEnvelope,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    UserResponse,
)
from src.schemas.common import MessageResponse
from src.schemas.deck import (
    CardCreate,
    CardResponse,
    CardUpdate,
    DeckCreate,
    DeckResponse,
    DeckUpdate,
)
from src.schemas.todo import TodoCreate, TodoResponse, TodoUpdate

__all__ = [
    "SignUpRequest",
    "SignInRequest",
    "UserResponse",
    "SessionResponse",
    "SessionEnvelope",
    "AuthResponse",
    "MessageResponse",
    "TodoCreate",
    "TodoUpdate",
    "TodoResponse",
    "DeckCreate",
    "DeckUpdate",
    "DeckResponse",
    "CardCreate",
    "CardUpdate",
    "CardResponse",
]
