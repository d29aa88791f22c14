"""Shared response schemas."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Confirmation for operations with no row to return."""

    message: str
