"""Todo schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TodoCreate(BaseModel):
    """Create a new todo."""

    title: str = Field(..., min_length=1, max_length=500)


class TodoUpdate(BaseModel):
    """Update a todo. Omitted or null fields keep their stored value."""

    title: str | None = Field(None, min_length=1, max_length=500)
    completed: bool | None = None


class TodoResponse(BaseModel):
    """Todo response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    completed: bool
    user_id: str | None
    created_at: datetime
    updated_at: datetime
