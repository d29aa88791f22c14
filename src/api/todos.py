"""Todo API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_todo_owner_id, request_body
from src.database import get_db
from src.models.mixins import utcnow
from src.models.todo import Todo
from src.schemas.common import MessageResponse
from src.schemas.todo import TodoCreate, TodoResponse, TodoUpdate
from src.services.scoping import owner_filter, parse_id, scoped_query, verify_ownership

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/todos", tags=["todos"])


@router.get("", response_model=list[TodoResponse])
def get_todos(
    owner_id: Annotated[str | None, Depends(get_todo_owner_id)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get all todos of the current user."""
    return scoped_query(db, Todo, owner_id).order_by(Todo.id).all()


@router.get("/{todo_id}", response_model=TodoResponse)
def get_todo(
    todo_id: str,
    owner_id: Annotated[str | None, Depends(get_todo_owner_id)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific todo."""
    return verify_ownership(db, Todo, parse_id(todo_id), owner_id)


@router.post("", response_model=TodoResponse, status_code=status.HTTP_201_CREATED)
def create_todo(
    owner_id: Annotated[str | None, Depends(get_todo_owner_id)],
    todo_data: Annotated[TodoCreate, Depends(request_body(TodoCreate))],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new todo."""
    todo = Todo(title=todo_data.title, completed=False, user_id=owner_id)
    db.add(todo)
    db.commit()
    db.refresh(todo)

    logger.info(f"Created todo {todo.id} for user {owner_id}")
    return todo


@router.put("/{todo_id}", response_model=TodoResponse)
def update_todo(
    todo_id: str,
    owner_id: Annotated[str | None, Depends(get_todo_owner_id)],
    todo_data: Annotated[TodoUpdate, Depends(request_body(TodoUpdate))],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a todo. Fields left out of the body keep their values."""
    todo = verify_ownership(db, Todo, parse_id(todo_id), owner_id)

    values = {
        "title": todo_data.title if todo_data.title is not None else todo.title,
        "completed": todo_data.completed if todo_data.completed is not None else todo.completed,
        "updated_at": utcnow(),
    }

    # Scope the write itself by owner as well as the lookup above
    db.query(Todo).filter(Todo.id == todo.id, owner_filter(Todo, owner_id)).update(
        values, synchronize_session="fetch"
    )
    db.commit()
    db.refresh(todo)

    logger.info(f"Updated todo {todo.id}")
    return todo


@router.delete("/{todo_id}", response_model=MessageResponse)
def delete_todo(
    todo_id: str,
    owner_id: Annotated[str | None, Depends(get_todo_owner_id)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a todo."""
    # The instance is expired by the commit and cannot be reloaded afterwards
    deleted_id = verify_ownership(db, Todo, parse_id(todo_id), owner_id).id

    db.query(Todo).filter(Todo.id == deleted_id, owner_filter(Todo, owner_id)).delete(
        synchronize_session=False
    )
    db.commit()

    logger.info(f"Deleted todo {deleted_id}")
    return {"message": "Deleted successfully"}
