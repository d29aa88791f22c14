"""SQLAlchemy models."""

from src.models.deck import Card, Deck
from src.models.todo import Todo
from src.models.user import User

__all__ = [
    "User",
    "Todo",
    "Deck",
    "Card",
]
