"""Deck and card models."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import backref, relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Deck(Base, TimestampMixin):
    """Flashcard deck owned by a user."""

    __tablename__ = "decks"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(String, nullable=True)
    user_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    owner = relationship("User", backref=backref("decks", passive_deletes=True))
    cards = relationship(
        "Card", back_populates="deck", cascade="all, delete-orphan", passive_deletes=True
    )


class Card(Base, TimestampMixin):
    """Flashcard. Ownership follows the parent deck."""

    __tablename__ = "cards"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    deck_id = Column(
        Integer, ForeignKey("decks.id", ondelete="CASCADE"), nullable=False, index=True
    )
    front = Column(String, nullable=False)
    back = Column(String, nullable=False)

    deck = relationship("Deck", back_populates="cards")
