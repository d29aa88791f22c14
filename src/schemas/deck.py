"""Deck and card schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DeckCreate(BaseModel):
    """Create a new deck."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)


class DeckUpdate(BaseModel):
    """Update a deck.

    ``description`` is nullable: leaving the key out keeps the stored value,
    sending ``null`` clears it. Use ``model_fields_set`` to tell them apart.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)


class DeckResponse(BaseModel):
    """Deck response with the live number of cards."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    user_id: str
    created_at: datetime
    updated_at: datetime
    card_count: int = 0


class CardCreate(BaseModel):
    """Create a new card in a deck."""

    front: str = Field(..., min_length=1, max_length=5000)
    back: str = Field(..., min_length=1, max_length=5000)


class CardUpdate(BaseModel):
    """Update a card."""

    front: str | None = Field(None, min_length=1, max_length=5000)
    back: str | None = Field(None, min_length=1, max_length=5000)


class CardResponse(BaseModel):
    """Card response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    deck_id: int
    front: str
    back: str
    created_at: datetime
    updated_at: datetime
