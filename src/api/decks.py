"""Deck API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.api.dependencies import request_body, require_auth
from src.database import get_db
from src.exceptions import DeckNotFoundError
from src.models.deck import Deck
from src.models.mixins import utcnow
from src.schemas.common import MessageResponse
from src.schemas.deck import DeckCreate, DeckResponse, DeckUpdate
from src.services.identity import AuthUser
from src.services.scoping import (
    decks_with_card_counts,
    get_owned_deck,
    owner_filter,
    parse_id,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/decks", tags=["decks"])


def build_deck_response(deck: Deck, card_count: int | None) -> DeckResponse:
    deck_response = DeckResponse.model_validate(deck)
    deck_response.card_count = card_count or 0
    return deck_response


def get_deck_with_count(db: Session, deck_id: int | None, user_id: str) -> DeckResponse:
    """Fetch an owned deck together with its live card count."""
    if deck_id is None:
        raise DeckNotFoundError()
    row = decks_with_card_counts(db, user_id).filter(Deck.id == deck_id).first()
    if row is None:
        raise DeckNotFoundError()
    deck, card_count = row
    return build_deck_response(deck, card_count)


@router.get("", response_model=list[DeckResponse])
def get_decks(
    current_user: Annotated[AuthUser, Depends(require_auth)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get all decks of the current user with their card counts."""
    rows = decks_with_card_counts(db, current_user.id).order_by(Deck.id).all()
    return [build_deck_response(deck, card_count) for deck, card_count in rows]


@router.get("/{deck_id}", response_model=DeckResponse)
def get_deck(
    deck_id: str,
    current_user: Annotated[AuthUser, Depends(require_auth)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific deck."""
    return get_deck_with_count(db, parse_id(deck_id), current_user.id)


@router.post("", response_model=DeckResponse, status_code=status.HTTP_201_CREATED)
def create_deck(
    current_user: Annotated[AuthUser, Depends(require_auth)],
    deck_data: Annotated[DeckCreate, Depends(request_body(DeckCreate))],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new deck."""
    deck = Deck(
        name=deck_data.name,
        description=deck_data.description,
        user_id=current_user.id,
    )
    db.add(deck)
    db.commit()
    db.refresh(deck)

    logger.info(f"Created deck {deck.id} for user {current_user.id}")
    return build_deck_response(deck, 0)  # New deck has no cards


@router.put("/{deck_id}", response_model=DeckResponse)
def update_deck(
    deck_id: str,
    current_user: Annotated[AuthUser, Depends(require_auth)],
    deck_data: Annotated[DeckUpdate, Depends(request_body(DeckUpdate))],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a deck.

    An omitted ``description`` is kept; an explicit ``null`` clears it.
    """
    deck = get_owned_deck(db, parse_id(deck_id), current_user.id)

    values = {
        "name": deck_data.name if deck_data.name is not None else deck.name,
        "description": (
            deck_data.description
            if "description" in deck_data.model_fields_set
            else deck.description
        ),
        "updated_at": utcnow(),
    }
    db.query(Deck).filter(Deck.id == deck.id, owner_filter(Deck, current_user.id)).update(
        values, synchronize_session="fetch"
    )
    db.commit()

    logger.info(f"Updated deck {deck.id}")
    return get_deck_with_count(db, deck.id, current_user.id)


@router.delete("/{deck_id}", response_model=MessageResponse)
def delete_deck(
    deck_id: str,
    current_user: Annotated[AuthUser, Depends(require_auth)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a deck. Its cards are removed by the ON DELETE CASCADE foreign key."""
    deleted_id = get_owned_deck(db, parse_id(deck_id), current_user.id).id

    db.query(Deck).filter(Deck.id == deleted_id, owner_filter(Deck, current_user.id)).delete(
        synchronize_session=False
    )
    db.commit()

    logger.info(f"Deleted deck {deleted_id}")
    return {"message": "Deleted successfully"}
