"""Card API endpoints.

Cards have no owner column; each endpoint first checks that the caller owns
the deck in the path.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from src.api.dependencies import request_body, require_auth
from src.database import get_db
from src.models.deck import Card
from src.models.mixins import utcnow
from src.schemas.common import MessageResponse
from src.schemas.deck import CardCreate, CardResponse, CardUpdate
from src.services.identity import AuthUser
from src.services.scoping import get_owned_card, get_owned_deck, parse_id, scoped_cards

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/decks/{deck_id}", tags=["cards"])


@router.get("/cards", response_model=list[CardResponse])
def get_cards(
    deck_id: str,
    current_user: Annotated[AuthUser, Depends(require_auth)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get all cards in a deck."""
    deck = get_owned_deck(db, parse_id(deck_id), current_user.id)
    return scoped_cards(db, deck.id, current_user.id).order_by(Card.id).all()


@router.post("/cards", response_model=CardResponse, status_code=status.HTTP_201_CREATED)
def create_card(
    deck_id: str,
    current_user: Annotated[AuthUser, Depends(require_auth)],
    card_data: Annotated[CardCreate, Depends(request_body(CardCreate))],
    db: Annotated[Session, Depends(get_db)],
):
    """Add a card to a deck."""
    deck = get_owned_deck(db, parse_id(deck_id), current_user.id)

    card = Card(deck_id=deck.id, front=card_data.front, back=card_data.back)
    db.add(card)
    db.commit()
    db.refresh(card)

    logger.info(f"Created card {card.id} in deck {deck.id}")
    return card


@router.put("/cards/{card_id}", response_model=CardResponse)
def update_card(
    deck_id: str,
    card_id: str,
    current_user: Annotated[AuthUser, Depends(require_auth)],
    card_data: Annotated[CardUpdate, Depends(request_body(CardUpdate))],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a card's front and/or back."""
    card = get_owned_card(db, parse_id(deck_id), parse_id(card_id), current_user.id)

    values = {
        "front": card_data.front if card_data.front is not None else card.front,
        "back": card_data.back if card_data.back is not None else card.back,
        "updated_at": utcnow(),
    }
    scoped_cards(db, card.deck_id, current_user.id).filter(Card.id == card.id).update(
        values, synchronize_session=False
    )
    db.commit()
    db.refresh(card)

    logger.info(f"Updated card {card.id}")
    return card


@router.delete("/cards/{card_id}", response_model=MessageResponse)
def delete_card(
    deck_id: str,
    card_id: str,
    current_user: Annotated[AuthUser, Depends(require_auth)],
    db: Annotated[Session, Depends(get_db)],
):
    """Remove a card from a deck."""
    card = get_owned_card(db, parse_id(deck_id), parse_id(card_id), current_user.id)
    deleted_id, parent_id = card.id, card.deck_id

    scoped_cards(db, parent_id, current_user.id).filter(Card.id == deleted_id).delete(
        synchronize_session=False
    )
    db.commit()

    logger.info(f"Deleted card {deleted_id} from deck {parent_id}")
    return {"message": "Deleted successfully"}


@router.get("/study", response_model=list[CardResponse])
def study_deck(
    deck_id: str,
    current_user: Annotated[AuthUser, Depends(require_auth)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get every card in a deck, shuffled anew on each call."""
    deck = get_owned_deck(db, parse_id(deck_id), current_user.id)
    return scoped_cards(db, deck.id, current_user.id).order_by(func.random()).all()
