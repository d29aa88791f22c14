"""Ownership-scoped access to todos, decks and cards.

Every query a resource handler runs goes through this module. Todos and
decks carry their owner in ``user_id``; cards are owned through their deck,
so every card operation first checks the deck.

A row that does not exist and a row owned by someone else both come back as
``NotFoundError``.
"""

from sqlalchemy import func, select
from sqlalchemy.orm import Query, Session

from src.exceptions import CardNotFoundError, DeckNotFoundError, NotFoundError, TodoNotFoundError
from src.models.deck import Card, Deck
from src.models.todo import Todo

NOT_FOUND_ERRORS: dict[type, type[NotFoundError]] = {
    Todo: TodoNotFoundError,
    Deck: DeckNotFoundError,
    Card: CardNotFoundError,
}

# Largest value an Integer primary key can hold on every supported backend
MAX_ID = 2**31 - 1


def parse_id(raw: str | int | None) -> int | None:
    """Parse a path parameter as a positive integer.

    Anything else (``"abc"``, ``"1.5"``, ``"-3"``, ``"0"``, values past
    ``MAX_ID``) becomes None and is treated by callers as a missing row.
    """
    if raw is None:
        return None
    if isinstance(raw, int):
        value = raw
    else:
        text = raw.strip()
        if not text.isdigit() or not text.isascii():
            return None
        value = int(text)
    return value if 0 < value <= MAX_ID else None


def owner_filter(model, user_id: str | None):
    """Predicate restricting ``model`` to rows owned by ``user_id``.

    ``None`` means single-tenant mode, where only unowned rows are visible.
    """
    if user_id is None:
        return model.user_id.is_(None)
    return model.user_id == user_id


def scoped_query(db: Session, model, user_id: str | None) -> Query:
    """All rows of a top-level resource owned by ``user_id``."""
    return db.query(model).filter(owner_filter(model, user_id))


def get_owned(db: Session, model, resource_id: int | None, user_id: str | None):
    """Fetch one top-level row by id and owner, or None."""
    if resource_id is None:
        return None
    return scoped_query(db, model, user_id).filter(model.id == resource_id).first()


def verify_ownership(db: Session, parent_type, parent_id: int | None, user_id: str | None):
    """Return the row if ``user_id`` owns it, else raise the resource's NotFoundError."""
    entity = get_owned(db, parent_type, parent_id, user_id)
    if entity is None:
        raise NOT_FOUND_ERRORS.get(parent_type, NotFoundError)()
    return entity


def get_owned_deck(db: Session, deck_id: int | None, user_id: str) -> Deck:
    return verify_ownership(db, Deck, deck_id, user_id)


def scoped_cards(db: Session, deck_id: int, user_id: str) -> Query:
    """Cards of ``deck_id``, restricted to decks owned by ``user_id``."""
    owned_deck_ids = select(Deck.id).where(Deck.id == deck_id, Deck.user_id == user_id)
    return db.query(Card).filter(Card.deck_id == deck_id, Card.deck_id.in_(owned_deck_ids))


def get_owned_card(db: Session, deck_id: int | None, card_id: int | None, user_id: str) -> Card:
    """Two-step check: the deck must be owned first, then the card must belong to it."""
    deck = get_owned_deck(db, deck_id, user_id)
    if card_id is None:
        raise CardNotFoundError()
    card = scoped_cards(db, deck.id, user_id).filter(Card.id == card_id).first()
    if card is None:
        raise CardNotFoundError()
    return card


def card_count_subquery():
    """Correlated count of cards per deck, evaluated at query time."""
    return (
        select(func.count(Card.id))
        .where(Card.deck_id == Deck.id)
        .correlate(Deck)
        .scalar_subquery()
        .label("card_count")
    )


def decks_with_card_counts(db: Session, user_id: str) -> Query:
    """Owned decks paired with their live card counts."""
    return db.query(Deck, card_count_subquery()).filter(owner_filter(Deck, user_id))
