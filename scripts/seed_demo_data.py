#!/usr/bin/env python3
"""Seed demo data.

Creates a dedicated demo user with a couple of decks, cards and todos in the
configured database. Re-running clears the demo user's rows and re-seeds.

Usage:
    # From project root:
    python scripts/seed_demo_data.py

    # Or against another database:
    DATABASE_URL=postgresql://flashdeck:flashdeck@db:5432/flashdeck \
        python scripts/seed_demo_data.py
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.database import SessionLocal, init_db
from src.models import Card, Deck, Todo, User
from src.services.identity import get_password_hash

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demopass123"

DEMO_DECKS = {
    ("Spanish", "Everyday vocabulary"): [
        ("hola", "hello"),
        ("gracias", "thank you"),
        ("perro", "dog"),
        ("gato", "cat"),
    ],
    ("Capitals", None): [
        ("France", "Paris"),
        ("Japan", "Tokyo"),
        ("Canada", "Ottawa"),
    ],
}

DEMO_TODOS = [
    ("Review Spanish deck", False),
    ("Add more capitals", False),
    ("Buy milk", True),
]


def seed_demo_data():
    """Seed the database with a demo user and representative data."""
    init_db()
    session = SessionLocal()

    try:
        existing_user = session.query(User).filter_by(email=DEMO_EMAIL).first()
        if existing_user:
            print("Demo data already exists. Clearing and re-seeding...")
            session.query(Todo).filter_by(user_id=existing_user.id).delete()
            session.query(Deck).filter_by(user_id=existing_user.id).delete()
            user = existing_user
        else:
            user = User(
                email=DEMO_EMAIL,
                password_hash=get_password_hash(DEMO_PASSWORD),
                name="Demo User",
            )
            session.add(user)
            session.flush()

        for (name, description), cards in DEMO_DECKS.items():
            deck = Deck(name=name, description=description, user_id=user.id)
            deck.cards = [Card(front=front, back=back) for front, back in cards]
            session.add(deck)

        for title, completed in DEMO_TODOS:
            session.add(Todo(title=title, completed=completed, user_id=user.id))

        session.commit()
        print(f"Seeded {len(DEMO_DECKS)} decks and {len(DEMO_TODOS)} todos for {DEMO_EMAIL}")
        print(f"Sign in with {DEMO_EMAIL} / {DEMO_PASSWORD}")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    seed_demo_data()
