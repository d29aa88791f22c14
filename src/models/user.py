"""User model."""

import uuid

from sqlalchemy import Column, String

from src.database import Base
from src.models.mixins import TimestampMixin


def new_user_id() -> str:
    return uuid.uuid4().hex


class User(Base, TimestampMixin):
    """User account owned by the identity provider.

    Resource tables only reference ``id``; nothing outside the identity
    provider writes to this table.
    """

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_user_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)
