"""Todo model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import backref, relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Todo(Base, TimestampMixin):
    """Standalone task owned by a single user."""

    __tablename__ = "todos"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String(500), nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    # NULL only for todos created in single-tenant mode
    user_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )

    owner = relationship("User", backref=backref("todos", passive_deletes=True))
