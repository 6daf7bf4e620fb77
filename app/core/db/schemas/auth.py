from __future__ import annotations

from typing import TYPE_CHECKING
from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fastapi_users_db_sqlalchemy import SQLAlchemyBaseUserTable

from app.core.db.base import Base

if TYPE_CHECKING:
    from .flashcards import FlashcardSet
    from .notes import Note


class User(SQLAlchemyBaseUserTable[int], Base):
    __tablename__ = "users"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    notes: Mapped[list["Note"]] = relationship(
        "Note", back_populates="user", cascade="all, delete-orphan"
    )
    flashcard_sets: Mapped[list["FlashcardSet"]] = relationship(
        "FlashcardSet", back_populates="user", cascade="all, delete-orphan"
    )


__all__ = ["User"]
