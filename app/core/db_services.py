"""Database service classes for notes and flashcard sets."""

from __future__ import annotations

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from app.core.db.schemas.notes import Note
from app.core.db.schemas.flashcards import FlashcardSet, Flashcard
from app.modules.flashcards.models.flashcards import (
    FlashcardSet as PydanticFlashcardSet,
)


class NoteService:
    """Per-user note storage."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_notes(self, user_id: int) -> list[Note]:
        """Notes owned by ``user_id``, newest first."""
        result = await self.session.execute(
            select(Note)
            .where(Note.user_id == user_id)
            .order_by(Note.created_at.desc(), Note.id.desc())
        )
        return list(result.scalars().all())

    async def create_note(
        self, *, user_id: int, content: str, position: dict
    ) -> Note:
        note = Note(user_id=user_id, content=content, position=position)
        self.session.add(note)
        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def get_note(self, *, user_id: int, note_id: int) -> Optional[Note]:
        result = await self.session.execute(
            select(Note).where(Note.id == note_id, Note.user_id == user_id)
        )
        return result.scalar_one_or_none()


class FlashcardSetService:
    """Service for storing and reading generated flashcard sets."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save_flashcard_set(
        self,
        *,
        user_id: int,
        pydantic_set: PydanticFlashcardSet,
    ) -> FlashcardSet:
        """Save a Pydantic FlashcardSet; cards keep their extraction order."""
        db_set = FlashcardSet(user_id=user_id, title=pydantic_set.title)

        self.session.add(db_set)
        await self.session.flush()

        for index, card in enumerate(pydantic_set.flashcards):
            self.session.add(
                Flashcard(
                    flashcard_set_id=db_set.id,
                    question=card.question,
                    answer=card.answer,
                    order_index=index,
                )
            )

        await self.session.commit()
        return await self._load(db_set.id)

    async def get_flashcard_set(
        self, *, user_id: int, set_id: int
    ) -> Optional[FlashcardSet]:
        """A set with its cards, only if ``user_id`` owns it."""
        result = await self.session.execute(
            select(FlashcardSet)
            .options(selectinload(FlashcardSet.flashcards))
            .where(FlashcardSet.id == set_id, FlashcardSet.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_flashcard_sets(
        self, user_id: int
    ) -> list[tuple[FlashcardSet, int]]:
        """(set, card count) pairs for ``user_id``, newest first."""
        card_count = (
            select(func.count(Flashcard.id))
            .where(Flashcard.flashcard_set_id == FlashcardSet.id)
            .correlate(FlashcardSet)
            .scalar_subquery()
        )
        rows = await self.session.execute(
            select(FlashcardSet, card_count)
            .where(FlashcardSet.user_id == user_id)
            .order_by(FlashcardSet.created_at.desc(), FlashcardSet.id.desc())
        )
        return [(s, int(n or 0)) for s, n in rows.all()]

    async def _load(self, set_id: int) -> FlashcardSet:
        result = await self.session.execute(
            select(FlashcardSet)
            .options(selectinload(FlashcardSet.flashcards))
            .where(FlashcardSet.id == set_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()
