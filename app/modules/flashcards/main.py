"""Flashcards service class.

Provides a high-level class that turns a batch of notes into a titled,
validated flashcard set, optionally persisting it. Used by the API handlers,
the CLI and ``quick_test.py``.
"""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Optional, Sequence

from pydantic_ai.models import Model
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db.schemas.flashcards import FlashcardSet as DBSet
from app.modules.flashcards.extractor import require_flashcards
from app.modules.flashcards.generator import combine_notes, generate_raw_flashcards
from app.modules.flashcards.models.flashcards import FlashcardSet
from app.modules.flashcards.topics import build_set_title


class FlashcardsGenerator:
    """Notes in, extracted and titled ``FlashcardSet`` out.

    Raises :class:`~app.modules.flashcards.extractor.ExtractionFailed` when the
    model reply cannot be turned into at least one flashcard. No retry is
    attempted here; re-running on the same reply would fail the same way.
    """

    def __init__(self, *, model: Optional[Model] = None) -> None:
        self.model = model

    async def generate(
        self, notes: Sequence[str], *, today: Optional[date] = None
    ) -> FlashcardSet:
        raw = await generate_raw_flashcards(notes, model=self.model)
        return self.build_set(notes, raw, today=today)

    @staticmethod
    def build_set(
        notes: Sequence[str], raw: str, *, today: Optional[date] = None
    ) -> FlashcardSet:
        cards = require_flashcards(raw)
        return FlashcardSet(
            title=build_set_title(combine_notes(notes), today),
            flashcards=cards,
        )

    async def generate_with_db(
        self,
        session: AsyncSession,
        user_id: int,
        notes: Sequence[str],
    ) -> DBSet:
        """Generate a set and store it with one flashcard row per extracted card."""
        from app.core.db_services import FlashcardSetService

        fc = await self.generate(notes)
        return await FlashcardSetService(session).save_flashcard_set(
            user_id=user_id, pydantic_set=fc
        )

    def generate_sync(self, notes: Sequence[str]) -> FlashcardSet:
        return asyncio.run(self.generate(notes))
