"""Quick DB inspector for notes and flashcards data.

Runs lightweight queries to summarize notes, flashcard sets, card counts and
a few examples.

Usage:
  uv run scripts/inspect_flashcards.py
"""

from __future__ import annotations

import asyncio

from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from app.core.db.base import get_session
from app.core.db.schemas.flashcards import FlashcardSet, Flashcard
from app.core.db.schemas.notes import Note


async def main() -> int:
    async for session in get_session():  # get_session is an async generator
        total_notes = (await session.execute(select(func.count(Note.id)))).scalar() or 0
        total_sets = (
            await session.execute(select(func.count(FlashcardSet.id)))
        ).scalar() or 0
        total_cards = (
            await session.execute(select(func.count(Flashcard.id)))
        ).scalar() or 0

        print("Flashcards DB summary:")
        print(f"- Notes: {total_notes}")
        print(f"- Flashcard sets: {total_sets}")
        print(f"- Flashcards: {total_cards}")

        recent_q = (
            select(FlashcardSet)
            .options(selectinload(FlashcardSet.flashcards))
            .order_by(FlashcardSet.created_at.desc())
            .limit(5)
        )
        recent_sets = (await session.execute(recent_q)).scalars().all()

        if not recent_sets:
            print("- No flashcard sets found.")
            return 0

        print("\nRecent sets:")
        for s in recent_sets:
            print(
                f"  • ID {s.id} | user={s.user_id} | title={s.title!r} | "
                f"cards={len(s.flashcards)}"
            )

        print("\nSample cards (first recent set):")
        for c in recent_sets[0].flashcards[:3]:
            print(f"  - Q: {c.question[:100]!r}")
            print(f"    A: {c.answer[:120]!r}")

        return 0
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
