"""Pydantic models for extracted flashcards.

``Flashcard`` is the in-memory candidate produced by the extractor before it
is persisted. Fields are strict strings: LLM output that puts numbers, lists
or nested objects in ``question``/``answer`` is rejected rather than coerced.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class Flashcard(BaseModel):
    """Simple question/answer flashcard, trimmed and non-empty."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    question: StrictStr = Field(min_length=1)
    answer: StrictStr = Field(min_length=1)


class FlashcardSet(BaseModel):
    """A titled set of flashcards ready to be stored."""

    title: str
    flashcards: list[Flashcard] = Field(min_length=1)
