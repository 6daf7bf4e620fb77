from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    notes: list[str] = Field(
        ..., min_length=1, description="Note texts to turn into flashcards"
    )


class FlashcardRead(BaseModel):
    id: int
    question: str
    answer: str
    order_index: int

    model_config = {"from_attributes": True}


class GenerateResponse(BaseModel):
    set_id: int
    title: str
    flashcards: list[FlashcardRead] = Field(default_factory=list)
    total_cards: int


class FlashcardSetSummary(BaseModel):
    id: int
    title: str
    created_at: datetime
    total_cards: int = 0


class FlashcardSetRead(BaseModel):
    id: int
    title: str
    created_at: datetime
    flashcards: list[FlashcardRead] = Field(default_factory=list)

    model_config = {"from_attributes": True}
