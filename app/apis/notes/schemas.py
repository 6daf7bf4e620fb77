from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class Position(BaseModel):
    x: float = 0.0
    y: float = 0.0


class NoteCreate(BaseModel):
    content: str = Field(..., min_length=1, description="Note text")
    position: Position = Field(default_factory=Position)


class NoteRead(BaseModel):
    id: int
    content: str
    position: Position
    created_at: datetime

    model_config = {"from_attributes": True}


class NoteList(BaseModel):
    notes: list[NoteRead] = Field(default_factory=list)
