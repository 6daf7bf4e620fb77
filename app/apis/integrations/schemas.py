from pydantic import BaseModel


class ProcessNoteRequest(BaseModel):
    note_id: int
    content: str


class ProcessNoteResponse(BaseModel):
    success: bool
