from fastapi import APIRouter

from app.apis.deps import CurrentUser
from app.core.config import settings
from app.core.task_queue import enqueue_note_notification
from .schemas import ProcessNoteRequest, ProcessNoteResponse


router = APIRouter()


@router.post(
    f"/{settings.app.version}/integrations/process-note",
    response_model=ProcessNoteResponse,
    tags=["integrations"],
)
async def process_note(req: ProcessNoteRequest, user: CurrentUser) -> ProcessNoteResponse:
    """Queue a note_created webhook delivery; the response does not wait for it."""
    enqueue_note_notification(note_id=req.note_id, content=req.content, user_id=user.id)
    return ProcessNoteResponse(success=True)
