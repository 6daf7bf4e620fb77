from fastapi import APIRouter, status

from app.apis.deps import CurrentUser, Session
from app.core.config import settings
from app.core.db_services import NoteService
from .schemas import NoteCreate, NoteList, NoteRead


router = APIRouter()


@router.get(
    f"/{settings.app.version}/notes",
    response_model=NoteList,
    tags=["notes"],
)
async def list_notes(user: CurrentUser, session: Session) -> NoteList:
    """The current user's notes, newest first."""
    notes = await NoteService(session).list_notes(user.id)
    return NoteList(notes=[NoteRead.model_validate(n) for n in notes])


@router.post(
    f"/{settings.app.version}/notes",
    response_model=NoteRead,
    status_code=status.HTTP_201_CREATED,
    tags=["notes"],
)
async def create_note(req: NoteCreate, user: CurrentUser, session: Session) -> NoteRead:
    note = await NoteService(session).create_note(
        user_id=user.id,
        content=req.content,
        position=req.position.model_dump(),
    )
    return NoteRead.model_validate(note)
