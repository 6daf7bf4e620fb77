from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic_ai.exceptions import ModelHTTPError

from app.apis.deps import CurrentUser, Session
from app.core.config import settings
from app.core.db_services import FlashcardSetService
from app.core.logging import bind, get_logger
from app.modules.flashcards.extractor import ExtractionFailed
from app.modules.flashcards.generator import LLMConfigurationError
from app.modules.flashcards.main import FlashcardsGenerator
from .schemas import (
    FlashcardRead,
    FlashcardSetRead,
    FlashcardSetSummary,
    GenerateRequest,
    GenerateResponse,
)


router = APIRouter()
logger = get_logger(__name__)

RETRY_WITH_SPECIFIC_NOTES = (
    "Failed to generate flashcards. Please try again with more specific notes."
)
GENERIC_FAILURE = "Failed to generate flashcards. Please try again."
API_KEY_FAILURE = "API configuration error. Please check your Perplexity API key."
RATE_LIMITED = "Rate limit exceeded. Please try again in a moment."


def get_flashcards_generator() -> FlashcardsGenerator:
    return FlashcardsGenerator()


def _llm_error_to_http(exc: ModelHTTPError) -> HTTPException:
    if exc.status_code in (401, 403):
        return HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, API_KEY_FAILURE)
    if exc.status_code == 429:
        return HTTPException(status.HTTP_429_TOO_MANY_REQUESTS, RATE_LIMITED)
    return HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_FAILURE)


@router.post(
    f"/{settings.app.version}/flashcards/generate",
    response_model=GenerateResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["flashcards"],
)
async def generate_flashcards(
    req: GenerateRequest,
    user: CurrentUser,
    session: Session,
    generator: FlashcardsGenerator = Depends(get_flashcards_generator),
) -> GenerateResponse:
    """Generate flashcards from the submitted notes and store them as a new set."""
    log = bind(logger, user_id=user.id)
    try:
        db_set = await generator.generate_with_db(session, user.id, req.notes)
    except ExtractionFailed as e:
        log.error("%s", e, extra={"stage": e.outcome.stage.value})
        raise HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR, RETRY_WITH_SPECIFIC_NOTES
        )
    except ModelHTTPError as e:
        log.error("Flashcard LLM call failed with HTTP %s: %s", e.status_code, e)
        raise _llm_error_to_http(e)
    except LLMConfigurationError as e:
        log.error("Flashcard generation misconfigured: %s", e)
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, API_KEY_FAILURE)
    except Exception:
        log.exception("Failed to generate flashcards")
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_FAILURE)

    cards = [FlashcardRead.model_validate(c) for c in db_set.flashcards]
    log.info("Created flashcard set %s with %d cards", db_set.id, len(cards))
    return GenerateResponse(
        set_id=db_set.id,
        title=db_set.title,
        flashcards=cards,
        total_cards=len(cards),
    )


@router.get(
    f"/{settings.app.version}/flashcards/sets",
    response_model=list[FlashcardSetSummary],
    tags=["flashcards"],
)
async def list_flashcard_sets(
    user: CurrentUser, session: Session
) -> list[FlashcardSetSummary]:
    rows = await FlashcardSetService(session).list_flashcard_sets(user.id)
    return [
        FlashcardSetSummary(
            id=s.id, title=s.title, created_at=s.created_at, total_cards=count
        )
        for s, count in rows
    ]


@router.get(
    f"/{settings.app.version}/flashcards/sets/{{set_id:int}}",
    response_model=FlashcardSetRead,
    tags=["flashcards"],
)
async def get_flashcard_set(
    set_id: int, user: CurrentUser, session: Session
) -> FlashcardSetRead:
    s = await FlashcardSetService(session).get_flashcard_set(
        user_id=user.id, set_id=set_id
    )
    if not s:
        raise HTTPException(status_code=404, detail="Flashcard set not found")
    return FlashcardSetRead.model_validate(s)
