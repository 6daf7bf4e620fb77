"""Best-effort extraction of flashcards from raw LLM replies.

The model is asked for a JSON array of ``{"question", "answer"}`` objects but
frequently wraps it in prose, or answers conversationally instead. Extraction
therefore runs in two stages:

1. *strict*: cut the outermost ``[...]`` span, decode it as JSON and keep the
   records whose ``question`` and ``answer`` are non-empty strings.
2. *fallback*: only when the strict stage fails, mine the text with an ordered
   list of regex rules; the first rule that yields anything wins.

Both stages return an :class:`ExtractionOutcome` instead of raising, so the
policy can be tested without the HTTP layer. :func:`require_flashcards` is the
one place that turns a terminal failure into an exception.
"""

from __future__ import annotations

import enum
import json
import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from app.core.logging import get_logger
from app.modules.flashcards.models.flashcards import Flashcard

logger = get_logger(__name__)

# Leftmost "[" through rightmost "]"
_ARRAY_SPAN = re.compile(r"\[.*\]", re.DOTALL)

_RULE_FLAGS = re.IGNORECASE | re.DOTALL


class ExtractionErrorKind(str, enum.Enum):
    MALFORMED_PAYLOAD = "MalformedPayload"
    NO_VALID_CANDIDATES = "NoValidCandidates"
    EXTRACTION_FAILED = "ExtractionFailed"


class Stage(str, enum.Enum):
    STRICT = "strict"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ExtractionError:
    kind: ExtractionErrorKind
    stage: Stage
    detail: str


@dataclass(frozen=True)
class ExtractionOutcome:
    """Tagged result: either ``cards`` (non-empty) or ``error``."""

    stage: Stage
    cards: tuple[Flashcard, ...] = ()
    error: Optional[ExtractionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(
        cls, kind: ExtractionErrorKind, stage: Stage, detail: str
    ) -> "ExtractionOutcome":
        return cls(stage=stage, error=ExtractionError(kind, stage, detail))


class ExtractionFailed(Exception):
    """Neither the strict nor the fallback stage produced a flashcard."""

    def __init__(self, outcome: ExtractionOutcome, raw_text: str):
        self.outcome = outcome
        self.raw_text = raw_text
        detail = outcome.error.detail if outcome.error else "no flashcards"
        super().__init__(f"Flashcard extraction failed: {detail}")


@dataclass(frozen=True)
class FallbackRule:
    """A named pattern whose groups 1 and 2 are the question and the answer."""

    name: str
    pattern: re.Pattern[str]

    def extract(self, text: str) -> list[Flashcard]:
        cards: list[Flashcard] = []
        for match in self.pattern.finditer(text):
            card = _to_card(match.group(1), match.group(2))
            if card is not None:
                cards.append(card)
        return cards


# Tried in order; the first rule with at least one match wins.
FALLBACK_RULES: tuple[FallbackRule, ...] = (
    FallbackRule(
        "question_answer_markers",
        re.compile(
            r"(?:Question|Q):\s*(.+?)(?:Answer|A):\s*(.+?)(?=(?:Question|Q):|\Z)",
            _RULE_FLAGS,
        ),
    ),
    FallbackRule(
        "numbered_questions",
        re.compile(
            r"\d+\.\s*(.+?\?)\s*(?:Answer|A):\s*(.+?)(?=\d+\.|\Z)",
            _RULE_FLAGS,
        ),
    ),
    # Any bold span counts as a question, interrogative or not.
    FallbackRule(
        "bold_emphasis",
        re.compile(r"\*\*(.+?)\*\*\s*(.+?)(?=\*\*|\Z)", _RULE_FLAGS),
    ),
)


def _to_card(question: Any, answer: Any) -> Optional[Flashcard]:
    try:
        return Flashcard(question=question, answer=answer)
    except ValidationError:
        return None


def _valid_records(records: Iterable[Any]) -> list[Flashcard]:
    cards: list[Flashcard] = []
    for record in records:
        if not isinstance(record, dict):
            continue
        card = _to_card(record.get("question"), record.get("answer"))
        if card is not None:
            cards.append(card)
    return cards


def extract_strict(text: str) -> ExtractionOutcome:
    """Decode the JSON array embedded in ``text`` and keep its valid records."""
    match = _ARRAY_SPAN.search(text)
    payload = match.group(0) if match else text

    # Deeply nested arrays exhaust the decoder's recursion limit
    try:
        decoded = json.loads(payload)
    except (ValueError, RecursionError) as e:
        return ExtractionOutcome.failure(
            ExtractionErrorKind.MALFORMED_PAYLOAD, Stage.STRICT, f"invalid JSON: {e}"
        )

    if not isinstance(decoded, list):
        return ExtractionOutcome.failure(
            ExtractionErrorKind.MALFORMED_PAYLOAD,
            Stage.STRICT,
            f"expected a JSON array, got {type(decoded).__name__}",
        )
    # An empty array is reported the same way as one emptied by filtering
    cards = _valid_records(decoded)
    if not cards:
        return ExtractionOutcome.failure(
            ExtractionErrorKind.NO_VALID_CANDIDATES,
            Stage.STRICT,
            f"none of {len(decoded)} records has string question and answer",
        )
    return ExtractionOutcome(stage=Stage.STRICT, cards=tuple(cards))


def extract_fallback(
    text: str, rules: Iterable[FallbackRule] = FALLBACK_RULES
) -> tuple[Flashcard, ...]:
    """Mine question/answer pairs from prose; empty when no rule matches."""
    for rule in rules:
        cards = rule.extract(text)
        if cards:
            logger.debug(
                "Fallback rule %s produced %d flashcards", rule.name, len(cards)
            )
            return tuple(cards)
    return ()


def extract_flashcards(text: str) -> ExtractionOutcome:
    """Strict stage first, fallback stage on any strict failure."""
    strict = extract_strict(text)
    error = strict.error
    if error is None:
        return strict

    logger.warning(
        "Strict flashcard parse failed (%s: %s); trying fallback. Raw response: %r",
        error.kind.value,
        error.detail,
        text,
        extra={"stage": Stage.STRICT.value},
    )

    cards = extract_fallback(text)
    if cards:
        return ExtractionOutcome(stage=Stage.FALLBACK, cards=cards)

    logger.warning(
        "Fallback flashcard parse found nothing. Raw response: %r",
        text,
        extra={"stage": Stage.FALLBACK.value},
    )
    return ExtractionOutcome.failure(
        ExtractionErrorKind.EXTRACTION_FAILED,
        Stage.FALLBACK,
        f"strict stage: {error.kind.value}; no fallback rule matched",
    )


def require_flashcards(text: str) -> list[Flashcard]:
    """Like :func:`extract_flashcards` but raise :class:`ExtractionFailed` on failure."""
    outcome = extract_flashcards(text)
    if not outcome.ok:
        raise ExtractionFailed(outcome, text)
    return list(outcome.cards)
