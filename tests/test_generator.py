import json
from datetime import date

import pytest
from pydantic_ai.messages import ModelResponse, TextPart
from pydantic_ai.models.function import FunctionModel

from app.core.config import settings
from app.modules.flashcards import generator as gen
from app.modules.flashcards.extractor import ExtractionFailed
from app.modules.flashcards.main import FlashcardsGenerator

CARDS = json.dumps(
    [
        {"question": "What does chlorophyll absorb?", "answer": "Light energy"},
        {"question": "Where does photosynthesis happen?", "answer": "Chloroplasts"},
    ]
)


async def test_generate_builds_titled_set(reply_model):
    svc = FlashcardsGenerator(model=reply_model(CARDS))
    fc = await svc.generate(
        ["Photosynthesis converts light into chemical energy"], today=date(2025, 1, 2)
    )
    assert fc.title == "Photosynthesis - Study Set (1/2/2025)"
    assert [c.question for c in fc.flashcards] == [
        "What does chlorophyll absorb?",
        "Where does photosynthesis happen?",
    ]


async def test_notes_are_joined_with_blank_lines_in_prompt():
    seen = []

    def _respond(messages, info):
        for message in messages:
            for part in message.parts:
                if part.part_kind == "user-prompt":
                    seen.append(part.content)
        return ModelResponse(parts=[TextPart(content=CARDS)])

    raw = await gen.generate_raw_flashcards(
        ["first note", "second note"], model=FunctionModel(_respond)
    )
    assert raw == CARDS
    assert len(seen) == 1
    assert "first note\n\nsecond note" in seen[0]
    assert "JSON array" in seen[0]


async def test_conversational_reply_uses_fallback(reply_model):
    svc = FlashcardsGenerator(model=reply_model("Q: What is ATP? A: Energy currency."))
    fc = await svc.generate(["to be or not"])
    assert [(c.question, c.answer) for c in fc.flashcards] == [
        ("What is ATP?", "Energy currency.")
    ]
    assert fc.title.startswith("AI-Generated Study Set - ")


async def test_unusable_reply_raises_extraction_failed(reply_model):
    svc = FlashcardsGenerator(model=reply_model("Sorry, I can't help with that."))
    with pytest.raises(ExtractionFailed):
        await svc.generate(["anything"])


def test_missing_api_key_is_a_configuration_error(monkeypatch):
    monkeypatch.setattr(settings.perplexity, "api_key", None)
    with pytest.raises(gen.LLMConfigurationError):
        gen._build_perplexity_model()


def test_perplexity_request_settings():
    ms = gen._model_settings()
    assert ms["temperature"] == settings.perplexity.temperature
    assert ms["max_tokens"] == settings.perplexity.max_tokens
    assert ms["extra_body"] == {
        "search_domain_filter": ["edu", "gov", "org"],
        "search_recency_filter": "month",
        "return_citations": True,
        "return_related_questions": False,
    }
