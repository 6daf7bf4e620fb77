"""Flashcard generation against Perplexity using pydantic-ai.

Perplexity exposes an OpenAI-compatible chat completions API, so the model is
built from pydantic-ai's OpenAI chat model pointed at Perplexity's base URL.
The agent returns plain text: Perplexity's search-augmented models do not
reliably honour structured output, so parsing is left to
:mod:`app.modules.flashcards.extractor`. Provider imports are kept lazy to
avoid import-time errors when credentials are missing.
"""

from __future__ import annotations

from typing import Optional, Sequence

from pydantic_ai import Agent
from pydantic_ai.models import Model
from pydantic_ai.settings import ModelSettings

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

NOTE_SEPARATOR = "\n\n"

SYSTEM_PROMPT = (
    "You are an expert educational content creator specializing in creating "
    "comprehensive flashcards for studying. Generate flashcards in JSON format "
    "with 'question' and 'answer' fields. Use your real-time search "
    "capabilities to enhance content accuracy and provide up-to-date "
    "information when relevant. Create thorough flashcards that cover key "
    "concepts, definitions, facts, and important details from the provided "
    "notes. Include follow-up questions that test deeper understanding."
)


def _build_instruction(combined_notes: str) -> str:
    return (
        "Create comprehensive flashcards from the following study notes. Use "
        "your search capabilities to verify facts and enhance the content with "
        "current, accurate information where applicable:\n\n"
        f"{combined_notes}\n\n"
        "Generate between 8-20 flashcards depending on content complexity. "
        "Return only a valid JSON array with objects containing 'question' and "
        "'answer' fields. Ensure questions test both recall and understanding, "
        "and answers are clear and informative."
    )


class LLMConfigurationError(RuntimeError):
    """The LLM provider cannot be built from the current settings."""


def combine_notes(notes: Sequence[str]) -> str:
    return NOTE_SEPARATOR.join(notes)


def _build_perplexity_model():
    """Build the Perplexity model via the OpenAI-compatible provider (lazy import)."""
    from pydantic_ai.models.openai import OpenAIChatModel
    from pydantic_ai.providers.openai import OpenAIProvider

    cfg = settings.perplexity
    if not cfg.api_key:
        raise LLMConfigurationError(
            "Perplexity API key not configured. Set PERPLEXITY_API_KEY in your environment."
        )

    provider = OpenAIProvider(api_key=cfg.api_key, base_url=cfg.base_url)
    return OpenAIChatModel(cfg.model, provider=provider)


def _model_settings() -> ModelSettings:
    cfg = settings.perplexity
    return ModelSettings(
        temperature=cfg.temperature,
        max_tokens=cfg.max_tokens,
        # Perplexity-only request fields
        extra_body={
            "search_domain_filter": list(cfg.search_domains),
            "search_recency_filter": cfg.recency_filter,
            "return_citations": True,
            "return_related_questions": False,
        },
    )


def _build_agent(model: Optional[Model] = None) -> Agent[None, str]:
    return Agent[None, str](
        model=model or _build_perplexity_model(),
        output_type=str,
        system_prompt=SYSTEM_PROMPT,
        model_settings=_model_settings(),
    )


async def generate_raw_flashcards(
    notes: Sequence[str], *, model: Optional[Model] = None
) -> str:
    """Ask the LLM for flashcards covering ``notes`` and return its reply verbatim."""
    agent = _build_agent(model)
    res = await agent.run(_build_instruction(combine_notes(notes)))
    logger.info("LLM returned %d characters for %d notes", len(res.output), len(notes))
    return res.output

