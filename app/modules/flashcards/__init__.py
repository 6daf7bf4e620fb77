"""Flashcards module exports."""

from .models.flashcards import Flashcard, FlashcardSet
from .extractor import (
    ExtractionErrorKind,
    ExtractionFailed,
    ExtractionOutcome,
    extract_fallback,
    extract_flashcards,
    extract_strict,
    require_flashcards,
)
from .topics import build_set_title, infer_topic_label
from .main import FlashcardsGenerator

__all__ = [
    "Flashcard",
    "FlashcardSet",
    "ExtractionErrorKind",
    "ExtractionFailed",
    "ExtractionOutcome",
    "extract_fallback",
    "extract_flashcards",
    "extract_strict",
    "require_flashcards",
    "build_set_title",
    "infer_topic_label",
    "FlashcardsGenerator",
]
