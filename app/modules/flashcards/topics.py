"""Display labels for generated flashcard sets."""

from __future__ import annotations

from datetime import date
from typing import Optional

STOP_WORDS = frozenset(
    {
        "the", "and", "or", "but", "in", "on", "at", "to", "for", "of",
        "with", "by", "is", "are", "was", "were", "be", "been", "being",
        "have", "has", "had", "do", "does", "did", "will", "would", "could",
        "should", "may", "might", "must", "can",
    }
)  # fmt: skip

MIN_WORD_LENGTH = 4
MAX_CANDIDATES = 20


def infer_topic_label(corpus: str) -> str:
    """Capitalized first significant word of ``corpus``, or ``""``.

    Not a keyword extractor: the first lower-cased word longer than three
    characters that is not a stop word wins, regardless of frequency.
    """
    significant = [
        word
        for word in corpus.lower().split()
        if len(word) >= MIN_WORD_LENGTH and word not in STOP_WORDS
    ][:MAX_CANDIDATES]
    if not significant:
        return ""
    first = significant[0]
    return first[0].upper() + first[1:]


def format_display_date(day: date) -> str:
    """US-style date without zero padding, e.g. ``3/7/2025``."""
    return f"{day.month}/{day.day}/{day.year}"


def build_set_title(corpus: str, today: Optional[date] = None) -> str:
    day = format_display_date(today or date.today())
    label = infer_topic_label(corpus)
    if label:
        return f"{label} - Study Set ({day})"
    return f"AI-Generated Study Set - {day}"
