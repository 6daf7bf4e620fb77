from .flashcards import Flashcard, FlashcardSet

__all__ = [
    "Flashcard",
    "FlashcardSet",
]
