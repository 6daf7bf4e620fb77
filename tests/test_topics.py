from datetime import date

import pytest

from app.modules.flashcards.topics import build_set_title, infer_topic_label


def test_first_significant_word_is_capitalized():
    assert infer_topic_label("The cat sat on the mat and pondered quietly") == "Pondered"


@pytest.mark.parametrize(
    "corpus, expected",
    [
        ("Would these notes help", "These"),
        ("  PHOTOSYNTHESIS in plants", "Photosynthesis"),
        ("Photosynthesis, explained", "Photosynthesis,"),
        ("mitochondria\n\nribosome", "Mitochondria"),
    ],
)
def test_stop_words_and_short_words_are_skipped(corpus, expected):
    assert infer_topic_label(corpus) == expected


@pytest.mark.parametrize("corpus", ["", "   ", "a an the of to", "cat dog sun", "should would could"])
def test_no_significant_word_gives_empty_label(corpus):
    assert infer_topic_label(corpus) == ""


def test_label_depends_on_word_order_not_frequency():
    corpus = "enzymes catalyse reactions; reactions reactions reactions"
    assert infer_topic_label(corpus) == "Enzymes"


def test_title_with_label():
    title = build_set_title("Mitochondria make ATP", today=date(2025, 3, 7))
    assert title == "Mitochondria - Study Set (3/7/2025)"


def test_title_without_label_uses_generic_name():
    assert build_set_title("to be or not", today=date(2024, 12, 25)) == (
        "AI-Generated Study Set - 12/25/2024"
    )
