import json

from app.modules.flashcards.cli import main
from app.modules.flashcards.main import FlashcardsGenerator


def test_extract_prints_cards_as_json(tmp_path, capsys):
    reply = tmp_path / "reply.txt"
    reply.write_text("1. What is H2O?\nAnswer: Water\n2. What is NaCl?\nAnswer: Salt")

    assert main(["extract", str(reply)]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["stage"] == "fallback"
    assert out["flashcards"] == [
        {"question": "What is H2O?", "answer": "Water"},
        {"question": "What is NaCl?", "answer": "Salt"},
    ]


def test_extract_failure_exits_nonzero(tmp_path, capsys):
    reply = tmp_path / "reply.txt"
    reply.write_text("Nothing to see here.")

    assert main(["extract", str(reply)]) == 1
    assert "ExtractionFailed" in capsys.readouterr().err


def test_generate_prints_titled_set(tmp_path, capsys, monkeypatch, reply_model):
    model = reply_model('[{"question": "What is ATP?", "answer": "Energy currency"}]')
    monkeypatch.setattr(
        "app.modules.flashcards.cli.FlashcardsGenerator",
        lambda: FlashcardsGenerator(model=model),
    )
    note = tmp_path / "note.txt"
    note.write_text("Mitochondria produce ATP")

    assert main(["generate", str(note)]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["title"].startswith("Mitochondria - Study Set (")
    assert out["flashcards"] == [
        {"question": "What is ATP?", "answer": "Energy currency"}
    ]


def test_generate_unusable_reply_exits_nonzero(
    tmp_path, capsys, monkeypatch, reply_model
):
    model = reply_model("Sorry, I cannot help with that.")
    monkeypatch.setattr(
        "app.modules.flashcards.cli.FlashcardsGenerator",
        lambda: FlashcardsGenerator(model=model),
    )
    note = tmp_path / "note.txt"
    note.write_text("Mitochondria produce ATP")

    assert main(["generate", str(note)]) == 1
    assert "Flashcard extraction failed" in capsys.readouterr().err
