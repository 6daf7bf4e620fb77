from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from app.modules.flashcards.extractor import ExtractionFailed, extract_flashcards
from app.modules.flashcards.main import FlashcardsGenerator


def _read_text(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="flashcards", description="Flashcards extraction and generation CLI"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    e = sub.add_parser(
        "extract", help="Extract flashcards from a saved LLM reply (file or '-')"
    )
    e.add_argument("source", help="Path to the raw reply, or '-' for stdin")

    g = sub.add_parser("generate", help="Generate a flashcard set from note files")
    g.add_argument("notes", nargs="+", help="One note per file")

    args = parser.parse_args(argv)
    if args.cmd == "extract":
        outcome = extract_flashcards(_read_text(args.source))
        error = outcome.error
        if error is not None:
            print(f"{error.kind.value}: {error.detail}", file=sys.stderr)
            return 1
        payload = {
            "stage": outcome.stage.value,
            "flashcards": [c.model_dump() for c in outcome.cards],
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0
    if args.cmd == "generate":
        notes = [_read_text(p) for p in args.notes]
        try:
            result = FlashcardsGenerator().generate_sync(notes)
        except ExtractionFailed as exc:
            print(str(exc), file=sys.stderr)
            return 1
        print(json.dumps(result.model_dump(), indent=2, ensure_ascii=False))
        return 0

    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
