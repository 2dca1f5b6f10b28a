"""
main.py -- Command-line front end for the tender assistant.

Loads one document (or the built-in sample notice), then either answers
the --query prompts in order, produces the preset officer summary, or
drops into an interactive prompt loop.

    tender-assistant notice.pdf -q "What is the deadline?" -q "Any penalties?"
    tender-assistant --sample --summary --json
    tender-assistant notice.pdf --mode remote --interactive
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from tender_assistant.config import SUMMARIZER_MODES, config
from tender_assistant.orchestrator import DocumentAssistant
from tender_assistant.sample import SAMPLE_FILENAME, SAMPLE_TENDER_TEXT
from tender_assistant.schemas import SummaryResult, Turn

logger = logging.getLogger("tender_assistant")

_EXIT_WORDS = {"quit", "exit", "q"}


def render_summary(summary: SummaryResult) -> str:
    """Plain-text rendering of a summary, one section per field."""
    lines = ["Summary", summary.short_summary, "", "Relevance to Officials"]
    lines.extend(f"  - {item}" for item in summary.relevance_to_officials)
    lines.extend(["", "Action Items"])
    lines.extend(f"  - {item}" for item in summary.action_items)
    lines.extend(["", "Confidence", summary.confidence_estimate])
    return "\n".join(lines)


def render_turn(turn: Turn, as_json: bool = False) -> str:
    if as_json:
        return json.dumps(turn.model_dump(), indent=2, ensure_ascii=False)
    if turn.summary is not None:
        return f"{turn.content}\n\n{render_summary(turn.summary)}"
    return turn.content


def _print_replies(turns: List[Turn], as_json: bool) -> None:
    for turn in turns:
        if turn.role == "assistant":
            print(render_turn(turn, as_json))
            print()


def _interactive(assistant: DocumentAssistant, as_json: bool) -> None:
    print("Ask about the document (deadline, cost, contact, eligibility, "
          "penalty, document type). Anything else gets a full summary. "
          "Type 'quit' to leave.")
    while True:
        try:
            prompt = input("> ").strip()
        except EOFError:
            print()
            return
        if not prompt:
            continue
        if prompt.lower() in _EXIT_WORDS:
            return
        _print_replies(assistant.submit(prompt), as_json)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tender-assistant",
        description="Ask questions about a tender/procurement document or summarize it",
    )
    parser.add_argument("file", nargs="?", help="Path to the document (PDF, TXT, DOCX, JPG, PNG)")
    parser.add_argument("--sample", action="store_true", help="Use the built-in sample tender notice")
    parser.add_argument("--query", "-q", action="append", default=[],
                        help="Question to ask (repeatable, answered in order)")
    parser.add_argument("--summary", "-s", action="store_true",
                        help="Produce the preset summary for a procurement officer")
    parser.add_argument("--mode", "-m", choices=SUMMARIZER_MODES, default=config.summarizer_mode,
                        help="Summarizer used when no specific answer applies")
    parser.add_argument("--interactive", "-i", action="store_true", help="Interactive prompt loop")
    parser.add_argument("--show-text", action="store_true", help="Print the extracted text first")
    parser.add_argument("--json", action="store_true", help="Print assistant turns as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if bool(args.file) == args.sample:
        parser.error("give exactly one of FILE or --sample")

    level = logging.DEBUG if args.verbose else getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )

    assistant = DocumentAssistant(mode=args.mode)

    try:
        if args.sample:
            assistant.load_text(SAMPLE_TENDER_TEXT, source_name=SAMPLE_FILENAME)
        else:
            assistant.load_document(args.file)

        if args.show_text:
            print(assistant.text)
            print("-" * 60)

        for prompt in args.query:
            _print_replies(assistant.submit(prompt), args.json)

        if args.summary or not (args.query or args.interactive):
            _print_replies(assistant.summarize_preset(), args.json)

        if args.interactive:
            _interactive(assistant, args.json)
    except FileNotFoundError as exc:
        logger.error("File not found: %s", exc)
        return 1
    except ValueError as exc:
        logger.error("Invalid input: %s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
