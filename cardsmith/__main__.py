"""Command-line entry point: generate flashcards for one page."""

from __future__ import annotations

import argparse
import asyncio
import sys

from cardsmith.anki.client import parse_tags
from cardsmith.config import Settings
from cardsmith.errors import CardsmithError
from cardsmith.logging_config import setup_logging
from cardsmith.pipeline import FlashcardPipeline


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cardsmith",
        description="Generate question/answer flashcards from a web page and add them to Anki",
    )
    parser.add_argument("url", help="Absolute URL of the page (e.g. https://www.example.com)")
    parser.add_argument("--deck", default=None, help="Anki deck to add cards to (default: DEFAULT_DECK)")
    parser.add_argument("--tags", default="", help="Comma-separated tags for every added card")
    parser.add_argument("--add", action="store_true", help="Add the generated cards to Anki")
    parser.add_argument("--model", default=None, help="Model to use, e.g. gpt-4o-mini or openai:gpt-4o")

    filter_group = parser.add_argument_group("Page filter options")
    filter_group.add_argument("--include", action="append", default=None, metavar="TAG",
                              help="Only take text from these tags (repeatable; default: all)")
    filter_group.add_argument("--exclude-tag", action="append", default=None, metavar="TAG",
                              help="Skip these tags and everything inside them (repeatable)")
    filter_group.add_argument("--exclude-id", action="append", default=None, metavar="TEXT",
                              help="Skip elements whose id contains TEXT (repeatable)")
    filter_group.add_argument("--exclude-class", action="append", default=None, metavar="TEXT",
                              help="Skip elements whose class contains TEXT (repeatable)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL)")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Build settings from the environment, overridden by any flags given."""
    overrides: dict[str, str] = {}
    if args.model:
        overrides["model"] = args.model
    if args.log_level:
        overrides["log_level"] = args.log_level
    for flag, field_name in (
        ("include", "include_tags"),
        ("exclude_tag", "exclude_tags"),
        ("exclude_id", "exclude_ids"),
        ("exclude_class", "exclude_classes"),
    ):
        values = getattr(args, flag)
        if values is not None:
            overrides[field_name] = ",".join(values)
    return Settings(**overrides)


def print_cards(result, out=None) -> None:
    out = out or sys.stdout
    if not result.cards:
        print("No flashcards were generated.", file=out)
        return
    for number, card in enumerate(result.cards, start=1):
        print(f"\n[{number}] Front: {card.front}", file=out)
        print(f"    Back:  {card.back}", file=out)
    if result.added:
        print(f"\nAdded {len(result.added)}/{len(result.cards)} cards to deck {result.deck!r}.", file=out)


def main(argv: list[str] | None = None) -> int:
    args = create_parser().parse_args(argv)
    settings = settings_from_args(args)
    # stdout is reserved for the cards
    setup_logging(settings.log_level, stream=sys.stderr)

    pipeline = FlashcardPipeline(settings)
    try:
        result = asyncio.run(
            pipeline.run(url=args.url, deck=args.deck, tags=parse_tags(args.tags), insert=args.add)
        )
    except CardsmithError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print_cards(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
