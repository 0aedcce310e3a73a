"""Flashcard pipeline — scrape -> generate -> (optionally) add to Anki."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Sequence

from cardsmith.anki.client import AnkiConnectClient, parse_tags
from cardsmith.api.schemas import Card, FlashcardMetadata, FlashcardResult, Usage
from cardsmith.config import Settings
from cardsmith.events import EventCallback, emit_event, emit_status
from cardsmith.generation.generator import FlashcardGenerator
from cardsmith.generation.prompts import PROMPT_VERSION
from cardsmith.scrape import PageFetcher, scrape_page

logger = logging.getLogger(__name__)


class FlashcardPipeline:
    """Orchestrates one page -> cards run using an immutable settings value."""

    def __init__(
        self,
        settings: Settings,
        fetcher: PageFetcher | None = None,
        anki: AnkiConnectClient | None = None,
    ) -> None:
        self._settings = settings
        self._filter = settings.selector_filter()
        self._fetcher = fetcher or PageFetcher(
            timeout=settings.fetch_timeout_seconds,
            user_agent=settings.user_agent,
        )
        self._anki = anki or AnkiConnectClient(settings.anki_connect_url)
        self._generator = FlashcardGenerator(
            model=settings.agent_model,
            context=settings.generation_context,
        )

    @property
    def anki(self) -> AnkiConnectClient:
        return self._anki

    async def run(
        self,
        url: str,
        deck: str | None = None,
        tags: Sequence[str] = (),
        insert: bool = False,
        on_event: EventCallback | None = None,
    ) -> FlashcardResult:
        """Execute the pipeline for *url* and return the generated cards.

        With ``insert`` every generated card is added to *deck* (or the
        configured default deck) with the same *tags*.
        """
        task_id = uuid.uuid4().hex[:12]
        deck = deck or self._settings.default_deck
        tags = parse_tags(list(tags))

        logger.info(
            "flashcard pipeline started",
            extra={
                "task_id": task_id,
                "url": url,
                "deck": deck,
                "insert": insert,
                "model": self._generator.model,
            },
        )
        await emit_event(on_event, "started", {"task_id": task_id, "url": url})

        # --- Stage 1: scrape ---
        await emit_status(on_event, "scraping", f"Fetching {url}...")
        extraction = await scrape_page(url, self._fetcher, self._filter)
        if not extraction.ok:
            logger.warning(
                "page extraction failed",
                extra={"task_id": task_id, "url": url, "error": extraction.error},
            )

        # --- Stage 2: generate ---
        await emit_status(
            on_event, "generating", f"Generating cards from {len(extraction.fragments)} fragments..."
        )
        outcome = await self._generator.generate(extraction.fragments)
        cards = [Card(front=p.front, back=p.back) for p in outcome.pairs]
        await emit_event(on_event, "cards", {"cards": [c.model_dump() for c in cards]})

        # --- Stage 3: insert ---
        added: list[Card] = []
        if insert and outcome.pairs:
            await emit_status(on_event, "inserting", f"Adding {len(cards)} cards to {deck}...")
            accepted = await self._anki.add_notes(deck, outcome.pairs, tags)
            added = [Card(front=p.front, back=p.back) for p in accepted]

        usage = Usage(
            prompt_tokens=outcome.input_tokens,
            completion_tokens=outcome.output_tokens,
            total_tokens=outcome.input_tokens + outcome.output_tokens,
        )
        result = FlashcardResult(
            task_id=task_id,
            url=url,
            cards=cards,
            deck=deck,
            tags=tags,
            added=added,
            usage=usage,
            metadata=FlashcardMetadata(
                requests=outcome.requests,
                model=self._generator.model,
                prompt_version=PROMPT_VERSION,
                fragment_count=len(extraction.fragments),
            ),
            created_at=datetime.now(timezone.utc),
        )

        logger.info(
            "flashcard pipeline completed",
            extra={
                "task_id": task_id,
                "cards": len(cards),
                "added": len(added),
                "total_tokens": usage.total_tokens,
            },
        )
        await emit_event(on_event, "result", result.model_dump(mode="json"))
        await emit_event(on_event, "done", {})
        return result
