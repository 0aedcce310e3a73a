"""Service layer — runs pipeline operations for the API routes."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, AsyncGenerator

from cardsmith.anki.client import AnkiConnectClient, parse_tags
from cardsmith.api.schemas import Card, FlashcardRequest, NoteRequest, NoteResponse
from cardsmith.errors import CardsmithError
from cardsmith.pipeline import FlashcardPipeline

logger = logging.getLogger(__name__)


async def stream_flashcards(
    pipeline: FlashcardPipeline,
    body: FlashcardRequest,
) -> AsyncGenerator[dict[str, str], None]:
    """Yield SSE-formatted events while the pipeline runs."""
    logger.info("streaming flashcards started", extra={"url": body.url, "insert": body.insert})

    queue: asyncio.Queue[tuple[str, dict[str, Any]] | None] = asyncio.Queue()

    async def on_event(event: str, data: dict[str, Any]) -> None:
        await queue.put((event, data))

    async def run_and_signal_done() -> None:
        try:
            await pipeline.run(
                url=body.url,
                deck=body.deck,
                tags=body.tags,
                insert=body.insert,
                on_event=on_event,
            )
        except CardsmithError as exc:
            logger.warning("streaming flashcards failed", extra={"url": body.url, "error": str(exc)})
            await queue.put(("error", {"message": str(exc)}))
        except Exception:
            logger.exception("streaming flashcards failed", extra={"url": body.url})
            await queue.put(("error", {"message": "Flashcard generation failed"}))
        finally:
            await queue.put(None)  # sentinel

    task = asyncio.create_task(run_and_signal_done())

    try:
        while True:
            item = await queue.get()
            if item is None:
                break
            event, data = item
            yield {"event": event, "data": json.dumps(data)}
    finally:
        if not task.done():
            task.cancel()


async def add_reviewed_notes(anki: AnkiConnectClient, body: NoteRequest) -> NoteResponse:
    """Add reviewed cards, each with its own tags or the request's shared tags."""
    shared_tags = parse_tags(body.tags)
    added: list[Card] = []
    failed: list[Card] = []

    for card in body.cards:
        tags = parse_tags(card.tags) if card.tags is not None else shared_tags
        note_id = await anki.add_note(body.deck, card.front, card.back, tags)
        target = added if note_id is not None else failed
        target.append(Card(front=card.front, back=card.back))

    logger.info(
        "reviewed notes added",
        extra={"deck": body.deck, "added": len(added), "failed": len(failed)},
    )
    return NoteResponse(deck=body.deck, added=added, failed=failed)
