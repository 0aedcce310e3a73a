"""AnkiConnect client — adds notes to a running Anki instance.

Requires the AnkiConnect add-on (https://ankiweb.net/shared/info/2055492159),
which listens on ``http://127.0.0.1:8765`` by default.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

import httpx

from cardsmith.generation.pairs import FlashcardPair

logger = logging.getLogger(__name__)

ANKI_CONNECT_VERSION = 6
NOTE_MODEL = "Basic"


def parse_tags(raw: str | Iterable[str] | None) -> list[str]:
    """Turn ``"a, b,,c"`` (or a list of such strings) into ``["a", "b", "c"]``."""
    if not raw:
        return []
    items = raw.split(",") if isinstance(raw, str) else raw
    return [tag.strip() for tag in items if tag and tag.strip()]


class AnkiConnectClient:
    """Thin async wrapper around the AnkiConnect JSON API."""

    def __init__(self, url: str = "http://127.0.0.1:8765", timeout: float = 10.0) -> None:
        self._url = url
        self._timeout = timeout

    async def _invoke(self, action: str, **params: Any) -> Any:
        payload: dict[str, Any] = {"action": action, "version": ANKI_CONNECT_VERSION}
        if params:
            payload["params"] = params
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            resp = await client.post(self._url, json=payload)
            resp.raise_for_status()
            return resp.json()

    async def add_note(
        self,
        deck: str,
        front: str,
        back: str,
        tags: Sequence[str] = (),
    ) -> int | None:
        """Add one Basic note and return its id, or ``None`` if Anki refused it."""
        note = {
            "deckName": deck,
            "modelName": NOTE_MODEL,
            "fields": {"Front": front, "Back": back},
            "tags": list(tags),
        }
        try:
            reply = await self._invoke("addNote", note=note)
        except Exception:
            logger.warning(
                "error communicating with AnkiConnect",
                extra={"url": self._url, "deck": deck},
                exc_info=True,
            )
            return None

        if reply.get("error"):
            logger.warning(
                "AnkiConnect rejected note",
                extra={"deck": deck, "error": reply["error"], "front": front[:80]},
            )
            return None

        note_id = reply.get("result")
        logger.info("flashcard added", extra={"deck": deck, "note_id": note_id})
        return note_id

    async def add_notes(
        self,
        deck: str,
        pairs: Iterable[FlashcardPair],
        tags: Sequence[str] = (),
    ) -> list[FlashcardPair]:
        """Add *pairs* one at a time and return those Anki accepted."""
        added: list[FlashcardPair] = []
        for pair in pairs:
            note_id = await self.add_note(deck, pair.front, pair.back, tags)
            if note_id is not None:
                added.append(pair)
        return added
