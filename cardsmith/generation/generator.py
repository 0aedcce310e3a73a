"""Flashcard text generation via a PydanticAI agent."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from pydantic_ai import Agent

from cardsmith.errors import GenerationError

from .pairs import FlashcardPair, pairs_from_response, response_content
from .prompts import PROMPT_VERSION, format_page_text

logger = logging.getLogger(__name__)


def _reasoning_tokens(usage: Any) -> int:
    """Extract reasoning tokens from PydanticAI usage details, if present."""
    details = getattr(usage, "details", None) or {}
    return details.get("reasoning_tokens", 0)


@dataclass
class GenerationOutcome:
    """Pairs produced by one generation call, with the raw text and token counts."""

    pairs: list[FlashcardPair] = field(default_factory=list)
    raw_text: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    requests: int = 0


class FlashcardGenerator:
    """Turns extracted page text into question/answer pairs."""

    def __init__(self, model: str, context: str) -> None:
        self._model = model
        self._context = context

    @property
    def model(self) -> str:
        return self._model

    async def generate(self, fragments: Sequence[str]) -> GenerationOutcome:
        if not fragments:
            raise GenerationError("No text extracted from the page")
        if not self._context:
            raise GenerationError("No generation context provided")
        if not self._model:
            raise GenerationError("No model provided")

        user_message = format_page_text(fragments)
        logger.info(
            "generating flashcards",
            extra={
                "model": self._model,
                "prompt_version": PROMPT_VERSION,
                "fragment_count": len(fragments),
                "input_chars": len(user_message),
            },
        )

        # Missing provider credentials surface here, from Agent() or run()
        try:
            agent = Agent(self._model, system_prompt=self._context)
            result = await agent.run(user_message)
        except Exception as exc:
            logger.warning(
                "flashcard generation request failed",
                extra={"model": self._model},
                exc_info=True,
            )
            raise GenerationError(f"Flashcard generation failed: {exc}") from exc

        pairs = pairs_from_response(result)

        usage = result.usage()
        outcome = GenerationOutcome(
            pairs=pairs,
            raw_text=response_content(result) or "",
            input_tokens=usage.input_tokens or 0,
            output_tokens=(usage.output_tokens or 0) + _reasoning_tokens(usage),
            requests=usage.requests or 0,
        )
        logger.info(
            "flashcards generated",
            extra={
                "model": self._model,
                "pair_count": len(pairs),
                "input_tokens": outcome.input_tokens,
                "output_tokens": outcome.output_tokens,
            },
        )
        return outcome
