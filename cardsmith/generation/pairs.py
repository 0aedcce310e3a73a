"""Question/answer pair extraction from model output."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from cardsmith.errors import InputContractViolation

from .prompts import PROMPT_VERSION, QA_PATTERN

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlashcardPair:
    """One card: ``front`` is the question, ``back`` the answer."""

    front: str
    back: str


def extract_pairs(raw_text: str | None) -> list[FlashcardPair]:
    """Extract ``Q:``/``A:`` pairs from *raw_text* in the order they appear.

    Text without any markers gives an empty list. Raises
    :class:`InputContractViolation` if *raw_text* is missing or empty.
    """
    if not raw_text:
        raise InputContractViolation("No content in the response")

    content = str(raw_text)
    pairs = [
        FlashcardPair(
            front=match.group("question").strip(),
            back=match.group("answer").strip(),
        )
        for match in QA_PATTERN.finditer(content)
    ]

    if not pairs:
        logger.warning(
            "no question/answer pairs found in response",
            extra={"prompt_version": PROMPT_VERSION, "content_length": len(content)},
        )
    else:
        logger.debug(
            "pairs extracted",
            extra={"prompt_version": PROMPT_VERSION, "pair_count": len(pairs)},
        )
    return pairs


def response_content(response: Any) -> str | None:
    """Return the text payload of a generation result, if it has one."""
    content = getattr(response, "output", None)
    if not isinstance(content, str):
        return None
    return content


def pairs_from_response(response: Any) -> list[FlashcardPair]:
    """Extract pairs from a generation result's ``output`` field."""
    return extract_pairs(response_content(response))
