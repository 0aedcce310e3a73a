"""Generation context and the pattern that reads its answers back.

The instructions in ``DEFAULT_CONTEXT`` ask the model for ``Q:``/``A:``
blocks, and ``QA_PATTERN`` only recognizes that shape. Change them together
and bump ``PROMPT_VERSION``; a context that asks for another layout makes
pair extraction return fewer or no cards without any error.
"""

import re
from typing import Sequence

PROMPT_VERSION = "qa-v1"

DEFAULT_CONTEXT = """\
You write flashcards for spaced-repetition study. The user message is text \
scraped from a web page, one fragment per line; some fragments repeat and \
some are navigation or boilerplate, which you should ignore.

Write question/answer pairs that cover the key facts and concepts of the page.

Format every card exactly like this, one card per numbered item:
1. Q: <question>
A: <answer>
2. Q: <question>
A: <answer>

Rules:
- Each question must be answerable on its own, without the page.
- Keep answers short: a word, a phrase or one sentence.
- Do not add any text before the first card or after the last one.
"""

# Optional "N." ordinal and "*" emphasis around the markers. A card ends at
# the next ordinal line, the next "Q:" line, a blank line or end of input.
QA_PATTERN = re.compile(
    r"(?:\d+\.\s*)?\**\s*Q:\**\s*(?P<question>.+?)\s*\**\s*A:\**\s*(?P<answer>.+?)\s*\**"
    r"(?=\n\s*\d+\.|\n\s*\**\s*Q:|\n[ \t]*\n|\s*\Z)",
    re.DOTALL | re.MULTILINE,
)


def format_page_text(fragments: Sequence[str]) -> str:
    """Join extracted fragments into the user message, one per line."""
    return "\n".join(fragments)
