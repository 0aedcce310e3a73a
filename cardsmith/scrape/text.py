"""Text extraction from page markup with include/exclude element filters."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from itertools import chain
from typing import Iterable

from bs4 import BeautifulSoup
from bs4.element import (
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    ProcessingInstruction,
    Tag,
)

from .models import ExtractionResult

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")

# String types that are not part of an element's text content
_NON_TEXT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


def _as_tuple(values: Iterable[str], lower: bool = False) -> tuple[str, ...]:
    items = (v.strip() for v in values if v and v.strip())
    return tuple(v.lower() for v in items) if lower else tuple(items)


@dataclass(frozen=True)
class SelectorFilter:
    """Which elements of a page contribute text.

    ``include_tags`` empty means every element is a candidate. ``exclude_ids``
    and ``exclude_classes`` match as substrings of the attribute value, so
    ``"ad"`` excludes ``id="advert-1"``.
    """

    include_tags: tuple[str, ...] = ()
    exclude_tags: tuple[str, ...] = ()
    exclude_ids: tuple[str, ...] = ()
    exclude_classes: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "include_tags", _as_tuple(self.include_tags, lower=True))
        object.__setattr__(self, "exclude_tags", _as_tuple(self.exclude_tags, lower=True))
        object.__setattr__(self, "exclude_ids", _as_tuple(self.exclude_ids))
        object.__setattr__(self, "exclude_classes", _as_tuple(self.exclude_classes))

    @property
    def has_exclusions(self) -> bool:
        return bool(self.exclude_tags or self.exclude_ids or self.exclude_classes)

    def excludes(self, element: Tag) -> bool:
        """True if *element* itself matches any exclusion rule."""
        if element.name in self.exclude_tags:
            return True

        element_id = element.get("id")
        if element_id and any(s in element_id for s in self.exclude_ids):
            return True

        classes = element.get("class")
        if classes:
            if not isinstance(classes, str):
                classes = " ".join(classes)
            if any(s in classes for s in self.exclude_classes):
                return True

        return False

    def excludes_within(self, element: Tag) -> bool:
        """True if *element* or any of its ancestors matches an exclusion rule."""
        return any(
            self.excludes(node)
            for node in chain([element], element.parents)
            if isinstance(node, Tag) and not isinstance(node, BeautifulSoup)
        )


def normalize_text(text: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def text_content(element: Tag) -> str:
    """Concatenate every descendant text node, the way DOM ``textContent`` does."""
    return "".join(
        node
        for node in element.descendants
        if isinstance(node, NavigableString) and not isinstance(node, _NON_TEXT_STRINGS)
    )


def _candidates(soup: BeautifulSoup, selector_filter: SelectorFilter) -> list[Tag]:
    if selector_filter.include_tags:
        return soup.find_all(list(selector_filter.include_tags))
    return soup.find_all(True)


def extract_text_result(markup: str, selector_filter: SelectorFilter) -> ExtractionResult:
    """Extract normalized text fragments and report whether extraction failed."""
    try:
        soup = BeautifulSoup(markup, "html5lib")
        fragments: list[str] = []
        for element in _candidates(soup, selector_filter):
            if selector_filter.has_exclusions and selector_filter.excludes_within(element):
                continue
            text = normalize_text(text_content(element))
            if text:
                fragments.append(text)
    except Exception as exc:
        logger.warning("text extraction failed", exc_info=True)
        return ExtractionResult(fragments=[], error=f"{type(exc).__name__}: {exc}")

    logger.debug(
        "text extracted",
        extra={
            "fragment_count": len(fragments),
            "include_tags": list(selector_filter.include_tags),
        },
    )
    return ExtractionResult(fragments=fragments)


def extract_text(markup: str, selector_filter: SelectorFilter) -> list[str]:
    """Return the page's text fragments in document order.

    Every candidate element yields its own fragment, so text inside nested
    containers appears once per enclosing candidate. Markup that cannot be
    processed yields an empty list; use :func:`extract_text_result` to tell
    that apart from a page with no matching text.
    """
    return extract_text_result(markup, selector_filter).fragments
