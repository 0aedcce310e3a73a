"""Page fetching and text extraction."""

from __future__ import annotations

from .fetch import PageFetcher, scrape_page, validate_url
from .models import ExtractionResult, FetchedPage
from .text import (
    SelectorFilter,
    extract_text,
    extract_text_result,
    normalize_text,
)

__all__ = [
    "ExtractionResult",
    "FetchedPage",
    "PageFetcher",
    "SelectorFilter",
    "extract_text",
    "extract_text_result",
    "normalize_text",
    "scrape_page",
    "validate_url",
]
