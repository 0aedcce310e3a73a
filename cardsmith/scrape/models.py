"""Data models for the scrape submodule."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FetchedPage:
    """Raw markup returned for a single page address."""

    url: str
    markup: str
    status_code: int = 200
    content_type: str = ""


@dataclass(frozen=True)
class ExtractionResult:
    """Fragments pulled from one page.

    ``error`` is ``None`` when the page was processed; an empty ``fragments``
    list then means the page simply had no matching text. When ``error`` is
    set, the page could not be fetched or parsed and ``fragments`` is empty.
    """

    fragments: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
