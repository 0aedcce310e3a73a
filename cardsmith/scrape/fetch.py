"""Page fetching over HTTP and the scrape entry point."""

from __future__ import annotations

import asyncio
import logging
from urllib.parse import urlparse

import httpx

from cardsmith.errors import InvalidURLError

from .models import ExtractionResult, FetchedPage
from .text import SelectorFilter, extract_text_result

logger = logging.getLogger(__name__)

_VALID_SCHEMES = {"http", "https"}


def validate_url(url: str) -> bool:
    """Check that *url* is an absolute http(s) address with a hostname."""
    if not url or not isinstance(url, str):
        return False
    parsed = urlparse(url.strip())
    return parsed.scheme in _VALID_SCHEMES and bool(parsed.hostname)


class PageFetcher:
    """Fetches raw page markup with httpx."""

    def __init__(
        self,
        *,
        timeout: float = 15.0,
        user_agent: str = "cardsmith/0.1.0",
    ) -> None:
        self._timeout = timeout
        self._user_agent = user_agent

    async def fetch(self, url: str) -> FetchedPage | None:
        """GET *url* and return its markup, or ``None`` if the request fails."""
        logger.debug("fetching page", extra={"url": url})
        try:
            async with httpx.AsyncClient(
                follow_redirects=True,
                headers={"User-Agent": self._user_agent},
            ) as client:
                resp = await client.get(url, timeout=self._timeout)
                resp.raise_for_status()
        except Exception:
            logger.warning("page fetch failed", extra={"url": url}, exc_info=True)
            return None

        page = FetchedPage(
            url=str(resp.url),
            markup=resp.text,
            status_code=resp.status_code,
            content_type=resp.headers.get("content-type", ""),
        )
        logger.debug(
            "page fetched",
            extra={"url": url, "status_code": page.status_code, "length": len(page.markup)},
        )
        return page


async def scrape_page(
    url: str,
    fetcher: PageFetcher,
    selector_filter: SelectorFilter,
) -> ExtractionResult:
    """Fetch *url* and extract its text fragments.

    Raises :class:`InvalidURLError` for an address that is not absolute
    http(s). A failed fetch yields an empty result with ``error`` set.
    """
    if not validate_url(url):
        raise InvalidURLError(f"Invalid URL provided: {url!r}")

    page = await fetcher.fetch(url)
    if page is None:
        return ExtractionResult(fragments=[], error=f"could not fetch {url}")

    # parsing large pages is CPU bound; keep it off the event loop
    result = await asyncio.to_thread(extract_text_result, page.markup, selector_filter)
    logger.info(
        "page scraped",
        extra={"url": url, "fragment_count": len(result.fragments), "ok": result.ok},
    )
    return result
