"""Fixtures — settings, sample markup, mocked collaborators."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from cardsmith.config import Settings
from cardsmith.scrape import FetchedPage

ARTICLE_HTML = """\
<html>
  <head><title>Photosynthesis</title></head>
  <body>
    <nav id="main-nav"><a href="/">Home</a></nav>
    <article>
      <h1>Photosynthesis</h1>
      <p>Plants convert light into chemical energy.</p>
      <div class="advert-slot"><p>Buy seeds now</p></div>
    </article>
    <footer>Copyright 2024</footer>
  </body>
</html>
"""


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_key="",
        model="gpt-4o-mini",
        include_tags="h1,p",
        exclude_tags="nav,footer",
        exclude_ids="",
        exclude_classes="advert",
        default_deck="Biology",
    )


@pytest.fixture
def fetcher() -> MagicMock:
    """PageFetcher stand-in returning ARTICLE_HTML for any URL."""
    mock = MagicMock()
    mock.fetch = AsyncMock(
        side_effect=lambda url: FetchedPage(url=url, markup=ARTICLE_HTML)
    )
    return mock


@pytest.fixture
def anki() -> MagicMock:
    """AnkiConnectClient stand-in that accepts every note."""
    mock = MagicMock()
    mock.add_notes = AsyncMock(side_effect=lambda deck, pairs, tags=(): list(pairs))
    mock.add_note = AsyncMock(return_value=1)
    return mock


@pytest.fixture
def article_html() -> str:
    return ARTICLE_HTML
