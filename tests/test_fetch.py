"""Page fetcher and scrape entry point tests."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from cardsmith.errors import InvalidURLError
from cardsmith.scrape import (
    ExtractionResult,
    FetchedPage,
    PageFetcher,
    SelectorFilter,
    extract_text_result,
    scrape_page,
    validate_url,
)


# --- URL validation (sync) ---


@pytest.mark.parametrize(
    "url",
    ["https://www.example.com", "http://example.com/page?x=1", "  https://example.com/a  "],
)
def test_validate_url_accepts(url):
    assert validate_url(url) is True


@pytest.mark.parametrize(
    "url",
    ["", "example.com", "ftp://example.com/file", "https://", "not a url", None],
)
def test_validate_url_rejects(url):
    assert validate_url(url) is False


# --- PageFetcher (async, mocked httpx) ---


def _mock_client(mock_client_cls, response):
    ctx = AsyncMock()
    ctx.get.return_value = response
    mock_client_cls.return_value.__aenter__ = AsyncMock(return_value=ctx)
    mock_client_cls.return_value.__aexit__ = AsyncMock(return_value=False)
    return ctx


@pytest.mark.asyncio
async def test_fetch_returns_markup():
    fetcher = PageFetcher(timeout=5.0, user_agent="test-agent")

    mock_response = MagicMock()
    mock_response.text = "<p>hello</p>"
    mock_response.url = "https://example.com/final"
    mock_response.status_code = 200
    mock_response.headers = {"content-type": "text/html; charset=utf-8"}
    mock_response.raise_for_status = MagicMock()

    with patch("cardsmith.scrape.fetch.httpx.AsyncClient") as mock_client:
        ctx = _mock_client(mock_client, mock_response)
        page = await fetcher.fetch("https://example.com/start")

    assert page == FetchedPage(
        url="https://example.com/final",
        markup="<p>hello</p>",
        status_code=200,
        content_type="text/html; charset=utf-8",
    )
    ctx.get.assert_awaited_once_with("https://example.com/start", timeout=5.0)
    assert mock_client.call_args.kwargs["headers"] == {"User-Agent": "test-agent"}


@pytest.mark.asyncio
async def test_fetch_http_error_returns_none():
    fetcher = PageFetcher()

    mock_response = MagicMock()
    mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
        "404 Not Found",
        request=MagicMock(),
        response=MagicMock(status_code=404),
    )

    with patch("cardsmith.scrape.fetch.httpx.AsyncClient") as mock_client:
        _mock_client(mock_client, mock_response)
        page = await fetcher.fetch("https://example.com/missing")

    assert page is None


@pytest.mark.asyncio
async def test_fetch_connect_error_returns_none():
    fetcher = PageFetcher()

    with patch("cardsmith.scrape.fetch.httpx.AsyncClient") as mock_client:
        ctx = _mock_client(mock_client, None)
        ctx.get.side_effect = httpx.ConnectError("connection refused")
        page = await fetcher.fetch("https://example.com/")

    assert page is None


# --- scrape_page ---


@pytest.mark.asyncio
async def test_scrape_page_invalid_url_raises(fetcher):
    with pytest.raises(InvalidURLError):
        await scrape_page("example.com/page", fetcher, SelectorFilter())
    fetcher.fetch.assert_not_awaited()


@pytest.mark.asyncio
async def test_scrape_page_extracts_fragments(fetcher):
    result = await scrape_page(
        "https://example.com/photosynthesis",
        fetcher,
        SelectorFilter(include_tags=("h1",)),
    )
    assert result.ok
    assert result.fragments == ["Photosynthesis"]


@pytest.mark.asyncio
async def test_scrape_page_fetch_failure_is_empty_with_error():
    fetcher = MagicMock()
    fetcher.fetch = AsyncMock(return_value=None)

    result = await scrape_page("https://example.com/", fetcher, SelectorFilter())

    assert result.fragments == []
    assert not result.ok
    assert "https://example.com/" in result.error


@pytest.mark.asyncio
async def test_scrape_page_extracts_in_worker_thread(fetcher):
    selector_filter = SelectorFilter(include_tags=("h1",))
    with patch("cardsmith.scrape.fetch.asyncio.to_thread", new_callable=AsyncMock) as mock_to_thread:
        mock_to_thread.return_value = ExtractionResult(fragments=["Photosynthesis"])
        result = await scrape_page("https://example.com/photosynthesis", fetcher, selector_filter)

    assert result.fragments == ["Photosynthesis"]
    func, markup, passed_filter = mock_to_thread.await_args.args
    assert func is extract_text_result
    assert "<h1>Photosynthesis</h1>" in markup
    assert passed_filter == selector_filter
