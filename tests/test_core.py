import pytest
from unittest.mock import AsyncMock, patch

from seo_crawler.core import crawl, is_empty
from seo_crawler.errors import BrowserError, FetchError
from seo_crawler.models import CrawlResult, RawPageResult


MOCK_HTML = """
<html lang="en">
<head>
    <title>Edward Snowden Profile | CNN Politics</title>
    <meta name="description" content="Edward Snowden leaked NSA surveillance secrets.">
</head>
<body>
    <h1>Man behind NSA leaks</h1>
    <p>Edward Snowden revealed details about government surveillance programs in 2013.</p>
</body>
</html>
"""

# what a single-page app looks like before its scripts run
EMPTY_SHELL_HTML = """
<html>
<head><title>App</title><script src="/bundle.js"></script></head>
<body><div id="root"></div><script>window.boot();</script></body>
</html>
"""

HEADINGLESS_HTML = "<html><body><p>Plenty of words here but no headings at all.</p></body></html>"

RENDERED_RESULT = CrawlResult(
    url="https://spa.example.com/",
    title="App",
    h1="Rendered heading",
    h2s=("Section",),
    word_count=120,
)


# --- emptiness heuristic ---

def test_no_result_is_empty():
    assert is_empty(None)


def test_zero_words_is_empty():
    assert is_empty(CrawlResult(url="u", h1="Heading", word_count=0))


def test_no_headings_is_empty():
    assert is_empty(CrawlResult(url="u", word_count=50))


def test_h1_only_is_not_empty():
    assert not is_empty(CrawlResult(url="u", h1="Heading", word_count=50))


def test_h2_only_is_not_empty():
    assert not is_empty(CrawlResult(url="u", h2s=("Sub",), word_count=50))


# --- orchestration ---

@pytest.mark.asyncio
async def test_static_result_accepted_without_browser():
    with patch("seo_crawler.core.fetch_page", new_callable=AsyncMock) as mock_fetch, \
         patch("seo_crawler.core.render_page", new_callable=AsyncMock) as mock_render:
        mock_fetch.return_value = (MOCK_HTML, 200, "https://cnn.com/story")
        result = await crawl("https://cnn.com/story")

    mock_render.assert_not_called()
    assert isinstance(result, CrawlResult)
    assert result.h1 == "Man behind NSA leaks"
    assert "Snowden" in result.title
    assert result.word_count > 0


@pytest.mark.asyncio
async def test_empty_static_markup_escalates_to_browser():
    with patch("seo_crawler.core.fetch_page", new_callable=AsyncMock) as mock_fetch, \
         patch("seo_crawler.core.render_page", new_callable=AsyncMock) as mock_render:
        mock_fetch.return_value = (EMPTY_SHELL_HTML, 200, "https://spa.example.com/")
        mock_render.return_value = RENDERED_RESULT
        result = await crawl("https://spa.example.com/")

    mock_render.assert_awaited_once_with("https://spa.example.com/", True)
    assert result is RENDERED_RESULT


@pytest.mark.asyncio
async def test_headingless_page_escalates_to_browser():
    with patch("seo_crawler.core.fetch_page", new_callable=AsyncMock) as mock_fetch, \
         patch("seo_crawler.core.render_page", new_callable=AsyncMock) as mock_render:
        mock_fetch.return_value = (HEADINGLESS_HTML, 200, "https://example.com/")
        mock_render.return_value = RENDERED_RESULT
        await crawl("https://example.com/")

    mock_render.assert_awaited_once()


@pytest.mark.asyncio
async def test_static_fetch_error_is_swallowed_and_escalates():
    with patch("seo_crawler.core.fetch_page", new_callable=AsyncMock) as mock_fetch, \
         patch("seo_crawler.core.render_page", new_callable=AsyncMock) as mock_render:
        mock_fetch.side_effect = FetchError("Connection timeout")
        mock_render.return_value = RENDERED_RESULT
        result = await crawl("https://spa.example.com/")

    assert result is RENDERED_RESULT


@pytest.mark.asyncio
async def test_browser_result_is_final_even_if_empty():
    empty = CrawlResult(url="https://blank.example.com/")
    with patch("seo_crawler.core.fetch_page", new_callable=AsyncMock) as mock_fetch, \
         patch("seo_crawler.core.render_page", new_callable=AsyncMock) as mock_render:
        mock_fetch.return_value = ("", 200, "https://blank.example.com/")
        mock_render.return_value = empty
        result = await crawl("https://blank.example.com/")

    assert result is empty
    mock_render.assert_awaited_once()


@pytest.mark.asyncio
async def test_both_tiers_failing_raises_fetch_error():
    with patch("seo_crawler.core.fetch_page", new_callable=AsyncMock) as mock_fetch, \
         patch("seo_crawler.core.render_page", new_callable=AsyncMock) as mock_render:
        mock_fetch.side_effect = FetchError("Connection refused")
        mock_render.side_effect = BrowserError("net::ERR_NAME_NOT_RESOLVED")
        with pytest.raises(FetchError) as exc_info:
            await crawl("https://dead.example.com/")

    assert "ERR_NAME_NOT_RESOLVED" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, BrowserError)


@pytest.mark.asyncio
async def test_raw_mode_returns_static_markup():
    with patch("seo_crawler.core.fetch_page", new_callable=AsyncMock) as mock_fetch, \
         patch("seo_crawler.core.render_page", new_callable=AsyncMock) as mock_render:
        mock_fetch.return_value = (MOCK_HTML, 200, "https://cnn.com/story")
        result = await crawl("https://cnn.com/story", extract_data=False)

    mock_render.assert_not_called()
    assert result == RawPageResult(url="https://cnn.com/story", html=MOCK_HTML)


@pytest.mark.asyncio
async def test_raw_mode_escalates_on_empty_markup():
    rendered = RawPageResult(url="https://spa.example.com/", html="<html>rendered</html>")
    with patch("seo_crawler.core.fetch_page", new_callable=AsyncMock) as mock_fetch, \
         patch("seo_crawler.core.render_page", new_callable=AsyncMock) as mock_render:
        mock_fetch.return_value = (EMPTY_SHELL_HTML, 200, "https://spa.example.com/")
        mock_render.return_value = rendered
        result = await crawl("https://spa.example.com/", extract_data=False)

    mock_render.assert_awaited_once_with("https://spa.example.com/", False)
    assert result is rendered
