import logging
from typing import Optional

from .browser import render_page
from .errors import BrowserError, FetchError
from .extractor import extract_seo
from .fetcher import fetch_page
from .models import CrawlResult, PageResult, RawPageResult

logger = logging.getLogger(__name__)


def is_empty(result: Optional[CrawlResult]) -> bool:
    """
    True when static markup carried no real content: nothing came back, no
    words were counted, or the page has neither an <h1> nor any <h2>.
    Pages that pass this test are assumed to be rendered client-side.
    """
    if result is None:
        return True
    if result.word_count == 0:
        return True
    return not result.h1 and not result.h2s


async def _static_crawl(url: str, extract_data: bool) -> tuple[Optional[PageResult], Optional[CrawlResult]]:
    """
    Tier 1. Returns (result, fields) where `fields` is what the emptiness test
    looks at; both are None if the fetch or parse failed for any reason.
    """
    try:
        html, status_code, final_url = await fetch_page(url)
        fields = extract_seo(html, url)
    except Exception as exc:
        logger.warning("Static fetch failed for %s: %s", url, exc)
        return None, None

    logger.info(
        "Static crawl for %s (%d, %s): title=%r, h1=%r, h2s=%d, words=%d",
        url, status_code, final_url, fields.title, fields.h1, len(fields.h2s), fields.word_count,
    )
    # raw mode escalates on empty markup only, not on every raw result
    if not extract_data:
        return RawPageResult(url=url, html=html), fields
    return fields, fields


async def crawl(url: str, extract_data: bool = True) -> PageResult:
    """
    Top-level entry point. Tries a cheap static fetch first and falls back
    to a headless browser render when the static markup looks empty.

    Raises FetchError only when the browser tier fails as well.
    """
    result, fields = await _static_crawl(url, extract_data)
    tier = "static"

    if is_empty(fields):
        logger.info("Falling back to headless browser for %s", url)
        tier = "browser"
        try:
            result = await render_page(url, extract_data)
        except BrowserError as exc:
            logger.error("Browser crawl failed for %s: %s", url, exc)
            raise FetchError(str(exc)) from exc

    if isinstance(result, CrawlResult):
        logger.info(
            "Crawled %s via %s: title=%r, h1=%r, h2s=%d, words=%d",
            url, tier, result.title, result.h1, len(result.h2s), result.word_count,
        )
    else:
        logger.info("Crawled %s via %s: %d bytes of markup", url, tier, len(result.html))
    return result
