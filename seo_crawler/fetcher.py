import asyncio
import logging
from functools import partial

import requests

from .errors import FetchError

logger = logging.getLogger(__name__)

# realistic browser UA — avoids most trivial bot blocks
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

DEFAULT_TIMEOUT = 20  # seconds
MAX_REDIRECTS = 5
MAX_CONTENT_BYTES = 5 * 1024 * 1024  # 5 MB ceiling to avoid runaway pages

_HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml", "application/xml", "text/xml", "text/plain")


def _is_html(content_type: str) -> bool:
    # servers that send no content type get the benefit of the doubt
    if not content_type:
        return True
    return content_type.split(";")[0].strip().lower() in _HTML_CONTENT_TYPES


def _sync_fetch(url: str, user_agent: str, timeout: float) -> tuple[str, int, str]:
    """Synchronous fetch using requests — runs inside a thread executor."""
    headers = {
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
    }
    with requests.Session() as session:
        session.max_redirects = MAX_REDIRECTS
        response = session.get(url, headers=headers, timeout=timeout, allow_redirects=True)
        response.raise_for_status()

    content_type = response.headers.get("Content-Type", "")
    if not _is_html(content_type):
        raise FetchError(f"Expected HTML from {url}, got {content_type}")

    content = response.text[:MAX_CONTENT_BYTES]
    return content, response.status_code, response.url


async def fetch_page(
    url: str,
    user_agent: str = USER_AGENT,
    timeout: float = DEFAULT_TIMEOUT,
) -> tuple[str, int, str]:
    """
    Fetch the HTML content of a URL asynchronously.

    Uses requests in a thread executor to stay non-blocking inside the async
    event loop. Returns (html_content, status_code, final_url) and raises
    FetchError on network errors, timeouts, HTTP error statuses and non-HTML
    responses.
    """
    loop = asyncio.get_event_loop()
    try:
        return await loop.run_in_executor(None, partial(_sync_fetch, url, user_agent, timeout))
    except requests.RequestException as exc:
        logger.debug("Static fetch error for %s: %r", url, exc)
        raise FetchError(f"Request to {url} failed: {exc}") from exc
