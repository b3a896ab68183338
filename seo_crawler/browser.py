import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator, Sequence

from playwright.async_api import Browser, Error as PlaywrightError, async_playwright

from .errors import BrowserError
from .fetcher import USER_AGENT
from .models import CrawlResult, PageResult, RawPageResult

logger = logging.getLogger(__name__)

LAUNCH_TIMEOUT_MS = 60_000
NAVIGATION_TIMEOUT_MS = 30_000
SETTLE_DELAY_MS = 2_500  # time for client-side rendering to finish after DOMContentLoaded

# container-friendly Chromium flags
BROWSER_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--no-zygote",
    "--single-process",
    "--disable-extensions",
)

# runs inside the page; mirrors extractor.extract_seo against the live DOM
_EXTRACT_SCRIPT = """
(pageUrl) => {
  const text = (el) => (el ? el.innerText.trim() : '');
  const metaDesc = document.querySelector('meta[name="description"]');
  const canonicalEl = document.querySelector('link[rel="canonical"]');
  const bodyText = document.body ? document.body.innerText : '';

  let schema = null;
  const schemaEl = document.querySelector('script[type="application/ld+json"]');
  if (schemaEl) {
    try { schema = JSON.parse(schemaEl.textContent); } catch (e) { schema = null; }
  }

  const hostname = new URL(pageUrl).hostname;
  const hrefs = Array.from(document.querySelectorAll('a[href]')).map((a) => a.href);
  const absolute = hrefs.filter((href) => /^https?:/i.test(href));
  const internal = absolute.filter((href) => {
    try { return new URL(href).hostname === hostname; } catch (e) { return false; }
  }).length;

  return {
    url: pageUrl,
    title: (document.title || '').trim(),
    meta_description: metaDesc ? (metaDesc.getAttribute('content') || '').trim() : '',
    canonical: canonicalEl ? (canonicalEl.getAttribute('href') || '').trim() : '',
    h1: text(document.querySelector('h1')),
    h2s: Array.from(document.querySelectorAll('h2')).map(text),
    word_count: bodyText.split(/\\s+/).filter(Boolean).length,
    schema: schema,
    internal_links_count: internal,
    external_links_count: Math.max(0, absolute.length - internal),
  };
}
"""


@asynccontextmanager
async def launch_browser(args: Sequence[str] = BROWSER_ARGS) -> AsyncIterator[Browser]:
    """
    Launch a dedicated headless Chromium for one unit of work.

    The browser and the Playwright driver are released on every exit path,
    including when the caller's block raises.
    """
    async with AsyncExitStack() as stack:
        playwright = await stack.enter_async_context(async_playwright())
        browser = await playwright.chromium.launch(
            headless=True,
            args=list(args),
            timeout=LAUNCH_TIMEOUT_MS,
        )
        stack.push_async_callback(browser.close)
        logger.debug("Browser launched (%s)", browser.version)
        yield browser


def _to_crawl_result(data: dict) -> CrawlResult:
    return CrawlResult(
        url=data["url"],
        title=data.get("title") or "",
        meta_description=data.get("meta_description") or "",
        canonical=data.get("canonical") or "",
        h1=data.get("h1") or "",
        h2s=tuple(data.get("h2s") or ()),
        word_count=int(data.get("word_count") or 0),
        schema=data.get("schema"),
        internal_links_count=int(data.get("internal_links_count") or 0),
        external_links_count=int(data.get("external_links_count") or 0),
    )


async def render_page(url: str, extract_data: bool = True) -> PageResult:
    """
    Load `url` in a fresh headless browser, let scripts settle, then return
    either the rendered markup or the SEO fields read from the live DOM.
    Raises BrowserError on launch, navigation or evaluation failure.
    """
    try:
        async with launch_browser() as browser:
            page = await browser.new_page(user_agent=USER_AGENT)
            await page.goto(url, wait_until="domcontentloaded", timeout=NAVIGATION_TIMEOUT_MS)
            await page.wait_for_timeout(SETTLE_DELAY_MS)

            if not extract_data:
                return RawPageResult(url=url, html=await page.content())

            data = await page.evaluate(_EXTRACT_SCRIPT, url)
    except PlaywrightError as exc:
        raise BrowserError(f"Browser render of {url} failed: {exc}") from exc

    return _to_crawl_result(data)
