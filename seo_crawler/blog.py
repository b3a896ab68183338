import logging
from typing import Optional
from urllib.parse import urljoin

from .errors import FetchError
from .extractor import extract_keywords
from .fetcher import fetch_page
from .models import ArticleSummary
from .parser import all_texts, first_text, make_soup, optional

logger = logging.getLogger(__name__)

BOT_USER_AGENT = "Mozilla/5.0 (compatible; SEOBot/1.0)"
LISTING_TIMEOUT = 20  # seconds
ARTICLE_TIMEOUT = 15  # seconds
MAX_ARTICLES = 20

# href fragments that mark a link as an article
ARTICLE_URL_SIGNALS = ("/blog/", "/article/", "/post/")

# containers that usually hold the article body; all matches are used
BODY_SELECTORS = "article, main, .content, .post-content"


def discover_article_links(html: str, listing_url: str, limit: int = MAX_ARTICLES) -> list[str]:
    """
    Article-like links on a listing page, absolute, deduplicated in
    first-seen order, capped at `limit` after deduplication.
    """
    soup = make_soup(html)
    links: list[str] = []
    seen: set[str] = set()

    for a in soup.find_all("a", href=True):
        href = a["href"].strip()
        if not any(signal in href for signal in ARTICLE_URL_SIGNALS):
            continue
        if not href.lower().startswith(("http://", "https://")):
            href = optional(urljoin, listing_url, href)
        if not href or href in seen:
            continue
        seen.add(href)
        links.append(href)
        if len(links) >= limit:
            break

    return links


def _published_date(soup) -> Optional[str]:
    return soup.find("time", attrs={"datetime": True})["datetime"].strip() or None


def summarize_article(html: str, url: str) -> ArticleSummary:
    soup = make_soup(html)

    title = first_text(soup, "h1") or first_text(soup, "title")
    body_text = " ".join(el.get_text(separator=" ") for el in soup.select(BODY_SELECTORS))

    return ArticleSummary(
        url=url,
        title=title,
        h2s=tuple(all_texts(soup, "h2")),
        keywords=extract_keywords(body_text),
        published_date=optional(_published_date, soup),
        word_count=len(body_text.split()),
    )


async def crawl_blog(listing_url: str) -> list[ArticleSummary]:
    """
    Summarize the articles linked from a blog listing page.

    Articles are fetched one at a time; an article that fails is logged and
    left out. Only a failure to fetch the listing itself raises (FetchError).
    """
    try:
        html, _, _ = await fetch_page(listing_url, user_agent=BOT_USER_AGENT, timeout=LISTING_TIMEOUT)
    except FetchError as exc:
        logger.error("Blog listing fetch failed for %s: %s", listing_url, exc)
        raise FetchError(str(exc), error="Failed to crawl blog") from exc

    links = discover_article_links(html, listing_url)
    logger.info("Found %d article links on %s", len(links), listing_url)

    articles = []
    for link in links:
        try:
            article_html, _, _ = await fetch_page(link, user_agent=BOT_USER_AGENT, timeout=ARTICLE_TIMEOUT)
            articles.append(summarize_article(article_html, link))
        except Exception as exc:
            logger.error("Failed to crawl article %s: %s", link, exc)

    logger.info("Summarized %d/%d articles from %s", len(articles), len(links), listing_url)
    return articles
