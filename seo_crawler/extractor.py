import re
from collections import Counter
from urllib.parse import urlparse

from .models import CrawlResult
from .parser import optional, parse_html, source_host


# fixed stop list for the blog keyword report
STOP_WORDS = frozenset({"this", "that", "with", "from", "have", "been", "were"})

MIN_KEYWORD_LENGTH = 4
TOP_KEYWORDS = 10

_KEYWORD_RE = re.compile(r"\b\w{%d,}\b" % MIN_KEYWORD_LENGTH, re.ASCII)


def _is_absolute_http(href: str) -> bool:
    return href.lower().startswith(("http://", "https://"))


def _host_of(href: str) -> str:
    return urlparse(href).hostname or ""


def count_links(hrefs: list[str], url: str) -> tuple[int, int]:
    """
    Return (internal, external) anchor counts for a page served from `url`.

    Internal: root-relative hrefs plus absolute http(s) hrefs on the same host.
    External: absolute http(s) hrefs minus internal, floored at zero.
    """
    host = source_host(url)

    internal = 0
    absolute = 0
    for href in hrefs:
        href = href.strip()
        if href.startswith("/"):
            internal += 1
        elif _is_absolute_http(href):
            absolute += 1
            if optional(_host_of, href) == host:
                internal += 1

    return internal, max(0, absolute - internal)


def extract_seo(html: str, url: str) -> CrawlResult:
    """
    Pure extraction of the SEO field set from raw markup. No I/O.
    Raises UrlParseError if `url` cannot be parsed for its host.
    """
    parsed = parse_html(html)
    internal, external = count_links(parsed["hrefs"], url)

    body_text = parsed["body_text"]
    word_count = len(body_text.split()) if body_text else 0

    return CrawlResult(
        url=url,
        title=parsed["title"],
        meta_description=parsed["meta_description"],
        canonical=parsed["canonical"],
        h1=parsed["h1"],
        h2s=tuple(parsed["h2s"]),
        word_count=word_count,
        schema=parsed["schema"],
        internal_links_count=internal,
        external_links_count=external,
    )


def extract_keywords(text: str, top_n: int = TOP_KEYWORDS) -> dict[str, int]:
    """
    Frequency-ranked keywords: lowercase tokens of 4+ word characters, minus
    stop words. Ties keep first-seen order.
    """
    tokens = _KEYWORD_RE.findall(text.lower())
    counts = Counter(t for t in tokens if t not in STOP_WORDS)
    return dict(counts.most_common(top_n))
