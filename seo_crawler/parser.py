import json
import re
from typing import Any, Callable, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from .errors import UrlParseError

# tags whose text never renders for a visitor
_INVISIBLE_TAGS = ["script", "style", "noscript", "template"]


def optional(func: Callable[..., Any], *args: Any, default: Any = None) -> Any:
    """
    Call func(*args), mapping the usual parse failures to `default`.
    Used for opportunistic fields (JSON-LD, dates) that must never sink a crawl.
    """
    try:
        return func(*args)
    except (ValueError, TypeError, KeyError, AttributeError):
        return default


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "lxml")


def source_host(url: str) -> str:
    """Hostname of `url`, lowercased. Raises UrlParseError for malformed URLs."""
    try:
        host = urlparse(url).hostname
    except ValueError as exc:
        raise UrlParseError(f"Cannot parse URL {url!r}: {exc}") from exc
    if not host:
        raise UrlParseError(f"URL {url!r} has no host")
    return host


def clean_text(raw: str) -> str:
    """Collapse whitespace and strip control characters from extracted text."""
    text = re.sub(r"[\r\n\t]+", " ", raw)
    text = re.sub(r" {2,}", " ", text)
    return text.strip()


def first_text(soup: BeautifulSoup, name: str) -> str:
    tag = soup.find(name)
    return clean_text(tag.get_text()) if tag else ""


def all_texts(soup: BeautifulSoup, name: str) -> list[str]:
    return [clean_text(tag.get_text()) for tag in soup.find_all(name)]


def _get_meta(soup: BeautifulSoup, name: str) -> str:
    tag = soup.find("meta", attrs={"name": name})
    if tag:
        return (tag.get("content") or "").strip()
    return ""


def _json_ld(soup: BeautifulSoup) -> Optional[Any]:
    tag = soup.find("script", attrs={"type": "application/ld+json"})
    if not tag:
        return None
    return optional(json.loads, tag.string or tag.get_text())


def parse_html(html: str) -> dict:
    """
    Parse raw HTML and return a flat dict of the signals the extractor needs.
    Link classification and counting happen in the extractor layer.
    """
    soup = make_soup(html)

    canonical_tag = soup.find("link", rel="canonical")

    signals = {
        "title": first_text(soup, "title"),
        "meta_description": _get_meta(soup, "description"),
        "canonical": (canonical_tag.get("href") or "").strip() if canonical_tag else "",
        "h1": first_text(soup, "h1"),
        "h2s": all_texts(soup, "h2"),
        "schema": _json_ld(soup),
        "hrefs": [a["href"] for a in soup.find_all("a", href=True)],
    }

    # --- body text: drop non-rendered content first ---
    for tag in soup(_INVISIBLE_TAGS):
        tag.decompose()

    body = soup.find("body")
    raw_body_text = body.get_text(separator=" ") if body else soup.get_text(separator=" ")
    signals["body_text"] = clean_text(raw_body_text)

    return signals
