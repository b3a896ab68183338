from .core import crawl
from .blog import crawl_blog
from .pdf import render_pdf
from .fetcher import fetch_page
from .extractor import extract_seo, extract_keywords
from .models import ArticleSummary, CrawlResult, PdfJob, PdfResult, RawPageResult

__all__ = [
    "crawl",
    "crawl_blog",
    "render_pdf",
    "fetch_page",
    "extract_seo",
    "extract_keywords",
    "ArticleSummary",
    "CrawlResult",
    "PdfJob",
    "PdfResult",
    "RawPageResult",
]
