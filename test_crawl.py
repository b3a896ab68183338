"""
Quick smoke test — run with: python test_crawl.py
Hits live sites: one static page, one client-side rendered page (exercises the
headless browser fallback), one blog listing, and renders a small PDF.
Needs network access and `playwright install chromium`.
"""

import asyncio
import base64
import json

from seo_crawler import PdfJob, crawl, crawl_blog, render_pdf

URLS = [
    "https://www.python.org/",
    "https://react.dev/",
]

BLOG_URL = "https://blog.python.org/"


def print_result(data: dict):
    if data.get("html"):
        data["html"] = data["html"][:300] + "..."
    print(json.dumps(data, indent=2, default=str))
    print("-" * 80)


async def main():
    for url in URLS:
        print(f"\n>>> Crawling: {url}\n")
        result = await crawl(url)
        print_result(result.to_dict())

    print(f"\n>>> Crawling blog: {BLOG_URL}\n")
    articles = await crawl_blog(BLOG_URL)
    for article in articles[:3]:
        print_result(article.to_dict())
    print(f"{len(articles)} articles summarized")

    print("\n>>> Rendering PDF\n")
    result = await render_pdf(PdfJob(html="<html><body><h1>Hi</h1></body></html>", file_name="smoke.pdf"))
    pdf_bytes = base64.b64decode(result.pdf)
    print(f"{result.file_name}: {len(pdf_bytes)} bytes, header {pdf_bytes[:8]!r}")


if __name__ == "__main__":
    asyncio.run(main())
