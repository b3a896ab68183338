import logging
from typing import Union

from fastapi import APIRouter

from seo_crawler.blog import crawl_blog
from seo_crawler.core import crawl
from seo_crawler.errors import MissingInputError
from seo_crawler.models import CrawlResult, PdfJob
from seo_crawler.pdf import render_pdf

from .config import SERVICE_NAME, SERVICE_TITLE, SERVICE_VERSION
from .schemas import (
    ArticleSummaryResponse,
    BlogCrawlRequest,
    BlogCrawlResponse,
    CrawlRequest,
    CrawlResponse,
    EndpointInfo,
    ErrorResponse,
    HealthResponse,
    PdfRequest,
    PdfResponse,
    RawPageResponse,
    ServiceInfoResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}

ENDPOINTS = [
    EndpointInfo(method="POST", path="/crawl", description="Crawl a single page (static fetch, headless browser fallback)"),
    EndpointInfo(method="POST", path="/crawl-blog", description="Crawl blog/article pages"),
    EndpointInfo(method="POST", path="/generate-pdf", description="Generate PDF from HTML"),
    EndpointInfo(method="GET", path="/health", description="Health check"),
]


@router.post(
    "/crawl",
    response_model=Union[CrawlResponse, RawPageResponse],
    responses=_ERROR_RESPONSES,
    summary="Crawl a URL and extract SEO metadata",
)
async def crawl_url(request: CrawlRequest):
    """
    Fetches the page statically and extracts title, meta description,
    headings, word count, canonical, JSON-LD and link counts.

    - Falls back to a headless browser when the static markup looks empty
      (no words, or neither an h1 nor any h2).
    - Set `extractData: false` to get the page markup back instead.
    """
    if not request.url:
        raise MissingInputError("URL is required")

    result = await crawl(request.url, extract_data=request.extract_data)

    if isinstance(result, CrawlResult):
        return CrawlResponse(**result.to_dict())
    return RawPageResponse(**result.to_dict())


@router.post(
    "/crawl-blog",
    response_model=BlogCrawlResponse,
    responses=_ERROR_RESPONSES,
    summary="Summarize the articles linked from a blog listing",
)
async def crawl_blog_url(request: BlogCrawlRequest) -> BlogCrawlResponse:
    """
    Collects up to 20 article links (`/blog/`, `/article/`, `/post/`) from the
    listing page and returns title, h2s, top keywords, publish date and word
    count for each article that could be fetched.
    """
    if not request.url:
        raise MissingInputError("URL is required")

    articles = await crawl_blog(request.url)
    return BlogCrawlResponse(articles=[ArticleSummaryResponse(**a.to_dict()) for a in articles])


@router.post(
    "/generate-pdf",
    response_model=PdfResponse,
    responses=_ERROR_RESPONSES,
    summary="Render HTML to a base64-encoded A4 PDF",
)
async def generate_pdf(request: PdfRequest) -> PdfResponse:
    if not request.html:
        raise MissingInputError("HTML content is required")

    result = await render_pdf(PdfJob(html=request.html, file_name=request.file_name))
    return PdfResponse(**result.to_dict())


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", service=SERVICE_NAME, version=SERVICE_VERSION)


@router.get("/", response_model=ServiceInfoResponse, summary="Service descriptor")
async def service_info() -> ServiceInfoResponse:
    return ServiceInfoResponse(service=SERVICE_TITLE, version=SERVICE_VERSION, endpoints=ENDPOINTS)
