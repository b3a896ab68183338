from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    # wire format is camelCase; python side stays snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _UrlRequest(_CamelModel):
    url: Optional[str] = None           # required, but checked in the route so it 400s

    @field_validator("url")
    @classmethod
    def url_must_be_http(cls, v: Optional[str]) -> Optional[str]:
        if v and not v.lower().startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v


class CrawlRequest(_UrlRequest):
    extract_data: bool = True


class BlogCrawlRequest(_UrlRequest):
    pass


class PdfRequest(_CamelModel):
    html: Optional[str] = None
    file_name: str = "report.pdf"


# fields below are all required so a raw-page payload never validates as a crawl result
class CrawlResponse(_CamelModel):
    url: str
    title: str
    meta_description: str
    h1: str
    h2s: list[str] = Field(alias="h2s")    # to_camel would give "h2S"
    word_count: int
    canonical: str
    schema_data: Optional[Any] = Field(alias="schema")
    internal_links_count: int
    external_links_count: int


class RawPageResponse(_CamelModel):
    url: str
    html: str


class ArticleSummaryResponse(_CamelModel):
    url: str
    title: str
    h2s: list[str] = Field(alias="h2s")    # to_camel would give "h2S"
    keywords: dict[str, int]
    published_date: Optional[str] = None
    word_count: int


class BlogCrawlResponse(_CamelModel):
    articles: list[ArticleSummaryResponse]


class PdfResponse(_CamelModel):
    success: bool
    pdf: str                # base64
    file_name: str


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


class EndpointInfo(BaseModel):
    method: str
    path: str
    description: str


class ServiceInfoResponse(BaseModel):
    service: str
    version: str
    endpoints: list[EndpointInfo]


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None
