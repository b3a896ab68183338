from dataclasses import dataclass, field
from typing import Any, Optional, Union


@dataclass(frozen=True)
class CrawlResult:
    url: str

    # standard meta
    title: str = ""
    meta_description: str = ""
    canonical: str = ""

    # headings
    h1: str = ""                            # first <h1> only
    h2s: tuple[str, ...] = ()               # every <h2>, document order

    # derived
    word_count: int = 0
    schema: Optional[Any] = None            # first JSON-LD block, parsed
    internal_links_count: int = 0
    external_links_count: int = 0

    def to_dict(self) -> dict:
        data = {k: v for k, v in self.__dict__.items()}
        data["h2s"] = list(self.h2s)
        return data


@dataclass(frozen=True)
class RawPageResult:
    """Returned instead of a CrawlResult when the caller skips extraction."""
    url: str
    html: str

    def to_dict(self) -> dict:
        return {k: v for k, v in self.__dict__.items()}


PageResult = Union[CrawlResult, RawPageResult]


@dataclass(frozen=True)
class ArticleSummary:
    url: str
    title: str = ""
    h2s: tuple[str, ...] = ()
    keywords: dict[str, int] = field(default_factory=dict)   # top 10, by descending count
    published_date: Optional[str] = None                      # <time datetime="..."> as written
    word_count: int = 0

    def to_dict(self) -> dict:
        data = {k: v for k, v in self.__dict__.items()}
        data["h2s"] = list(self.h2s)
        data["keywords"] = dict(self.keywords)
        return data


@dataclass(frozen=True)
class PdfJob:
    html: str
    file_name: str = "report.pdf"


@dataclass(frozen=True)
class PdfResult:
    pdf: str                                # base64-encoded PDF bytes
    file_name: str
    success: bool = True

    def to_dict(self) -> dict:
        return {k: v for k, v in self.__dict__.items()}
