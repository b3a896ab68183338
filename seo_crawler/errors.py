from typing import Optional


class CrawlerError(Exception):
    """
    Base error for the service. Carries the HTTP status the API layer should
    answer with and a short, client-facing `error` label.
    """

    status_code = 500
    error = "Internal server error"

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        if error is not None:
            self.error = error


class MissingInputError(CrawlerError):
    status_code = 400
    error = "Missing required input"


class FetchError(CrawlerError):
    error = "Failed to crawl URL"


class BrowserError(CrawlerError):
    error = "Headless browser failed"


class RenderError(CrawlerError):
    error = "Failed to generate PDF"


class UrlParseError(CrawlerError, ValueError):
    error = "Invalid URL"
