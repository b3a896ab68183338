import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from seo_crawler.errors import CrawlerError

from .config import HOST, LOG_LEVEL, PORT, SERVICE_TITLE, SERVICE_VERSION
from .middleware import BodySizeLimitMiddleware, RequestLoggingMiddleware
from .routes import router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title=SERVICE_TITLE,
    description=(
        "Crawls pages for SEO metadata (static fetch with a headless-browser fallback "
        "for JS-rendered sites), summarizes blog articles, and renders HTML to PDF."
    ),
    version=SERVICE_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# middleware stack — outermost runs first on request, last on response
app.add_middleware(BodySizeLimitMiddleware)
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(CrawlerError)
async def crawler_error_handler(request: Request, exc: CrawlerError):
    if exc.status_code < 500:
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})

    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "message": str(exc)},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # malformed bodies are client errors; report them like missing input
    messages = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'][1:])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse(status_code=400, content={"error": "Invalid request body", "message": messages})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": str(exc)},
    )


app.include_router(router)


def run() -> None:
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
