import time
import logging

from fastapi import Request
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from .config import MAX_BODY_BYTES

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    """
    Reject request bodies over the cap with a 413.

    A declared Content-Length is checked up front. Bodies without one
    (chunked uploads) are counted as they arrive and replayed downstream
    once they are known to fit.
    """

    def __init__(self, app, max_body_bytes: int = MAX_BODY_BYTES):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit():
            if int(content_length) > self.max_body_bytes:
                await self._reject(scope, receive, send, content_length)
                return
            await self.app(scope, receive, send)
            return

        chunks = []
        received = 0
        while True:
            message = await receive()
            if message["type"] != "http.request":
                # client went away before finishing the body
                return
            chunk = message.get("body", b"")
            received += len(chunk)
            if received > self.max_body_bytes:
                await self._reject(scope, receive, send, f"more than {received}")
                return
            chunks.append(chunk)
            if not message.get("more_body", False):
                break

        body = b"".join(chunks)
        replayed = False

        async def replay_receive():
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay_receive, send)

    async def _reject(self, scope, receive, send, size: str):
        logger.warning(
            "Rejected %s %s: body of %s bytes exceeds %d",
            scope["method"], scope["path"], size, self.max_body_bytes,
        )
        response = JSONResponse(
            status_code=413,
            content={
                "error": "Request body too large",
                "message": f"Request bodies are limited to {self.max_body_bytes} bytes.",
            },
        )
        await response(scope, receive, send)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        duration_ms = int((time.time() - start) * 1000)
        logger.info(
            "%s %s -> %d (%dms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response
