"""
Phonebook Backend — Request Logging Middleware
===============================================

What:  One access-log line for every HTTP request, written after completion.
How:   Reads (and caches) the request body, times the downstream call, then
       logs method, URL, status, response length, duration and body.
Who:   Applied to every request via Starlette middleware.
When:  Inside RequestIDMiddleware (uses the request ID for correlation).

Log Line:
    POST /api/persons 200 52 - 3.412 ms {"name":"Ada","number":"1"} [a1b2c3d4]

    - length is the Content-Length of the response, "-" when there is none
      (e.g. 204 responses)
    - body is the JSON request body re-serialized compactly; "{}" when the
      request had no body, "-" when the body is not valid JSON

Logging is a pure side effect: the response is returned untouched.
"""

import json
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from phonebook.middleware.request_id import request_id_var

logger = logging.getLogger("phonebook.access")


def serialize_body(raw: bytes) -> str:
    """Compact JSON rendering of a request body for the access log."""
    if not raw.strip():
        return "{}"
    try:
        decoded = json.loads(raw)
    except (UnicodeDecodeError, ValueError):
        return "-"
    return json.dumps(decoded, separators=(",", ":"), ensure_ascii=False)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, URL, status, response length, duration and request body.

    Log level follows the status code:
        5xx → ERROR, 4xx → WARNING, everything else → INFO

    An exception escaping the route is logged as a 500 with no length and
    then re-raised for the server error handler to answer.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        # Starlette caches the body, so handlers can still read it
        raw_body = await request.body()

        try:
            response = await call_next(request)
        except Exception:
            self.log_request(request, raw_body, 500, "-", start_time)
            raise

        length = response.headers.get("content-length", "-")
        self.log_request(request, raw_body, response.status_code, length, start_time)
        return response

    def log_request(
        self,
        request: Request,
        raw_body: bytes,
        status: int,
        length: str,
        start_time: float,
    ) -> None:
        duration_ms = (time.perf_counter() - start_time) * 1000

        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        url = request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"
        body = serialize_body(raw_body)
        rid = request_id_var.get("")

        logger.log(
            log_level,
            "%s %s %d %s - %.3f ms %s [%s]",
            request.method,
            url,
            status,
            length,
            duration_ms,
            body,
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 3),
            },
        )
