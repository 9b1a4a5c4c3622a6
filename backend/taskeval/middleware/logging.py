"""
Task Evaluator Backend — Access Log Middleware
===============================================

What:  One access-log line per API request.
How:   Times the request and logs it on the "taskeval.access" logger at a
       level chosen by status class (5xx ERROR, 4xx WARNING, else INFO).

Example:
    rid=a1b2c3d4e5f6 POST /api/analyze -> 200 in 3456.8ms (client 192.168.1.100)

Probe and documentation paths are not logged. Request bodies never are:
submitted text and screenshots may be private.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from taskeval.middleware.request_id import request_id_var

logger = logging.getLogger("taskeval.access")

QUIET_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Typical durations:
        - POST /api/summarize: 1-4s (Gemini call + one INSERT)
        - POST /api/analyze: 2-8s (Gemini call dominates)
        - POST /api/analyze-image: 0.5-3s (tesseract)
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        client = request.client.host if request.client else "unknown"
        logger.log(
            level_for_status(response.status_code),
            "rid=%s %s %s -> %d in %.1fms (client %s)",
            request_id_var.get(""),
            request.method,
            path,
            response.status_code,
            duration_ms,
            client,
        )
        return response
