"""
Request context middleware

Assigns every request an ID (reusing a client supplied X-Request-ID when
present), exposes it on ``request.state.request_id`` and the response headers,
and writes one access log line per request with its status and duration.
"""

import logging
import secrets
import time
from datetime import datetime

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def generate_request_id() -> str:
    return f"{datetime.now():%Y%m%d%H%M%S}-{secrets.token_hex(3)}"


class RequestContextMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, exclude_paths: list[str] | None = None):
        super().__init__(app)
        self.exclude_paths = exclude_paths or []

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        request.state.request_id = request_id

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"{request.method} {request.url.path} [{request_id}] - Error: {str(e)}")
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id

        if request.url.path in self.exclude_paths:
            return response

        message = (
            f"{request.method} {request.url.path} {response.status_code} "
            f"{duration_ms:.1f}ms [{request_id}]"
        )
        if response.status_code >= 500:
            logger.error(message)
        elif response.status_code >= 400:
            logger.warning(message)
        else:
            logger.info(message)

        return response
