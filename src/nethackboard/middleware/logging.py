# src/nethackboard/middleware/logging.py

"""Request/response logging middleware for the dashboard."""

import logging
import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("nethackboard.web")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each page request with its status and duration.

    A request ID supplied by a proxy is reused; otherwise a short one is
    generated. Either way it is echoed back in the X-Request-ID header.
    Query strings are logged because they carry the view's sort/filter state.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        started = time.perf_counter()
        context = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": str(request.query_params),
        }

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "[%s] %s %s -> ERROR (%.2fms): %s",
                request_id,
                request.method,
                request.url.path,
                (time.perf_counter() - started) * 1000,
                e,
                extra=context,
                exc_info=True,
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "[%s] %s %s%s -> %d (%.2fms)",
            request_id,
            request.method,
            request.url.path,
            f"?{request.query_params}" if request.query_params else "",
            response.status_code,
            duration_ms,
            extra={
                **context,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response  # type: ignore[no-any-return]
