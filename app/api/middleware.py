"""
Request logging middleware.
Tags every request with an ID, logs its outcome and timing, and echoes the
ID back in the X-Request-ID response header.
"""
import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
USER_ID_HEADER = "X-User-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request with request and user context."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        context = {
            "request_id": request_id,
            "user_id": request.headers.get(USER_ID_HEADER),
        }
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.exception(
                f"Request failed: {request.method} {request.url.path} "
                f"elapsed_ms={elapsed_ms:.2f}",
                extra=context,
            )
            raise

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"elapsed_ms={elapsed_ms:.2f}",
            extra=context,
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
