"""
Observability middleware.

Tags every request with a correlation ID and writes one structured log
line when it completes.
"""

import logging
import time
import uuid
from typing import Callable

from django.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# Health and metrics endpoints are scraped constantly; keep them out of INFO logs
QUIET_PREFIXES = ("/health/", "/metrics/")


class ObservabilityMiddleware:
    """
    Middleware for request observability.

    Reuses an incoming ``X-Correlation-ID`` or generates one, exposes it as
    ``request.correlation_id`` and echoes it on the response together with
    the request duration.
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex
        request.correlation_id = correlation_id  # type: ignore

        started = time.perf_counter()
        try:
            response = self.get_response(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra=self._context(request, correlation_id, started, error_type=type(e).__name__),
                exc_info=True,
            )
            raise

        duration = time.perf_counter() - started
        context = self._context(request, correlation_id, started, status_code=response.status_code)
        logger.log(self._level(request, response), "Request completed", extra=context)

        response[CORRELATION_HEADER] = correlation_id
        response["X-Request-Duration"] = f"{duration:.3f}"
        return response

    @staticmethod
    def _level(request: HttpRequest, response: HttpResponse) -> int:
        if response.status_code >= 500:
            return logging.ERROR
        if response.status_code >= 400:
            return logging.WARNING
        if request.path.startswith(QUIET_PREFIXES):
            return logging.DEBUG
        return logging.INFO

    @staticmethod
    def _context(request: HttpRequest, correlation_id: str, started: float, **fields) -> dict:
        context = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            "remote_addr": request.META.get("REMOTE_ADDR"),
            "duration_ms": round((time.perf_counter() - started) * 1000, 2),
        }
        context.update(fields)
        return context
