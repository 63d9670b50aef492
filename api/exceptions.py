"""
API exception handlers.

This module provides custom exception handling for REST API responses.
"""

import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import ConfigurationError, DomainException, StorageError
from core.metrics import errors_total
from core.middleware.metrics import endpoint_label

logger = logging.getLogger(__name__)


class APIError(APIException):
    """Base API exception with error code."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "An error occurred"
    default_code = "api_error"

    def __init__(self, detail=None, code=None, status_code=None):
        """
        Initialize API error.

        Args:
            detail: Error message
            code: Error code
            status_code: HTTP status code
        """
        if status_code:
            self.status_code = status_code
        if code:
            self.default_code = code
        super().__init__(detail)


class Unauthorized(APIError):
    """Missing or wrong admin token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "unauthorized"
    default_code = "unauthorized"


class AdminTokenNotConfigured(APIError):
    """The service was started without an admin token."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "admin token not configured"
    default_code = "admin_token_not_configured"


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    correlation_id = _get_correlation_id(context)
    endpoint = _get_endpoint(context)

    if isinstance(exc, (StorageError, ConfigurationError)):
        return _internal_error(exc, endpoint, correlation_id)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, correlation_id)
        return _tag(response, correlation_id)

    if isinstance(exc, ValidationError):
        response = exception_handler(exc, context)
        response.data = {"message": "invalid request", "errors": response.data}
        return _tag(response, correlation_id)

    if isinstance(exc, APIException):
        response = exception_handler(exc, context)
        if response is not None:
            detail = response.data.get("detail", exc.default_detail)
            response.data = {"message": str(detail)}
            return _tag(response, correlation_id)

    if isinstance(exc, Http404):
        response = Response({"message": "not found"}, status=status.HTTP_404_NOT_FOUND)
        return _tag(response, correlation_id)

    return _internal_error(exc, endpoint, correlation_id)


def _get_correlation_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract correlation ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "correlation_id", None)


def _get_endpoint(context: Dict[str, Any]) -> str:
    request = context.get("request")
    return endpoint_label(request) if request is not None else "unknown"


def _tag(response: Response, correlation_id: Optional[str]) -> Response:
    if correlation_id:
        response["X-Correlation-ID"] = correlation_id
    return response


def _handle_domain_exception(exc: DomainException, correlation_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    logger.warning(
        "Domain exception: %s - %s", exc.code, exc.message, extra={"correlation_id": correlation_id}
    )
    return Response(
        {"message": exc.message, "code": exc.code}, status=status.HTTP_400_BAD_REQUEST
    )


def _internal_error(exc: Exception, endpoint: str, correlation_id: Optional[str]) -> Response:
    """Log an unhandled failure and hide its detail unless DEBUG is on."""
    errors_total.labels(error_type=type(exc).__name__, endpoint=endpoint).inc()
    logger.error(
        "Unexpected error: %s", exc, extra={"correlation_id": correlation_id}, exc_info=True
    )
    response = Response(
        {"message": "internal error", "error": str(exc) if settings.DEBUG else None},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    return _tag(response, correlation_id)
