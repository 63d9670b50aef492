"""
Request signature middleware.

Site-facing license endpoints may be protected by an HMAC-SHA256 of the
raw request body, keyed by a shared secret and sent hex-encoded in a
header. With no secret configured the check is skipped entirely.
"""

import hashlib
import hmac
import logging
from typing import Callable

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse

from core.metrics import errors_total
from core.middleware.metrics import endpoint_label

logger = logging.getLogger(__name__)


def compute_signature(raw_body: bytes, secret: str) -> str:
    """
    Compute the hex HMAC-SHA256 of a request body.

    Args:
        raw_body: Raw request body
        secret: Shared signing secret

    Returns:
        Hex digest
    """
    return hmac.new(secret.encode(), raw_body, hashlib.sha256).hexdigest()


def verify_signature(raw_body: bytes, signature_header: str, secret: str) -> bool:
    """
    Check a signature header against the body.

    Args:
        raw_body: Raw request body
        signature_header: Header value supplied by the client
        secret: Shared signing secret; empty disables verification

    Returns:
        True if the request is acceptable
    """
    if not secret:
        return True
    if not signature_header:
        return False
    expected = compute_signature(raw_body, secret)
    return hmac.compare_digest(expected.encode(), signature_header.strip().encode())


class RequestSignatureMiddleware:
    """
    Rejects unsigned or mis-signed calls to the license endpoints.

    Returns 401 ``{"message": "invalid signature"}`` before any view runs.
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        secret = getattr(settings, "SIGNING_SECRET", "")
        prefix = getattr(settings, "SIGNED_PATH_PREFIX", "/api/v1/license/")

        if secret and request.path.startswith(prefix):
            header_name = getattr(settings, "SIGNATURE_HEADER", "X-EdgeCache-Signature")
            signature = request.headers.get(header_name, "")
            if not verify_signature(request.body, signature, secret):
                errors_total.labels(
                    error_type="invalid_signature", endpoint=endpoint_label(request)
                ).inc()
                logger.warning("Rejected request with invalid signature", extra={"path": request.path})
                return JsonResponse({"message": "invalid signature"}, status=401)

        return self.get_response(request)
