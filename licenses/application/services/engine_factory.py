"""
License engine construction from Django settings.
"""
from django.conf import settings

from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from core.infrastructure.audit_log_adapters import DjangoAuditLog
from core.infrastructure.rate_limit_adapters import DjangoRateLimiter
from licenses.application.services.license_engine import LicenseEngine
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository


def build_license_engine() -> LicenseEngine:
    """
    Build a LicenseEngine wired to the Django stores.

    Reads ``settings.LICENSE_ENGINE`` (MASTER_KEY, RATE_LIMIT_WINDOW_SECONDS,
    RATE_LIMIT_MAX_REQUESTS) on every call, so overridden settings take
    effect immediately.

    Returns:
        Configured LicenseEngine
    """
    config = getattr(settings, "LICENSE_ENGINE", {})
    return LicenseEngine(
        license_repository=DjangoLicenseRepository(),
        activation_repository=DjangoActivationRepository(),
        rate_limiter=DjangoRateLimiter(),
        audit_log=DjangoAuditLog(),
        master_key=config.get("MASTER_KEY", ""),
        rate_limit_window=int(config.get("RATE_LIMIT_WINDOW_SECONDS", 60)),
        rate_limit_max=int(config.get("RATE_LIMIT_MAX_REQUESTS", 60)),
    )
