"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone

import pytest

from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from core.infrastructure.audit_log_adapters import DjangoAuditLog
from core.infrastructure.rate_limit_adapters import DjangoRateLimiter
from licenses.application.services.license_engine import LicenseEngine
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

MASTER_KEY = "EDGE-MASTER-0000"
ADMIN_TOKEN = "test-admin-token"


class FakeClock:
    """Controllable clock returning aware datetimes."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: int) -> None:
        self.current = self.current + timedelta(seconds=seconds)

    @property
    def timestamp(self) -> int:
        return int(self.current.timestamp())


@pytest.fixture
def clock():
    """Fixture for a clock frozen at a fixed instant."""
    return FakeClock(datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def master_key():
    """The bootstrap key the engine fixture is configured with."""
    return MASTER_KEY


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def activation_repository():
    """Fixture for ActivationRepository."""
    return DjangoActivationRepository()


@pytest.fixture
def rate_limiter(clock):
    """Fixture for the database-backed RateLimiter."""
    return DjangoRateLimiter(clock=clock)


@pytest.fixture
def audit_log(clock):
    """Fixture for AuditLog."""
    return DjangoAuditLog(clock=clock)


@pytest.fixture
def engine(db, license_repository, activation_repository, rate_limiter, audit_log, clock):
    """Fixture for a LicenseEngine wired to the Django stores."""
    return LicenseEngine(
        license_repository=license_repository,
        activation_repository=activation_repository,
        rate_limiter=rate_limiter,
        audit_log=audit_log,
        master_key=MASTER_KEY,
        rate_limit_window=60,
        rate_limit_max=100,
        clock=clock,
    )


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def admin_headers():
    """Headers carrying the admin token configured in test settings."""
    return {"HTTP_X_EDGECACHE_ADMIN_TOKEN": ADMIN_TOKEN}
