"""
License validation and activation engine.

The engine decides, for a raw license key and a consuming site, whether
the site is entitled (active / inactive / expired / invalid), keeps the
per-site activation bindings current, throttles callers and records an
audit trail. It keeps no state between calls: every decision re-reads the
stores it was constructed with.
"""

import logging
import secrets
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from django.utils import timezone

from activations.domain.activation import Activation
from activations.ports.activation_repository import ActivationRepository
from core.domain.exceptions import ConfigurationError
from core.domain.hashing import hash_license_key, limiter_key
from core.domain.value_objects import LicenseStatus, Plan
from core.infrastructure.audit_log import AuditLog
from core.infrastructure.rate_limit import RateLimiter
from core.metrics import license_operations_total, licenses_bootstrapped_total, rate_limited_total
from licenses.application.dto.license_dto import (
    LicenseListItemDTO,
    LicenseResult,
    OperationResult,
)
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

MSG_REQUIRED = "license_key and site_url are required"
MSG_KEY_REQUIRED = "license_key is required"
MSG_RATE_LIMITED = "rate limit exceeded"
MSG_INVALID_KEY = "invalid license key"
MSG_NOT_ACTIVE = "license is not active"
MSG_INACTIVE = "license inactive"
MSG_EXPIRED = "license expired"
MSG_ACTIVATED = "license activated"
MSG_VALID = "license valid"
MSG_DEACTIVATED = "deactivated"
MSG_ACTIVATION_NOT_FOUND = "activation not found"
MSG_UPSERTED = "license upserted"

DEFAULT_LIST_LIMIT = 100


class LicenseEngine:
    """Orchestrates hashing, throttling, stores and audit log."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        activation_repository: ActivationRepository,
        rate_limiter: RateLimiter,
        audit_log: AuditLog,
        master_key: str = "",
        rate_limit_window: int = 60,
        rate_limit_max: int = 60,
        clock: Callable[[], datetime] = timezone.now,
    ):
        """
        Initialize engine with its collaborators and configuration.

        Args:
            license_repository: License store
            activation_repository: Activation store
            rate_limiter: Fixed-window limiter
            audit_log: Append-only event recorder
            master_key: Bootstrap key; empty disables bootstrap
            rate_limit_window: Window length in seconds
            rate_limit_max: Requests allowed per window
            clock: Returns the current aware datetime

        Raises:
            ConfigurationError: If the rate limit settings are unusable
        """
        if rate_limit_window <= 0:
            raise ConfigurationError("Rate limit window must be a positive number of seconds")
        if rate_limit_max <= 0:
            raise ConfigurationError("Rate limit must allow at least one request per window")

        self.license_repository = license_repository
        self.activation_repository = activation_repository
        self.rate_limiter = rate_limiter
        self.audit_log = audit_log
        self.master_key = (master_key or "").strip()
        self.rate_limit_window = rate_limit_window
        self.rate_limit_max = rate_limit_max
        self.clock = clock

    def activate(self, license_key: str, site_url: str, caller_address: str) -> LicenseResult:
        """
        Bind a license to a site.

        Unknown keys equal to the configured master key are provisioned
        as a pro license on first use.

        Args:
            license_key: Raw license key
            site_url: Consuming site identifier
            caller_address: Remote address of the caller

        Returns:
            LicenseResult
        """
        license_key = (license_key or "").strip()
        site_url = (site_url or "").strip()

        rejected = self._precheck("activate", license_key, site_url, caller_address)
        if rejected:
            return rejected

        now = self.clock()
        key_hash = hash_license_key(license_key)
        stored = self.license_repository.find_by_key_hash(key_hash)

        if stored is not None:
            if not stored.is_active:
                return self._finish("activate", LicenseResult(LicenseStatus.INVALID, MSG_NOT_ACTIVE))
            if stored.is_expired(now):
                return self._finish("activate", self._expired(stored))

            self.activation_repository.upsert(Activation.create(key_hash, site_url, now))
            self.audit_log.record("license.activate", {"site_url": site_url, "via": "stored"})
            logger.info("License activated for %s", site_url, extra={"via": "stored"})
            return self._finish("activate", self._active(stored, MSG_ACTIVATED))

        if self._is_master_key(license_key):
            bootstrapped = License.bootstrap(key_hash, now)
            self.license_repository.upsert(bootstrapped)
            self.activation_repository.upsert(Activation.create(key_hash, site_url, now))
            self.audit_log.record("license.activate", {"site_url": site_url, "via": "master_key"})
            licenses_bootstrapped_total.inc()
            logger.info("License bootstrapped from master key for %s", site_url)
            return self._finish("activate", self._active(bootstrapped, MSG_ACTIVATED))

        self.audit_log.record("license.activate_invalid", {"site_url": site_url})
        logger.warning("Activation attempted with unknown license key for %s", site_url)
        return self._finish("activate", LicenseResult(LicenseStatus.INVALID, MSG_INVALID_KEY))

    def verify(self, license_key: str, site_url: str, caller_address: str) -> LicenseResult:
        """
        Re-check a license for a site and refresh its activation.

        Args:
            license_key: Raw license key
            site_url: Consuming site identifier
            caller_address: Remote address of the caller

        Returns:
            LicenseResult
        """
        license_key = (license_key or "").strip()
        site_url = (site_url or "").strip()

        rejected = self._precheck("verify", license_key, site_url, caller_address)
        if rejected:
            return rejected

        now = self.clock()
        key_hash = hash_license_key(license_key)
        stored = self.license_repository.find_by_key_hash(key_hash)

        if stored is None:
            return self._finish("verify", LicenseResult(LicenseStatus.INVALID, MSG_INVALID_KEY))
        if not stored.is_active:
            return self._finish("verify", LicenseResult(LicenseStatus.INACTIVE, MSG_INACTIVE))
        if stored.is_expired(now):
            return self._finish("verify", self._expired(stored))

        self.activation_repository.upsert(Activation.create(key_hash, site_url, now))
        self.audit_log.record("license.verify", {"site_url": site_url})
        return self._finish("verify", self._active(stored, MSG_VALID))

    def deactivate(self, license_key: str, site_url: str) -> OperationResult:
        """
        Mark the activation of a license on a site inactive.

        Args:
            license_key: Raw license key
            site_url: Consuming site identifier

        Returns:
            OperationResult; ok is False when no activation existed
        """
        license_key = (license_key or "").strip()
        site_url = (site_url or "").strip()

        if not license_key or not site_url:
            return OperationResult(ok=False, message=MSG_REQUIRED)

        deactivated = self.activation_repository.deactivate(
            hash_license_key(license_key), site_url, self.clock()
        )
        self.audit_log.record("license.deactivate", {"site_url": site_url, "ok": deactivated})
        license_operations_total.labels(
            operation="deactivate", status="ok" if deactivated else "not_found"
        ).inc()

        return OperationResult(
            ok=deactivated,
            message=MSG_DEACTIVATED if deactivated else MSG_ACTIVATION_NOT_FOUND,
        )

    def issue_or_update_license(
        self,
        license_key: str,
        plan: Optional[str],
        status: Optional[str],
        features: Iterable[str],
        expires_at: Optional[int],
    ) -> OperationResult:
        """
        Create a license or fully replace an existing one.

        Unrecognised plans fall back to pro and unrecognised statuses to
        active. Features are trimmed and empty names dropped, order and
        duplicates kept.

        Args:
            license_key: Raw license key
            plan: Plan name
            status: Status name
            features: Feature names
            expires_at: Unix timestamp, None or <= 0 for no expiry

        Returns:
            OperationResult
        """
        license_key = (license_key or "").strip()
        if not license_key:
            return OperationResult(ok=False, message=MSG_KEY_REQUIRED)

        license = License.create(
            key_hash=hash_license_key(license_key),
            plan=Plan.normalize(plan, Plan.PRO),
            status=LicenseStatus.normalize(status, LicenseStatus.ACTIVE),
            features=features,
            expires_at=expires_at,
            now=self.clock(),
        )
        self.license_repository.upsert(license)
        self.audit_log.record(
            "license.issue", {"plan": license.plan.value, "status": license.status.value}
        )
        license_operations_total.labels(operation="issue", status=license.status.value).inc()
        logger.info("License upserted", extra={"plan": license.plan.value, "status": license.status.value})

        return OperationResult(ok=True, message=MSG_UPSERTED)

    def list_licenses(self, limit: int = DEFAULT_LIST_LIMIT) -> List[LicenseListItemDTO]:
        """
        List the most recently created licenses, newest first.

        Args:
            limit: Maximum number of licenses

        Returns:
            List of LicenseListItemDTO (no key material)
        """
        licenses = self.license_repository.list_recent(max(0, limit))
        return [
            LicenseListItemDTO(
                plan=license.plan.value,
                status=license.status.value,
                expires_at=license.expires_at,
                created_at=license.created_at,
                updated_at=license.updated_at,
            )
            for license in licenses
        ]

    def _precheck(
        self, operation: str, license_key: str, site_url: str, caller_address: str
    ) -> Optional[LicenseResult]:
        """Required-field check and rate limiting shared by activate and verify."""
        if not license_key or not site_url:
            return self._finish(operation, LicenseResult(LicenseStatus.INVALID, MSG_REQUIRED))

        limited = self.rate_limiter.hit(
            limiter_key(license_key, caller_address or ""),
            self.rate_limit_window,
            self.rate_limit_max,
        )
        if limited:
            rate_limited_total.labels(operation=operation).inc()
            logger.warning("Rate limit exceeded on %s for %s", operation, site_url)
            return self._finish(operation, LicenseResult(LicenseStatus.INACTIVE, MSG_RATE_LIMITED))

        return None

    def _is_master_key(self, license_key: str) -> bool:
        """Constant-time comparison against the configured master key."""
        if not self.master_key:
            return False
        return secrets.compare_digest(self.master_key.encode(), license_key.encode())

    @staticmethod
    def _active(license: License, message: str) -> LicenseResult:
        return LicenseResult(
            status=LicenseStatus.ACTIVE,
            message=message,
            plan=license.plan,
            features=license.features,
            expires_at=license.expires_at,
        )

    @staticmethod
    def _expired(license: License) -> LicenseResult:
        return LicenseResult(LicenseStatus.EXPIRED, MSG_EXPIRED, expires_at=license.expires_at)

    @staticmethod
    def _finish(operation: str, result: LicenseResult) -> LicenseResult:
        license_operations_total.labels(operation=operation, status=result.status.value).inc()
        return result
