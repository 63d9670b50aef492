"""
Activation domain entity.

This is the core domain entity representing a license activation.
It contains business logic and is independent of infrastructure.
"""

from dataclasses import dataclass
from datetime import datetime

from core.domain.value_objects import ActivationStatus


@dataclass(frozen=True)
class Activation:
    """
    Activation domain entity.

    Binds a license (by key hash) to a consuming site. The pair
    (license_hash, site_url) identifies at most one activation.
    """

    license_hash: str
    site_url: str
    status: ActivationStatus
    last_verified_at: datetime
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate activation entity."""
        if not self.license_hash:
            raise ValueError("License hash is required")
        if not self.site_url or len(self.site_url.strip()) == 0:
            raise ValueError("Site URL cannot be empty")

    @classmethod
    def create(cls, license_hash: str, site_url: str, now: datetime) -> "Activation":
        """
        Create an active binding verified at ``now``.

        Upserting this entity over an existing row refreshes status,
        last_verified_at and updated_at and keeps the original created_at.

        Args:
            license_hash: Digest of the raw license key
            site_url: Consuming site identifier
            now: Current time

        Returns:
            Activation entity instance
        """
        return cls(
            license_hash=license_hash,
            site_url=site_url,
            status=ActivationStatus.ACTIVE,
            last_verified_at=now,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_active(self) -> bool:
        """Whether the binding is currently active."""
        return self.status == ActivationStatus.ACTIVE
