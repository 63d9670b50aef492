"""
License domain entity.

This is the core domain entity representing a license.
It contains business logic and is independent of infrastructure.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Tuple

from core.domain.value_objects import LicenseStatus, Plan

BOOTSTRAP_FEATURES = ("prefetch", "analytics")


def clean_features(features: Iterable[str]) -> Tuple[str, ...]:
    """
    Trim feature names and drop empty ones.

    Entries that are not strings (null, numbers, objects) are dropped.
    Order is preserved and duplicates are kept.

    Args:
        features: Raw feature names

    Returns:
        Cleaned tuple of feature names
    """
    cleaned = (feature.strip() for feature in features if isinstance(feature, str))
    return tuple(feature for feature in cleaned if feature)


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Identified by the SHA-256 digest of its raw key; the raw key itself
    is never held by the entity.
    """

    key_hash: str
    plan: Plan
    status: LicenseStatus
    features: Tuple[str, ...]
    expires_at: Optional[int]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate license entity."""
        if not self.key_hash or len(self.key_hash) != 64:
            raise ValueError("Invalid key hash")

    @classmethod
    def create(
        cls,
        key_hash: str,
        plan: Plan,
        status: LicenseStatus,
        features: Iterable[str],
        expires_at: Optional[int],
        now: datetime,
    ) -> "License":
        """
        Create a new License entity.

        Args:
            key_hash: Digest of the raw license key
            plan: Plan tier
            status: Lifecycle status
            features: Feature names (cleaned on the way in)
            expires_at: Unix timestamp, None or <= 0 for no expiry
            now: Creation time

        Returns:
            License entity instance
        """
        return cls(
            key_hash=key_hash,
            plan=plan,
            status=status,
            features=clean_features(features),
            expires_at=expires_at,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def bootstrap(cls, key_hash: str, now: datetime) -> "License":
        """Create the pro license provisioned on first use of the master key."""
        return cls.create(
            key_hash=key_hash,
            plan=Plan.PRO,
            status=LicenseStatus.ACTIVE,
            features=BOOTSTRAP_FEATURES,
            expires_at=None,
            now=now,
        )

    @property
    def is_active(self) -> bool:
        """Whether the stored status is active (expiry not considered)."""
        return self.status == LicenseStatus.ACTIVE

    @property
    def has_expiry(self) -> bool:
        """Whether the license carries a real expiry timestamp."""
        return self.expires_at is not None and self.expires_at > 0

    def is_expired(self, current_time: datetime) -> bool:
        """
        Check if the license has expired.

        Args:
            current_time: Time to check against

        Returns:
            True if an expiry is set and lies before current_time
        """
        return self.has_expiry and self.expires_at < int(current_time.timestamp())
