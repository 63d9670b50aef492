"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. The enums below are the closed alphabets used
by licenses, activations and engine results.
"""
from enum import Enum
from typing import Optional


class NormalizableEnum(Enum):
    """Enum that can coerce loosely-typed input into a member."""

    @classmethod
    def normalize(cls, value: Optional[str], default: "NormalizableEnum"):
        """
        Map a raw string onto a member, falling back to a default.

        Matching is exact (case-sensitive), mirroring how values are
        stored in the database.

        Args:
            value: Raw value supplied by a caller
            default: Member returned when value is not recognised

        Returns:
            Matching enum member or default
        """
        for member in cls:
            if member.value == value:
                return member
        return default

    def __str__(self) -> str:
        """Return the stored value."""
        return self.value


class LicenseStatus(NormalizableEnum):
    """License status value object."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    INVALID = "invalid"


class Plan(NormalizableEnum):
    """Plan tier of a license."""

    FREE = "free"
    PRO = "pro"
    ENTERPRISE = "enterprise"


class ActivationStatus(NormalizableEnum):
    """Status of a license-to-site binding."""

    ACTIVE = "active"
    INACTIVE = "inactive"
