"""
License DTOs returned by the license engine.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from core.domain.value_objects import LicenseStatus, Plan


@dataclass(frozen=True)
class LicenseResult:
    """Outcome of activate / verify."""

    status: LicenseStatus
    message: str
    plan: Plan = Plan.FREE
    features: Tuple[str, ...] = field(default_factory=tuple)
    expires_at: Optional[int] = None

    @property
    def is_active(self) -> bool:
        """Whether the boundary should report success."""
        return self.status == LicenseStatus.ACTIVE


@dataclass(frozen=True)
class OperationResult:
    """Outcome of deactivate / issue-or-update."""

    ok: bool
    message: str


@dataclass(frozen=True)
class LicenseListItemDTO:
    """DTO for the administrative license listing (never carries the key)."""

    plan: str
    status: str
    expires_at: Optional[int]
    created_at: datetime
    updated_at: datetime
