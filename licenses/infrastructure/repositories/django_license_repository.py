"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from typing import List, Optional

from core.domain.value_objects import LicenseStatus, Plan
from core.infrastructure.database import storage_errors
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Upserts with INSERT ... ON CONFLICT (key_hash) DO UPDATE
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        features = model.features if isinstance(model.features, list) else []
        return License(
            key_hash=model.key_hash,
            plan=Plan.normalize(model.plan, Plan.PRO),
            status=LicenseStatus.normalize(model.status, LicenseStatus.INVALID),
            features=tuple(str(feature) for feature in features),
            expires_at=model.expires_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, license: License) -> LicenseModel:
        """
        Convert domain entity to an unsaved Django model.

        Args:
            license: License domain entity

        Returns:
            Django License model
        """
        return LicenseModel(
            key_hash=license.key_hash,
            plan=license.plan.value,
            status=license.status.value,
            features=list(license.features),
            expires_at=license.expires_at,
            created_at=license.created_at,
            updated_at=license.updated_at,
        )

    def find_by_key_hash(self, key_hash: str) -> Optional[License]:
        with storage_errors("licenses.find"):
            model = LicenseModel.objects.filter(key_hash=key_hash).first()  # pylint: disable=no-member
        return self._to_domain(model) if model else None

    def upsert(self, license: License) -> None:
        with storage_errors("licenses.upsert"):
            LicenseModel.objects.bulk_create(  # pylint: disable=no-member
                [self._to_model(license)],
                update_conflicts=True,
                unique_fields=["key_hash"],
                update_fields=["plan", "status", "features", "expires_at", "updated_at"],
            )

    def list_recent(self, limit: int) -> List[License]:
        with storage_errors("licenses.list"):
            models = list(
                LicenseModel.objects.order_by("-created_at", "-id")[:limit]  # pylint: disable=no-member
            )
        return [self._to_domain(model) for model in models]
