"""
Django implementation of ActivationRepository port.

This adapter converts between domain entities and Django ORM models.
"""

from datetime import datetime
from typing import Optional

from activations.domain.activation import Activation
from activations.infrastructure.models import Activation as ActivationModel
from activations.ports.activation_repository import ActivationRepository
from core.domain.value_objects import ActivationStatus
from core.infrastructure.database import storage_errors


class DjangoActivationRepository(ActivationRepository):
    """
    Django ORM implementation of ActivationRepository.

    Upserts use INSERT ... ON CONFLICT (license_hash, site_url) DO UPDATE,
    so concurrent writers for the same pair resolve to last-writer-wins.
    """

    def _to_domain(self, model: ActivationModel) -> Activation:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Activation model

        Returns:
            Activation domain entity
        """
        return Activation(
            license_hash=model.license_hash,
            site_url=model.site_url,
            status=ActivationStatus.normalize(model.status, ActivationStatus.INACTIVE),
            last_verified_at=model.last_verified_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def find(self, license_hash: str, site_url: str) -> Optional[Activation]:
        with storage_errors("activations.find"):
            # pylint: disable=no-member
            model = ActivationModel.objects.filter(
                license_hash=license_hash, site_url=site_url
            ).first()
        return self._to_domain(model) if model else None

    def upsert(self, activation: Activation) -> None:
        model = ActivationModel(
            license_hash=activation.license_hash,
            site_url=activation.site_url,
            status=activation.status.value,
            last_verified_at=activation.last_verified_at,
            created_at=activation.created_at,
            updated_at=activation.updated_at,
        )
        with storage_errors("activations.upsert"):
            ActivationModel.objects.bulk_create(  # pylint: disable=no-member
                [model],
                update_conflicts=True,
                unique_fields=["license_hash", "site_url"],
                update_fields=["status", "last_verified_at", "updated_at"],
            )

    def deactivate(self, license_hash: str, site_url: str, now: datetime) -> bool:
        with storage_errors("activations.deactivate"):
            # pylint: disable=no-member
            updated = ActivationModel.objects.filter(
                license_hash=license_hash, site_url=site_url
            ).update(status=ActivationStatus.INACTIVE.value, updated_at=now)
        return updated > 0
