"""
Activation repository port (interface).

This defines the contract for activation persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from activations.domain.activation import Activation


class ActivationRepository(ABC):
    """
    Abstract repository for Activation entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    def find(self, license_hash: str, site_url: str) -> Optional[Activation]:
        """
        Find the activation of a license on a site.

        Args:
            license_hash: Digest of the raw license key
            site_url: Consuming site identifier

        Returns:
            Activation entity or None if not found
        """
        pass

    @abstractmethod
    def upsert(self, activation: Activation) -> None:
        """
        Insert an activation or refresh the stored one for the same pair.

        Status, last_verified_at and updated_at are replaced; created_at
        of an existing row is kept.

        Args:
            activation: Activation entity to store
        """
        pass

    @abstractmethod
    def deactivate(self, license_hash: str, site_url: str, now: datetime) -> bool:
        """
        Mark the activation of a license on a site inactive.

        Args:
            license_hash: Digest of the raw license key
            site_url: Consuming site identifier
            now: Update time

        Returns:
            True if a row existed and was updated, False otherwise
        """
        pass
