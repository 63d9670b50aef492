"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    def find_by_key_hash(self, key_hash: str) -> Optional[License]:
        """
        Find a license by key hash.

        Args:
            key_hash: Digest of the raw license key

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    def upsert(self, license: License) -> None:
        """
        Insert a license or replace the stored one with the same key hash.

        Plan, status, features, expires_at and updated_at are replaced;
        created_at of an existing row is kept.

        Args:
            license: License entity to store
        """
        pass

    @abstractmethod
    def list_recent(self, limit: int) -> List[License]:
        """
        List the most recently created licenses, newest first.

        Args:
            limit: Maximum number of licenses

        Returns:
            List of License entities
        """
        pass
