"""
Database utilities.
"""

import contextlib
import logging
from typing import Iterator

from django.db import DatabaseError

from core.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """
    Translate database failures into StorageError.

    Usage:
        with storage_errors("licenses.upsert"):
            # Database operations
            pass

    Args:
        operation: Name of the storage operation, used in logs and messages
    """
    try:
        yield
    except DatabaseError as e:
        logger.error("Storage operation %s failed: %s", operation, e, exc_info=True)
        raise StorageError(f"{operation} failed: {e}") from e
