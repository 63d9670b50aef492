"""
Audit log adapter implementations.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict

from django.utils import timezone

from core.infrastructure.audit_log import AuditLog
from core.infrastructure.database import storage_errors
from core.infrastructure.models import AuditLogEntry

logger = logging.getLogger(__name__)


class DjangoAuditLog(AuditLog):
    """
    Django ORM implementation of AuditLog.

    Write failures surface as StorageError like any other storage failure.
    """

    def __init__(self, clock: Callable[[], datetime] = timezone.now):
        """Initialize audit log with a clock returning aware datetimes."""
        self._clock = clock

    def record(self, event: str, details: Dict[str, Any]) -> None:
        with storage_errors("audit_logs.record"):
            AuditLogEntry.objects.create(  # pylint: disable=no-member
                event=event,
                details=details,
                created_at=self._clock(),
            )
        logger.debug("Audit event recorded: %s", event, extra={"audit_event": event})
