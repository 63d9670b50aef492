"""
Rate limit and audit log Django ORM models.
"""
from django.db import models


class RateLimitCounter(models.Model):
    """
    Fixed-window request counter for one (license key, caller) pair.

    The counter is reset when its window elapses, never decremented.
    """

    limiter_key = models.CharField(max_length=64, unique=True)
    window_start = models.BigIntegerField(help_text="Unix timestamp of the current window")
    count = models.PositiveIntegerField(default=1)

    class Meta:
        db_table = "rate_limits"

    def __str__(self):
        return f"{self.limiter_key[:12]}... ({self.count})"


class AuditLogEntry(models.Model):
    """
    Append-only record of license lifecycle events.
    """

    event = models.CharField(max_length=64, db_index=True)
    details = models.JSONField(default=dict, help_text="Structured event payload")
    created_at = models.DateTimeField()

    class Meta:
        db_table = "audit_logs"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["created_at"]),
        ]

    def __str__(self):
        return f"{self.event} @ {self.created_at}"
