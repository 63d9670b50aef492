"""
License Django ORM model.

This is the infrastructure layer model for licenses.
Domain entities are in licenses.domain.license.
"""
from django.db import models


class License(models.Model):
    """
    An entitlement identified by the SHA-256 digest of its raw key.
    """

    PLAN_CHOICES = [
        ("free", "Free"),
        ("pro", "Pro"),
        ("enterprise", "Enterprise"),
    ]

    STATUS_CHOICES = [
        ("active", "Active"),
        ("inactive", "Inactive"),
        ("expired", "Expired"),
        ("invalid", "Invalid"),
    ]

    key_hash = models.CharField(
        max_length=64, unique=True, help_text="SHA-256 of the raw license key"
    )
    plan = models.CharField(max_length=20, choices=PLAN_CHOICES, default="pro")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="active")
    features = models.JSONField(default=list, blank=True)
    expires_at = models.BigIntegerField(
        null=True, blank=True, help_text="Unix timestamp; empty or <= 0 never expires"
    )
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["created_at"]),
            models.Index(fields=["status"]),
        ]

    def __str__(self):
        return f"{self.key_hash[:12]}... ({self.plan}, {self.status})"
