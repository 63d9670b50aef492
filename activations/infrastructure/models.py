"""
Activation Django ORM model.

This is the infrastructure layer model for activations.
Domain entities are in activations.domain.activation.
"""
from django.db import models


class Activation(models.Model):
    """
    Represents a site currently using a license.
    """

    STATUS_CHOICES = [
        ("active", "Active"),
        ("inactive", "Inactive"),
    ]

    license_hash = models.CharField(
        max_length=64, help_text="SHA-256 of the raw license key"
    )
    site_url = models.TextField(help_text="Consuming site identifier")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="active")
    last_verified_at = models.DateTimeField()
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = "activations"
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["license_hash", "site_url"], name="uq_activation_license_site"
            ),
        ]
        indexes = [
            models.Index(fields=["license_hash", "status"]),
        ]

    def __str__(self):
        return f"{self.license_hash[:12]}... @ {self.site_url}"
