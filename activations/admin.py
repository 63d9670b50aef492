"""
Django admin configuration for activations app.
"""

from django.contrib import admin
from django.utils.html import format_html

from activations.infrastructure.models import Activation


@admin.register(Activation)
class ActivationAdmin(admin.ModelAdmin):
    """Admin interface for Activation model."""

    list_display = [
        "site_url_display",
        "status_display",
        "last_verified_at",
        "created_at",
    ]
    list_filter = ["status", "last_verified_at", "created_at"]
    search_fields = ["site_url", "license_hash"]
    readonly_fields = [
        "id",
        "license_hash",
        "site_url",
        "last_verified_at",
        "created_at",
        "updated_at",
    ]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "license_hash", "site_url", "status"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("last_verified_at", "created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def site_url_display(self, obj):
        """Display site with truncation."""
        if len(obj.site_url) > 50:
            return format_html(
                '<span title="{}">{}</span>',
                obj.site_url,
                obj.site_url[:47] + "...",
            )
        return obj.site_url

    site_url_display.short_description = "Site"

    def status_display(self, obj):
        """Display active status with color."""
        if obj.status == "active":
            return format_html('<span style="color: green; font-weight: bold;">✓ Active</span>')
        return format_html('<span style="color: red; font-weight: bold;">✗ Inactive</span>')

    status_display.short_description = "Status"
