"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils.html import format_html

from licenses.infrastructure.models import License


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "short_hash",
        "plan",
        "status_display",
        "expires_at",
        "created_at",
        "updated_at",
    ]
    list_filter = ["plan", "status", "created_at"]
    search_fields = ["key_hash"]
    readonly_fields = ["id", "key_hash", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "key_hash", "plan", "status"),
            },
        ),
        (
            "Entitlements",
            {
                "fields": ("features", "expires_at"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def short_hash(self, obj):
        """Display the first characters of the key hash."""
        return f"{obj.key_hash[:12]}…"

    short_hash.short_description = "Key hash"

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            "active": "green",
            "inactive": "orange",
            "expired": "gray",
            "invalid": "red",
        }
        color = colors.get(obj.status, "black")
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            obj.status.upper(),
        )

    status_display.short_description = "Status"

    def has_add_permission(self, request):
        """Licenses are issued through the engine so the key is hashed."""
        return False
