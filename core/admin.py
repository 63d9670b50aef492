"""
Django admin configuration for core app.
"""
import json

from django.contrib import admin
from django.utils.html import format_html

from core.infrastructure.models import AuditLogEntry, RateLimitCounter


class ReadOnlyAdmin(admin.ModelAdmin):
    """Rows written by the engine only."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(AuditLogEntry)
class AuditLogEntryAdmin(ReadOnlyAdmin):
    """Admin interface for the audit trail."""

    list_display = ["event", "created_at"]
    list_filter = ["event", "created_at"]
    search_fields = ["event"]
    readonly_fields = ["id", "event", "details_display", "created_at"]
    fields = ["id", "event", "details_display", "created_at"]

    def details_display(self, obj):
        """Display details in a formatted way."""
        if obj.details:
            return format_html(
                '<pre style="background: #f5f5f5; padding: 10px; '
                'border-radius: 4px; overflow-x: auto;">{}</pre>',
                json.dumps(obj.details, indent=2),
            )
        return "-"

    details_display.short_description = "Details"

    def has_delete_permission(self, request, obj=None):
        """Audit entries should not be deleted."""
        return False


@admin.register(RateLimitCounter)
class RateLimitCounterAdmin(ReadOnlyAdmin):
    """Admin interface for rate limit windows."""

    list_display = ["limiter_key", "window_start", "count"]
    search_fields = ["limiter_key"]
